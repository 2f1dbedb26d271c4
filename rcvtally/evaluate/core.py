'''General tabulation machinery and result types.

Every evaluator returns a :class:`TabulationResult`: either a
:class:`Winner` holding the winning candidate, or a :class:`NoWinner`
holding a :class:`NoWinnerReason`. Having no winner is an ordinary outcome
of some elections (everyone tied, an unresolved preference cycle, nothing
to count), so it is never signalled by an exception. Exceptions are
reserved for malformed input (:class:`rcvtally.vote.InvalidBallotError`,
:class:`rcvtally.candidate.CandidateError`) and for broken internal
invariants (:class:`TabulationError`).

Both result types carry the ``rounds`` of the count as :class:`Round`
records, to allow auditing how the result came about.
'''

import abc
import enum
import logging
import dataclasses
from typing import Any, Dict, Iterable, List, Optional, Tuple

import rcvtally.convert
from rcvtally.candidate import Candidate, index_candidates
from rcvtally.vote import Ballot, Ranking


logger = logging.getLogger(__name__)


class TabulationError(Exception):
    '''A tabulation with a valid setup ended up in an unresolvable state.'''
    pass


class NoWinnerReason(enum.Enum):
    '''Why a tabulation produced no winner.'''

    ALL_TIED = 'all-tied'
    '''All remaining candidates are tied at the elimination threshold.'''

    NO_CANDIDATES = 'no-candidates'
    '''No candidates were given.'''

    CYCLE_UNRESOLVED = 'cycle-unresolved'
    '''The ranked pairs lock graph has zero or several unbeaten candidates.'''

    EMPTY_INPUT = 'empty-input'
    '''No ballots were given.'''


@dataclasses.dataclass(frozen=True)
class Round:
    '''A record of one round (count) of a tabulation.

    Sequential evaluators fill in the tallies (first preferences for instant
    runoff, last places for Coombs), exhausted ballots and eliminated
    candidates. Ranked pairs has a single round whose tallies are the
    pairwise preference counts, with the locked and skipped victories.
    '''
    number: int
    tallies: Dict[Any, int] = dataclasses.field(default_factory=dict)
    exhausted: int = 0
    eliminated: Tuple[Any, ...] = ()
    locked: Tuple[Any, ...] = ()
    skipped: Tuple[Any, ...] = ()


class TabulationResult(metaclass=abc.ABCMeta):
    '''Outcome of a single tabulation.'''

    rounds: Tuple[Round, ...]

    @property
    @abc.abstractmethod
    def winner(self) -> Optional[Candidate]:
        raise NotImplementedError

    def __bool__(self) -> bool:
        return self.winner is not None


@dataclasses.dataclass(frozen=True)
class Winner(TabulationResult):
    '''The tabulation elected a candidate.'''
    candidate: Candidate
    rounds: Tuple[Round, ...] = ()

    @property
    def winner(self) -> Candidate:
        return self.candidate

    @property
    def name(self) -> str:
        '''Display name of the winning candidate.'''
        return self.candidate.name


@dataclasses.dataclass(frozen=True)
class NoWinner(TabulationResult):
    '''The tabulation could not determine a winner.'''
    reason: NoWinnerReason
    rounds: Tuple[Round, ...] = ()

    @property
    def winner(self) -> None:
        return None


class Evaluator(metaclass=abc.ABCMeta):
    '''Tabulate ranked ballots to determine a single winner.

    A root abstract base class for all evaluators. It handles the parts
    common to all methods: returning early for empty input and turning the
    ballots into rankings over the candidate set. Subclasses implement
    :meth:`tabulate` on the rankings.

    Evaluators keep no state between calls and never modify their input, so
    a single instance can be used for any number of tabulations, also
    concurrently.

    :param unknown_candidates: Policy for ballot entries referring to
        candidates outside the candidate set (``ignore`` or ``error``).
    '''
    def __init__(self, unknown_candidates: str = 'ignore'):
        self.unknown_candidates = unknown_candidates
        self._normalizer = rcvtally.convert.BallotsToRankings(
            unknown_candidates=unknown_candidates
        )

    def evaluate(self,
                 candidates: Iterable[Candidate],
                 ballots: Iterable[Ballot],
                 ) -> TabulationResult:
        '''Determine the winner of the election.

        :param candidates: Candidates taking part, usually only the active
            ones (see :func:`rcvtally.candidate.active_only`).
        :param ballots: Cast ballots.
        :returns: A :class:`Winner` or a :class:`NoWinner`.
        :raises InvalidBallotError: If any ballot is malformed.
        :raises CandidateError: If two candidates share an identifier.
        '''
        cand_index = index_candidates(candidates)
        ballots = list(ballots)
        if not cand_index:
            logger.info('no candidates to tabulate')
            return NoWinner(NoWinnerReason.NO_CANDIDATES)
        if not ballots:
            logger.info('no ballots to tabulate')
            return NoWinner(NoWinnerReason.EMPTY_INPUT)
        rankings = self._normalizer.convert(cand_index.values(), ballots)
        logger.info(
            'tabulating %d ballots for %d candidates',
            len(rankings), len(cand_index)
        )
        return self.tabulate(cand_index, rankings)

    @abc.abstractmethod
    def tabulate(self,
                 candidates: Dict[Any, Candidate],
                 rankings: List[Ranking],
                 ) -> TabulationResult:
        '''Determine the winner from rankings.

        :param candidates: Candidates keyed by their id, in input order.
        :param rankings: Rankings over the candidate ids, one per ballot.
        '''
        raise NotImplementedError
