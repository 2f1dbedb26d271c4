'''Evaluators that eliminate candidates sequentially, round by round.

Both evaluators here count the rankings over a shrinking set of active
candidates; in each round the rankings re-resolve to their highest (or
lowest) still active candidate. They differ in the elimination criterion:

-   :class:`InstantRunoff` (IRV, also called the alternative vote) elects
    a candidate holding a majority of the continuing first preferences and
    otherwise eliminates the candidate(s) with the fewest of them.
-   :class:`Coombs` eliminates the candidate(s) ranked last on the most
    rankings until a single candidate remains.

Ties at the elimination threshold are resolved by an elimination policy
from :mod:`rcvtally.component.elimination`. The default policy removes all
tied candidates at once; when that would remove every remaining candidate,
the count ends with no winner (``all-tied``).

Every round eliminates at least one candidate, so a count finishes within
as many rounds as there are candidates.
'''

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import rcvtally.component.elimination
import rcvtally.component.tally
import rcvtally.evaluate.core
from rcvtally.candidate import Candidate
from rcvtally.evaluate.core import NoWinner, NoWinnerReason, Round, Winner
from rcvtally.persist import simple_serialization
from rcvtally.vote import Ranking


logger = logging.getLogger(__name__)


class SequentialEliminator(rcvtally.evaluate.core.Evaluator):
    '''Common round loop of the sequential elimination evaluators.

    :param elimination: An elimination policy callable, or the name of one
        from :mod:`rcvtally.component.elimination`.
    :param unknown_candidates: Policy for ballot entries referring to
        candidates outside the candidate set (``ignore`` or ``error``).
    '''
    def __init__(self,
                 elimination: Union[str, Callable] = 'all_tied',
                 unknown_candidates: str = 'ignore',
                 ):
        super().__init__(unknown_candidates=unknown_candidates)
        self.elimination = rcvtally.component.elimination.construct(
            elimination
        )

    def tabulate(self,
                 candidates: Dict[Any, Candidate],
                 rankings: List[Ranking],
                 ) -> rcvtally.evaluate.core.TabulationResult:
        active = list(candidates)
        rounds = []
        for round_no in range(1, len(candidates) + 1):
            logger.info('proceeding to round %d', round_no)
            winner, tallies, exhausted, tied = self.count_round(
                rankings, active
            )
            logger.info('current tallies: %s', tallies)
            logger.debug('%d ballots exhausted', exhausted)
            if winner is not None:
                rounds.append(Round(round_no, tallies, exhausted))
                logger.info('%r elected in round %d', winner, round_no)
                return Winner(candidates[winner], tuple(rounds))
            eliminated = self._select_eliminated(tied, active)
            if frozenset(eliminated) == frozenset(active):
                rounds.append(Round(round_no, tallies, exhausted))
                logger.info('all remaining candidates tied: %s', active)
                return NoWinner(NoWinnerReason.ALL_TIED, tuple(rounds))
            logger.info('eliminating %s', eliminated)
            rounds.append(Round(
                round_no, tallies, exhausted, tuple(eliminated)
            ))
            eliminated_set = frozenset(eliminated)
            active = [cand for cand in active if cand not in eliminated_set]
        raise rcvtally.evaluate.core.TabulationError(
            f'no result after {len(candidates)} rounds'
        )

    def count_round(self,
                    rankings: List[Ranking],
                    active: List[Any],
                    ) -> Tuple[Optional[Any], Dict[Any, int], int, List[Any]]:
        '''Count one round.

        :returns: A 4-tuple of the winner id (None if there is no winner
            yet), the round tallies, the number of exhausted rankings and
            the candidates tied at the elimination threshold.
        '''
        raise NotImplementedError

    def _select_eliminated(self,
                           tied: List[Any],
                           active: List[Any],
                           ) -> List[Any]:
        eliminated = self.elimination(tied, active)
        if not eliminated or not frozenset(eliminated) <= frozenset(tied):
            raise rcvtally.evaluate.core.TabulationError(
                f'elimination policy chose {eliminated!r} from {tied!r}'
            )
        # a policy may name a candidate twice
        return list(dict.fromkeys(eliminated))


@simple_serialization
class InstantRunoff(SequentialEliminator):
    '''Instant-runoff voting (IRV) evaluator.

    In each round, every ranking counts as one vote for its highest ranked
    candidate still in the count. A candidate with strictly more than half of
    the votes counted in that round wins; exhausted rankings do not count
    towards the total. Otherwise, the candidate(s) with the fewest votes
    are eliminated and the next round is counted.

    :param elimination: An elimination policy callable, or the name of one
        from :mod:`rcvtally.component.elimination`. The default eliminates
        all candidates tied for the fewest votes at once.
    :param unknown_candidates: Policy for ballot entries referring to
        candidates outside the candidate set (``ignore`` or ``error``).
    '''
    def __init__(self,
                 elimination: Union[str, Callable] = 'all_tied',
                 unknown_candidates: str = 'ignore',
                 ):
        super().__init__(
            elimination=elimination,
            unknown_candidates=unknown_candidates,
        )

    def count_round(self, rankings, active):
        tallies, exhausted = rcvtally.component.tally.first_preferences(
            rankings, active
        )
        winner = rcvtally.component.tally.majority_holder(tallies)
        if winner is not None:
            return winner, tallies, exhausted, []
        return None, tallies, exhausted, rcvtally.component.tally.fewest(
            tallies
        )


@simple_serialization
class Coombs(SequentialEliminator):
    '''Coombs method evaluator.

    In each round, every ranking counts against its lowest ranked candidate
    still in the count; the candidate(s) ranked last most often are
    eliminated. The count goes on until a single candidate remains, who is
    the winner. Rankings with no candidate left in the count contribute
    nothing.

    :param elimination: An elimination policy callable, or the name of one
        from :mod:`rcvtally.component.elimination`. The default eliminates
        all candidates tied for the most last places at once.
    :param majority_check: Whether to first elect a candidate holding
        a majority of first preferences in the round, as in the classic
        formulation of the method.
    :param unknown_candidates: Policy for ballot entries referring to
        candidates outside the candidate set (``ignore`` or ``error``).
    '''
    def __init__(self,
                 elimination: Union[str, Callable] = 'all_tied',
                 majority_check: bool = False,
                 unknown_candidates: str = 'ignore',
                 ):
        super().__init__(
            elimination=elimination,
            unknown_candidates=unknown_candidates,
        )
        self.majority_check = majority_check

    def count_round(self, rankings, active):
        if len(active) == 1 or self.majority_check:
            firsts, exhausted = rcvtally.component.tally.first_preferences(
                rankings, active
            )
            if len(active) == 1:
                return active[0], firsts, exhausted, []
            winner = rcvtally.component.tally.majority_holder(firsts)
            if winner is not None:
                logger.info('%r holds a first preference majority', winner)
                return winner, firsts, exhausted, []
        tallies, exhausted = rcvtally.component.tally.last_preferences(
            rankings, active
        )
        return None, tallies, exhausted, rcvtally.component.tally.most(
            tallies
        )


EVALUATORS = {
    'irv': InstantRunoff(),
    'irv_lowest_id': InstantRunoff(elimination='lowest_id'),
    'irv_input_order': InstantRunoff(elimination='input_order'),
    'coombs': Coombs(),
    'coombs_lowest_id': Coombs(elimination='lowest_id'),
    'coombs_majority': Coombs(majority_check=True),
}
