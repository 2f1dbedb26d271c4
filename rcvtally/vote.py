'''Ballot types, ballot validation and the ranking model.

A ballot, as submitted by a voter, is a set of :class:`BallotEntry` objects
sharing one ballot identifier; each entry gives a rank (a positive integer,
1 being the most preferred) to one candidate identifier. Ranks need not be
contiguous (1, 2, 5 is a valid ranking) but must be unique within a ballot.

Evaluators do not work with the entries directly. They reorder them into a
**ranking** (also called a preference list): a tuple of candidate
identifiers in ascending order of rank, the first item being the most
preferred candidate. :func:`preference_list` does this for a single ballot;
:class:`rcvtally.convert.BallotsToRankings` does it for a whole ballot
collection.

Malformed ballots are rejected with :class:`InvalidBallotError`; the
:class:`RankedBallotValidator` performs the checks. Entries for candidates
outside the tabulated candidate set are either ignored (the default, which
keeps ballots cast for since deactivated candidates usable) or rejected,
according to the unknown candidate policy.
'''

import abc
import dataclasses
from typing import Any, Collection, Iterable, Optional, Tuple

from rcvtally.persist import simple_serialization


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the election rules.'''
    pass


class InvalidBallotError(VoteError):
    '''A ballot cannot be turned into a ranking.

    :param reason: What is wrong with the ballot (e.g. a duplicate rank).
    :param ballot_id: Identifier of the offending ballot, if known.
    '''
    def __init__(self, reason: str, ballot_id: Any = None):
        self.reason = reason
        self.ballot_id = ballot_id
        message = 'invalid ballot'
        if ballot_id is not None:
            message += f' {ballot_id!r}'
        super().__init__(f'{message}: {reason}')


UNKNOWN_CANDIDATE_POLICIES = ('ignore', 'error')

Ranking = Tuple[Any, ...]


@dataclasses.dataclass(frozen=True)
class BallotEntry:
    '''A rank given to one candidate on one ballot.'''
    candidate_id: Any
    rank: int


@dataclasses.dataclass(frozen=True)
class Ballot:
    '''A single voter's ranked ballot.'''
    id: Any
    entries: Tuple[BallotEntry, ...] = ()

    @classmethod
    def from_ranking(cls, id: Any, candidate_ids: Iterable[Any]) -> 'Ballot':
        '''Create a ballot ranking the given candidates 1, 2, 3... in order.'''
        return cls(id, tuple(
            BallotEntry(cand_id, rank)
            for rank, cand_id in enumerate(candidate_ids, start=1)
        ))


@simple_serialization
class RankedBallotValidator:
    '''Validate that a ranked ballot is well formed.

    A well formed ballot uses positive integer ranks, uses each rank at most
    once and ranks each candidate at most once.

    :param max_rank: Highest rank allowed on the ballot; None means the rank
        is not bounded from above.
    '''
    def __init__(self, max_rank: Optional[int] = None):
        self.max_rank = max_rank

    def validate(self, ballot: Ballot) -> None:
        '''Check the ballot.

        :param ballot: Ballot to be checked.
        :raises InvalidBallotError: If any rank is not a positive integer,
            a rank is used twice or a candidate is ranked twice.
        '''
        seen_ranks = set()
        seen_cands = set()
        for entry in ballot.entries:
            rank = entry.rank
            if isinstance(rank, bool) or not isinstance(rank, int):
                raise InvalidBallotError(
                    f'rank {rank!r} is not an integer', ballot.id
                )
            if rank < 1:
                raise InvalidBallotError(
                    f'rank {rank} is not positive', ballot.id
                )
            if self.max_rank is not None and rank > self.max_rank:
                raise InvalidBallotError(
                    f'rank {rank} exceeds {self.max_rank}', ballot.id
                )
            if rank in seen_ranks:
                raise InvalidBallotError(f'duplicate rank {rank}', ballot.id)
            if entry.candidate_id in seen_cands:
                raise InvalidBallotError(
                    f'candidate {entry.candidate_id!r} ranked twice',
                    ballot.id
                )
            seen_ranks.add(rank)
            seen_cands.add(entry.candidate_id)


DEFAULT_VALIDATOR = RankedBallotValidator()


def preference_list(ballot: Ballot,
                    candidate_ids: Collection[Any],
                    unknown_candidates: str = 'ignore',
                    validator: RankedBallotValidator = DEFAULT_VALIDATOR,
                    ) -> Ranking:
    '''Transform a ballot into its ranking (ordering of candidate ids).

    :param ballot: The ballot to transform.
    :param candidate_ids: Identifiers of the candidates in the tabulation.
    :param unknown_candidates: How to treat entries for candidates that are
        not in candidate_ids:

        -   ``ignore``: Drop the entry, keep the rest of the ballot in order.
        -   ``error``: Raise an :class:`InvalidBallotError`.

    :param validator: Validator checking the ballot before it is ordered.
    :returns: A tuple of candidate ids, most preferred first. Empty if the
        ballot ranks no known candidate.
    :raises InvalidBallotError: If the ballot is malformed.
    '''
    if unknown_candidates not in UNKNOWN_CANDIDATE_POLICIES:
        raise ValueError(
            f'invalid unknown candidate policy: {unknown_candidates!r}'
        )
    validator.validate(ballot)
    known = []
    for entry in ballot.entries:
        if entry.candidate_id in candidate_ids:
            known.append(entry)
        elif unknown_candidates == 'error':
            raise InvalidBallotError(
                f'unknown candidate {entry.candidate_id!r}', ballot.id
            )
    known.sort(key=lambda entry: entry.rank)
    return tuple(entry.candidate_id for entry in known)
