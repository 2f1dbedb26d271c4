'''Converters between ballot formats.

These objects have a `convert()` method that converts between different
representations of the cast ballots:

-   flat storage rows ``(ballot_id, candidate_id, rank)`` to :class:`Ballot`
    objects (:class:`RowsToBallots`),
-   ballots to rankings over a candidate set (:class:`BallotsToRankings`),
-   rankings to pairwise preference counts (:class:`RankingsToPairwise`).
'''

import collections
from typing import Any, Collection, Dict, Iterable, List, Optional, Tuple

import rcvtally.vote
from rcvtally.candidate import Candidate
from rcvtally.vote import Ballot, BallotEntry, Ranking
from rcvtally.persist import simple_serialization


class Converter:
    def convert(self, *args, **kwargs):
        raise NotImplementedError


@simple_serialization
class RowsToBallots:
    '''Group flat ballot rows into ballots.

    Storage keeps one row per ranked candidate, identified by the ballot it
    belongs to. The rows of a single ballot need not be adjacent or sorted;
    ballots are returned in the order their first row appears.
    '''
    def convert(self,
                rows: Iterable[Tuple[Any, Any, int]],
                ) -> List[Ballot]:
        '''Convert ``(ballot_id, candidate_id, rank)`` rows to ballots.'''
        grouped = collections.OrderedDict()
        for ballot_id, cand_id, rank in rows:
            grouped.setdefault(ballot_id, []).append(
                BallotEntry(cand_id, rank)
            )
        return [
            Ballot(ballot_id, tuple(entries))
            for ballot_id, entries in grouped.items()
        ]


@simple_serialization
class BallotsToRankings:
    '''Order each ballot's entries into a ranking of known candidates.

    This is the ranking model used by all evaluators: entries are sorted by
    ascending rank and entries for candidates outside the tabulated set are
    handled according to the unknown candidate policy.

    :param unknown_candidates: ``ignore`` to drop entries for unknown
        candidates, ``error`` to reject such ballots with
        :class:`rcvtally.vote.InvalidBallotError`.
    :param validator: Validator to check each ballot with.
    '''
    def __init__(self,
                 unknown_candidates: str = 'ignore',
                 validator: rcvtally.vote.RankedBallotValidator =
                     rcvtally.vote.DEFAULT_VALIDATOR,
                 ):
        if unknown_candidates not in rcvtally.vote.UNKNOWN_CANDIDATE_POLICIES:
            raise ValueError(
                f'invalid unknown candidate policy: {unknown_candidates!r}'
            )
        self.unknown_candidates = unknown_candidates
        self.validator = validator

    def convert(self,
                candidates: Collection[Candidate],
                ballots: Iterable[Ballot],
                ) -> List[Ranking]:
        '''Convert ballots to rankings over the given candidates.

        :param candidates: Candidates taking part in the tabulation.
        :param ballots: Ballots to convert. They are not modified.
        :returns: One ranking per ballot, in the ballot order. Ballots that
            rank no known candidate produce empty rankings.
        :raises InvalidBallotError: If any of the ballots is malformed.
        '''
        cand_ids = frozenset(cand.id for cand in candidates)
        return [
            rcvtally.vote.preference_list(
                ballot,
                cand_ids,
                unknown_candidates=self.unknown_candidates,
                validator=self.validator,
            )
            for ballot in ballots
        ]


@simple_serialization
class RankingsToPairwise:
    '''Aggregate rankings to counts of pairwise preferences.

    Basic component for ranked pairs. For each ranking that places
    a candidate above another, adds one to the count of the first candidate
    over the second. The counts of the two directions of a pair are
    independent of each other.

    :param unranked_at_bottom: Whether to consider candidates (of the given
        candidate set) not ranked on a ballot as being ranked below all
        ranked candidates. If False, only pairs with both candidates present
        on the ballot are counted.
    '''
    def __init__(self, unranked_at_bottom: bool = False):
        self.unranked_at_bottom = unranked_at_bottom

    def convert(self,
                rankings: Iterable[Ranking],
                candidate_ids: Optional[Collection[Any]] = None,
                ) -> Dict[Tuple[Any, Any], int]:
        '''Convert rankings to counts of pairwise wins.

        :param rankings: Rankings (tuples of candidate ids, best first).
        :param candidate_ids: All candidates of the tabulation; required when
            unranked candidates are counted at the bottom.
        :returns: A mapping of ordered candidate pairs to the number of
            rankings preferring the first to the second. Pairs never ranked
            in that order are absent.
        '''
        if self.unranked_at_bottom and candidate_ids is None:
            raise ValueError('candidate ids needed for unranked at bottom')
        counts = collections.defaultdict(int)
        for ranking in rankings:
            if self.unranked_at_bottom:
                unranked = [
                    cand for cand in candidate_ids if cand not in ranking
                ]
            else:
                unranked = []
            for i, upper_cand in enumerate(ranking):
                for lower_cand in ranking[i+1:]:
                    counts[upper_cand, lower_cand] += 1
                for lower_cand in unranked:
                    counts[upper_cand, lower_cand] += 1
        return dict(counts)
