'''Per-round tallies of rankings over a shrinking set of active candidates.

Each tally walks every ranking once and attributes it to a single active
candidate: the highest ranked one for :func:`first_preferences` (instant
runoff, the majority check) or the lowest ranked one for
:func:`last_preferences` (Coombs). Rankings with no active candidate left
are exhausted and counted separately.

:func:`fewest` and :func:`most` then pick the candidates tied at the
elimination threshold; which of those actually get eliminated is decided
by an elimination policy from :mod:`rcvtally.component.elimination`.
'''

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from rcvtally.vote import Ranking


def first_preferences(rankings: Iterable[Ranking],
                      active: Sequence[Any],
                      ) -> Tuple[Dict[Any, int], int]:
    '''Count each ranking for its most preferred active candidate.

    :param rankings: Rankings of candidate ids, most preferred first.
    :param active: Ids of candidates still in the count. Every one of them
        appears in the output, in this order, even with no votes.
    :returns: A 2-tuple of the vote counts per active candidate and
        the number of exhausted rankings.
    '''
    return _tally(rankings, active, reverse=False)


def last_preferences(rankings: Iterable[Ranking],
                     active: Sequence[Any],
                     ) -> Tuple[Dict[Any, int], int]:
    '''Count each ranking for its least preferred active candidate.

    Only candidates present on the ranking are considered; unranked
    candidates do not receive last-place tallies.

    :returns: A 2-tuple of the last-place counts per active candidate and
        the number of exhausted rankings.
    '''
    return _tally(rankings, active, reverse=True)


def _tally(rankings: Iterable[Ranking],
           active: Sequence[Any],
           reverse: bool,
           ) -> Tuple[Dict[Any, int], int]:
    counts = {cand: 0 for cand in active}
    exhausted = 0
    for ranking in rankings:
        ordered = reversed(ranking) if reverse else ranking
        for cand in ordered:
            if cand in counts:
                counts[cand] += 1
                break
        else:
            exhausted += 1
    return counts, exhausted


def majority_holder(counts: Dict[Any, int]) -> Optional[Any]:
    '''Return the candidate with strictly more than half the counted votes.

    Exhausted rankings must not be included in the counts; the majority is
    taken of the continuing votes only.

    :returns: The candidate id, or None if nobody has a majority.
    '''
    total = sum(counts.values())
    for cand, n_votes in counts.items():
        if n_votes * 2 > total:
            return cand
    return None


def fewest(counts: Dict[Any, int]) -> List[Any]:
    '''Return all candidates tied at the lowest count, in count order.'''
    if not counts:
        return []
    threshold = min(counts.values())
    return [cand for cand, n_votes in counts.items() if n_votes == threshold]


def most(counts: Dict[Any, int]) -> List[Any]:
    '''Return all candidates tied at the highest count, in count order.'''
    if not counts:
        return []
    threshold = max(counts.values())
    return [cand for cand, n_votes in counts.items() if n_votes == threshold]
