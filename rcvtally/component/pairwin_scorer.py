'''Pairwise victories and functions to score their strength.

Ranked pairs locks pairwise victories in descending order of strength.
A victory exists for an unordered pair of candidates whenever one of them is
preferred to the other by strictly more rankings (a strictly positive
margin); equally preferred pairs produce no victory at all.

The strength used for ordering is given by a pairwise win scorer. The
scorers take the pairwise preference counts and return the strength of
every ordered pair. All supported scorers are assembled in the
`PAIRWIN_SCORERS` dictionary keyed by their name.
'''

import dataclasses
import itertools
from numbers import Number
from typing import Any, Callable, Dict, List, Sequence, Tuple

import rcvtally.util
import rcvtally.component.core


PAIRWIN_SCORERS = rcvtally.component.core.Register('pairwise win scorer')

pairwin_scorer_mark = PAIRWIN_SCORERS.mark
get = PAIRWIN_SCORERS.lookup
construct = PAIRWIN_SCORERS.construct


@pairwin_scorer_mark
def margins(counts: Dict[Tuple[Any, Any], int]
            ) -> Dict[Tuple[Any, Any], int]:
    '''Margins pairwise win scorer. Takes the difference from reverse option.

    Assigns the number of rankings preferring the pair in the given order
    minus the number preferring the reverse order as the win strength.

    :param counts: Pairwise preference counts.
    '''
    return {
        pair: count - counts.get((pair[1], pair[0]), 0)
        for pair, count in counts.items()
    }


@pairwin_scorer_mark
def winning_votes(counts: Dict[Tuple[Any, Any], int]
                  ) -> Dict[Tuple[Any, Any], int]:
    '''Winning votes pairwise win scorer. Counts wins fully, zero otherwise.

    When the number of rankings preferring the pair in one direction is
    larger than the other direction, assigns all those rankings as the
    pairwise win strength.

    :param counts: Pairwise preference counts.
    '''
    return {
        pair: (count if count > counts.get((pair[1], pair[0]), 0) else 0)
        for pair, count in counts.items()
    }


@dataclasses.dataclass(frozen=True)
class Victory:
    '''A pairwise victory of one candidate over another.'''
    winner: Any
    loser: Any
    margin: int
    strength: Number


def victories(counts: Dict[Tuple[Any, Any], int],
              candidate_ids: Sequence[Any],
              scorer: Callable = margins,
              ) -> List[Victory]:
    '''List all pairwise victories in the order they are to be locked.

    The order is by descending strength; victories of equal strength are
    ordered by the winner's id and then the loser's id, both ascending.

    :param counts: Pairwise preference counts.
    :param candidate_ids: Ids of all candidates in the tabulation.
    :param scorer: Pairwise win scorer determining the victory strength.
    '''
    scores = scorer(counts)
    wins = []
    for cand1, cand2 in itertools.combinations(candidate_ids, 2):
        margin = counts.get((cand1, cand2), 0) - counts.get((cand2, cand1), 0)
        if margin > 0:
            wins.append(Victory(
                cand1, cand2, margin, scores.get((cand1, cand2), 0)
            ))
        elif margin < 0:
            wins.append(Victory(
                cand2, cand1, -margin, scores.get((cand2, cand1), 0)
            ))
    positions = rcvtally.util.id_positions(candidate_ids)
    wins.sort(key=lambda victory: (
        -victory.strength,
        positions[victory.winner],
        positions[victory.loser],
    ))
    return wins
