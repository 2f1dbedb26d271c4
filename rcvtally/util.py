'''Various utility functions for other modules of rcvtally.

There should normally be no need to use these functions directly.
'''

import operator
from numbers import Number
from typing import Any, Dict, Iterable, List, Tuple


def sorted_ids(ids: Iterable[Any]) -> List[Any]:
    '''Sort candidate identifiers in ascending order.

    Identifiers that cannot be compared to each other (e.g. a mix of
    integers and strings) are ordered by their string forms instead.
    '''
    ids = list(ids)
    try:
        return sorted(ids)
    except TypeError:
        return sorted(ids, key=str)


def id_positions(ids: Iterable[Any]) -> Dict[Any, int]:
    '''Map candidate identifiers to their position in ascending id order.'''
    return {cand_id: i for i, cand_id in enumerate(sorted_ids(ids))}


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value.'''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))
