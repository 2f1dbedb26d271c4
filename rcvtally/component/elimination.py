'''Elimination policies for the sequential evaluators.

When instant runoff or Coombs has to eliminate and several candidates are
tied at the elimination threshold (fewest first preferences, most last
places), the policy decides which of them go. A policy is called with the
tied candidate ids and the ordered ids of all active candidates, and
returns a non-empty subset of the tied ones.

All supported policies are assembled in the `ELIMINATION_POLICIES`
dictionary keyed by their name. `get()` retrieves from this dictionary by
string key; `construct()` also accepts callables and passes them through.
'''

from typing import Any, List, Sequence

import rcvtally.util
import rcvtally.component.core


ELIMINATION_POLICIES = rcvtally.component.core.Register('elimination policy')

elimination_mark = ELIMINATION_POLICIES.mark
get = ELIMINATION_POLICIES.lookup
construct = ELIMINATION_POLICIES.construct


@elimination_mark
def all_tied(tied: Sequence[Any], active: Sequence[Any]) -> List[Any]:
    '''Eliminate every tied candidate at once.

    This is the default. It can end a count with no winner when all the
    remaining candidates are tied, and it can remove several candidates in
    a round where eliminating one of them would have changed the outcome.
    '''
    return list(tied)


@elimination_mark
def lowest_id(tied: Sequence[Any], active: Sequence[Any]) -> List[Any]:
    '''Eliminate only the tied candidate with the lowest identifier.'''
    return rcvtally.util.sorted_ids(tied)[:1]


@elimination_mark
def input_order(tied: Sequence[Any], active: Sequence[Any]) -> List[Any]:
    '''Eliminate only the tied candidate listed first in the candidate list.'''
    tied_set = frozenset(tied)
    return [cand for cand in active if cand in tied_set][:1]
