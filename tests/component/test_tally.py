import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvtally.component.tally


RANKINGS = [
    ('A', 'B', 'C'),
    ('A', 'C'),
    ('B',),
    ('C', 'B', 'A'),
    (),
]


@pytest.mark.parametrize(('active', 'expected', 'exhausted'), [
    (['A', 'B', 'C'], {'A': 2, 'B': 1, 'C': 1}, 1),
    (['B', 'C'], {'B': 2, 'C': 2}, 1),
    (['C'], {'C': 3}, 2),
    (['D'], {'D': 0}, 5),
])
def test_first_preferences(active, expected, exhausted):
    assert rcvtally.component.tally.first_preferences(RANKINGS, active) == (
        expected, exhausted
    )


@pytest.mark.parametrize(('active', 'expected', 'exhausted'), [
    (['A', 'B', 'C'], {'A': 1, 'B': 1, 'C': 2}, 1),
    (['A', 'B'], {'A': 2, 'B': 2}, 1),
    (['B'], {'B': 3}, 2),
])
def test_last_preferences(active, expected, exhausted):
    assert rcvtally.component.tally.last_preferences(RANKINGS, active) == (
        expected, exhausted
    )


def test_tallies_keep_active_order():
    counts, exhausted = rcvtally.component.tally.first_preferences(
        [('C',)], ['B', 'C', 'A']
    )
    assert list(counts.keys()) == ['B', 'C', 'A']


@pytest.mark.parametrize(('counts', 'expected'), [
    ({'A': 3, 'B': 2}, 'A'),
    ({'A': 2, 'B': 2}, None),
    ({'A': 2, 'B': 1, 'C': 1}, None),
    ({'A': 0, 'B': 0}, None),
    ({'A': 1}, 'A'),
    ({}, None),
])
def test_majority_holder(counts, expected):
    assert rcvtally.component.tally.majority_holder(counts) == expected


@pytest.mark.parametrize(('counts', 'fewest', 'most'), [
    ({'A': 3, 'B': 2, 'C': 2}, ['B', 'C'], ['A']),
    ({'A': 1, 'B': 1}, ['A', 'B'], ['A', 'B']),
    ({'A': 0, 'B': 4, 'C': 4}, ['A'], ['B', 'C']),
    ({}, [], []),
])
def test_thresholds(counts, fewest, most):
    assert rcvtally.component.tally.fewest(counts) == fewest
    assert rcvtally.component.tally.most(counts) == most
