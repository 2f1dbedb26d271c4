import sys
import os
import copy

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvtally.candidate
import rcvtally.evaluate.condorcet
import rcvtally.evaluate.core
import rcvtally.evaluate.sequential
from rcvtally.candidate import Candidate
from rcvtally.evaluate.core import NoWinner, NoWinnerReason, Round, Winner

sys.path.append(os.path.join(os.path.dirname(__file__)))
from test_sequential import make_ballots, make_candidates


ALL_EVALUATORS = (
    list(rcvtally.evaluate.sequential.EVALUATORS.values())
    + list(rcvtally.evaluate.condorcet.EVALUATORS.values())
)


def test_winner_result():
    cand = Candidate(3, 'Carol')
    result = Winner(cand, (Round(1, {3: 2}),))
    assert result
    assert result.winner == cand
    assert result.name == 'Carol'
    assert result.rounds[0].eliminated == ()


def test_no_winner_result():
    result = NoWinner(NoWinnerReason.CYCLE_UNRESOLVED)
    assert not result
    assert result.winner is None
    assert result.rounds == ()
    assert result.reason.value == 'cycle-unresolved'


@pytest.mark.parametrize(('reason', 'value'), [
    (NoWinnerReason.ALL_TIED, 'all-tied'),
    (NoWinnerReason.NO_CANDIDATES, 'no-candidates'),
    (NoWinnerReason.CYCLE_UNRESOLVED, 'cycle-unresolved'),
    (NoWinnerReason.EMPTY_INPUT, 'empty-input'),
])
def test_reason_values(reason, value):
    assert NoWinnerReason(value) == reason


def test_results_immutable():
    result = NoWinner(NoWinnerReason.ALL_TIED)
    with pytest.raises(AttributeError):
        result.reason = NoWinnerReason.EMPTY_INPUT


@pytest.mark.parametrize('evaluator', ALL_EVALUATORS)
def test_no_candidates_before_empty_input(evaluator):
    result = evaluator.evaluate([], [])
    assert result.reason == NoWinnerReason.NO_CANDIDATES
    assert result.rounds == ()


@pytest.mark.parametrize('evaluator', ALL_EVALUATORS)
def test_duplicate_candidate_ids(evaluator):
    candidates = [Candidate(1, 'Alice'), Candidate(1, 'Alicia')]
    with pytest.raises(rcvtally.candidate.CandidateError):
        evaluator.evaluate(candidates, make_ballots({(1,): 1}))


@pytest.mark.parametrize('evaluator', ALL_EVALUATORS)
def test_input_not_modified(evaluator):
    candidates = make_candidates('ABC')
    ballots = make_ballots({tuple('ABC'): 2, tuple('CB'): 1, ('Q',): 1})
    cand_copy = copy.deepcopy(candidates)
    ballot_copy = copy.deepcopy(ballots)
    evaluator.evaluate(candidates, ballots)
    assert ballots == ballot_copy
    assert [
        (cand.id, cand.name, cand.active) for cand in candidates
    ] == [
        (cand.id, cand.name, cand.active) for cand in cand_copy
    ]


@pytest.mark.parametrize('evaluator', ALL_EVALUATORS)
def test_accepts_iterators(evaluator):
    result = evaluator.evaluate(
        iter(make_candidates('AB')),
        iter(make_ballots({tuple('AB'): 2, tuple('BA'): 1})),
    )
    assert result.candidate.id == 'A'


def test_winner_is_candidate_object():
    candidates = [Candidate(1, 'Alice'), Candidate(2, 'Bob')]
    result = rcvtally.evaluate.sequential.InstantRunoff().evaluate(
        candidates, make_ballots({(2, 1): 3, (1, 2): 1})
    )
    assert result.candidate is candidates[1]
    assert result.name == 'Bob'


def test_invalid_unknown_candidate_policy():
    with pytest.raises(ValueError):
        rcvtally.evaluate.sequential.InstantRunoff(
            unknown_candidates='drop'
        )
