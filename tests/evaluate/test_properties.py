import sys
import collections
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvtally.convert
import rcvtally.evaluate.condorcet
import rcvtally.evaluate.sequential
from rcvtally.candidate import Candidate
from rcvtally.evaluate.core import NoWinner, Winner
from rcvtally.vote import Ballot


SEQUENTIAL_EVALUATORS = list(
    rcvtally.evaluate.sequential.EVALUATORS.values()
)
CONDORCET_EVALUATORS = list(
    rcvtally.evaluate.condorcet.EVALUATORS.values()
)
SEEDS = list(range(40))


def random_election(seed):
    rng = random.Random(seed)
    n_cands = rng.randint(1, 6)
    cand_ids = list(range(1, n_cands + 1))
    candidates = [Candidate(cid, f'cand{cid}') for cid in cand_ids]
    ballots = []
    for i in range(rng.randint(1, 30)):
        ranked = rng.sample(cand_ids, rng.randint(0, n_cands))
        ballots.append(Ballot.from_ranking(i, ranked))
    return candidates, ballots


def planted_election(seed, complete=False):
    '''Generate an election where one candidate tops most of the ballots.

    More than half of the ballots rank the planted winner first. With
    complete rankings, it is also the Condorcet winner.
    '''
    rng = random.Random(seed)
    n_cands = rng.randint(2, 6)
    cand_ids = list(range(1, n_cands + 1))
    candidates = [Candidate(cid, f'cand{cid}') for cid in cand_ids]
    winner = rng.choice(cand_ids)
    others = [cid for cid in cand_ids if cid != winner]
    n_ballots = rng.randint(1, 30)
    n_backing = n_ballots // 2 + 1
    rankings = []
    for i in range(n_ballots):
        if i < n_backing:
            rest = rng.sample(others, len(others))
            if not complete:
                rest = rest[:rng.randint(0, len(others))]
            rankings.append([winner] + rest)
        elif complete:
            rankings.append(rng.sample(cand_ids, n_cands))
        else:
            rankings.append(rng.sample(cand_ids, rng.randint(0, n_cands)))
    rng.shuffle(rankings)
    ballots = [
        Ballot.from_ranking(i, ranking) for i, ranking in enumerate(rankings)
    ]
    return candidates, ballots, winner


def pairwise_winner(candidates, ballots):
    rankings = rcvtally.convert.BallotsToRankings().convert(
        candidates, ballots
    )
    counts = rcvtally.convert.RankingsToPairwise().convert(rankings)
    for cand in candidates:
        if all(
            counts.get((cand.id, other.id), 0)
            > counts.get((other.id, cand.id), 0)
            for other in candidates if other.id != cand.id
        ):
            return cand.id
    return None


@pytest.mark.parametrize('seed', SEEDS)
@pytest.mark.parametrize(
    'evaluator', SEQUENTIAL_EVALUATORS + CONDORCET_EVALUATORS
)
def test_deterministic(evaluator, seed):
    candidates, ballots = random_election(seed)
    first = evaluator.evaluate(candidates, ballots)
    second = evaluator.evaluate(candidates, ballots)
    assert first == second
    assert isinstance(first, (Winner, NoWinner))


@pytest.mark.parametrize('seed', SEEDS)
@pytest.mark.parametrize('evaluator', SEQUENTIAL_EVALUATORS)
def test_sequential_terminates(evaluator, seed):
    candidates, ballots = random_election(seed)
    result = evaluator.evaluate(candidates, ballots)
    assert 1 <= len(result.rounds) <= len(candidates)
    n_active = len(candidates)
    for count in result.rounds[:-1]:
        assert len(count.tallies) == n_active
        assert count.eliminated
        assert set(count.eliminated) <= set(count.tallies)
        n_active -= len(count.eliminated)
        assert n_active >= 1
    assert result.rounds[-1].eliminated == ()
    assert len(result.rounds[-1].tallies) == n_active
    if isinstance(result, Winner):
        assert result.candidate.id in result.rounds[-1].tallies


@pytest.mark.parametrize('seed', SEEDS)
@pytest.mark.parametrize('evaluator', [
    rcvtally.evaluate.sequential.InstantRunoff(),
    rcvtally.evaluate.sequential.InstantRunoff(elimination='lowest_id'),
    rcvtally.evaluate.sequential.Coombs(majority_check=True),
])
def test_majority_elected_first_round(evaluator, seed):
    candidates, ballots, winner = planted_election(seed)
    firsts = collections.Counter(
        ballot.entries[0].candidate_id for ballot in ballots if ballot.entries
    )
    assert firsts[winner] * 2 > len(ballots)
    result = evaluator.evaluate(candidates, ballots)
    assert result.candidate.id == winner
    assert len(result.rounds) == 1


@pytest.mark.parametrize('seed', SEEDS)
@pytest.mark.parametrize('evaluator', CONDORCET_EVALUATORS)
def test_condorcet_winner_elected(evaluator, seed):
    candidates, ballots, winner = planted_election(seed, complete=True)
    assert pairwise_winner(candidates, ballots) == winner
    result = evaluator.evaluate(candidates, ballots)
    assert result.candidate.id == winner


@pytest.mark.parametrize('seed', SEEDS)
@pytest.mark.parametrize('evaluator', CONDORCET_EVALUATORS)
def test_locked_graph_is_acyclic(evaluator, seed):
    candidates, ballots = random_election(seed)
    result = evaluator.evaluate(candidates, ballots)
    rnd = result.rounds[0]
    locked = {(vic.winner, vic.loser) for vic in rnd.locked}
    # every skipped victory would close a cycle of locked ones
    for vic in rnd.skipped:
        assert _reaches(locked, vic.loser, vic.winner)
    assert len(rnd.locked) + len(rnd.skipped) <= (
        len(candidates) * (len(candidates) - 1) // 2
    )


def _reaches(edges, source, target):
    seen = set()
    stack = [source]
    while stack:
        node = stack.pop()
        if node == target:
            return True
        if node in seen:
            continue
        seen.add(node)
        stack.extend(loser for winner, loser in edges if winner == node)
    return False
