'''Condorcet evaluators working on pairwise preferences.

Holds the ranked pairs (Tideman) evaluator, which reliably selects
a Condorcet winner (a candidate beating every other one head-to-head) when
there is one in the input.
'''

import logging
from typing import Any, Callable, Dict, List, Union

import rcvtally.convert
import rcvtally.evaluate.core
import rcvtally.component.lockgraph
import rcvtally.component.pairwin_scorer
from rcvtally.candidate import Candidate
from rcvtally.evaluate.core import NoWinner, NoWinnerReason, Round, Winner
from rcvtally.persist import simple_serialization
from rcvtally.vote import Ranking


logger = logging.getLogger(__name__)


@simple_serialization
class RankedPairs(rcvtally.evaluate.core.Evaluator):
    '''Tideman's ranked pairs Condorcet evaluator.

    Counts for every ordered pair of candidates the rankings that place the
    first above the second (both must be ranked). Pairs preferred by
    strictly more rankings than the reverse are pairwise victories; these
    are sorted by their strength in descending order and sequentially locked
    into a graph of who beats whom, skipping victories that would contradict
    previously locked ones (i.e. create a cycle).

    The winner is the only candidate with no locked defeat. When there are
    several such candidates (e.g. two candidates tied head-to-head), the
    result is ``cycle-unresolved``.

    Victories of equal strength are locked in ascending order of the winner's
    and then the loser's candidate id.

    :param pairwin_scoring: A pairwise win scorer callable, or the name of
        one from :mod:`rcvtally.component.pairwin_scorer`. Margins are used
        by default.
    :param unknown_candidates: Policy for ballot entries referring to
        candidates outside the candidate set (``ignore`` or ``error``).
    '''
    def __init__(self,
                 pairwin_scoring: Union[str, Callable] = 'margins',
                 unknown_candidates: str = 'ignore',
                 ):
        super().__init__(unknown_candidates=unknown_candidates)
        self.pairwin_scoring = rcvtally.component.pairwin_scorer.construct(
            pairwin_scoring
        )
        self._pairwise = rcvtally.convert.RankingsToPairwise()

    def tabulate(self,
                 candidates: Dict[Any, Candidate],
                 rankings: List[Ranking],
                 ) -> rcvtally.evaluate.core.TabulationResult:
        cand_ids = list(candidates)
        counts = self._pairwise.convert(rankings)
        logger.debug('pairwise preference counts: %s', counts)
        victories = rcvtally.component.pairwin_scorer.victories(
            counts, cand_ids, self.pairwin_scoring
        )
        graph = rcvtally.component.lockgraph.LockGraph(cand_ids)
        locked = []
        skipped = []
        for victory in victories:
            if graph.lock(victory.winner, victory.loser):
                logger.info(
                    'locking %r over %r (margin %d)',
                    victory.winner, victory.loser, victory.margin
                )
                locked.append(victory)
            else:
                logger.info(
                    'skipping %r over %r, would create a cycle',
                    victory.winner, victory.loser
                )
                skipped.append(victory)
        rounds = (Round(
            1, counts, locked=tuple(locked), skipped=tuple(skipped)
        ), )
        sources = graph.sources()
        if len(sources) == 1:
            logger.info('%r has no locked defeat', sources[0])
            return Winner(candidates[sources[0]], rounds)
        logger.info('candidates with no locked defeat: %s', sources)
        return NoWinner(NoWinnerReason.CYCLE_UNRESOLVED, rounds)


EVALUATORS = {
    'rankedpairs_margins': RankedPairs(),
    'rankedpairs_winvotes': RankedPairs('winning_votes'),
}
