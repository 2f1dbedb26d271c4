'''The graph of locked pairwise victories used by ranked pairs.

A :class:`LockGraph` maps each candidate to the candidates it has a locked
victory over. It stays acyclic for its whole lifetime: an edge is only ever
added after checking that its loser cannot already reach its winner.

Reachability is kept as an incrementally maintained transitive closure, so
the cycle check is a set lookup rather than a graph search, and no recursion
is involved whatever the number of candidates.
'''

import logging
from typing import Any, FrozenSet, Iterable, List, Tuple


logger = logging.getLogger(__name__)


class CycleError(Exception):
    '''Adding an edge would create a cycle in the lock graph.

    :param winner: Winner of the rejected edge.
    :param loser: Loser of the rejected edge.
    '''
    def __init__(self, winner: Any, loser: Any):
        self.winner = winner
        self.loser = loser
        super().__init__(
            f'locking {winner!r} over {loser!r} would create a cycle'
        )


class LockGraph:
    '''Directed acyclic graph of locked victories.

    :param nodes: Candidate ids to start with. Their order is kept and
        used to order :meth:`sources`.
    '''
    def __init__(self, nodes: Iterable[Any] = ()):
        self._edges = {}
        self._reach = {}
        for node in nodes:
            self.add_node(node)

    def add_node(self, node: Any) -> None:
        '''Add a candidate with no locked victories or defeats.'''
        if node not in self._edges:
            self._edges[node] = set()
            self._reach[node] = set()

    @property
    def nodes(self) -> List[Any]:
        return list(self._edges)

    def edges(self) -> List[Tuple[Any, Any]]:
        '''Return all locked (winner, loser) pairs.'''
        return [
            (winner, loser)
            for winner, losers in self._edges.items()
            for loser in losers
        ]

    def beats(self, node: Any) -> FrozenSet[Any]:
        '''Return the candidates the node has a direct locked victory over.'''
        return frozenset(self._edges[node])

    def reaches(self, source: Any, target: Any) -> bool:
        '''Return True if a path of locked victories leads from source.'''
        return target in self._reach.get(source, ())

    def would_cycle(self, winner: Any, loser: Any) -> bool:
        '''Return True if locking winner over loser would close a cycle.'''
        return winner == loser or self.reaches(loser, winner)

    def add_edge(self, winner: Any, loser: Any) -> None:
        '''Lock a victory of winner over loser.

        :raises CycleError: If the edge would create a cycle.
        '''
        if self.would_cycle(winner, loser):
            raise CycleError(winner, loser)
        self.add_node(winner)
        self.add_node(loser)
        self._edges[winner].add(loser)
        gained = self._reach[loser] | {loser}
        for node, reached in self._reach.items():
            if node == winner or winner in reached:
                reached.update(gained)
        logger.debug('locked %r over %r', winner, loser)

    def lock(self, winner: Any, loser: Any) -> bool:
        '''Lock a victory unless it would create a cycle.

        :returns: True if the edge was added, False if it was skipped.
        '''
        if self.would_cycle(winner, loser):
            return False
        self.add_edge(winner, loser)
        return True

    def sources(self) -> List[Any]:
        '''Return the candidates with no locked defeat, in node order.'''
        defeated = set()
        for losers in self._edges.values():
            defeated.update(losers)
        return [node for node in self._edges if node not in defeated]

    def is_acyclic(self) -> bool:
        '''Check the graph for cycles by repeatedly removing sources.

        Independent of the maintained closure; used to verify it.
        '''
        in_degree = {node: 0 for node in self._edges}
        for losers in self._edges.values():
            for loser in losers:
                in_degree[loser] += 1
        ready = [node for node, degree in in_degree.items() if degree == 0]
        n_removed = 0
        while ready:
            node = ready.pop()
            n_removed += 1
            for loser in self._edges[node]:
                in_degree[loser] -= 1
                if in_degree[loser] == 0:
                    ready.append(loser)
        return n_removed == len(in_degree)
