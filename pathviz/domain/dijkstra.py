"""Uniform-cost (Dijkstra) search, executed one expansion at a time."""

import logging

from .grid import Grid
from .neighbors import get_neighbors, edge_cost
from .path import rebuild_path
from .priority_queue import Frontier
from .search import Search
from .types import Coord, NodeState, NO_PARENT, SearchConfig, SearchStatus, from_index, to_index

logger = logging.getLogger(__name__)


class DijkstraSearch(Search):
    """
    Uniform-cost search ordered by accumulated distance.

    Equal distances pop in insertion order. Improved distances push a new
    frontier entry; the superseded ones are discarded when popped.
    """

    name = "Dijkstra"

    def __init__(self):
        super().__init__()
        self._open = Frontier()

    def reset(self, grid: Grid, start: Coord, goal: Coord, config: SearchConfig) -> bool:
        self._open.clear()
        if not self._run.bind(grid, start, goal, config):
            return False

        snapshot = self._run.snapshot
        start_index = to_index(grid.width, start)
        snapshot.g_score[start_index] = 0
        snapshot.f_score[start_index] = 0
        snapshot.parent[start_index] = NO_PARENT
        snapshot.state[start_index] = NodeState.OPEN
        self._open.push(start_index, (0,))
        return True

    def step(self, iterations: int = 1) -> SearchStatus:
        run = self._run
        if run.status != SearchStatus.RUNNING:
            return run.status

        grid = run.grid
        config = run.config
        snapshot = run.snapshot
        width = grid.width
        start_index = to_index(width, run.start)
        goal_index = to_index(width, run.goal)

        expansions = 0
        while expansions < iterations:
            entry = self._open.pop()
            if entry is None:
                run.status = SearchStatus.NO_PATH
                logger.debug("%s: frontier exhausted after %d expansions", self.name, run.expansions)
                return run.status

            (distance,), index = entry
            if snapshot.state[index] == NodeState.CLOSED or snapshot.g_score[index] != distance:
                run.stale_pops += 1
                continue

            snapshot.state[index] = NodeState.CLOSED
            expansions += 1
            run.expansions += 1

            if index == goal_index:
                run.status = SearchStatus.FOUND
                rebuild_path(snapshot, start_index, goal_index)
                logger.debug("%s: goal reached at distance %d", self.name, distance)
                return run.status

            coord = from_index(width, index)
            for neighbor in get_neighbors(coord, grid, config):
                neighbor_index = to_index(width, neighbor)
                if snapshot.state[neighbor_index] == NodeState.CLOSED:
                    continue

                new_distance = distance + edge_cost(neighbor, grid, config)
                if new_distance < snapshot.g_score[neighbor_index]:
                    snapshot.g_score[neighbor_index] = new_distance
                    snapshot.f_score[neighbor_index] = new_distance
                    snapshot.parent[neighbor_index] = index
                    snapshot.state[neighbor_index] = NodeState.OPEN
                    self._open.push(neighbor_index, (new_distance,))

        return run.status

    @property
    def frontier_size(self) -> int:
        return len(self._open)
