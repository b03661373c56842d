"""Heuristic-guided (A*) search, executed one expansion at a time."""

import logging

from .grid import Grid
from .heuristics import heuristic_for_mode
from .neighbors import get_neighbors, edge_cost, get_direction_vector
from .path import rebuild_path
from .priority_queue import Frontier
from .search import Search
from .types import Coord, NodeState, NO_PARENT, SearchConfig, SearchStatus, from_index, to_index

logger = logging.getLogger(__name__)


class AStarSearch(Search):
    """
    A* search ordered by f = g + h.

    Tie-breaking: lower f first, then larger g (deeper partial paths win,
    which reduces zig-zagging), then insertion order.

    h is Chebyshev distance in 8-direction mode and Manhattan distance in
    4-direction mode. With penalize_turns on, a move whose direction differs
    from the move that reached the expanded cell costs turn_penalty extra;
    the start cell has no incoming direction and never pays it.
    """

    name = "A*"

    def __init__(self):
        super().__init__()
        self._open = Frontier()

    def reset(self, grid: Grid, start: Coord, goal: Coord, config: SearchConfig) -> bool:
        self._open.clear()
        if not self._run.bind(grid, start, goal, config):
            return False

        snapshot = self._run.snapshot
        start_index = to_index(grid.width, start)
        h_start = self._heuristic(start)
        snapshot.g_score[start_index] = 0
        snapshot.f_score[start_index] = h_start
        snapshot.parent[start_index] = NO_PARENT
        snapshot.state[start_index] = NodeState.OPEN
        self._open.push(start_index, (h_start, 0))
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
        apply_turn_penalty = config.penalize_turns and config.turn_penalty > 0

        expansions = 0
        while expansions < iterations:
            entry = self._open.pop()
            if entry is None:
                run.status = SearchStatus.NO_PATH
                logger.debug("%s: frontier exhausted after %d expansions", self.name, run.expansions)
                return run.status

            (f_cost, _), index = entry
            # g alone cannot identify an entry once a cell was relaxed twice; f can
            if snapshot.state[index] == NodeState.CLOSED or snapshot.f_score[index] != f_cost:
                run.stale_pops += 1
                continue

            snapshot.state[index] = NodeState.CLOSED
            expansions += 1
            run.expansions += 1

            if index == goal_index:
                run.status = SearchStatus.FOUND
                rebuild_path(snapshot, start_index, goal_index)
                logger.debug("%s: goal reached with g=%d", self.name, int(snapshot.g_score[index]))
                return run.status

            coord = from_index(width, index)
            current_g = int(snapshot.g_score[index])

            incoming = None
            parent_index = int(snapshot.parent[index])
            if parent_index != NO_PARENT:
                incoming = get_direction_vector(from_index(width, parent_index), coord)

            for neighbor in get_neighbors(coord, grid, config):
                neighbor_index = to_index(width, neighbor)
                if snapshot.state[neighbor_index] == NodeState.CLOSED:
                    continue

                step_cost = edge_cost(neighbor, grid, config)
                if apply_turn_penalty and incoming is not None:
                    if get_direction_vector(coord, neighbor) != incoming:
                        step_cost += config.turn_penalty

                new_g = current_g + step_cost
                if new_g < snapshot.g_score[neighbor_index]:
                    new_f = new_g + self._heuristic(neighbor)
                    snapshot.g_score[neighbor_index] = new_g
                    snapshot.f_score[neighbor_index] = new_f
                    snapshot.parent[neighbor_index] = index
                    snapshot.state[neighbor_index] = NodeState.OPEN
                    self._open.push(neighbor_index, (new_f, -new_g))

        return run.status

    def _heuristic(self, coord: Coord) -> int:
        """Heuristic distance from coord to the bound goal."""
        return heuristic_for_mode(self._run.config.neighbor_mode)(coord, self._run.goal)

    @property
    def frontier_size(self) -> int:
        return len(self._open)
