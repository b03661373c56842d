"""Algorithm selection and run-to-completion helpers."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .astar import AStarSearch
from .dijkstra import DijkstraSearch
from .path import extract_path
from .search import Search
from .types import Coord, NodeState, SearchStatus


class AlgorithmKind(Enum):
    """Algorithms the embedding application can choose from."""
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"


def create_search(kind: AlgorithmKind) -> Search:
    """Create a fresh, unbound search for the given algorithm."""
    if kind == AlgorithmKind.DIJKSTRA:
        return DijkstraSearch()
    if kind == AlgorithmKind.ASTAR:
        return AStarSearch()
    raise ValueError(f"Unknown algorithm: {kind}")


@dataclass
class SearchResult:
    """Summary of a finished (or abandoned) run."""
    algorithm: str
    status: SearchStatus
    expansions: int = 0
    path: List[Coord] = field(default_factory=list)
    path_cost: Optional[int] = None
    open_count: int = 0
    closed_count: int = 0
    elapsed_ms: float = 0.0

    @property
    def success(self) -> bool:
        """Whether a path was found."""
        return self.status == SearchStatus.FOUND and len(self.path) > 0

    @property
    def path_length(self) -> int:
        """Number of moves along the path."""
        return max(0, len(self.path) - 1)


def summarize(search: Search, elapsed_ms: float = 0.0) -> SearchResult:
    """Build a SearchResult from the current state of a search."""
    snapshot = search.snapshot
    path: List[Coord] = []
    path_cost = None
    if search.status == SearchStatus.FOUND:
        path = extract_path(snapshot, search.start, search.goal)
        path_cost = snapshot.g_at(search.goal)

    return SearchResult(
        algorithm=search.name,
        status=search.status,
        expansions=search.expansions,
        path=path,
        path_cost=path_cost,
        open_count=snapshot.count(NodeState.OPEN),
        closed_count=snapshot.count(NodeState.CLOSED),
        elapsed_ms=elapsed_ms,
    )


def run_to_completion(search: Search, iterations_per_step: int = 1,
                      max_steps: Optional[int] = None) -> SearchResult:
    """
    Step an already reset search until its status is terminal.

    max_steps bounds the number of step() calls; by default it is ten times
    the cell count of the bound grid, which no valid run can exceed.
    """
    if max_steps is None:
        grid = search.grid
        max_steps = grid.size * 10 if grid is not None else 0

    started = time.perf_counter_ns()
    steps = 0
    while search.status == SearchStatus.RUNNING and steps < max_steps:
        search.step(iterations_per_step)
        steps += 1
    elapsed_ms = (time.perf_counter_ns() - started) / 1_000_000

    return summarize(search, elapsed_ms)
