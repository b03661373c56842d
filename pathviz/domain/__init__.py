"""Incremental grid search engine: grid, snapshot, lifecycle and algorithms."""

from .types import (
    Coord, NodeState, SearchStatus, NeighborMode, SearchConfig,
    NO_PARENT, INF_SCORE, to_index, from_index, in_bounds,
)
from .grid import Cell, Grid
from .snapshot import SearchSnapshot
from .search import Search, SearchRun
from .dijkstra import DijkstraSearch
from .astar import AStarSearch
from .runner import AlgorithmKind, SearchResult, create_search, run_to_completion, summarize

__all__ = [
    "Coord", "NodeState", "SearchStatus", "NeighborMode", "SearchConfig",
    "NO_PARENT", "INF_SCORE", "to_index", "from_index", "in_bounds",
    "Cell", "Grid", "SearchSnapshot", "Search", "SearchRun",
    "DijkstraSearch", "AStarSearch",
    "AlgorithmKind", "SearchResult", "create_search", "run_to_completion", "summarize",
]
