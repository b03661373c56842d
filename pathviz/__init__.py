"""PathViz - stepwise grid shortest-path search.

This package implements uniform-cost and A* search over a rectangular grid,
executed a bounded number of expansions at a time so a host application can
render the per-cell search state between steps.
"""

from .domain import (
    Coord, NodeState, SearchStatus, NeighborMode, SearchConfig,
    Grid, SearchSnapshot, Search, DijkstraSearch, AStarSearch,
    AlgorithmKind, SearchResult, create_search, run_to_completion,
)

__version__ = "1.0.0"

__all__ = [
    "Coord", "NodeState", "SearchStatus", "NeighborMode", "SearchConfig",
    "Grid", "SearchSnapshot", "Search", "DijkstraSearch", "AStarSearch",
    "AlgorithmKind", "SearchResult", "create_search", "run_to_completion",
]
