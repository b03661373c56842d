"""Heuristic functions for the heuristic-guided search."""

from typing import Callable, Dict

from .types import Coord, NeighborMode


def manhattan_distance(start: Coord, target: Coord) -> int:
    """
    Manhattan (L1) distance heuristic.
    Admissible for 4-directional movement with unit minimum cost.
    """
    return abs(start[0] - target[0]) + abs(start[1] - target[1])


def chebyshev_distance(start: Coord, target: Coord) -> int:
    """
    Chebyshev (L-infinity) distance heuristic.
    Admissible for 8-directional movement where a diagonal step costs the same
    as an orthogonal one.
    """
    return max(abs(start[0] - target[0]), abs(start[1] - target[1]))


HEURISTICS: Dict[NeighborMode, Callable[[Coord, Coord], int]] = {
    NeighborMode.FOUR: manhattan_distance,
    NeighborMode.EIGHT: chebyshev_distance,
}


def heuristic_for_mode(mode: NeighborMode) -> Callable[[Coord, Coord], int]:
    """Get the heuristic matching a neighbor topology."""
    return HEURISTICS[mode]
