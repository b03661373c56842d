"""Neighbor generation with topology and corner-cutting rules."""

from typing import List, Tuple

from .grid import Grid
from .types import Coord, SearchConfig, NeighborMode


def get_neighbors(coord: Coord, grid: Grid, config: SearchConfig) -> List[Coord]:
    """
    Passable neighbors of coord under the configured topology.

    Enumeration order follows Grid.neighbors4 / Grid.neighbors8. In 8-direction
    mode without corner cutting, a diagonal step is dropped when either
    orthogonal cell it passes between is blocked.
    """
    if config.neighbor_mode == NeighborMode.FOUR:
        return grid.neighbors4(coord)

    neighbors = grid.neighbors8(coord)
    if config.allow_corner_cutting:
        return neighbors
    return [n for n in neighbors if not is_corner_cut(coord, n, grid)]


def is_corner_cut(coord: Coord, neighbor: Coord, grid: Grid) -> bool:
    """
    Check whether moving from coord to neighbor cuts a blocked corner.
    Orthogonal moves never cut corners.
    """
    dx = neighbor[0] - coord[0]
    dy = neighbor[1] - coord[1]
    if dx == 0 or dy == 0:
        return False

    side1 = (coord[0] + dx, coord[1])
    side2 = (coord[0], coord[1] + dy)
    return grid.is_blocked(side1) or grid.is_blocked(side2)


def edge_cost(neighbor: Coord, grid: Grid, config: SearchConfig) -> int:
    """Cost of entering neighbor: its cell cost with weights on, else 1."""
    if config.use_weights:
        return grid.cost(neighbor)
    return 1


def get_direction_vector(from_coord: Coord, to_coord: Coord) -> Tuple[int, int]:
    """Get the (dx, dy) step between two adjacent coordinates."""
    return (to_coord[0] - from_coord[0], to_coord[1] - from_coord[1])
