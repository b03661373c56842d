"""Grid model: blocked flags and traversal costs per cell."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .types import Coord, to_index, in_bounds

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """A single grid cell."""
    blocked: bool = False
    cost: int = 1


class Grid:
    """
    Authoritative map state and neighbor topology.

    Cells are stored row-major, so index ``y * width + x`` addresses (x, y).
    Searches borrow a grid for the duration of a run and never mutate it.

    Blocked/cost queries outside the grid are total: ``is_blocked`` reports
    True (outside behaves like a wall) and ``cost`` reports 1.
    """

    def __init__(self, width: int, height: int, default_cost: int = 1):
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        if default_cost < 1:
            raise ValueError(f"Default cost must be >= 1, got {default_cost}")

        self._width = width
        self._height = height
        self._cells: List[Cell] = [Cell(False, default_cost) for _ in range(width * height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._width * self._height

    def in_bounds(self, coord: Coord) -> bool:
        """Check if coordinate is within grid bounds."""
        return in_bounds(self._width, self._height, coord)

    def cell(self, coord: Coord) -> Optional[Cell]:
        """Get cell at coordinate, returns None if out of bounds."""
        if not self.in_bounds(coord):
            return None
        return self._cells[to_index(self._width, coord)]

    def set_blocked(self, coord: Coord, blocked: bool) -> bool:
        if not self.in_bounds(coord):
            return False
        self._cells[to_index(self._width, coord)].blocked = blocked
        return True

    def is_blocked(self, coord: Coord) -> bool:
        if not self.in_bounds(coord):
            logger.debug("is_blocked queried out of bounds at %s", coord)
            return True
        return self._cells[to_index(self._width, coord)].blocked

    def set_cost(self, coord: Coord, cost: int) -> bool:
        if not self.in_bounds(coord) or cost < 1:
            return False
        self._cells[to_index(self._width, coord)].cost = cost
        return True

    def cost(self, coord: Coord) -> int:
        if not self.in_bounds(coord):
            logger.debug("cost queried out of bounds at %s", coord)
            return 1
        return self._cells[to_index(self._width, coord)].cost

    def clear_blocked(self) -> None:
        """Unblock every cell."""
        for cell in self._cells:
            cell.blocked = False

    def fill_cost(self, cost: int) -> bool:
        """Set every cell to the same cost."""
        if cost < 1:
            return False
        for cell in self._cells:
            cell.cost = cost
        return True

    def neighbors4(self, coord: Coord) -> List[Coord]:
        """
        Orthogonal passable neighbors in the order east, west, south, north.
        The order is significant: it decides ties between equal priorities.
        """
        if not self.in_bounds(coord):
            return []

        x, y = coord
        result = []
        for candidate in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if self.in_bounds(candidate) and not self.is_blocked(candidate):
                result.append(candidate)
        return result

    def neighbors8(self, coord: Coord) -> List[Coord]:
        """Passable neighbors in row-major scan order of the 3x3 block around coord."""
        if not self.in_bounds(coord):
            return []

        x, y = coord
        result = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                candidate = (x + dx, y + dy)
                if self.in_bounds(candidate) and not self.is_blocked(candidate):
                    result.append(candidate)
        return result

    def copy(self) -> "Grid":
        """Deep copy, used to give side-by-side runs independent grids."""
        clone = Grid(self._width, self._height)
        clone._cells = [Cell(c.blocked, c.cost) for c in self._cells]
        return clone

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"
