"""Core type definitions for the incremental search engine."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple

# Coordinate type for grid positions, (x, y)
Coord = Tuple[int, int]

NO_PARENT = -1
INF_SCORE = 1_000_000_000


class NodeState(IntEnum):
    """Per-cell search state exposed through the snapshot."""
    UNSEEN = 0
    OPEN = 1
    CLOSED = 2
    PATH = 3


class SearchStatus(Enum):
    """Lifecycle of a single search run."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FOUND = "found"
    NO_PATH = "no_path"

    @property
    def is_terminal(self) -> bool:
        """Whether only a fresh reset can leave this status."""
        return self in (SearchStatus.FOUND, SearchStatus.NO_PATH)


class NeighborMode(Enum):
    """Neighbor topology used when expanding a cell."""
    FOUR = "4-dir"
    EIGHT = "8-dir"


@dataclass
class SearchConfig:
    """Configuration for a search run."""
    neighbor_mode: NeighborMode = NeighborMode.FOUR
    use_weights: bool = False
    allow_corner_cutting: bool = False
    penalize_turns: bool = False
    turn_penalty: int = 1


def to_index(width: int, coord: Coord) -> int:
    """Flatten a coordinate to its row-major index."""
    return coord[1] * width + coord[0]


def from_index(width: int, index: int) -> Coord:
    """Expand a row-major index back to a coordinate."""
    if width <= 0:
        return (0, 0)
    return (index % width, index // width)


def in_bounds(width: int, height: int, coord: Coord) -> bool:
    """Check if coordinate lies inside a width x height rectangle."""
    x, y = coord
    return width > 0 and height > 0 and 0 <= x < width and 0 <= y < height
