"""Per-cell algorithm state exposed to renderers and tests."""

import numpy as np

from .types import Coord, NodeState, NO_PARENT, INF_SCORE, to_index, in_bounds


class SearchSnapshot:
    """
    Parallel numpy arrays sized width * height, indexed row-major.

    - state: NodeState values (uint8)
    - parent: row-major index of the parent cell, or NO_PARENT
    - g_score / f_score: INF_SCORE until a cell is reached

    An empty 0x0 snapshot means no run is bound. Only the active algorithm
    writes to it; everyone else treats it as read-only.
    """

    def __init__(self, width: int = 0, height: int = 0):
        self.width = 0
        self.height = 0
        self.state = np.zeros(0, dtype=np.uint8)
        self.parent = np.zeros(0, dtype=np.int32)
        self.g_score = np.zeros(0, dtype=np.int64)
        self.f_score = np.zeros(0, dtype=np.int64)
        self.resize(width, height)

    @property
    def size(self) -> int:
        return self.width * self.height

    def valid(self) -> bool:
        """True when dimensions are positive and every array matches them."""
        if self.width <= 0 or self.height <= 0:
            return False
        expected = self.width * self.height
        return (len(self.state) == expected and len(self.parent) == expected
                and len(self.g_score) == expected and len(self.f_score) == expected)

    def resize(self, width: int, height: int) -> None:
        """Resize to the given dimensions and clear every cell."""
        self.width = width
        self.height = height
        total = width * height if width > 0 and height > 0 else 0
        self.state = np.zeros(total, dtype=np.uint8)
        self.parent = np.zeros(total, dtype=np.int32)
        self.g_score = np.zeros(total, dtype=np.int64)
        self.f_score = np.zeros(total, dtype=np.int64)
        self.clear()

    def clear(self) -> None:
        self.state.fill(NodeState.UNSEEN)
        self.parent.fill(NO_PARENT)
        self.g_score.fill(INF_SCORE)
        self.f_score.fill(INF_SCORE)

    def in_bounds(self, coord: Coord) -> bool:
        return in_bounds(self.width, self.height, coord)

    def index_of(self, coord: Coord) -> int:
        """Row-major index of coord, -1 when out of bounds."""
        if not self.in_bounds(coord):
            return -1
        return to_index(self.width, coord)

    def get_state(self, coord: Coord) -> NodeState:
        if not self.in_bounds(coord):
            return NodeState.UNSEEN
        return NodeState(int(self.state[to_index(self.width, coord)]))

    def set_state(self, coord: Coord, state: NodeState) -> bool:
        if not self.in_bounds(coord):
            return False
        self.state[to_index(self.width, coord)] = state
        return True

    def set_parent(self, coord: Coord, parent_index: int) -> bool:
        if not self.in_bounds(coord):
            return False
        self.parent[to_index(self.width, coord)] = parent_index
        return True

    def g_at(self, coord: Coord) -> int:
        """g-score at coord, INF_SCORE when unknown or out of bounds."""
        if not self.in_bounds(coord):
            return INF_SCORE
        return int(self.g_score[to_index(self.width, coord)])

    def count(self, state: NodeState) -> int:
        """Number of cells currently in the given state."""
        return int(np.count_nonzero(self.state == state))

    def state_grid(self) -> np.ndarray:
        """State array reshaped to (height, width) for renderers."""
        return self.state.reshape(self.height, self.width)

    def copy(self) -> "SearchSnapshot":
        clone = SearchSnapshot()
        clone.width = self.width
        clone.height = self.height
        clone.state = self.state.copy()
        clone.parent = self.parent.copy()
        clone.g_score = self.g_score.copy()
        clone.f_score = self.f_score.copy()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchSnapshot):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.state, other.state)
                and np.array_equal(self.parent, other.parent)
                and np.array_equal(self.g_score, other.g_score)
                and np.array_equal(self.f_score, other.f_score))

    __hash__ = None
