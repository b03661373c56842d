"""Lazy-deletion priority frontier shared by both search algorithms."""

import heapq
import itertools
from typing import List, Optional, Tuple


class Frontier:
    """
    Binary min-heap of (priority, sequence, index) entries.

    Priorities are tuples compared lexicographically, so each algorithm
    encodes its own tie-breaking in the tuple. Entries are never updated in
    place: an improved score pushes a duplicate, and the caller discards
    stale entries on pop by comparing against its authoritative scores.
    The sequence number makes equal priorities pop in insertion order.
    """

    def __init__(self):
        self._heap: List[Tuple[tuple, int, int]] = []
        self._counter = itertools.count()

    def push(self, index: int, priority: tuple) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), index))

    def pop(self) -> Optional[Tuple[tuple, int]]:
        """
        Remove and return (priority, index) with the lowest priority.
        Returns None if the frontier is empty.
        """
        if not self._heap:
            return None
        priority, _, index = heapq.heappop(self._heap)
        return priority, index

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        self._heap.clear()
        self._counter = itertools.count()

    def __len__(self) -> int:
        """Number of entries, stale duplicates included."""
        return len(self._heap)
