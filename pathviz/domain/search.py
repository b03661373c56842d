"""Shared search lifecycle and the contract every algorithm implements."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .grid import Grid
from .snapshot import SearchSnapshot
from .types import Coord, SearchConfig, SearchStatus

logger = logging.getLogger(__name__)


class SearchRun:
    """
    State of one bound run: grid reference, endpoints, config copy, status
    and snapshot.

    The grid is borrowed, not owned. Callers must not edit it between a
    reset and the next reset; any edit has to be followed by a fresh reset
    so the snapshot and frontier stay consistent with the grid.
    """

    def __init__(self):
        self._grid: Optional[Grid] = None
        self._start: Coord = (0, 0)
        self._goal: Coord = (0, 0)
        self._config = SearchConfig()
        self.status = SearchStatus.NOT_STARTED
        self.snapshot = SearchSnapshot()
        self.expansions = 0
        self.stale_pops = 0

    def bind(self, grid: Grid, start: Coord, goal: Coord, config: SearchConfig) -> bool:
        """
        Validate and bind a run.

        Returns False (empty snapshot, NOT_STARTED) when the grid has a
        non-positive dimension, or start/goal is out of bounds or blocked.
        start == goal is accepted.
        """
        self._grid = None
        self._start = (0, 0)
        self._goal = (0, 0)
        self.status = SearchStatus.NOT_STARTED
        self.expansions = 0
        self.stale_pops = 0

        reason = None
        if grid.width <= 0 or grid.height <= 0:
            reason = "grid has no cells"
        elif not grid.in_bounds(start) or not grid.in_bounds(goal):
            reason = "start or goal out of bounds"
        elif grid.is_blocked(start) or grid.is_blocked(goal):
            reason = "start or goal blocked"

        if reason is not None:
            logger.debug("Rejected run %s -> %s on %r: %s", start, goal, grid, reason)
            self.snapshot.resize(0, 0)
            return False

        self._grid = grid
        self._start = start
        self._goal = goal
        self._config = dataclasses.replace(config)
        self.snapshot.resize(grid.width, grid.height)
        self.status = SearchStatus.RUNNING
        return True

    @property
    def grid(self) -> Optional[Grid]:
        """The bound grid, None when no run is bound."""
        return self._grid

    @property
    def start(self) -> Coord:
        return self._start

    @property
    def goal(self) -> Coord:
        return self._goal

    @property
    def config(self) -> SearchConfig:
        return self._config


class Search(ABC):
    """
    Capability set shared by every stepwise search algorithm.

    The embedding application calls reset() whenever the grid, endpoints or
    configuration change, then step() repeatedly until the status is
    terminal, reading the snapshot after each call.
    """

    name = "search"

    def __init__(self):
        self._run = SearchRun()

    @abstractmethod
    def reset(self, grid: Grid, start: Coord, goal: Coord, config: SearchConfig) -> bool:
        """Bind a new run. Returns False if it was rejected."""

    @abstractmethod
    def step(self, iterations: int = 1) -> SearchStatus:
        """Perform up to `iterations` expansions and return the status."""

    @property
    def status(self) -> SearchStatus:
        return self._run.status

    @property
    def snapshot(self) -> SearchSnapshot:
        """Per-cell state of the current run. Treat as read-only."""
        return self._run.snapshot

    @property
    def grid(self) -> Optional[Grid]:
        return self._run.grid

    @property
    def start(self) -> Coord:
        return self._run.start

    @property
    def goal(self) -> Coord:
        return self._run.goal

    @property
    def expansions(self) -> int:
        """Expansions performed in the current run."""
        return self._run.expansions

    @property
    def stale_pops(self) -> int:
        """Stale frontier entries discarded in the current run."""
        return self._run.stale_pops

    @property
    @abstractmethod
    def frontier_size(self) -> int:
        """Frontier entries waiting to be popped, stale duplicates included."""
