"""Application controller connecting a host loop to the search engine."""

import dataclasses
import logging
import time
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ..domain.grid import Grid
from ..domain.runner import AlgorithmKind, SearchResult, create_search, summarize
from ..domain.search import Search
from ..domain.snapshot import SearchSnapshot
from ..domain.types import Coord, NeighborMode, SearchConfig, SearchStatus
from ..utils import map_io
from ..utils.grid_factory import build_demo_grid
from .fsm import PlaybackStateMachine, PlaybackState

logger = logging.getLogger(__name__)

SPEED_MIN = 1
SPEED_MAX = 100
MAX_INTERVAL_MS = 30
TURN_PENALTY_MIN = 1
TURN_PENALTY_MAX = 10


def interval_for_speed(speed: int) -> int:
    """
    Timer interval in ms for a steps-per-tick speed setting.
    The top speed maps to 0 (fire whenever the event loop is idle).
    """
    if speed >= SPEED_MAX:
        return 0
    speed = max(SPEED_MIN, speed)
    steps = SPEED_MAX - SPEED_MIN
    numerator = MAX_INTERVAL_MS * (SPEED_MAX - speed)
    return max(1, (numerator + steps - 1) // steps)


class SearchController(QObject):
    """
    Owns the grid, endpoints, configuration and active search, and drives
    stepping from a QTimer.

    Every edit to the grid, endpoints, configuration or algorithm is followed
    by a fresh reset, so the running search never sees a grid that changed
    under it.

    Signals:
        state_changed: Emitted when the playback state changes
        step_completed: Emitted after each step with the SearchStatus
        search_finished: Emitted with a SearchResult on a terminal status
        grid_updated: Emitted when the grid or snapshot needs to be redrawn
        error_occurred: Emitted with a human-readable message
    """

    state_changed = Signal(object)  # PlaybackState
    step_completed = Signal(object)  # SearchStatus
    search_finished = Signal(object)  # SearchResult
    grid_updated = Signal()
    error_occurred = Signal(str)

    def __init__(self, algorithm: AlgorithmKind = AlgorithmKind.DIJKSTRA,
                 parent: Optional[QObject] = None):
        super().__init__(parent)

        self._grid, self._start, self._goal = build_demo_grid()
        self._config = SearchConfig()
        self._algorithm = algorithm
        self._search: Search = create_search(algorithm)
        self._state_machine = PlaybackStateMachine()
        self._steps_per_tick = 5
        self._paint_cost = 5
        self._algo_time_ns = 0

        self._timer = QTimer(self)
        self._timer.setInterval(interval_for_speed(self._steps_per_tick))
        self._timer.timeout.connect(self.tick)

        self._setup_state_callbacks()
        self.reset_search()

    def _setup_state_callbacks(self):
        """Setup callbacks for state machine transitions."""
        self._state_machine.on_state_enter(PlaybackState.RUNNING, self._on_running_entered)
        self._state_machine.on_state_enter(PlaybackState.PAUSED, self._on_paused_entered)
        self._state_machine.on_state_enter(PlaybackState.COMPLETE, self._on_finished_entered)
        self._state_machine.on_state_enter(PlaybackState.NO_PATH, self._on_finished_entered)
        self._state_machine.on_state_enter(PlaybackState.INVALID, self._on_invalid_entered)

    # Properties

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def start(self) -> Coord:
        return self._start

    @property
    def goal(self) -> Coord:
        return self._goal

    @property
    def config(self) -> SearchConfig:
        """Live configuration; changes apply through update_config()."""
        return self._config

    @property
    def algorithm(self) -> AlgorithmKind:
        return self._algorithm

    @property
    def search(self) -> Search:
        return self._search

    @property
    def snapshot(self) -> SearchSnapshot:
        return self._search.snapshot

    @property
    def status(self) -> SearchStatus:
        return self._search.status

    @property
    def playback_state(self) -> PlaybackState:
        return self._state_machine.current_state

    @property
    def playing(self) -> bool:
        return self._state_machine.is_running()

    @property
    def steps_per_tick(self) -> int:
        return self._steps_per_tick

    @property
    def paint_cost(self) -> int:
        return self._paint_cost

    @property
    def algo_time_ms(self) -> float:
        """Wall time spent inside step() since the last reset."""
        return self._algo_time_ns / 1_000_000

    @property
    def timer_interval(self) -> int:
        return self._timer.interval()

    # Search control

    def reset_search(self) -> bool:
        """Rebind the active search to the current grid, endpoints and config."""
        self._timer.stop()
        self._algo_time_ns = 0
        self._state_machine.reset()

        accepted = self._search.reset(self._grid, self._start, self._goal, self._config)
        if accepted:
            self.state_changed.emit(PlaybackState.IDLE)
        else:
            logger.warning("Search reset rejected for start %s, goal %s", self._start, self._goal)
            self._state_machine.transition_to(PlaybackState.INVALID)

        self.grid_updated.emit()
        return accepted

    def play(self) -> bool:
        """Start or resume timed stepping."""
        return self._state_machine.transition_to(PlaybackState.RUNNING)

    def pause(self) -> bool:
        return self._state_machine.transition_to(PlaybackState.PAUSED)

    def toggle_play(self) -> bool:
        if self._state_machine.is_running():
            return self.pause()
        return self.play()

    def step_once(self) -> bool:
        """Perform a single expansion, pausing timed playback first."""
        if not self._state_machine.can_step():
            return False
        if not self._state_machine.is_paused():
            self._state_machine.transition_to(PlaybackState.PAUSED)
        self._advance(1)
        return True

    def tick(self):
        """One timer tick: steps_per_tick expansions while playing."""
        if not self._state_machine.is_running():
            self._timer.stop()
            return
        self._advance(self._steps_per_tick)

    def _advance(self, iterations: int):
        started = time.perf_counter_ns()
        status = self._search.step(iterations)
        self._algo_time_ns += time.perf_counter_ns() - started

        self.step_completed.emit(status)
        if status == SearchStatus.FOUND:
            self._state_machine.transition_to(PlaybackState.COMPLETE, {"result": self.result()})
        elif status == SearchStatus.NO_PATH:
            self._state_machine.transition_to(PlaybackState.NO_PATH, {"result": self.result()})
        self.grid_updated.emit()

    def result(self) -> SearchResult:
        """Summary of the current run."""
        return summarize(self._search, self.algo_time_ms)

    # Configuration

    def set_algorithm(self, kind: AlgorithmKind) -> bool:
        if kind == self._algorithm:
            return True
        self._algorithm = kind
        self._search = create_search(kind)
        return self.reset_search()

    def update_config(self, **kwargs) -> bool:
        """
        Update configuration fields by name and restart the search.
        Nothing is applied when any name is unknown.
        """
        known = {f.name for f in dataclasses.fields(self._config)}
        for key in kwargs:
            if key not in known:
                self.error_occurred.emit(f"Unknown configuration option: {key}")
                return False
        for key, value in kwargs.items():
            setattr(self._config, key, value)
        return self.reset_search()

    def set_turn_penalty(self, value: int) -> bool:
        value = max(TURN_PENALTY_MIN, min(TURN_PENALTY_MAX, value))
        return self.update_config(turn_penalty=value)

    def set_steps_per_tick(self, value: int):
        self._steps_per_tick = max(SPEED_MIN, min(SPEED_MAX, value))
        self._timer.setInterval(interval_for_speed(self._steps_per_tick))

    def set_paint_cost(self, value: int):
        self._paint_cost = map_io.clamp_cost(value)

    # Grid editing

    def _can_edit(self) -> bool:
        return not self._state_machine.is_running()

    def apply_wall_at(self, coord: Coord, blocked: bool) -> bool:
        """Block or unblock a cell; endpoints cannot be blocked."""
        if not self._can_edit() or not self._grid.in_bounds(coord):
            return False
        if blocked and coord in (self._start, self._goal):
            return False
        if self._grid.is_blocked(coord) == blocked:
            return True
        self._grid.set_blocked(coord, blocked)
        self.reset_search()
        return True

    def apply_cost_at(self, coord: Coord, cost: Optional[int] = None) -> bool:
        """Paint a cost (default: the current paint cost) onto a cell."""
        if not self._can_edit():
            return False
        cost = self._paint_cost if cost is None else map_io.clamp_cost(cost)
        if not self._grid.set_cost(coord, cost):
            return False
        self.reset_search()
        return True

    def set_start_at(self, coord: Coord) -> bool:
        if not self._valid_endpoint(coord, self._goal):
            return False
        self._start = coord
        self.reset_search()
        return True

    def set_goal_at(self, coord: Coord) -> bool:
        if not self._valid_endpoint(coord, self._start):
            return False
        self._goal = coord
        self.reset_search()
        return True

    def _valid_endpoint(self, coord: Coord, other: Coord) -> bool:
        return (self._can_edit() and self._grid.in_bounds(coord)
                and not self._grid.is_blocked(coord) and coord != other)

    def clear_walls(self) -> bool:
        if not self._can_edit():
            return False
        self._grid.clear_blocked()
        self.reset_search()
        return True

    def new_map(self) -> bool:
        """Replace the grid with the demo map and default topology."""
        self._grid, self._start, self._goal = build_demo_grid()
        self._config.neighbor_mode = NeighborMode.FOUR
        self._config.use_weights = False
        self._config.allow_corner_cutting = False
        return self.reset_search()

    def resize_grid(self, width: int, height: int) -> bool:
        """Replace the grid with an empty one; endpoints move to opposite corners."""
        if width <= 0 or height <= 0 or width * height < 2:
            self.error_occurred.emit(f"Invalid grid size {width}x{height}")
            return False
        self._grid = Grid(width, height)
        self._start = (0, 0)
        self._goal = (width - 1, height - 1)
        return self.reset_search()

    # Persistence

    def save_map(self, filepath: str) -> bool:
        result = map_io.save_map(self._grid, self._start, self._goal,
                                 map_io.ensure_map_suffix(filepath) if filepath else filepath)
        if not result:
            self.error_occurred.emit(result.message)
            return False
        return True

    def load_map(self, filepath: str) -> bool:
        result = map_io.load_map(filepath)
        if not result:
            self.error_occurred.emit(result.message)
            return False

        self._grid = result.data.grid
        self._start = result.data.start
        self._goal = result.data.goal
        logger.info("Loaded %dx%d map from %s", self._grid.width, self._grid.height, filepath)
        return self.reset_search()

    # State machine callbacks

    def _on_running_entered(self, context):
        self._timer.start()
        self.state_changed.emit(PlaybackState.RUNNING)

    def _on_paused_entered(self, context):
        self._timer.stop()
        self.state_changed.emit(PlaybackState.PAUSED)

    def _on_finished_entered(self, context):
        self._timer.stop()
        result = context.get("result") if context else None
        if result is not None:
            logger.info("%s finished: %s after %d expansions",
                        result.algorithm, result.status.value, result.expansions)
            self.search_finished.emit(result)
        self.state_changed.emit(self._state_machine.current_state)

    def _on_invalid_entered(self, context):
        self._timer.stop()
        self.state_changed.emit(PlaybackState.INVALID)

    # Utility methods

    def get_statistics(self) -> dict:
        """Get current search statistics."""
        result = self.result()
        return {
            "algorithm": self._search.name,
            "status": self._search.status.value,
            "expansions": result.expansions,
            "stale_pops": self._search.stale_pops,
            "frontier_size": self._search.frontier_size,
            "open_count": result.open_count,
            "closed_count": result.closed_count,
            "path_length": result.path_length,
            "path_cost": result.path_cost,
            "algo_time_ms": self.algo_time_ms,
            "state_description": self._state_machine.get_state_description(),
        }

    def cleanup(self):
        """Stop the timer before the Qt application shuts down."""
        self._timer.stop()
