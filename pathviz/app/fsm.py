"""Finite State Machine for search playback."""

from enum import Enum
from typing import Callable, Dict, Optional, Set, Tuple


class PlaybackState(Enum):
    """Playback states as seen by the embedding application."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    NO_PATH = "no_path"
    INVALID = "invalid"


class PlaybackStateMachine:
    """
    Finite State Machine for driving a search run from a host loop.

    State Transitions:
    IDLE -> RUNNING (play pressed on a freshly reset run)
    IDLE -> PAUSED (manual step on a freshly reset run)
    IDLE -> INVALID (reset was rejected)
    RUNNING -> PAUSED (pause pressed)
    RUNNING -> COMPLETE / NO_PATH (search reached a terminal status)
    PAUSED -> RUNNING (play pressed again)
    PAUSED -> COMPLETE / NO_PATH (manual step finished the search)
    PAUSED, COMPLETE, NO_PATH, INVALID -> IDLE (reset)
    """

    def __init__(self):
        self._current_state = PlaybackState.IDLE
        self._state_callbacks: Dict[PlaybackState, Callable[[Optional[dict]], None]] = {}
        self._transition_callbacks: Dict[Tuple[PlaybackState, PlaybackState], Callable] = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> Dict[PlaybackState, Set[PlaybackState]]:
        return {
            PlaybackState.IDLE: {PlaybackState.RUNNING, PlaybackState.PAUSED, PlaybackState.INVALID},
            PlaybackState.RUNNING: {PlaybackState.PAUSED, PlaybackState.COMPLETE, PlaybackState.NO_PATH},
            PlaybackState.PAUSED: {PlaybackState.RUNNING, PlaybackState.COMPLETE,
                                   PlaybackState.NO_PATH, PlaybackState.IDLE},
            PlaybackState.COMPLETE: {PlaybackState.IDLE},
            PlaybackState.NO_PATH: {PlaybackState.IDLE},
            PlaybackState.INVALID: {PlaybackState.IDLE},
        }

    @property
    def current_state(self) -> PlaybackState:
        return self._current_state

    def can_transition_to(self, target_state: PlaybackState) -> bool:
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: PlaybackState, context: Optional[dict] = None) -> bool:
        """
        Attempt to transition to the target state.

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(target_state):
            return False

        old_state = self._current_state
        self._current_state = target_state

        callback = self._transition_callbacks.get((old_state, target_state))
        if callback:
            callback(old_state, target_state, context)

        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)

        return True

    def on_state_enter(self, state: PlaybackState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def on_transition(self, from_state: PlaybackState, to_state: PlaybackState,
                      callback: Callable[[PlaybackState, PlaybackState, Optional[dict]], None]):
        """Register a callback for a specific state transition."""
        self._transition_callbacks[(from_state, to_state)] = callback

    def reset(self):
        """Force the machine back to IDLE without firing callbacks."""
        self._current_state = PlaybackState.IDLE

    def is_running(self) -> bool:
        return self._current_state == PlaybackState.RUNNING

    def is_paused(self) -> bool:
        return self._current_state == PlaybackState.PAUSED

    def is_idle(self) -> bool:
        return self._current_state == PlaybackState.IDLE

    def is_finished(self) -> bool:
        """Whether the search reached a terminal status."""
        return self._current_state in (PlaybackState.COMPLETE, PlaybackState.NO_PATH)

    def can_step(self) -> bool:
        """Whether a manual or timed step may run."""
        return self._current_state in (PlaybackState.IDLE, PlaybackState.RUNNING, PlaybackState.PAUSED)

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            PlaybackState.IDLE: "Ready to start",
            PlaybackState.RUNNING: "Search running",
            PlaybackState.PAUSED: "Search paused",
            PlaybackState.COMPLETE: "Path found",
            PlaybackState.NO_PATH: "No path exists",
            PlaybackState.INVALID: "Start or goal is invalid",
        }
        return descriptions.get(self._current_state, "Unknown state")
