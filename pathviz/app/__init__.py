"""Host-loop integration: playback state machine, controller and text view."""
