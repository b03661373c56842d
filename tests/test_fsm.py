from pathviz.app.fsm import PlaybackState, PlaybackStateMachine


def test_starts_idle():
    fsm = PlaybackStateMachine()
    assert fsm.is_idle()
    assert fsm.can_step()
    assert fsm.get_state_description() == "Ready to start"


def test_play_pause_cycle():
    fsm = PlaybackStateMachine()
    assert fsm.transition_to(PlaybackState.RUNNING)
    assert fsm.is_running()
    assert fsm.transition_to(PlaybackState.PAUSED)
    assert fsm.is_paused()
    assert fsm.transition_to(PlaybackState.RUNNING)
    assert fsm.transition_to(PlaybackState.COMPLETE)
    assert fsm.is_finished()
    assert not fsm.can_step()


def test_invalid_transitions_are_refused():
    fsm = PlaybackStateMachine()
    assert not fsm.transition_to(PlaybackState.COMPLETE)
    assert fsm.is_idle()

    fsm.transition_to(PlaybackState.RUNNING)
    assert not fsm.transition_to(PlaybackState.IDLE)
    assert not fsm.transition_to(PlaybackState.INVALID)
    assert fsm.is_running()

    fsm.transition_to(PlaybackState.NO_PATH)
    assert not fsm.transition_to(PlaybackState.RUNNING)
    assert fsm.transition_to(PlaybackState.IDLE)


def test_callbacks_fire_with_context():
    fsm = PlaybackStateMachine()
    entered = []
    transitions = []
    fsm.on_state_enter(PlaybackState.PAUSED, entered.append)
    fsm.on_transition(PlaybackState.IDLE, PlaybackState.PAUSED,
                      lambda old, new, ctx: transitions.append((old, new, ctx)))

    fsm.transition_to(PlaybackState.PAUSED, {"reason": "step"})
    assert entered == [{"reason": "step"}]
    assert transitions == [(PlaybackState.IDLE, PlaybackState.PAUSED, {"reason": "step"})]


def test_reset_skips_callbacks():
    fsm = PlaybackStateMachine()
    entered = []
    fsm.on_state_enter(PlaybackState.IDLE, entered.append)
    fsm.transition_to(PlaybackState.INVALID)
    assert fsm.get_state_description() == "Start or goal is invalid"
    fsm.reset()
    assert fsm.is_idle()
    assert entered == []
