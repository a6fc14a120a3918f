from services.notification_state import NotificationState


def test_replace_swaps_whole_set():
    state = NotificationState(["A", "B"])
    state.replace(["C"])
    assert state.active == ["C"]


def test_dismiss_removes_exact_match_only():
    state = NotificationState(["Food budget warning", "Low balance alert"])
    assert state.dismiss("food budget warning") is False
    assert state.dismiss("Food budget warning") is True
    assert state.active == ["Low balance alert"]


def test_dismiss_missing_is_noop():
    state = NotificationState(["A"])
    assert state.dismiss("B") is False
    assert state.active == ["A"]


def test_replace_ignores_previous_dismissals():
    state = NotificationState(["A", "B"])
    state.dismiss("A")
    state.replace(["A", "B"])
    assert state.active == ["A", "B"]


def test_active_is_a_copy():
    state = NotificationState(["A"])
    state.active.append("B")
    assert state.active == ["A"]
    assert len(state) == 1
    assert "A" in state
