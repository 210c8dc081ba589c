from canvasmap.controller.events import KeyPressedEvent, Modifiers
from canvasmap.controller.keyboard import KeyboardInput


def _record(signal):
    events = []
    signal.connect(events.append)
    return events


def test_press_is_emitted_once_per_held_key(clock):
    keyboard = KeyboardInput(repeat_interval=-1, clock=clock)
    presses = _record(keyboard.press)

    keyboard.key_down("w", "KeyW")
    keyboard.key_down("w", "KeyW")
    keyboard.key_down("a", "KeyA", Modifiers(shift=True))

    assert [e.code for e in presses] == ["KeyW", "KeyA"]
    assert presses[1].modifiers.shift
    assert keyboard.keys == {"w": True, "a": True}
    assert keyboard.held_codes() == ["KeyW", "KeyA"]


def test_release_forgets_the_key(clock):
    keyboard = KeyboardInput(repeat_interval=-1, clock=clock)
    releases = _record(keyboard.release)

    keyboard.key_down("w", "KeyW")
    keyboard.key_up("w", "KeyW")

    assert [e.type for e in releases] == ["release"]
    assert keyboard.codes["KeyW"] is False
    assert keyboard.held_codes() == []


def test_repeat_reports_the_elapsed_interval(clock):
    keyboard = KeyboardInput(repeat_interval=-1, clock=clock)
    repeats = _record(keyboard.pressed)

    keyboard.key_down("d", "KeyD")
    clock.advance(0.05)
    keyboard.repeat()
    clock.advance(0.02)
    keyboard.repeat()

    assert all(isinstance(e, KeyPressedEvent) for e in repeats)
    assert [e.key for e in repeats] == ["d", "d"]
    assert abs(repeats[0].interval - 50.0) < 1e-6
    assert abs(repeats[1].interval - 20.0) < 1e-6


def test_repeat_timer_runs_only_while_keys_are_held(clock):
    keyboard = KeyboardInput(repeat_interval=10, clock=clock)
    assert not keyboard.is_repeating

    keyboard.key_down("q", "KeyQ")
    keyboard.key_down("e", "KeyE")
    assert keyboard.is_repeating

    keyboard.key_up("q", "KeyQ")
    assert keyboard.is_repeating
    keyboard.key_up("e", "KeyE")
    assert not keyboard.is_repeating


def test_negative_interval_disables_repeating(clock):
    keyboard = KeyboardInput(repeat_interval=-1, clock=clock)
    keyboard.key_down("q", "KeyQ")
    assert not keyboard.is_repeating


def test_untracked_codes_are_ignored(clock):
    keyboard = KeyboardInput(track_codes=["KeyW"], repeat_interval=-1, clock=clock)
    presses = _record(keyboard.press)

    keyboard.key_down("a", "KeyA")
    keyboard.key_down("w", "KeyW")

    assert [e.code for e in presses] == ["KeyW"]
    assert "a" not in keyboard.keys


def test_end_stops_everything(clock):
    keyboard = KeyboardInput(repeat_interval=10, clock=clock)
    repeats = _record(keyboard.pressed)
    keyboard.key_down("w", "KeyW")
    keyboard.end()
    keyboard.repeat()
    assert not keyboard.is_repeating
    assert repeats == []
