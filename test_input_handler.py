#!/usr/bin/env python3
"""
Tests for edge-triggered keyboard input.
"""

import pytest

from alpine_terrain.controls import InputHandler, KeyCodes
from alpine_terrain.lighting import DayNightCycle, TimeOfDay


def test_key_down_fires_once_while_held():
    handler = InputHandler()
    presses = []
    handler.on_key_down(KeyCodes.SPACE, lambda: presses.append("down"))

    handler.key_down(KeyCodes.SPACE)
    handler.key_down(KeyCodes.SPACE)
    handler.key_down(KeyCodes.SPACE)

    assert presses == ["down"]
    assert handler.is_pressed(KeyCodes.SPACE)


def test_key_up_rearms_key_down():
    handler = InputHandler()
    events = []
    handler.on_key_down(KeyCodes.SPACE, lambda: events.append("down"))
    handler.on_key_up(KeyCodes.SPACE, lambda: events.append("up"))

    handler.key_down(KeyCodes.SPACE)
    handler.key_up(KeyCodes.SPACE)
    handler.key_down(KeyCodes.SPACE)

    assert events == ["down", "up", "down"]


def test_polled_state_detects_edges():
    handler = InputHandler()
    events = []
    handler.on_key_down(KeyCodes.SPACE, lambda: events.append("down"))
    handler.on_key_up(KeyCodes.SPACE, lambda: events.append("up"))

    for is_down in [False, True, True, True, False, False, True]:
        handler.set_key_state(KeyCodes.SPACE, is_down)

    assert events == ["down", "up", "down"]


def test_reset_forgets_held_keys():
    handler = InputHandler()
    presses = []
    handler.on_key_down(KeyCodes.SPACE, lambda: presses.append(1))

    handler.key_down(KeyCodes.SPACE)
    handler.reset()
    assert not handler.is_pressed(KeyCodes.SPACE)

    handler.key_down(KeyCodes.SPACE)
    assert presses == [1, 1]


def test_other_keys_do_not_fire():
    handler = InputHandler()
    presses = []
    handler.on_key_down(KeyCodes.SPACE, lambda: presses.append(1))

    handler.key_down(KeyCodes.W)
    handler.key_down(KeyCodes.ENTER)

    assert presses == []


def test_off_removes_callback():
    handler = InputHandler()
    cycle = DayNightCycle()
    handler.on_key_down(KeyCodes.SPACE, cycle.toggle)
    handler.off(KeyCodes.SPACE, "down", cycle.toggle)

    handler.key_down(KeyCodes.SPACE)
    assert not cycle.is_transitioning


def test_unknown_event_type():
    with pytest.raises(ValueError):
        InputHandler().on(KeyCodes.SPACE, "press", lambda: None)


def test_space_toggles_day_night():
    handler = InputHandler()
    cycle = DayNightCycle(duration=1.0)
    handler.on_key_down(KeyCodes.SPACE, cycle.toggle)

    # Held for several frames: only one toggle
    for _ in range(5):
        handler.set_key_state(KeyCodes.SPACE, True)
        cycle.update(0.1, 0.0)
    handler.set_key_state(KeyCodes.SPACE, False)

    assert cycle.target_state is TimeOfDay.NIGHT
    cycle.update(1.0, 0.0)
    assert cycle.is_night()


def test_dispose_clears_everything():
    handler = InputHandler()
    presses = []
    handler.on_key_down(KeyCodes.SPACE, lambda: presses.append(1))
    handler.key_down(KeyCodes.SPACE)
    handler.dispose()

    handler.key_down(KeyCodes.SPACE)
    assert presses == [1]


if __name__ == "__main__":
    print("🧪 Testing input handling...")
    raise SystemExit(pytest.main([__file__, "-v"]))
