"""
Keyboard input handling.

Turns raw key state into press/release events: "down" callbacks fire only
on the initial press, never on auto-repeat while the key is held.
"""

from collections import defaultdict
from typing import Callable, Dict, List


class KeyCodes:
    """Common key codes."""

    SPACE = "Space"
    ESCAPE = "Escape"
    ENTER = "Enter"

    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"

    W = "KeyW"
    A = "KeyA"
    S = "KeyS"
    D = "KeyD"

    SHIFT = "ShiftLeft"
    CTRL = "ControlLeft"
    ALT = "AltLeft"

    NUM_1 = "Digit1"
    NUM_2 = "Digit2"
    NUM_3 = "Digit3"


class InputHandler:
    """
    Tracks held keys and dispatches edge-triggered callbacks.
    """

    def __init__(self):
        self.keys: Dict[str, bool] = {}
        self.callbacks: Dict[str, List[Callable[[], None]]] = defaultdict(list)

    @staticmethod
    def _event_key(key_code: str, event_type: str) -> str:
        return f"{key_code}_{event_type}"

    def key_down(self, key_code: str):
        """Report a key as down; repeats while held are ignored."""
        if not self.keys.get(key_code):
            self.keys[key_code] = True
            self.trigger_callback(key_code, "down")

    def key_up(self, key_code: str):
        self.keys[key_code] = False
        self.trigger_callback(key_code, "up")

    def set_key_state(self, key_code: str, is_down: bool):
        """Feed a polled key state (e.g. once per frame)."""
        if is_down:
            self.key_down(key_code)
        elif self.keys.get(key_code):
            self.key_up(key_code)

    def reset(self):
        """Forget held keys, e.g. when the window loses focus."""
        self.keys = {}

    def on(self, key_code: str, event_type: str, callback: Callable[[], None]):
        """Register a callback for "down" or "up" of a key."""
        if event_type not in ("down", "up"):
            raise ValueError(f"Unknown event type: {event_type}")
        self.callbacks[self._event_key(key_code, event_type)].append(callback)

    def off(self, key_code: str, event_type: str, callback: Callable[[], None]):
        key = self._event_key(key_code, event_type)
        self.callbacks[key] = [cb for cb in self.callbacks[key] if cb != callback]

    def trigger_callback(self, key_code: str, event_type: str):
        for callback in list(self.callbacks.get(self._event_key(key_code, event_type), [])):
            callback()

    def is_pressed(self, key_code: str) -> bool:
        return bool(self.keys.get(key_code))

    def on_key_down(self, key_code: str, callback: Callable[[], None]):
        self.on(key_code, "down", callback)

    def on_key_up(self, key_code: str, callback: Callable[[], None]):
        self.on(key_code, "up", callback)

    def dispose(self):
        self.callbacks = defaultdict(list)
        self.keys = {}
