"""
Day/night cycle.

Drives a smooth transition between the canonical day and night lighting
states. Call toggle() on user input and update() once per frame.
"""

import logging
from enum import IntEnum
from typing import Callable, List, Optional

from .state import LightingState, DAY_STATE, NIGHT_STATE, lerp_state
from .uniforms import SceneStateSink


logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_DURATION = 2.5


class TimeOfDay(IntEnum):
    DAY = 0
    NIGHT = 1

    def opposite(self) -> "TimeOfDay":
        return TimeOfDay.NIGHT if self is TimeOfDay.DAY else TimeOfDay.DAY

    @property
    def label(self) -> str:
        return self.name.capitalize()


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease: slow start, slow finish, f(0.5) = 0.5."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


class DayNightCycle:
    """
    State machine for day <-> night lighting transitions.

    Transition state:
    - current_state / target_state: TimeOfDay
    - progress: 0 at current_state, 1 at target_state
    - is_transitioning: a transition is in flight

    Toggling during a transition reverses its target without resetting
    progress. The blended state is rebuilt from the canonical states
    every active frame and pushed to the sink in full.
    """

    def __init__(
        self,
        sink: Optional[SceneStateSink] = None,
        duration: float = DEFAULT_TRANSITION_DURATION,
        time_listeners: Optional[List[Callable[[float], None]]] = None,
        target_listeners: Optional[List[Callable[[str], None]]] = None
    ):
        self.sink = sink
        self.time_listeners = list(time_listeners or [])
        self.target_listeners = list(target_listeners or [])

        self.current_state = TimeOfDay.DAY
        self.target_state = TimeOfDay.DAY
        self.progress = 0.0
        self.is_transitioning = False
        self.duration = DEFAULT_TRANSITION_DURATION
        self.set_transition_duration(duration)

        self.states = {
            TimeOfDay.DAY: DAY_STATE,
            TimeOfDay.NIGHT: NIGHT_STATE,
        }

        # Scene starts in daylight
        self.current_lighting: LightingState = DAY_STATE
        self._push(self.current_lighting)

    def state_of(self, time_of_day: TimeOfDay) -> LightingState:
        return self.states[time_of_day]

    def _push(self, state: LightingState):
        if self.sink is not None:
            self.sink.apply(state)

    def toggle(self):
        """Start a transition to the other state, or reverse the one in flight."""

        if self.is_transitioning:
            self.target_state = self.target_state.opposite()
            logger.debug(
                "Reversing transition at progress %.3f, now heading to %s",
                self.progress, self.target_state.label
            )
        else:
            self.target_state = self.current_state.opposite()
            self.is_transitioning = True
            self.progress = 0.0
            logger.debug(
                "Starting transition %s -> %s",
                self.current_state.label, self.target_state.label
            )

        for listener in self.target_listeners:
            listener(self.target_state.label)

    def update(self, delta_time: float, elapsed_time: float):
        """
        Advance the cycle by one frame.

        Args:
            delta_time: Seconds since the previous frame
            elapsed_time: Seconds since start, for time-animated effects
        """

        for listener in self.time_listeners:
            listener(elapsed_time)

        if not self.is_transitioning:
            return

        if self.duration > 0:
            self.progress += delta_time / self.duration
        else:
            self.progress = 1.0

        if self.progress >= 1.0:
            self.progress = 1.0
            self.current_state = self.target_state
            self.is_transitioning = False
            logger.debug("Transition complete: %s", self.current_state.label)

        eased = ease_in_out_cubic(self.progress)
        start = self.state_of(self.current_state)
        end = self.state_of(self.target_state)

        self.current_lighting = lerp_state(start, end, eased)
        self._push(self.current_lighting)

    def is_day(self) -> bool:
        return self.current_state == TimeOfDay.DAY and not self.is_transitioning

    def is_night(self) -> bool:
        return self.current_state == TimeOfDay.NIGHT and not self.is_transitioning

    def set_transition_duration(self, duration: float):
        """Set the transition duration in seconds."""

        if duration <= 0:
            logger.warning(
                "Non-positive transition duration %r: transitions will complete "
                "on the next update", duration
            )
        self.duration = duration

    def get_current_value(self) -> float:
        """
        Blend position between day (0) and night (1).

        After a reversal back onto current_state the direction is -1, so
        the value drifts away from the rendered state (below 0 when that
        state is day) until the transition ends.
        """

        if not self.is_transitioning:
            return float(self.current_state)

        direction = 1 if self.target_state > self.current_state else -1

        return self.current_state + direction * ease_in_out_cubic(self.progress)
