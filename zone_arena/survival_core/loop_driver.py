"""
Loop Driver
===========

Turns variable wall-clock frame times into fixed simulation ticks.

The display loop calls `FixedStepLoop.advance()` once per frame with the
measured frame time; the loop runs as many whole ticks as have accumulated.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

from zone_arena.survival_core.config_loader import GameConfig, get_config


class Clock(Protocol):
    """Monotonic clock abstraction.

    Frame timing depends on this interface rather than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class FrameTimer:
    """Measures the time between consecutive frames."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock if clock is not None else RealClock()
        self._last: Optional[float] = None

    def delta(self) -> float:
        """
        Seconds since the previous call.

        The first call returns 0 so a fresh loop never sees a huge first frame.
        """
        now = self._clock.now()
        if self._last is None:
            self._last = now
            return 0.0
        elapsed = max(0.0, now - self._last)
        self._last = now
        return elapsed

    def restart(self) -> None:
        """Forget the previous frame time."""
        self._last = None


# A step function advances the game by dt and returns True once the game ended
StepFn = Callable[[float], bool]


class FixedStepLoop:
    """
    Fixed-timestep accumulator.

    Frame time is clamped to max_frame_time so a stall (window drag, debugger,
    first frame) cannot trigger a burst of catch-up ticks.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        dt: Optional[float] = None,
        max_frame_time: Optional[float] = None
    ):
        """
        Initialize loop.

        Args:
            config: Game configuration. Uses default if None.
            dt: Tick length override.
            max_frame_time: Frame time clamp override.
        """
        if config is None:
            config = get_config()

        self._dt = dt if dt is not None else config.physics.dt
        self._max_frame_time = max_frame_time if max_frame_time is not None else config.physics.max_frame_time
        self._accumulator = 0.0

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def accumulator(self) -> float:
        """Unsimulated time carried to the next frame."""
        return self._accumulator

    @property
    def alpha(self) -> float:
        """Fraction of a tick left in the accumulator, for interpolation."""
        return self._accumulator / self._dt

    def advance(self, frame_time: float, step_fn: StepFn) -> int:
        """
        Run the ticks owed for one frame.

        Args:
            frame_time: Wall-clock seconds since the previous frame.
            step_fn: Called with dt once per tick; returning True stops the
                loop and drops the remaining accumulated time.

        Returns:
            Number of ticks run.
        """
        self._accumulator += min(max(frame_time, 0.0), self._max_frame_time)

        ticks = 0
        while self._accumulator >= self._dt:
            self._accumulator -= self._dt
            ticks += 1
            if step_fn(self._dt):
                self._accumulator = 0.0
                break

        return ticks

    def reset(self) -> None:
        """Drop any accumulated time."""
        self._accumulator = 0.0
