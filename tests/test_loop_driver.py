"""
Tests for frame timing and the fixed-step accumulator.
"""

import pytest

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.game import CoreGame
from zone_arena.survival_core.loop_driver import FixedStepLoop, FrameTimer, RealClock


class FakeClock:
    """Deterministic clock for tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._t = start

    def now(self) -> float:
        return self._t

    def advance(self, seconds: float) -> None:
        self._t += seconds


class StepRecorder:
    """Step function that records dts and can end the game on a given tick."""

    def __init__(self, stop_on: int = 0):
        self.calls = []
        self._stop_on = stop_on

    def __call__(self, dt: float) -> bool:
        self.calls.append(dt)
        return len(self.calls) == self._stop_on


@pytest.fixture
def config():
    return load_config()


class TestFrameTimer:
    """Wall-clock deltas between frames."""

    def test_first_delta_is_zero(self):
        clock = FakeClock(start=100.0)
        timer = FrameTimer(clock)
        assert timer.delta() == 0.0

    def test_measures_elapsed(self):
        clock = FakeClock()
        timer = FrameTimer(clock)
        timer.delta()
        clock.advance(0.25)
        assert timer.delta() == pytest.approx(0.25)
        clock.advance(0.5)
        assert timer.delta() == pytest.approx(0.5)

    def test_restart_forgets_last_frame(self):
        clock = FakeClock()
        timer = FrameTimer(clock)
        timer.delta()
        clock.advance(3.0)
        timer.restart()
        assert timer.delta() == 0.0

    def test_real_clock_is_monotonic(self):
        clock = RealClock()
        a = clock.now()
        b = clock.now()
        assert b >= a


class TestFixedStepLoop:
    """Frame time in, whole ticks out."""

    def test_runs_whole_ticks(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.2)
        recorder = StepRecorder()
        assert loop.advance(0.035, recorder) == 3
        assert recorder.calls == [0.01, 0.01, 0.01]
        assert loop.accumulator == pytest.approx(0.005)

    def test_remainder_carries_over(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.2)
        recorder = StepRecorder()
        assert loop.advance(0.005, recorder) == 0
        assert loop.alpha == pytest.approx(0.5)
        assert loop.advance(0.0075, recorder) == 1
        assert loop.accumulator == pytest.approx(0.0025)

    def test_stall_is_clamped(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.105)
        recorder = StepRecorder()
        assert loop.advance(5.0, recorder) == 10

    def test_negative_frame_time_ignored(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.1)
        assert loop.advance(-1.0, StepRecorder()) == 0
        assert loop.accumulator == 0.0

    def test_game_over_drops_remaining_time(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.2)
        recorder = StepRecorder(stop_on=2)
        assert loop.advance(0.055, recorder) == 2
        assert loop.accumulator == 0.0

    def test_defaults_from_config(self, config):
        loop = FixedStepLoop(config)
        assert loop.dt == config.physics.dt

    def test_reset(self):
        loop = FixedStepLoop(dt=0.01, max_frame_time=0.2)
        loop.advance(0.005, StepRecorder())
        loop.reset()
        assert loop.accumulator == 0.0

    def test_drives_game_at_fixed_rate(self, config):
        game = CoreGame(config=config, seed=1)
        game.start()
        loop = FixedStepLoop(config)
        clock = FakeClock()
        timer = FrameTimer(clock)
        timer.delta()

        # Uneven frames; remainders carry between them
        for frame in (0.016, 0.020, 0.033, 0.1, 0.15):
            clock.advance(frame)
            loop.advance(timer.delta(), lambda dt: game.tick(dt).terminated)

        assert game.ticks == 19
        assert game.time_alive == pytest.approx(game.ticks * config.physics.dt)
