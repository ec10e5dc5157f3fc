"""
Tests for score accrual and the survival timer.
"""

import pytest

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.rules import TerminationRules
from zone_arena.survival_core.scoring import ScoreTracker
from zone_arena.survival_core.zones import Zone


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scorer(config):
    return ScoreTracker(config)


class TestScoreTracker:
    """Zone-weighted score."""

    def test_starts_at_zero(self, scorer):
        assert scorer.score == 0.0
        assert scorer.time_alive == 0.0
        assert scorer.display_score == 0

    def test_zone_rates(self, scorer):
        assert scorer.accrue(Zone.SAFE, 1.0) == pytest.approx(3.0)
        assert scorer.accrue(Zone.CAUTION, 1.0) == pytest.approx(1.0)
        assert scorer.accrue(Zone.DANGER, 1.0) == 0.0
        assert scorer.score == pytest.approx(4.0)

    def test_display_score_floors(self, scorer):
        scorer.accrue(Zone.SAFE, 0.99)
        assert scorer.score == pytest.approx(2.97)
        assert scorer.display_score == 2

    def test_time_is_separate_from_score(self, scorer):
        scorer.accrue(Zone.DANGER, 0.5)
        scorer.advance_time(0.5)
        assert scorer.score == 0.0
        assert scorer.time_alive == pytest.approx(0.5)

    def test_time_in_zone(self, scorer):
        scorer.accrue(Zone.SAFE, 0.25)
        scorer.accrue(Zone.CAUTION, 0.5)
        breakdown = scorer.time_in_zone
        assert breakdown[Zone.SAFE] == pytest.approx(0.25)
        assert breakdown[Zone.CAUTION] == pytest.approx(0.5)
        assert breakdown[Zone.DANGER] == 0.0

    def test_hud_strings(self, scorer):
        scorer.accrue(Zone.SAFE, 1.5)
        scorer.advance_time(1.5)
        assert scorer.format_score() == "Score: 4"
        assert scorer.format_time() == "Time: 1.5 s"

    def test_reset(self, scorer):
        scorer.accrue(Zone.SAFE, 2.0)
        scorer.advance_time(2.0)
        scorer.reset()
        assert scorer.score == 0.0
        assert scorer.time_alive == 0.0
        assert scorer.time_in_zone[Zone.SAFE] == 0.0


class TestTerminationRules:
    """Fail threshold and tick cap."""

    def test_fail_threshold(self, config):
        rules = TerminationRules(config)
        assert not rules.check_fail(180.0, 180.0).is_over
        result = rules.check_fail(180.5, 180.0)
        assert result.terminated and not result.truncated
        assert result.reason == "fail_threshold"

    def test_tick_cap(self, config):
        rules = TerminationRules(config)
        assert not rules.check_cap(config.caps.max_ticks - 1).is_over
        result = rules.check_cap(config.caps.max_ticks)
        assert result.truncated and not result.terminated
        assert result.reason == "tick_cap"

    def test_fail_takes_priority(self, config):
        rules = TerminationRules(config)
        result = rules.check_termination(200.0, 180.0, config.caps.max_ticks)
        assert result.reason == "fail_threshold"
