"""
Tests for the zone scheduler.
"""

import pytest

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.zones import Zone, ZoneScheduler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def zones(config):
    return ZoneScheduler(config)


class TestShrinking:
    """Radii shrink at their own rates down to their floors."""

    def test_initial_radii(self, zones):
        assert zones.radii == (100.0, 150.0, 180.0)

    def test_one_second(self, zones):
        zones.update(1.0)
        assert zones.safe_radius == pytest.approx(95.0)
        assert zones.caution_radius == pytest.approx(147.0)
        assert zones.fail_radius == pytest.approx(178.0)

    def test_radii_never_grow(self, zones, config):
        previous = zones.radii
        for _ in range(120 * 60):
            zones.update(config.physics.dt)
            current = zones.radii
            assert all(c <= p for c, p in zip(current, previous))
            previous = current

    def test_order_is_kept(self, zones, config):
        for _ in range(120 * 60):
            zones.update(config.physics.dt)
            safe, caution, fail = zones.radii
            assert safe >= config.zones.min_safe_radius
            assert caution >= safe + config.zones.zone_gap - 1e-9
            assert fail >= caution + config.zones.zone_gap - 1e-9

    def test_floors(self, zones):
        zones.update(1000.0)
        assert zones.radii == (10.0, 20.0, 30.0)
        assert zones.fully_shrunk

    def test_not_fully_shrunk_at_start(self, zones):
        assert not zones.fully_shrunk

    def test_reset(self, zones):
        zones.update(10.0)
        zones.reset()
        assert zones.radii == (100.0, 150.0, 180.0)


class TestClassification:
    """Distances map to zones; boundaries belong to the inner zone."""

    def test_center_is_safe(self, zones):
        assert zones.classify(0.0) is Zone.SAFE

    def test_boundaries(self, zones):
        assert zones.classify(100.0) is Zone.SAFE
        assert zones.classify(100.5) is Zone.CAUTION
        assert zones.classify(150.0) is Zone.CAUTION
        assert zones.classify(150.5) is Zone.DANGER
        assert zones.classify(180.0) is Zone.DANGER

    def test_fail_is_strictly_outside(self, zones):
        assert not zones.is_failed(180.0)
        assert zones.is_failed(180.01)

    def test_classification_follows_shrink(self, zones):
        zones.update(2.0)  # safe radius 90
        assert zones.classify(95.0) is Zone.CAUTION
