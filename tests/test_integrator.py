"""
Tests for the per-tick motion update.
"""

import dataclasses

import pytest

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.forces import ForceModel
from zone_arena.survival_core.integrator import Integrator, PlayerBody
from zone_arena.survival_core.zones import ZoneScheduler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def integrator(config):
    return Integrator(ForceModel(config, seed=0), config)


@pytest.fixture
def zones(config):
    return ZoneScheduler(config)


class TestIntegrator:
    """Impulse, forces, move, damp, clamp."""

    def test_spawns_at_center_at_rest(self, integrator):
        body = integrator.spawn_body()
        assert body.position == (300.0, 300.0)
        assert body.velocity == (0.0, 0.0)

    def test_rest_at_center_stays_put(self, integrator, zones):
        body = integrator.spawn_body()
        distance = integrator.step(body, (0.0, 0.0), zones)
        assert distance == 0.0
        assert body.position == (300.0, 300.0)

    def test_key_impulse_moves_then_damps(self, integrator, zones):
        body = integrator.spawn_body()
        distance = integrator.step(body, (0.05, 0.0), zones)
        # Repulsion is zero at the exact center, so only the key acts
        assert body.x == pytest.approx(300.05)
        assert body.vx == pytest.approx(0.05 * 0.98)
        assert distance == pytest.approx(0.05)

    def test_repulsion_pushes_outward(self, integrator, zones):
        body = PlayerBody(x=350.0, y=300.0)
        integrator.step(body, (0.0, 0.0), zones)
        # (100 - 50) / 100 * 0.1 = 0.05 outward
        assert body.x == pytest.approx(350.05)

    def test_no_force_in_caution_band(self, integrator, zones):
        body = PlayerBody(x=300.0, y=420.0)
        integrator.step(body, (0.0, 0.0), zones)
        assert body.position == (300.0, 420.0)

    def test_edge_pull_outward(self, integrator, zones):
        body = PlayerBody(x=465.0, y=300.0)
        integrator.step(body, (0.0, 0.0), zones)
        assert body.x == pytest.approx(465.0125)

    def test_damping(self, integrator, zones):
        body = PlayerBody(x=420.0, y=300.0, vx=0.0, vy=1.0)
        integrator.step(body, (0.0, 0.0), zones)
        assert body.y == pytest.approx(301.0)
        assert body.vy == pytest.approx(0.98)

    def test_clamped_to_board(self, integrator, zones):
        body = PlayerBody(x=1.0, y=300.0, vx=-10.0)
        integrator.step(body, (0.0, 0.0), zones)
        assert body.x == 0.0
        # Velocity survives the clamp
        assert body.vx < 0

    def test_damping_from_config(self, config, zones):
        config = dataclasses.replace(config, physics=dataclasses.replace(config.physics, damping=0.5))
        integrator = Integrator(ForceModel(config, seed=0), config)
        body = PlayerBody(x=420.0, y=300.0, vx=2.0)
        integrator.step(body, (0.0, 0.0), zones)
        assert body.vx == pytest.approx(1.0)
