"""
Force Model
===========

Radial force fields around the board center plus random drift.

All forces are velocity impulses applied once per tick. Offsets (dx, dy) are
measured from the board center to the player.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.rng import DriftSource


Vec2 = Tuple[float, float]


def random_drift(drift_source: DriftSource) -> Vec2:
    """Random impulse drawn from the drift source."""
    return drift_source.sample()


def repulsion(dx: float, dy: float, safe_radius: float, strength: float) -> Vec2:
    """
    Outward push that keeps the player from parking on the center.

    Grows linearly from 0 at the safe radius to `strength` at the center.
    No force at the exact center, where the direction is undefined.

    Args:
        dx: Player x offset from center.
        dy: Player y offset from center.
        safe_radius: Current safe zone radius.
        strength: Impulse magnitude at the center.

    Returns:
        (fx, fy) impulse.
    """
    distance = math.hypot(dx, dy)
    if distance == 0 or distance >= safe_radius:
        return (0.0, 0.0)

    falloff = (safe_radius - distance) / safe_radius
    return (dx / distance * falloff * strength, dy / distance * falloff * strength)


def edge_pull(
    dx: float,
    dy: float,
    caution_radius: float,
    fail_radius: float,
    max_pull: float,
    exponent: float = 3.0
) -> Vec2:
    """
    Outward pull toward the fail line once the player leaves the caution zone.

    The pull follows max_pull * n**exponent where n is the normalized depth
    into the danger band (0 at the caution radius, 1 at the fail radius).

    Args:
        dx: Player x offset from center.
        dy: Player y offset from center.
        caution_radius: Current caution zone radius.
        fail_radius: Current fail threshold radius.
        max_pull: Impulse magnitude at the fail line.
        exponent: Curve exponent.

    Returns:
        (fx, fy) impulse.
    """
    distance = math.hypot(dx, dy)
    if distance <= caution_radius:
        return (0.0, 0.0)

    depth = (distance - caution_radius) / (fail_radius - caution_radius)
    pull = max_pull * depth ** exponent
    return (dx / distance * pull, dy / distance * pull)


class ForceModel:
    """
    Bundles the force fields with their configured strengths.

    The integrator asks for the two radial fields; CoreGame draws the random
    drift separately because it happens before the zones shrink.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize force model.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for the drift source.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._forces = config.forces
        self._drift = DriftSource(config, seed)

    def drift(self) -> Vec2:
        """Random drift impulse for this tick."""
        return random_drift(self._drift)

    def repulsion(self, dx: float, dy: float, safe_radius: float) -> Vec2:
        return repulsion(dx, dy, safe_radius, self._forces.repulsion_strength)

    def edge_pull(self, dx: float, dy: float, caution_radius: float, fail_radius: float) -> Vec2:
        return edge_pull(
            dx, dy,
            caution_radius,
            fail_radius,
            self._forces.max_edge_pull,
            self._forces.edge_pull_exponent
        )

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the drift source."""
        self._drift.reset(seed)
