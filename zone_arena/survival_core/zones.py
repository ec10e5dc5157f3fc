"""
Zone Scheduler
==============

Shrinks the three concentric radii (safe, caution, fail) over time and
classifies player distances against them.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Tuple

from zone_arena.survival_core.config_loader import GameConfig, get_config


class Zone(IntEnum):
    """Region of the arena the player occupies."""
    SAFE = 0      # Inside the safe radius
    CAUTION = 1   # Between safe and caution radii
    DANGER = 2    # Between caution radius and fail threshold


class ZoneScheduler:
    """
    Owns the current zone radii.

    Every update each radius shrinks at its own rate, subject to floors:
    - safe >= min_safe_radius
    - caution >= safe + zone_gap
    - fail >= caution + zone_gap

    Radii never grow.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize zone scheduler.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._zones = config.zones

        self._safe_radius: float = 0.0
        self._caution_radius: float = 0.0
        self._fail_radius: float = 0.0
        self.reset()

    @property
    def safe_radius(self) -> float:
        return self._safe_radius

    @property
    def caution_radius(self) -> float:
        return self._caution_radius

    @property
    def fail_radius(self) -> float:
        return self._fail_radius

    @property
    def radii(self) -> Tuple[float, float, float]:
        """(safe, caution, fail) radii."""
        return (self._safe_radius, self._caution_radius, self._fail_radius)

    @property
    def fully_shrunk(self) -> bool:
        """True once every radius sits on its floor."""
        z = self._zones
        return (
            self._safe_radius <= z.min_safe_radius
            and self._caution_radius <= self._safe_radius + z.zone_gap
            and self._fail_radius <= self._caution_radius + z.zone_gap
        )

    def reset(self) -> None:
        """Restore the initial radii."""
        self._safe_radius = self._zones.initial_safe_radius
        self._caution_radius = self._zones.initial_caution_radius
        self._fail_radius = self._zones.initial_fail_radius

    def update(self, dt: float) -> None:
        """
        Shrink the radii by one time step.

        Args:
            dt: Elapsed seconds.
        """
        z = self._zones

        if self._safe_radius > z.min_safe_radius:
            self._safe_radius = max(z.min_safe_radius, self._safe_radius - z.safe_shrink_rate * dt)

        # Each outer radius is floored against the one inside it
        self._caution_radius = max(
            self._safe_radius + z.zone_gap,
            self._caution_radius - z.caution_shrink_rate * dt
        )
        self._fail_radius = max(
            self._caution_radius + z.zone_gap,
            self._fail_radius - z.fail_shrink_rate * dt
        )

    def classify(self, distance: float) -> Zone:
        """
        Classify a distance from center.

        Boundaries belong to the inner zone.
        """
        if distance <= self._safe_radius:
            return Zone.SAFE
        if distance <= self._caution_radius:
            return Zone.CAUTION
        return Zone.DANGER

    def is_failed(self, distance: float) -> bool:
        """True when the distance is past the fail threshold."""
        return distance > self._fail_radius
