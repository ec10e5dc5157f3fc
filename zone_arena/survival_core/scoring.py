"""
Scoring System
==============

Integrates elapsed time into score based on the zone the player occupies,
and keeps the survival timer.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.zones import Zone


class ScoreTracker:
    """
    Tracks score and survival time.

    Score rates (points per second) come from the config:
    - safe zone: highest rate
    - caution zone: reduced rate
    - danger band: danger_rate (zero by default)
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rates: Dict[Zone, float] = {
            Zone.SAFE: config.scoring.safe_rate,
            Zone.CAUTION: config.scoring.caution_rate,
            Zone.DANGER: config.scoring.danger_rate,
        }
        self._score: float = 0.0
        self._time_alive: float = 0.0
        self._time_in_zone: Dict[Zone, float] = {z: 0.0 for z in Zone}

    @property
    def score(self) -> float:
        """Exact accumulated score."""
        return self._score

    @property
    def display_score(self) -> int:
        """Score as shown to the player (floored)."""
        return int(math.floor(self._score))

    @property
    def time_alive(self) -> float:
        """Seconds survived this game."""
        return self._time_alive

    @property
    def time_in_zone(self) -> Dict[Zone, float]:
        """Seconds spent in each zone (copy)."""
        return dict(self._time_in_zone)

    def rate_for(self, zone: Zone) -> float:
        """Points per second for a zone."""
        return self._rates[zone]

    def accrue(self, zone: Zone, dt: float) -> float:
        """
        Add score for time spent in a zone.

        Args:
            zone: Zone the player occupies.
            dt: Elapsed seconds.

        Returns:
            Points added.
        """
        points = self.rate_for(zone) * dt
        self._score += points
        self._time_in_zone[zone] += dt
        return points

    def advance_time(self, dt: float) -> None:
        """Advance the survival timer."""
        self._time_alive += dt

    def format_score(self) -> str:
        return f"Score: {self.display_score}"

    def format_time(self) -> str:
        return f"Time: {self._time_alive:.1f} s"

    def reset(self) -> None:
        """Reset score and timer to zero."""
        self._score = 0.0
        self._time_alive = 0.0
        self._time_in_zone = {z: 0.0 for z in Zone}
