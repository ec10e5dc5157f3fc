"""
Game Rules
==========

Handles termination conditions: crossing the fail threshold and the tick cap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zone_arena.survival_core.config_loader import GameConfig, get_config


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    truncated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, False, reason)

    @staticmethod
    def truncation(reason: str) -> "TerminationResult":
        return TerminationResult(False, True, reason)

    @property
    def is_over(self) -> bool:
        return self.terminated or self.truncated


class TerminationRules:
    """
    Handles game termination conditions.

    - Fail threshold: player farther from center than the fail radius
    - Tick cap: maximum ticks per episode (disabled when 0)
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._max_ticks = config.caps.max_ticks

    @property
    def max_ticks(self) -> int:
        """Maximum ticks per episode (0 = unlimited)."""
        return self._max_ticks

    def check_fail(self, distance: float, fail_radius: float) -> TerminationResult:
        """Check whether the player crossed the fail threshold."""
        if distance > fail_radius:
            return TerminationResult.game_over("fail_threshold")
        return TerminationResult.none()

    def check_cap(self, ticks: int) -> TerminationResult:
        """Check the tick cap."""
        if self._max_ticks > 0 and ticks >= self._max_ticks:
            return TerminationResult.truncation("tick_cap")
        return TerminationResult.none()

    def check_termination(
        self,
        distance: float,
        fail_radius: float,
        ticks: int
    ) -> TerminationResult:
        """
        Check all termination conditions.

        Args:
            distance: Player distance from center.
            fail_radius: Current fail threshold radius.
            ticks: Ticks simulated so far.

        Returns:
            TerminationResult indicating game state.
        """
        result = self.check_fail(distance, fail_radius)
        if result.is_over:
            return result
        return self.check_cap(ticks)
