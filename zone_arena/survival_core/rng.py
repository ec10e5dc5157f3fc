"""
RNG - Random Drift Source
=========================

Provides the seeded random drift that pushes the player around every tick.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from zone_arena.survival_core.config_loader import GameConfig, get_config


class DriftSource:
    """
    Seeded source of per-tick random drift impulses.

    Each component is uniform in [-strength, +strength). Two sources built
    with the same seed produce the same drift sequence.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize drift source.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._strength = config.forces.random_strength
        self._rng = random.Random(seed)

    def sample(self) -> Tuple[float, float]:
        """
        Draw one drift impulse.

        Returns:
            (fx, fy) velocity impulse.
        """
        s = self._strength
        fx = self._rng.random() * s * 2 - s
        fy = self._rng.random() * s * 2 - s
        return (fx, fy)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the source with optional new seed.

        Args:
            seed: New random seed. Keeps current stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
