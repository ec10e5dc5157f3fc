"""
Integrator
==========

Advances the player body: input impulses, radial forces, motion, damping and
boundary clamping.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.forces import ForceModel
from zone_arena.survival_core.zones import ZoneScheduler


@dataclass
class PlayerBody:
    """The player dot: position and velocity in board pixels."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    def apply_impulse(self, impulse: Tuple[float, float]) -> None:
        """Add a velocity impulse."""
        self.vx += impulse[0]
        self.vy += impulse[1]


class Integrator:
    """
    Per-tick motion update for the player body.

    Order within a step:
    1. Keyboard impulse
    2. Edge pull, then repulsion (against the current radii)
    3. Position += velocity
    4. Velocity *= damping
    5. Clamp position to the board
    """

    def __init__(
        self,
        forces: ForceModel,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize integrator.

        Args:
            forces: Force model supplying the radial fields.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._forces = forces
        self._damping = config.physics.damping
        self._width = config.board.width
        self._height = config.board.height
        self._cx, self._cy = config.center

    def spawn_body(self) -> PlayerBody:
        """New body at rest at the board center."""
        return PlayerBody(x=self._cx, y=self._cy)

    def offset(self, body: PlayerBody) -> Tuple[float, float]:
        """Offset of the body from the board center."""
        return body.x - self._cx, body.y - self._cy

    def distance(self, body: PlayerBody) -> float:
        """Distance of the body from the board center."""
        dx, dy = self.offset(body)
        return math.hypot(dx, dy)

    def step(
        self,
        body: PlayerBody,
        key_impulse: Tuple[float, float],
        zones: ZoneScheduler
    ) -> float:
        """
        Advance the body by one tick.

        Args:
            body: Player body, updated in place.
            key_impulse: Impulse from held keys.
            zones: Zone scheduler holding the current radii.

        Returns:
            Distance from center after the clamp.
        """
        body.apply_impulse(key_impulse)

        dx, dy = self.offset(body)
        body.apply_impulse(self._forces.edge_pull(dx, dy, zones.caution_radius, zones.fail_radius))
        body.apply_impulse(self._forces.repulsion(dx, dy, zones.safe_radius))

        body.x += body.vx
        body.y += body.vy

        body.vx *= self._damping
        body.vy *= self._damping

        # Clamp to the board; velocity is not zeroed
        body.x = min(max(body.x, 0.0), float(self._width))
        body.y = min(max(body.y, 0.0), float(self._height))

        return self.distance(body)
