"""
Baseline Orbit Agent - Holds a ring inside the safe zone.

The repulsion field pushes the dot away from the center and the random drift
nudges it every tick, so sitting still is not an option. This agent lets the
repulsion carry it outward and pushes back inward once it passes a target
radius, which keeps it in the highest scoring zone until the safe zone gets
too small to hold.

Strategy:
- Predict where the dot will be a few ticks ahead (position + velocity * lookahead)
- If the prediction is outside target_fraction * safe_radius, press the keys
  that point back toward the center on each axis where the offset is large
- Otherwise release everything
"""

import numpy as np
from typing import Any, Dict, Optional


class SurvivalAgent:
    """
    Simple baseline agent that orbits inside the safe zone.
    """

    def __init__(
        self,
        target_fraction: float = 0.5,
        lookahead: float = 12.0,
        deadband: float = 2.0,
        debug: bool = False
    ):
        """
        Initialize the agent.

        Args:
            target_fraction: Fraction of the safe radius to hold.
            lookahead: Ticks of velocity to project forward.
            deadband: Per-axis offset (px) below which no key is pressed.
            debug: If True, print decisions to stdout.
        """
        self.target_fraction = target_fraction
        self.lookahead = lookahead
        self.deadband = deadband
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless)."""
        pass

    def act(self, observation: Dict[str, Any]) -> np.ndarray:
        """
        Choose which direction keys to hold this tick.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            int8 array [up, down, left, right].
        """
        cx = float(observation["board_width"]) / 2
        cy = float(observation["board_height"]) / 2

        # Projected offset from center
        dx = float(observation["player_x"]) - cx + float(observation["player_vx"]) * self.lookahead
        dy = float(observation["player_y"]) - cy + float(observation["player_vy"]) * self.lookahead
        projected = float(np.hypot(dx, dy))

        target = self.target_fraction * float(observation["safe_radius"])

        action = np.zeros(4, dtype=np.int8)
        if projected > target:
            if dy > self.deadband:
                action[0] = 1   # up
            elif dy < -self.deadband:
                action[1] = 1   # down
            if dx > self.deadband:
                action[2] = 1   # left
            elif dx < -self.deadband:
                action[3] = 1   # right

        if self.debug:
            print(f"[Orbit Agent] projected={projected:.1f} target={target:.1f} "
                  f"zone={int(observation['zone'])} action={action.tolist()}")

        return action


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> SurvivalAgent:
    """Factory function to create an agent instance."""
    return SurvivalAgent(**kwargs)
