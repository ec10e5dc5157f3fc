"""
Input State
===========

Tracks which direction keys are held. Renderer- and backend-agnostic: the
pygame tool and the Gymnasium env both translate their input into Direction
presses and releases.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional, Sequence, Tuple


class Direction(Enum):
    """Steering directions, in action-vector order."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Unit impulse per direction in screen coordinates (y grows downward)
_IMPULSE_SIGNS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class InputState:
    """
    Held/released state for the four direction keys.

    Keys that don't map to a Direction are passed as None and ignored, so a
    caller can forward every key event without filtering.
    """

    def __init__(self):
        self._held: Dict[Direction, bool] = {d: False for d in Direction}

    def press(self, direction: Optional[Direction]) -> None:
        """Mark a direction as held."""
        if direction is not None:
            self._held[direction] = True

    def release(self, direction: Optional[Direction]) -> None:
        """Mark a direction as released."""
        if direction is not None:
            self._held[direction] = False

    def is_held(self, direction: Direction) -> bool:
        return self._held[direction]

    def held(self) -> FrozenSet[Direction]:
        """Set of currently held directions."""
        return frozenset(d for d, down in self._held.items() if down)

    def clear(self) -> None:
        """Release every key."""
        for d in Direction:
            self._held[d] = False

    def set_from_action(self, action: Sequence) -> None:
        """
        Replace held keys from an agent action vector.

        Args:
            action: 4 values [up, down, left, right]; truthy means held.

        Raises:
            ValueError: If the action does not have exactly 4 entries.
        """
        if len(action) != len(Direction):
            raise ValueError(f"Action must have {len(Direction)} entries [up, down, left, right], got {len(action)}")
        for d in Direction:
            self._held[d] = bool(action[d.value])

    @classmethod
    def from_action(cls, action: Sequence) -> "InputState":
        """Build an InputState from an agent action vector."""
        state = cls()
        state.set_from_action(action)
        return state

    def impulse(self, key_force: float) -> Tuple[float, float]:
        """
        Velocity impulse produced by the held keys this tick.

        Opposite keys cancel each other.

        Args:
            key_force: Impulse magnitude per held key.

        Returns:
            (dvx, dvy) impulse.
        """
        dvx = 0.0
        dvy = 0.0
        for d, down in self._held.items():
            if down:
                sx, sy = _IMPULSE_SIGNS[d]
                dvx += sx * key_force
                dvy += sy * key_force
        return (dvx, dvy)

    def to_action(self) -> Tuple[int, int, int, int]:
        """Held keys as an [up, down, left, right] binary tuple."""
        return tuple(int(self._held[d]) for d in Direction)
