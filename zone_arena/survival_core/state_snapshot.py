"""
State Snapshot
==============

Packs game state into numpy scalars for Gymnasium observations, and
describes the matching observation space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING
import numpy as np
from gymnasium import spaces

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.zones import Zone

if TYPE_CHECKING:
    from zone_arena.survival_core.integrator import PlayerBody
    from zone_arena.survival_core.zones import ZoneScheduler


@dataclass
class GameSnapshot:
    """
    Complete game state snapshot.

    Positions are in board pixels with the origin at the top-left corner.
    """
    # Player
    player_x: float
    player_y: float
    player_vx: float
    player_vy: float
    distance: float                   # Distance from board center

    # Zones
    safe_radius: float
    caution_radius: float
    fail_radius: float
    zone: int                         # Zone.SAFE / CAUTION / DANGER
    fail_margin: float                # fail_radius - distance (negative once failed)

    # Progress
    score: float
    time_alive: float
    ticks: int
    started: bool

    # Board info (for normalization)
    board_width: float
    board_height: float

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            # Player
            "player_x": np.array(self.player_x, dtype=np.float32),
            "player_y": np.array(self.player_y, dtype=np.float32),
            "player_vx": np.array(self.player_vx, dtype=np.float32),
            "player_vy": np.array(self.player_vy, dtype=np.float32),
            "distance": np.array(self.distance, dtype=np.float32),

            # Zones
            "safe_radius": np.array(self.safe_radius, dtype=np.float32),
            "caution_radius": np.array(self.caution_radius, dtype=np.float32),
            "fail_radius": np.array(self.fail_radius, dtype=np.float32),
            "zone": np.array(self.zone, dtype=np.int32),
            "fail_margin": np.array(self.fail_margin, dtype=np.float32),

            # Progress
            "score": np.array(self.score, dtype=np.float32),
            "time_alive": np.array(self.time_alive, dtype=np.float32),
            "ticks": np.array(self.ticks, dtype=np.int32),

            # Board info
            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


def build_observation_space(
    config: GameConfig,
    image_shape: Optional[Tuple[int, int]] = None
) -> spaces.Dict:
    """
    Gymnasium space matching GameSnapshot.to_obs_dict().

    Args:
        config: Game configuration (bounds come from the board and radii).
        image_shape: (height, width) of board_rgb, or None for no image.

    Returns:
        Dict space with one entry per observation key.
    """
    board = config.board
    diagonal = float(np.hypot(board.width, board.height))
    fail_max = config.zones.initial_fail_radius
    tick_limit = config.caps.max_ticks or np.iinfo(np.int32).max

    def scalar(low: float, high: float) -> spaces.Box:
        return spaces.Box(low=low, high=high, shape=(), dtype=np.float32)

    fields = {
        "player_x": scalar(0, board.width),
        "player_y": scalar(0, board.height),
        "player_vx": scalar(-np.inf, np.inf),
        "player_vy": scalar(-np.inf, np.inf),
        "distance": scalar(0, diagonal),
        "safe_radius": scalar(0, fail_max),
        "caution_radius": scalar(0, fail_max),
        "fail_radius": scalar(0, fail_max),
        "zone": spaces.Discrete(len(Zone)),
        "fail_margin": scalar(-diagonal, fail_max),
        "score": scalar(0, np.inf),
        "time_alive": scalar(0, np.inf),
        "ticks": spaces.Box(low=0, high=tick_limit, shape=(), dtype=np.int32),
        "board_width": scalar(0, board.width),
        "board_height": scalar(0, board.height),
    }

    if image_shape is not None:
        height, width = image_shape
        fields["board_rgb"] = spaces.Box(low=0, high=255, shape=(height, width, 3), dtype=np.uint8)

    return spaces.Dict(fields)


class SnapshotBuilder:
    """Builds GameSnapshot instances from live game objects."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._cx, self._cy = config.center

    def build(
        self,
        body: "PlayerBody",
        zones: "ZoneScheduler",
        score: float,
        time_alive: float,
        ticks: int,
        started: bool,
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot.

        Args:
            body: Player body.
            zones: Zone scheduler with the current radii.
            score: Exact accumulated score.
            time_alive: Seconds survived.
            ticks: Ticks simulated.
            started: Whether the game is running.
            board_rgb: Optional rendered image.

        Returns:
            GameSnapshot.
        """
        distance = float(np.hypot(body.x - self._cx, body.y - self._cy))

        return GameSnapshot(
            player_x=body.x,
            player_y=body.y,
            player_vx=body.vx,
            player_vy=body.vy,
            distance=distance,
            safe_radius=zones.safe_radius,
            caution_radius=zones.caution_radius,
            fail_radius=zones.fail_radius,
            zone=int(zones.classify(distance)),
            fail_margin=zones.fail_radius - distance,
            score=score,
            time_alive=time_alive,
            ticks=ticks,
            started=started,
            board_width=float(self._config.board.width),
            board_height=float(self._config.board.height),
            board_rgb=board_rgb
        )
