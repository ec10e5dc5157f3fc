"""
Vector Environment
==================

Batch of CoreGame instances stepped in lockstep in one process. Observations
come back as stacked numpy arrays with the env index as the first axis.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np
from gymnasium import spaces

from zone_arena.survival_core.config_loader import GameConfig, load_config
from zone_arena.survival_core.game import CoreGame
from zone_arena.survival_core.state_snapshot import build_observation_space


class ZoneSurvivalVectorEnv:
    """
    Vectorized zone survival environment.

    Env i is seeded with seed + i, so each slot replays the same drift
    stream as a single ZoneSurvivalEnv reset with that seed. Finished envs
    are not auto-reset; pass their indices to reset().
    """

    def __init__(
        self,
        num_envs: int,
        config_path: Optional[str] = None,
        seed: Optional[int] = None,
        render_style: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
    ):
        """
        Create the batch.

        Args:
            num_envs: Number of games.
            config_path: Tuning table to load. Packaged game_config.yaml if None.
            seed: Base seed. Env i uses seed + i.
            render_style: "solid" or "full" for board_rgb and render().
            image_obs: Add stacked board_rgb frames to observations.
            image_width: Frame width override.
            image_height: Frame height override.
        """
        if num_envs < 1:
            raise ValueError(f"num_envs must be at least 1, got {num_envs}")

        self._num_envs = num_envs
        self._config = load_config(config_path)
        self._base_seed = seed

        obs_cfg = self._config.observation
        self._render_style = render_style or obs_cfg.render_style
        self._frame_size = (
            image_height or obs_cfg.image_height,
            image_width or obs_cfg.image_width,
        )
        self._image_obs = image_obs
        self._renderer = None

        self._games: List[CoreGame] = [
            CoreGame(config=self._config, seed=self._slot_seed(i)) for i in range(num_envs)
        ]

        self.single_action_space = spaces.MultiBinary(4)
        self.single_observation_space = build_observation_space(
            self._config,
            self._frame_size if image_obs else None
        )

        # Batched buffers, one row per env; zone ids stay int32 as in to_obs_dict()
        self._obs: Dict[str, np.ndarray] = {
            key: np.zeros(
                (num_envs,) + space.shape,
                dtype=np.int32 if isinstance(space, spaces.Discrete) else space.dtype
            )
            for key, space in self.single_observation_space.spaces.items()
        }
        self._rewards = np.zeros(num_envs, dtype=np.float32)
        self._terminateds = np.zeros(num_envs, dtype=bool)
        self._truncateds = np.zeros(num_envs, dtype=bool)

        self._rng = np.random.default_rng(seed)

    @property
    def num_envs(self) -> int:
        return self._num_envs

    @property
    def config(self) -> GameConfig:
        return self._config

    def _slot_seed(self, index: int) -> Optional[int]:
        return None if self._base_seed is None else self._base_seed + index

    def reset(
        self,
        seed: Optional[int] = None,
        env_indices: Optional[Sequence[int]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Restart games, already running.

        Args:
            seed: New base seed. Keeps the previous base if None.
            env_indices: Games to restart. All if None.

        Returns:
            (observations, infos) for the whole batch.
        """
        if seed is not None:
            self._base_seed = seed

        indices = range(self._num_envs) if env_indices is None else env_indices
        for i in indices:
            self._games[i].reset(seed=self._slot_seed(i))
            self._games[i].start()
            self._rewards[i] = 0.0
            self._terminateds[i] = False
            self._truncateds[i] = False
            self._write_row(i)

        return self._batch(), self._batch_info()

    def step(
        self,
        actions: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], np.ndarray, np.ndarray, np.ndarray, Dict[str, Any]]:
        """
        Advance every game by one tick.

        Args:
            actions: (num_envs, 4) key array, rows are [up, down, left, right].

        Returns:
            (observations, rewards, terminateds, truncateds, infos).

        Raises:
            ValueError: If actions is not (num_envs, 4).
        """
        actions = np.asarray(actions)
        if actions.shape != (self._num_envs, 4):
            raise ValueError(f"Expected actions of shape ({self._num_envs}, 4), got {actions.shape}")

        for i, (game, keys) in enumerate(zip(self._games, actions)):
            game.set_input(keys)
            result = game.tick()
            self._rewards[i] = result.delta_score
            self._terminateds[i] = result.terminated
            self._truncateds[i] = result.truncated
            self._write_row(i)

        return (
            self._batch(),
            self._rewards.copy(),
            self._terminateds.copy(),
            self._truncateds.copy(),
            self._batch_info()
        )

    def _write_row(self, index: int) -> None:
        """Copy one game's observation into the batch buffers."""
        row = self._games[index].snapshot().to_obs_dict()
        if self._image_obs:
            row["board_rgb"] = self._frame(index)
        for key, buffer in self._obs.items():
            buffer[index] = row[key]

    def _batch(self) -> Dict[str, np.ndarray]:
        return {key: buffer.copy() for key, buffer in self._obs.items()}

    def _batch_info(self) -> Dict[str, Any]:
        return {
            "score": self._obs["score"].copy(),
            "delta_score": self._rewards.copy(),
            "time_alive": self._obs["time_alive"].copy(),
            "zone": self._obs["zone"].copy(),
            "terminated_reason": [game.termination_reason for game in self._games],
        }

    def _frame(self, index: int) -> np.ndarray:
        if self._renderer is None:
            if self._render_style == "full":
                from zone_arena.survival_core.render_full_pygame import PygameRenderer
                self._renderer = PygameRenderer(self._config)
            else:
                from zone_arena.survival_core.render_solid import SolidRenderer
                self._renderer = SolidRenderer(self._config)

        height, width = self._frame_size
        return self._renderer.render(self._games[index].get_render_data(), width, height)

    def render(self, env_indices: Optional[Sequence[int]] = None) -> np.ndarray:
        """
        Frames for a set of games.

        Args:
            env_indices: Games to draw. All if None.

        Returns:
            (len(env_indices), height, width, 3) uint8 array.
        """
        indices = range(self._num_envs) if env_indices is None else env_indices
        return np.stack([self._frame(i) for i in indices], axis=0)

    def get_game(self, env_idx: int) -> CoreGame:
        """Underlying game of one slot."""
        return self._games[env_idx]

    def sample_actions(self) -> np.ndarray:
        """Random key states, shape (num_envs, 4), dtype int8."""
        return self._rng.integers(0, 2, size=(self._num_envs, 4), dtype=np.int8)

    def close(self) -> None:
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
