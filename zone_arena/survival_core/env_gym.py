"""
Gymnasium Environment Wrapper
=============================

Exposes CoreGame to agents through the Gymnasium API. One env step is one
fixed simulation tick; the start prompt is skipped on reset.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Union
import numpy as np

import gymnasium as gym

from zone_arena.survival_core.config_loader import GameConfig, load_config
from zone_arena.survival_core.game import CoreGame, StepResult
from zone_arena.survival_core.state_snapshot import build_observation_space


ObsDict = Dict[str, np.ndarray]


class ZoneSurvivalEnv(gym.Env):
    """
    Zone survival game as a Gymnasium environment.

    Action Space:
        MultiBinary(4): direction keys held this tick, [up, down, left, right].

    Observation Space:
        Dict of player, zone and progress scalars (see state_snapshot),
        plus board_rgb when image_obs is enabled.

    Reward:
        Score earned this tick (zone rate * dt). Zero on the failing tick.

    Info:
        score, display_score, delta_score, time_alive, ticks, zone, distance,
        time_in_zone and terminated_reason.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        render_style: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Create the environment.

        Args:
            config_path: Tuning table to load. Packaged game_config.yaml if None.
            render_mode: "human" opens a window, "rgb_array" returns frames.
            render_style: "solid" (numpy circles) or "full" (pygame with HUD).
                Falls back to observation.render_style.
            image_obs: Add a board_rgb frame to every observation.
            image_width: board_rgb width. observation.image_width if None.
            image_height: board_rgb height. observation.image_height if None.
            debug: Print [DEBUG] lines on creation and game end.
        """
        super().__init__()

        if render_mode not in (None, *self.metadata["render_modes"]):
            raise ValueError(
                f"render_mode must be one of {self.metadata['render_modes']} or None, got '{render_mode}'"
            )

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        obs_cfg = self._config.observation
        self._render_style = render_style or obs_cfg.render_style
        self._frame_size = (
            image_height or obs_cfg.image_height,
            image_width or obs_cfg.image_width,
        )
        self._image_obs = image_obs

        self._game = CoreGame(config=self._config)
        self._renderer = None
        self._screen_renderer = None

        self.action_space = gym.spaces.MultiBinary(4)
        self.observation_space = build_observation_space(
            self._config,
            self._frame_size if image_obs else None
        )

        if self._debug:
            safe, caution, fail = self._game.zones.radii
            print(f"[DEBUG] ZoneSurvivalEnv ready")
            print(f"[DEBUG]   Board: {self._config.board.width}x{self._config.board.height}")
            print(f"[DEBUG]   Radii: safe={safe:.0f} caution={caution:.0f} fail={fail:.0f}")
            print(f"[DEBUG]   Tick: {self._config.physics.dt:.4f}s, cap {self._config.caps.max_ticks} ticks")

    @property
    def game(self) -> CoreGame:
        """Underlying game, for tools and debugging."""
        return self._game

    @property
    def config(self) -> GameConfig:
        return self._config

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[ObsDict, Dict[str, Any]]:
        """
        Start a fresh game, already running.

        Args:
            seed: Drift seed. Keeps the current drift stream if None.
            options: Unused.

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)
        self._game.start()

        return self._observe(), self._info(0.0)

    def step(
        self,
        action: Union[np.ndarray, Sequence[int]]
    ) -> Tuple[ObsDict, float, bool, bool, Dict[str, Any]]:
        """
        Hold the given keys for one tick.

        Args:
            action: [up, down, left, right]; truthy entries are held.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.

        Raises:
            ValueError: If the action does not have four entries.
        """
        self._game.set_input(np.asarray(action).reshape(-1))
        result = self._game.tick()

        if self._debug and result.terminated:
            self._print_game_end(result)

        if self.render_mode == "human":
            self.render()

        return (
            self._observe(),
            float(result.delta_score),
            bool(result.terminated),
            bool(result.truncated),
            self._info(result.delta_score)
        )

    def _observe(self) -> ObsDict:
        obs = self._game.snapshot().to_obs_dict()
        if self._image_obs:
            obs["board_rgb"] = self._frame()
        return obs

    def _info(self, delta_score: float) -> Dict[str, Any]:
        info = self._game.get_info()
        info["delta_score"] = delta_score
        return info

    def _print_game_end(self, result: StepResult) -> None:
        print(f"[DEBUG] GAME OVER ({result.termination_reason}) after {self._game.ticks} ticks: "
              f"score={self._game.score:.2f}, time={self._game.time_alive:.2f}s, "
              f"distance={result.distance:.1f}")

    def _frame(self) -> np.ndarray:
        """Current board as an RGB array of the configured frame size."""
        height, width = self._frame_size
        return self._get_renderer().render(self._game.get_render_data(), width, height)

    def _get_renderer(self):
        """Renderer for array frames, in the configured style."""
        if self._renderer is None:
            if self._render_style == "full":
                self._renderer = self._get_screen_renderer()
            else:
                from zone_arena.survival_core.render_solid import SolidRenderer
                self._renderer = SolidRenderer(self._config)
        return self._renderer

    def _get_screen_renderer(self):
        """pygame renderer for the window, shared with frames in full style."""
        if self._screen_renderer is None:
            from zone_arena.survival_core.render_full_pygame import PygameRenderer
            self._screen_renderer = PygameRenderer(self._config)
        return self._screen_renderer

    def render(self) -> Optional[np.ndarray]:
        """
        Draw the current state.

        Returns:
            RGB frame in "rgb_array" mode, otherwise None.
        """
        if self.render_mode == "rgb_array":
            return self._frame()

        if self.render_mode == "human":
            import pygame

            self._get_screen_renderer().render_to_screen(self._game.get_render_data())
            pygame.event.pump()
            pygame.display.flip()

        return None

    def close(self) -> None:
        if self._screen_renderer is not None:
            self._screen_renderer.close()
        if self._renderer is not None and self._renderer is not self._screen_renderer:
            self._renderer.close()
        self._renderer = None
        self._screen_renderer = None
