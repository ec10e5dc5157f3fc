"""
Full Pygame Renderer
====================

Renderer using pygame with the HUD, start prompt and game-over overlay.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import pygame

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.render_solid import (
    BACKGROUND,
    CAUTION_COLOR,
    FAIL_COLOR,
    PLAYER_COLOR,
    SAFE_COLOR,
)


START_PROMPT = "Press any key to START!"
CONTINUE_PROMPT = "Press any key to continue"


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    Supports:
    - Zone circles and player dot
    - Score/time HUD
    - Start prompt before the game begins
    - Game-over overlay with the run summary
    - Screen display for human mode and RGB array output for agents
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if config is None:
            config = get_config()

        self._config = config

        # Initialize pygame
        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Fonts
        pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._font_small = pygame.font.Font(None, 26)

        # Colors
        self._bg_color = BACKGROUND
        self._text_color = (0, 0, 0)
        self._overlay_color = (0, 0, 0, 160)
        self._overlay_text_color = (255, 255, 255)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self._render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: Optional[int] = None,
        window_height: Optional[int] = None
    ) -> None:
        """
        Render to pygame window.

        Args:
            render_data: Data from CoreGame.get_render_data().
            window_width: Window width. Defaults to the board width.
            window_height: Window height. Defaults to the board height.
        """
        window_width = window_width or self._config.board.width
        window_height = window_height or self._config.board.height

        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Zone Arena")

        self._render_to_surface(self._screen, render_data)

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any]
    ) -> None:
        """Render game state to a pygame surface."""
        width, height = surface.get_size()
        surface.fill(self._bg_color)

        if not render_data["started"]:
            self._draw_start_prompt(surface, render_data, width, height)
            return

        # Scale board to fit, centered
        board_width = render_data["board_width"]
        board_height = render_data["board_height"]
        scale = min(width / board_width, height / board_height)
        offset_x = (width - board_width * scale) / 2
        offset_y = (height - board_height * scale) / 2

        center = (
            int(render_data["center_x"] * scale + offset_x),
            int(render_data["center_y"] * scale + offset_y)
        )

        # Largest first so inner zones paint over outer ones
        for key, color in (
            ("fail_radius", FAIL_COLOR),
            ("caution_radius", CAUTION_COLOR),
            ("safe_radius", SAFE_COLOR),
        ):
            radius = int(round(render_data[key] * scale))
            if radius > 0:
                pygame.draw.circle(surface, color, center, radius)

        player = (
            int(render_data["player_x"] * scale + offset_x),
            int(render_data["player_y"] * scale + offset_y)
        )
        player_radius = max(1, int(round(render_data["player_radius"] * scale)))
        pygame.draw.circle(surface, PLAYER_COLOR, player, player_radius)

        self._draw_hud(surface, render_data, width)

        if render_data["game_over"]:
            self._draw_game_over(surface, render_data, width, height)

    def _draw_hud(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        width: int
    ) -> None:
        """Draw score (top left) and survival time (top right)."""
        score_surface = self._font_small.render(render_data["score_text"], True, self._text_color)
        surface.blit(score_surface, (10, 10))

        time_surface = self._font_small.render(render_data["time_text"], True, self._text_color)
        surface.blit(time_surface, (width - time_surface.get_width() - 10, 10))

    def _draw_start_prompt(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> None:
        """Draw the centered start prompt, with the previous result under it."""
        prompt = self._font.render(START_PROMPT, True, self._text_color)
        surface.blit(prompt, prompt.get_rect(center=(width // 2, height // 2)))

        last_message = render_data.get("game_over_message", "")
        if last_message:
            last = self._font_small.render(last_message, True, self._text_color)
            surface.blit(last, last.get_rect(center=(width // 2, height // 2 + 40)))

    def _draw_game_over(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> None:
        """Dim the final frame and show the run summary."""
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(self._overlay_color)
        surface.blit(overlay, (0, 0))

        message = self._font_small.render(render_data["game_over_message"], True, self._overlay_text_color)
        surface.blit(message, message.get_rect(center=(width // 2, height // 2 - 15)))

        hint = self._font_small.render(CONTINUE_PROMPT, True, self._overlay_text_color)
        surface.blit(hint, hint.get_rect(center=(width // 2, height // 2 + 20)))

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
