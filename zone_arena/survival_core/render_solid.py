"""
Solid Renderer
==============

Fast numpy-based renderer that draws the zones and the player as flat
circles. Used for agent image observations; draws no text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import numpy as np

from zone_arena.survival_core.config_loader import GameConfig, get_config


# Canvas palette
BACKGROUND = (255, 255, 255)
FAIL_COLOR = (255, 0, 0)        # red
CAUTION_COLOR = (255, 255, 0)   # yellow
SAFE_COLOR = (0, 128, 0)        # green
PLAYER_COLOR = (0, 0, 255)      # blue


class SolidRenderer:
    """
    Renders the arena as solid-color circles.

    Draw order is largest to smallest so each zone paints over the one
    outside it: fail (red), caution (yellow), safe (green), then the player.
    Before the game starts only the cleared background is drawn.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array(BACKGROUND, dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.empty((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        if not render_data["started"]:
            return img

        scale, offset_x, offset_y = self._layout(render_data, width, height)

        def to_img(x: float, y: float) -> Tuple[float, float]:
            return (x * scale + offset_x, y * scale + offset_y)

        cx, cy = to_img(render_data["center_x"], render_data["center_y"])
        for key, color in (
            ("fail_radius", FAIL_COLOR),
            ("caution_radius", CAUTION_COLOR),
            ("safe_radius", SAFE_COLOR),
        ):
            self._draw_circle(img, cx, cy, render_data[key] * scale, color)

        px, py = to_img(render_data["player_x"], render_data["player_y"])
        self._draw_circle(img, px, py, render_data["player_radius"] * scale, PLAYER_COLOR)

        return img

    def _layout(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> Tuple[float, float, float]:
        """Uniform scale and centering offsets from board to image."""
        board_width = render_data["board_width"]
        board_height = render_data["board_height"]
        scale = min(width / board_width, height / board_height)
        offset_x = (width - board_width * scale) / 2
        offset_y = (height - board_height * scale) / 2
        return scale, offset_x, offset_y

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: float,
        cy: float,
        radius: float,
        color: Tuple[int, int, int]
    ) -> None:
        """Draw a filled circle using numpy."""
        height, width = img.shape[:2]

        # Calculate bounding box
        y_min = max(0, int(np.floor(cy - radius)))
        y_max = min(height, int(np.ceil(cy + radius)) + 1)
        x_min = max(0, int(np.floor(cx - radius)))
        x_max = min(width, int(np.ceil(cx + radius)) + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        # Pixel centers inside the circle
        yy, xx = np.mgrid[y_min:y_max, x_min:x_max]
        mask = (xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2 <= radius ** 2

        img[y_min:y_max, x_min:x_max][mask] = np.array(color, dtype=np.uint8)

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """
        Render to screen (no-op for solid renderer).

        Use PygameRenderer for screen display.
        """
        pass

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
