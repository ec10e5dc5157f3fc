"""
Human Play Mode
================

Play the zone survival game interactively with real-time physics.

Controls:
    - Any key: Start the game (the first key press is not used for steering)
    - Arrow keys: Push the dot
    - R: Back to the start prompt
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, Optional

import pygame

from zone_arena.survival_core.config_loader import load_config, GameConfig
from zone_arena.survival_core.game import CoreGame, GamePhase
from zone_arena.survival_core.input_state import Direction
from zone_arena.survival_core.loop_driver import FixedStepLoop, FrameTimer
from zone_arena.survival_core.render_full_pygame import PygameRenderer


KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


class HumanPlayer:
    """
    Human-playable game: pygame events in, fixed-step simulation, redraw.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._window_width = window_width or config.board.width
        self._window_height = window_height or config.board.height
        self._target_fps = target_fps

        # Initialize game
        self._game = CoreGame(config=config, seed=seed)
        self._game.reset(seed=seed)

        # Initialize pygame
        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        # Fixed-step physics independent of the display rate
        self._loop = FixedStepLoop(config)
        self._timer = FrameTimer()

        self._running = True
        self._best_score = 0

    def run(self) -> int:
        """Run the game loop. Returns the best score of the session."""
        print("=== Zone Arena ===")
        print("Press any key to start, arrow keys to steer")
        print("R to return to the start prompt, ESC to quit")
        print()

        # First delta is 0 so startup time is not simulated
        self._timer.restart()

        while self._running:
            self._handle_events()

            self._clock.tick(self._target_fps)
            frame_time = self._timer.delta()
            if self._game.is_running:
                self._loop.advance(frame_time, self._step)
            else:
                self._loop.reset()

            self._render()

        pygame.quit()
        return self._best_score

    def _step(self, dt: float) -> bool:
        """One fixed tick. Returns True when the game ended."""
        result = self._game.tick(dt)
        if result.terminated or result.truncated:
            summary = self._game.last_result
            print(summary.message())
            self._best_score = max(self._best_score, summary.display_score)
            return True
        return False

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r and self._game.phase is GamePhase.RUNNING:
                    self._restart()
                else:
                    self._game.key_down(KEY_DIRECTIONS.get(event.key))

            elif event.type == pygame.KEYUP:
                self._game.key_up(KEY_DIRECTIONS.get(event.key))

    def _restart(self) -> None:
        """Abandon the current game and show the start prompt."""
        self._game.reset()
        self._loop.reset()
        print("\n=== Game Restarted ===\n")

    def _render(self) -> None:
        """Render the game."""
        self._renderer.render_to_screen(
            self._game.get_render_data(),
            self._window_width,
            self._window_height
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play the zone survival game interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: board width)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: board height)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    player = HumanPlayer(
        config=config,
        seed=args.seed,
        window_width=args.width,
        window_height=args.height,
        target_fps=args.fps
    )
    best = player.run()
    print(f"\nBest Score: {best}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
