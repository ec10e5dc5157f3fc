"""
Core Game
=========

Main game orchestrator combining input, forces, integration, zones, scoring
and rules.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from zone_arena.survival_core.config_loader import GameConfig, get_config
from zone_arena.survival_core.forces import ForceModel
from zone_arena.survival_core.input_state import Direction, InputState
from zone_arena.survival_core.integrator import Integrator, PlayerBody
from zone_arena.survival_core.rules import TerminationRules, TerminationResult
from zone_arena.survival_core.scoring import ScoreTracker
from zone_arena.survival_core.state_snapshot import GameSnapshot, SnapshotBuilder
from zone_arena.survival_core.zones import Zone, ZoneScheduler


class GamePhase(Enum):
    """Lifecycle of a single game."""
    WAITING = "waiting"      # Start prompt shown, nothing moves
    RUNNING = "running"
    GAME_OVER = "game_over"  # Final frame and summary shown until a key is pressed


@dataclass(frozen=True)
class GameOverSummary:
    """Outcome of a finished game."""
    time_alive: float
    score: float
    reason: str = "fail_threshold"

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))

    def message(self) -> str:
        return (
            f"Game Over! You survived {self.time_alive:.1f} seconds "
            f"with a score of {self.display_score}."
        )


@dataclass
class StepResult:
    """Result of a single tick."""
    snapshot: GameSnapshot
    terminated: bool
    truncated: bool
    termination_reason: str
    delta_score: float
    zone: Zone
    distance: float


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Input state (held direction keys)
    - Force model and integrator
    - Zone scheduler
    - Score and survival timer
    - Termination rules
    - State snapshots

    One tick = drift, shrink zones, move player, check fail, score, time.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible drift.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        # Initialize subsystems
        self._forces = ForceModel(config, seed)
        self._integrator = Integrator(self._forces, config)
        self._zones = ZoneScheduler(config)
        self._scorer = ScoreTracker(config)
        self._rules = TerminationRules(config)
        self._input = InputState()
        self._snapshot_builder = SnapshotBuilder(config)

        # Game state
        self._body: PlayerBody = self._integrator.spawn_body()
        self._phase: GamePhase = GamePhase.WAITING
        self._ticks: int = 0
        self._terminated: bool = False
        self._truncated: bool = False
        self._termination_reason: str = ""
        self._last_result: Optional[GameOverSummary] = None

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase is GamePhase.RUNNING

    @property
    def body(self) -> PlayerBody:
        """Player body (live object)."""
        return self._body

    @property
    def zones(self) -> ZoneScheduler:
        return self._zones

    @property
    def input_state(self) -> InputState:
        return self._input

    @property
    def score(self) -> float:
        """Current exact score."""
        return self._scorer.score

    @property
    def display_score(self) -> int:
        return self._scorer.display_score

    @property
    def time_alive(self) -> float:
        return self._scorer.time_alive

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def distance(self) -> float:
        """Player distance from the board center."""
        return self._integrator.distance(self._body)

    @property
    def zone(self) -> Zone:
        """Zone the player currently occupies."""
        return self._zones.classify(self.distance)

    @property
    def is_over(self) -> bool:
        """True if the current game has ended."""
        return self._terminated or self._truncated

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def last_result(self) -> Optional[GameOverSummary]:
        """Summary of the most recently finished game, kept across resets."""
        return self._last_result

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Reset game to its initial state, waiting for a start key.

        Args:
            seed: New random seed. Continues the current drift stream if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._seed = seed

        self._forces.reset(seed)
        self._zones.reset()
        self._scorer.reset()
        self._input.clear()

        self._body = self._integrator.spawn_body()
        self._phase = GamePhase.WAITING
        self._ticks = 0
        self._terminated = False
        self._truncated = False
        self._termination_reason = ""

        return self._build_snapshot()

    def start(self) -> None:
        """Begin the game if it is waiting for a start key."""
        if self._phase is GamePhase.WAITING:
            self._phase = GamePhase.RUNNING

    def key_down(self, direction: Optional[Direction]) -> None:
        """
        Handle a key press.

        While waiting, any key starts the game and is not recorded as held.
        After a game over, any key dismisses the summary and returns to the
        start prompt.

        Args:
            direction: Direction for arrow keys, None for any other key.
        """
        if self._phase is GamePhase.WAITING:
            self.start()
            return

        if self._phase is GamePhase.GAME_OVER:
            self.reset()
            return

        self._input.press(direction)

    def key_up(self, direction: Optional[Direction]) -> None:
        """Handle a key release."""
        self._input.release(direction)

    def set_input(self, action: Sequence) -> None:
        """
        Replace held keys from an agent action.

        Args:
            action: [up, down, left, right] binary vector.
        """
        self._input.set_from_action(action)

    def tick(self, dt: Optional[float] = None) -> StepResult:
        """
        Advance the game by one tick.

        Does nothing unless the game is running.

        Args:
            dt: Elapsed seconds. Uses physics.dt if None.

        Returns:
            StepResult with new state and metadata.
        """
        if dt is None:
            dt = self._config.physics.dt

        if self._phase is not GamePhase.RUNNING:
            distance = self.distance
            return StepResult(
                snapshot=self._build_snapshot(),
                terminated=self._terminated,
                truncated=self._truncated,
                termination_reason=self._termination_reason,
                delta_score=0.0,
                zone=self._zones.classify(distance),
                distance=distance
            )

        # Drift is drawn before the zones shrink
        self._body.apply_impulse(self._forces.drift())
        self._zones.update(dt)

        distance = self._integrator.step(
            self._body,
            self._input.impulse(self._config.forces.key_force),
            self._zones
        )
        self._ticks += 1

        zone = self._zones.classify(distance)
        fail = self._rules.check_fail(distance, self._zones.fail_radius)
        if fail.is_over:
            self._finish(fail)
            return StepResult(
                snapshot=self._build_snapshot(),
                terminated=True,
                truncated=False,
                termination_reason=fail.reason,
                delta_score=0.0,
                zone=zone,
                distance=distance
            )

        delta_score = self._scorer.accrue(zone, dt)
        self._scorer.advance_time(dt)

        cap = self._rules.check_cap(self._ticks)
        if cap.is_over:
            self._finish(cap)

        return StepResult(
            snapshot=self._build_snapshot(),
            terminated=self._terminated,
            truncated=self._truncated,
            termination_reason=self._termination_reason,
            delta_score=delta_score,
            zone=zone,
            distance=distance
        )

    def _finish(self, result: TerminationResult) -> None:
        """Record the end of the game."""
        self._terminated = result.terminated
        self._truncated = result.truncated
        self._termination_reason = result.reason
        self._phase = GamePhase.GAME_OVER
        self._input.clear()
        self._last_result = GameOverSummary(
            time_alive=self._scorer.time_alive,
            score=self._scorer.score,
            reason=result.reason
        )

    def _build_snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            body=self._body,
            zones=self._zones,
            score=self._scorer.score,
            time_alive=self._scorer.time_alive,
            ticks=self._ticks,
            started=self._phase is GamePhase.RUNNING
        )

    def snapshot(self) -> GameSnapshot:
        """Current game state snapshot."""
        return self._build_snapshot()

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "display_score": self._scorer.display_score,
            "time_alive": self._scorer.time_alive,
            "ticks": self._ticks,
            "zone": int(self.zone),
            "distance": self.distance,
            "time_in_zone": {z.name.lower(): t for z, t in self._scorer.time_in_zone.items()},
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with board, zone and player info plus HUD strings.
        """
        cx, cy = self._config.center
        last = self._last_result

        return {
            "board_width": self._config.board.width,
            "board_height": self._config.board.height,
            "center_x": cx,
            "center_y": cy,
            "phase": self._phase.value,
            "started": self._phase is not GamePhase.WAITING,
            "game_over": self._phase is GamePhase.GAME_OVER,
            "safe_radius": self._zones.safe_radius,
            "caution_radius": self._zones.caution_radius,
            "fail_radius": self._zones.fail_radius,
            "player_x": self._body.x,
            "player_y": self._body.y,
            "player_radius": self._config.board.player_radius,
            "score": self._scorer.display_score,
            "time_alive": self._scorer.time_alive,
            "score_text": self._scorer.format_score(),
            "time_text": self._scorer.format_time(),
            "game_over_message": last.message() if last is not None else "",
        }
