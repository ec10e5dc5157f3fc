"""
Survival Core - The game simulation and its agent-facing wrappers.

This module provides the core game simulation, Gymnasium environment wrapper,
and all supporting systems (input, forces, zones, scoring, rules).

Main exports:
- ZoneSurvivalEnv: Gymnasium environment for single-agent training
- ZoneSurvivalVectorEnv: Vectorized environment (single-process)
- CoreGame: Low-level game simulation (used by the human tool and the envs)
- FixedStepLoop: Frame-time to fixed-tick accumulator
- GameConfig: Configuration loaded from game_config.yaml
"""

from zone_arena.survival_core.config_loader import GameConfig, load_config
from zone_arena.survival_core.input_state import Direction, InputState
from zone_arena.survival_core.zones import Zone, ZoneScheduler
from zone_arena.survival_core.game import CoreGame, GamePhase, GameOverSummary
from zone_arena.survival_core.loop_driver import FixedStepLoop, FrameTimer
from zone_arena.survival_core.env_gym import ZoneSurvivalEnv
from zone_arena.survival_core.vector_env import ZoneSurvivalVectorEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Direction",
    "InputState",
    "Zone",
    "ZoneScheduler",
    "CoreGame",
    "GamePhase",
    "GameOverSummary",
    "FixedStepLoop",
    "FrameTimer",
    "ZoneSurvivalEnv",
    "ZoneSurvivalVectorEnv",
]
