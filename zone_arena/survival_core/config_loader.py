"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Arena geometry."""
    width: int
    height: int
    player_radius: float  # Drawn size of the player dot

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2, self.height / 2)


@dataclass(frozen=True)
class ZonesConfig:
    """Initial radii and shrink schedule of the three concentric zones."""
    initial_safe_radius: float
    initial_caution_radius: float
    initial_fail_radius: float
    safe_shrink_rate: float     # Pixels per second
    caution_shrink_rate: float
    fail_shrink_rate: float
    min_safe_radius: float
    zone_gap: float             # Minimum spacing between consecutive radii


@dataclass(frozen=True)
class PhysicsConfig:
    """Integrator parameters."""
    dt: float
    damping: float
    max_frame_time: float

    @property
    def ticks_per_second(self) -> float:
        return 1.0 / self.dt


@dataclass(frozen=True)
class ForcesConfig:
    """Per-tick force magnitudes."""
    random_strength: float
    key_force: float
    repulsion_strength: float
    max_edge_pull: float
    edge_pull_exponent: float


@dataclass(frozen=True)
class ScoringConfig:
    """Points per second earned in each zone."""
    safe_rate: float
    caution_rate: float
    danger_rate: float


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_ticks: int  # 0 disables truncation


@dataclass(frozen=True)
class ObservationConfig:
    """Observation image parameters."""
    image_width: int
    image_height: int
    render_style: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    zones: ZonesConfig
    physics: PhysicsConfig
    forces: ForcesConfig
    scoring: ScoringConfig
    caps: CapsConfig
    observation: ObservationConfig

    @property
    def center(self) -> Tuple[float, float]:
        """Board center, the common center of all zones."""
        return self.board.center


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    zones = config.zones

    # Radii must nest: safe < caution < fail
    if not (0 < zones.initial_safe_radius < zones.initial_caution_radius < zones.initial_fail_radius):
        raise ValueError(
            f"Zone radii must satisfy 0 < safe < caution < fail, got "
            f"{zones.initial_safe_radius}, {zones.initial_caution_radius}, {zones.initial_fail_radius}"
        )

    if zones.min_safe_radius <= 0 or zones.min_safe_radius > zones.initial_safe_radius:
        raise ValueError(
            f"min_safe_radius ({zones.min_safe_radius}) must be in (0, initial_safe_radius]"
        )

    if zones.zone_gap <= 0:
        raise ValueError(f"zone_gap must be positive, got {zones.zone_gap}")

    # Outer radii start at or above their floors so no radius ever grows
    if zones.initial_caution_radius < zones.initial_safe_radius + zones.zone_gap:
        raise ValueError(
            f"initial_caution_radius ({zones.initial_caution_radius}) must be at least "
            f"initial_safe_radius + zone_gap ({zones.initial_safe_radius + zones.zone_gap})"
        )

    if zones.initial_fail_radius < zones.initial_caution_radius + zones.zone_gap:
        raise ValueError(
            f"initial_fail_radius ({zones.initial_fail_radius}) must be at least "
            f"initial_caution_radius + zone_gap ({zones.initial_caution_radius + zones.zone_gap})"
        )

    for name in ("safe_shrink_rate", "caution_shrink_rate", "fail_shrink_rate"):
        if getattr(zones, name) < 0:
            raise ValueError(f"zones.{name} must be non-negative, got {getattr(zones, name)}")

    # The fail circle has to fit on the board or the clamp would hide it
    half_extent = min(config.board.width, config.board.height) / 2
    if zones.initial_fail_radius > half_extent:
        raise ValueError(
            f"initial_fail_radius ({zones.initial_fail_radius}) exceeds half the "
            f"board extent ({half_extent})"
        )

    if config.physics.dt <= 0:
        raise ValueError(f"physics.dt must be positive, got {config.physics.dt}")

    if not (0 < config.physics.damping <= 1):
        raise ValueError(f"physics.damping must be in (0, 1], got {config.physics.damping}")

    if config.physics.max_frame_time < config.physics.dt:
        raise ValueError(
            f"physics.max_frame_time ({config.physics.max_frame_time}) must be at "
            f"least one tick ({config.physics.dt})"
        )

    if config.caps.max_ticks < 0:
        raise ValueError(f"caps.max_ticks must be >= 0, got {config.caps.max_ticks}")

    # Validate render style
    if config.observation.render_style not in ("solid", "full"):
        raise ValueError(f"render_style must be 'solid' or 'full', got '{config.observation.render_style}'")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        player_radius=float(board_data.get("player_radius", 10))
    )

    zones_data = raw["zones"]
    zones = ZonesConfig(
        initial_safe_radius=float(zones_data["initial_safe_radius"]),
        initial_caution_radius=float(zones_data["initial_caution_radius"]),
        initial_fail_radius=float(zones_data["initial_fail_radius"]),
        safe_shrink_rate=float(zones_data["safe_shrink_rate"]),
        caution_shrink_rate=float(zones_data["caution_shrink_rate"]),
        fail_shrink_rate=float(zones_data["fail_shrink_rate"]),
        min_safe_radius=float(zones_data.get("min_safe_radius", 10)),
        zone_gap=float(zones_data.get("zone_gap", 10))
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        dt=float(physics_data["dt"]),
        damping=float(physics_data["damping"]),
        max_frame_time=float(physics_data.get("max_frame_time", 0.2))
    )

    forces_data = raw["forces"]
    forces = ForcesConfig(
        random_strength=float(forces_data["random_strength"]),
        key_force=float(forces_data["key_force"]),
        repulsion_strength=float(forces_data["repulsion_strength"]),
        max_edge_pull=float(forces_data["max_edge_pull"]),
        edge_pull_exponent=float(forces_data.get("edge_pull_exponent", 3))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        safe_rate=float(scoring_data["safe_rate"]),
        caution_rate=float(scoring_data["caution_rate"]),
        danger_rate=float(scoring_data.get("danger_rate", 0))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_ticks=int(caps_data.get("max_ticks", 0))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        image_width=int(obs_data.get("image_width", 300)),
        image_height=int(obs_data.get("image_height", 300)),
        render_style=str(obs_data.get("render_style", "solid"))
    )

    config = GameConfig(
        board=board,
        zones=zones,
        physics=physics,
        forces=forces,
        scoring=scoring,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
