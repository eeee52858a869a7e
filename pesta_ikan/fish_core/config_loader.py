"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class BoardConfig:
    """Board geometry."""
    width: int
    height: int
    spawn_offset: float      # Distance outside an edge where enemies appear
    offscreen_margin: float  # Enemies beyond this margin are culled


@dataclass(frozen=True)
class PlayerConfig:
    """Player fish parameters."""
    initial_radius: float
    color: str
    follow_factor: float
    growth_factor: float


@dataclass(frozen=True)
class EnemyConfig:
    """Enemy spawning parameters."""
    max_count: int
    spawn_interval_ms: float
    min_radius: float
    max_radius: float
    smaller_chance: float
    smaller_multiplier: float
    larger_multiplier: float
    min_inward_speed: float
    max_inward_speed: float
    max_drift_speed: float
    colors: Tuple[str, ...]


@dataclass(frozen=True)
class LoopConfig:
    """Frame loop timing."""
    fps: int
    max_frames: int

    @property
    def frame_ms(self) -> float:
        """Milliseconds between two frames."""
        return 1000.0 / self.fps


@dataclass(frozen=True)
class LeaderboardConfig:
    """Leaderboard server and client settings."""
    api_url: str
    database_url: str
    top_n: int
    request_timeout: float


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    player: PlayerConfig
    enemies: EnemyConfig
    loop: LoopConfig
    leaderboard: LeaderboardConfig

    @property
    def board_center(self) -> Tuple[float, float]:
        return (self.board.width / 2, self.board.height / 2)


def _parse_color(value) -> str:
    color = str(value)
    if not _HEX_COLOR.match(color):
        raise ValueError(f"Color must be a #rrggbb hex string, got {value!r}")
    return color.lower()


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(
            f"Board size must be positive, got {config.board.width}x{config.board.height}"
        )

    if config.board.offscreen_margin <= config.board.spawn_offset:
        raise ValueError(
            f"offscreen_margin ({config.board.offscreen_margin}) must exceed "
            f"spawn_offset ({config.board.spawn_offset}) or new enemies are culled at once"
        )

    enemies = config.enemies
    if not 0 < enemies.min_radius <= enemies.max_radius:
        raise ValueError(
            f"Enemy radius range invalid: [{enemies.min_radius}, {enemies.max_radius}]"
        )
    if not 0.0 <= enemies.smaller_chance <= 1.0:
        raise ValueError(f"smaller_chance must be in [0, 1], got {enemies.smaller_chance}")
    if enemies.min_inward_speed <= 0 or enemies.max_inward_speed < enemies.min_inward_speed:
        raise ValueError(
            f"Inward speed range invalid: [{enemies.min_inward_speed}, {enemies.max_inward_speed}]"
        )
    if not enemies.colors:
        raise ValueError("At least one enemy color is required")
    if enemies.max_count < 0:
        raise ValueError(f"max_count must be non-negative, got {enemies.max_count}")

    if not 0.0 < config.player.follow_factor <= 1.0:
        raise ValueError(f"follow_factor must be in (0, 1], got {config.player.follow_factor}")

    if config.loop.fps <= 0:
        raise ValueError(f"fps must be positive, got {config.loop.fps}")

    if config.leaderboard.top_n <= 0:
        raise ValueError(f"leaderboard.top_n must be positive, got {config.leaderboard.top_n}")


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
        spawn_offset=float(board_data.get("spawn_offset", 50)),
        offscreen_margin=float(board_data.get("offscreen_margin", 100))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        initial_radius=float(player_data["initial_radius"]),
        color=_parse_color(player_data.get("color", "#0ea5e9")),
        follow_factor=float(player_data["follow_factor"]),
        growth_factor=float(player_data["growth_factor"])
    )

    enemy_data = raw["enemies"]
    enemies = EnemyConfig(
        max_count=int(enemy_data["max_count"]),
        spawn_interval_ms=float(enemy_data["spawn_interval_ms"]),
        min_radius=float(enemy_data["min_radius"]),
        max_radius=float(enemy_data["max_radius"]),
        smaller_chance=float(enemy_data["smaller_chance"]),
        smaller_multiplier=float(enemy_data["smaller_multiplier"]),
        larger_multiplier=float(enemy_data["larger_multiplier"]),
        min_inward_speed=float(enemy_data.get("min_inward_speed", 1.0)),
        max_inward_speed=float(enemy_data.get("max_inward_speed", 3.0)),
        max_drift_speed=float(enemy_data.get("max_drift_speed", 1.0)),
        colors=tuple(_parse_color(c) for c in enemy_data["colors"])
    )

    loop_data = raw.get("loop", {})
    loop = LoopConfig(
        fps=int(loop_data.get("fps", 60)),
        max_frames=int(loop_data.get("max_frames", 36000))
    )

    # Environment variables win over the file for deployment settings
    lb_data = raw.get("leaderboard", {})
    leaderboard = LeaderboardConfig(
        api_url=os.environ.get(
            "PESTA_API_URL", str(lb_data.get("api_url", "http://127.0.0.1:8000"))
        ),
        database_url=os.environ.get(
            "DATABASE_URL", str(lb_data.get("database_url", "sqlite:///./pesta_ikan.db"))
        ),
        top_n=int(lb_data.get("top_n", 10)),
        request_timeout=float(lb_data.get("request_timeout", 5.0))
    )

    config = GameConfig(
        board=board,
        player=player,
        enemies=enemies,
        loop=loop,
        leaderboard=leaderboard
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
