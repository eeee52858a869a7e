"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.fish_core.game import FishGame


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Enemy arrays are fixed-size with masking for the variable enemy count.
    Enemies are ordered by distance to the player, nearest first.
    """
    player_x: float
    player_y: float
    player_radius: float
    pointer_x: float
    pointer_y: float
    score: int
    eaten: int
    enemy_count: int

    # Derived
    nearest_threat_distance: float    # Edge-to-edge gap to nearest enemy >= player, -1 if none
    nearest_prey_distance: float      # Edge-to-edge gap to nearest smaller enemy, -1 if none

    # Enemy arrays (fixed size, padded)
    enemy_x: np.ndarray               # (MAX_ENEMIES,) float32
    enemy_y: np.ndarray               # (MAX_ENEMIES,) float32
    enemy_dx: np.ndarray              # (MAX_ENEMIES,) float32
    enemy_dy: np.ndarray              # (MAX_ENEMIES,) float32
    enemy_radius: np.ndarray          # (MAX_ENEMIES,) float32
    enemy_edible: np.ndarray          # (MAX_ENEMIES,) bool
    enemy_mask: np.ndarray            # (MAX_ENEMIES,) bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "player_x": np.array(self.player_x, dtype=np.float32),
            "player_y": np.array(self.player_y, dtype=np.float32),
            "player_radius": np.array(self.player_radius, dtype=np.float32),
            "pointer_x": np.array(self.pointer_x, dtype=np.float32),
            "pointer_y": np.array(self.pointer_y, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "eaten": np.array(self.eaten, dtype=np.int32),
            "enemy_count": np.array(self.enemy_count, dtype=np.int32),
            "nearest_threat_distance": np.array(self.nearest_threat_distance, dtype=np.float32),
            "nearest_prey_distance": np.array(self.nearest_prey_distance, dtype=np.float32),
            "enemy_x": self.enemy_x,
            "enemy_y": self.enemy_y,
            "enemy_dx": self.enemy_dx,
            "enemy_dy": self.enemy_dy,
            "enemy_radius": self.enemy_radius,
            "enemy_edible": self.enemy_edible,
            "enemy_mask": self.enemy_mask,
        }


class SnapshotBuilder:
    """Builds game state snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_enemies = config.enemies.max_count

    @property
    def max_enemies(self) -> int:
        return self._max_enemies

    def build(self, game: FishGame) -> GameSnapshot:
        """
        Build a snapshot of the current game state.

        Args:
            game: Game to snapshot.

        Returns:
            GameSnapshot with padded enemy arrays.
        """
        n = self._max_enemies
        player = game.player

        enemy_x = np.zeros(n, dtype=np.float32)
        enemy_y = np.zeros(n, dtype=np.float32)
        enemy_dx = np.zeros(n, dtype=np.float32)
        enemy_dy = np.zeros(n, dtype=np.float32)
        enemy_radius = np.zeros(n, dtype=np.float32)
        enemy_edible = np.zeros(n, dtype=bool)
        enemy_mask = np.zeros(n, dtype=bool)

        enemies = sorted(game.enemies, key=player.distance_to)[:n]

        threat_gap = -1.0
        prey_gap = -1.0
        for i, enemy in enumerate(enemies):
            enemy_x[i] = enemy.x
            enemy_y[i] = enemy.y
            enemy_dx[i] = enemy.dx
            enemy_dy[i] = enemy.dy
            enemy_radius[i] = enemy.radius
            edible = player.radius > enemy.radius
            enemy_edible[i] = edible
            enemy_mask[i] = True

            gap = max(0.0, player.distance_to(enemy) - player.radius - enemy.radius)
            if edible and prey_gap < 0:
                prey_gap = gap
            elif not edible and threat_gap < 0:
                threat_gap = gap

        pointer_x, pointer_y = game.pointer
        return GameSnapshot(
            player_x=player.x,
            player_y=player.y,
            player_radius=player.radius,
            pointer_x=pointer_x,
            pointer_y=pointer_y,
            score=game.score,
            eaten=game.eaten,
            enemy_count=len(enemies),
            nearest_threat_distance=threat_gap,
            nearest_prey_distance=prey_gap,
            enemy_x=enemy_x,
            enemy_y=enemy_y,
            enemy_dx=enemy_dx,
            enemy_dy=enemy_dy,
            enemy_radius=enemy_radius,
            enemy_edible=enemy_edible,
            enemy_mask=enemy_mask,
        )
