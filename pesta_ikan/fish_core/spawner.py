"""
Enemy Spawner
=============

Creates enemy fish at random board edges, sized relative to the player.
Deterministic when given a seed.
"""

from __future__ import annotations

import random
from typing import Optional

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.fish_core.entities import Entity, PLAYER_ID


class EnemySpawner:
    """
    Spawns enemies just outside one of the four board edges.

    Each enemy gets an inward velocity across the board plus a small
    sideways drift. Its radius is a random multiple of the current player
    radius: usually smaller (easy food), sometimes larger (danger), so the
    difficulty follows the player's growth.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._next_id = PLAYER_ID + 1

    def should_spawn(
        self,
        timestamp_ms: float,
        last_spawn_ms: float,
        enemy_count: int
    ) -> bool:
        """True once the spawn interval has passed and there is room for another enemy."""
        enemies = self._config.enemies
        return (
            timestamp_ms - last_spawn_ms > enemies.spawn_interval_ms
            and enemy_count < enemies.max_count
        )

    def roll_radius(self, player_radius: float) -> float:
        """
        Pick an enemy radius relative to the player.

        Args:
            player_radius: Current player radius.

        Returns:
            Radius clamped to the configured [min_radius, max_radius].
        """
        enemies = self._config.enemies
        if self._rng.random() < enemies.smaller_chance:
            multiplier = enemies.smaller_multiplier
        else:
            multiplier = enemies.larger_multiplier

        radius = player_radius * multiplier * self._rng.uniform(0.5, 1.5)
        return max(enemies.min_radius, min(enemies.max_radius, radius))

    def spawn(self, player_radius: float) -> Entity:
        """
        Create a new enemy at a random edge.

        Args:
            player_radius: Current player radius, used for sizing.

        Returns:
            The new enemy entity.
        """
        board = self._config.board
        enemies = self._config.enemies

        horizontal = self._rng.random() > 0.5
        side = -1 if self._rng.random() > 0.5 else 1

        inward = self._rng.uniform(enemies.min_inward_speed, enemies.max_inward_speed) * -side
        drift = self._rng.uniform(-enemies.max_drift_speed, enemies.max_drift_speed)

        if horizontal:
            x = -board.spawn_offset if side == -1 else board.width + board.spawn_offset
            y = self._rng.random() * board.height
            dx, dy = inward, drift
        else:
            x = self._rng.random() * board.width
            y = -board.spawn_offset if side == -1 else board.height + board.spawn_offset
            dx, dy = drift, inward

        enemy = Entity(
            id=self._next_id,
            x=x,
            y=y,
            radius=self.roll_radius(player_radius),
            color=self._rng.choice(enemies.colors),
            dx=dx,
            dy=dy,
        )
        self._next_id += 1
        return enemy

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset ids and optionally reseed.

        Args:
            seed: New random seed. Keeps current generator if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._next_id = PLAYER_ID + 1
