"""
Game Rules
==========

Handles movement, off-screen culling, and collision outcomes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.fish_core.entities import Entity
from pesta_ikan.fish_core.scoring import ScoreEvent, ScoreTracker


@dataclass
class CollisionOutcome:
    """Result of one frame of collision checks."""
    eaten: List[ScoreEvent] = field(default_factory=list)
    died: bool = False
    killer_id: Optional[int] = None

    @property
    def points(self) -> int:
        return sum(event.points for event in self.eaten)


class MovementRules:
    """
    Moves entities for one frame.

    - Player eases toward the pointer, then is clamped inside the board
    - Enemies move linearly by their constant velocity
    - Enemies that drift past the off-screen margin are dropped
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize movement rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._width = config.board.width
        self._height = config.board.height
        self._margin = config.board.offscreen_margin
        self._follow = config.player.follow_factor

    def move_player(self, player: Entity, pointer: Tuple[float, float]) -> None:
        """
        Ease the player toward the pointer and keep it fully on the board.

        Args:
            player: Player entity (mutated in place).
            pointer: Target position in board coordinates.
        """
        target_x, target_y = pointer
        player.x += (target_x - player.x) * self._follow
        player.y += (target_y - player.y) * self._follow

        r = player.radius
        player.x = max(r, min(self._width - r, player.x))
        player.y = max(r, min(self._height - r, player.y))

    @staticmethod
    def move_enemies(enemies: List[Entity]) -> None:
        for enemy in enemies:
            enemy.x += enemy.dx
            enemy.y += enemy.dy

    def is_on_screen(self, entity: Entity) -> bool:
        """True while the entity is strictly inside the board plus margin."""
        m = self._margin
        return (
            -m < entity.x < self._width + m
            and -m < entity.y < self._height + m
        )

    def cull_offscreen(self, enemies: List[Entity]) -> List[Entity]:
        """
        Drop enemies that left the play area.

        Args:
            enemies: Current enemies.

        Returns:
            Enemies still in play, order preserved.
        """
        return [e for e in enemies if self.is_on_screen(e)]


class CollisionRules:
    """
    Resolves player/enemy contact.

    The bigger fish wins: the player eats an enemy only when strictly larger.
    An equal or larger enemy ends the session on contact.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize collision rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._growth = config.player.growth_factor

    def growth_for(self, enemy_radius: float) -> float:
        """Radius the player gains from eating a fish of this radius."""
        return math.sqrt(enemy_radius) * self._growth

    def resolve(
        self,
        player: Entity,
        enemies: List[Entity],
        scorer: ScoreTracker
    ) -> CollisionOutcome:
        """
        Check every enemy against the player, newest first.

        Eaten enemies are removed from ``enemies`` in place and the player
        grows. Checking stops at the first fatal contact.

        Args:
            player: Player entity (radius mutated on growth).
            enemies: Enemy list (mutated on eat).
            scorer: Score tracker credited for each eaten enemy.

        Returns:
            CollisionOutcome for this frame.
        """
        outcome = CollisionOutcome()

        for i in range(len(enemies) - 1, -1, -1):
            enemy = enemies[i]
            if not player.overlaps(enemy):
                continue

            if player.radius > enemy.radius:
                del enemies[i]
                # Sub-linear growth keeps the player from exploding in size
                player.radius += self.growth_for(enemy.radius)
                outcome.eaten.append(scorer.apply_eat(enemy))
            else:
                outcome.died = True
                outcome.killer_id = enemy.id
                break

        return outcome


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.movement = MovementRules(config)
        self.collision = CollisionRules(config)
