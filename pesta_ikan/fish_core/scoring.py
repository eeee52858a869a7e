"""
Scoring System
==============

Awards points for eaten fish.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pesta_ikan.fish_core.entities import Entity


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    enemy_id: int
    enemy_radius: float

    def __repr__(self) -> str:
        return f"ScoreEvent(ate={self.enemy_id}, points={self.points})"


class ScoreTracker:
    """
    Tracks the session score.

    Eating a fish is worth its radius rounded down, so bigger prey pays more.
    """

    def __init__(self):
        self._score: int = 0
        self._eaten: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def eaten(self) -> int:
        """Number of fish eaten this session."""
        return self._eaten

    @staticmethod
    def points_for(enemy: Entity) -> int:
        return int(math.floor(enemy.radius))

    def apply_eat(self, enemy: Entity) -> ScoreEvent:
        """
        Apply score for an eaten enemy.

        Args:
            enemy: The enemy that was eaten.

        Returns:
            ScoreEvent describing the points awarded.
        """
        points = self.points_for(enemy)
        self._score += points
        self._eaten += 1
        return ScoreEvent(points=points, enemy_id=enemy.id, enemy_radius=enemy.radius)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._eaten = 0
