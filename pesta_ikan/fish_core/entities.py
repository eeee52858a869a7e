"""
Entities
========

Circular game objects: the player fish and the enemy fish.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from pesta_ikan.fish_core.config_loader import GameConfig, get_config


PLAYER_ID = 0


@dataclass
class Entity:
    """
    A circular fish on the board.

    Velocity is in pixels per frame. Enemies keep the velocity they were
    spawned with; the player's velocity stays zero since it eases toward
    the pointer instead.
    """
    id: int
    x: float
    y: float
    radius: float
    color: str
    dx: float = 0.0
    dy: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.dx, self.dy

    def distance_to(self, other: "Entity") -> float:
        """Centre-to-centre distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def overlaps(self, other: "Entity") -> bool:
        """True if the two circles intersect (touching edges do not count)."""
        return self.distance_to(other) < self.radius + other.radius

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "color": self.color,
            "dx": self.dx,
            "dy": self.dy,
        }


def make_player(config: Optional[GameConfig] = None) -> Entity:
    """Create the player fish at the board centre with its starting size."""
    if config is None:
        config = get_config()

    cx, cy = config.board_center
    return Entity(
        id=PLAYER_ID,
        x=cx,
        y=cy,
        radius=config.player.initial_radius,
        color=config.player.color,
    )
