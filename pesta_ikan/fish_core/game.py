"""
Core Game
=========

Main game loop combining spawning, movement, collisions, and scoring.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.fish_core.entities import Entity, make_player
from pesta_ikan.fish_core.rules import GameRules
from pesta_ikan.fish_core.scoring import ScoreEvent, ScoreTracker
from pesta_ikan.fish_core.spawner import EnemySpawner


STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_OVER = "over"


@dataclass
class FrameResult:
    """Result of a single frame update."""
    timestamp_ms: float
    delta_score: int
    eaten: List[ScoreEvent] = field(default_factory=list)
    spawned: Optional[Entity] = None
    game_over: bool = False
    killer_id: Optional[int] = None


class FishGame:
    """
    Main game simulation class.

    Orchestrates:
    - Enemy spawner
    - Player and enemy movement
    - Collision resolution
    - Scoring

    One frame = one ``update(timestamp_ms)`` call, the way a display refresh
    callback would drive it. The loop stops on game over; later updates
    change nothing.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        on_game_over: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            on_game_over: Optional callback receiving the final score.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._on_game_over = on_game_over

        self._spawner = EnemySpawner(config, seed)
        self._rules = GameRules(config)
        self._scorer = ScoreTracker()

        self._player: Entity = make_player(config)
        self._enemies: List[Entity] = []
        self._pointer: Tuple[float, float] = config.board_center
        self._last_spawn_ms: float = 0.0
        self._frames: int = 0
        self._state: str = STATE_IDLE
        self._killer_id: Optional[int] = None

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def player(self) -> Entity:
        return self._player

    @property
    def enemies(self) -> List[Entity]:
        """Enemies currently in play (live list, do not mutate)."""
        return self._enemies

    @property
    def pointer(self) -> Tuple[float, float]:
        return self._pointer

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def eaten(self) -> int:
        """Number of fish eaten this session."""
        return self._scorer.eaten

    @property
    def frames(self) -> int:
        """Frames simulated since start."""
        return self._frames

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == STATE_RUNNING

    @property
    def is_over(self) -> bool:
        """True if the player has been eaten."""
        return self._state == STATE_OVER

    @property
    def killer_id(self) -> Optional[int]:
        """Id of the enemy that ended the session, if any."""
        return self._killer_id

    def start(self, timestamp_ms: float = 0.0, seed: Optional[int] = None) -> None:
        """
        Start (or restart) a session.

        Args:
            timestamp_ms: Clock value of the starting frame.
            seed: New random seed. Uses previous if None.
        """
        if seed is not None:
            self._seed = seed

        self._spawner.reset(self._seed)
        self._scorer.reset()

        self._player = make_player(self._config)
        self._enemies = []
        self._pointer = self._config.board_center
        self._last_spawn_ms = timestamp_ms
        self._frames = 0
        self._killer_id = None
        self._state = STATE_RUNNING

    def stop(self) -> None:
        """Cancel a running session without ending it as a game over."""
        if self._state == STATE_RUNNING:
            self._state = STATE_IDLE

    def set_pointer(self, x: float, y: float) -> None:
        """Set the position the player swims toward, in board coordinates."""
        self._pointer = (float(x), float(y))

    def pointer_from_surface(
        self,
        surface_x: float,
        surface_y: float,
        surface_width: float,
        surface_height: float
    ) -> None:
        """
        Set the pointer from a position on a scaled display surface.

        Args:
            surface_x: Pointer X relative to the surface's left edge.
            surface_y: Pointer Y relative to the surface's top edge.
            surface_width: Displayed surface width.
            surface_height: Displayed surface height.
        """
        if surface_width <= 0 or surface_height <= 0:
            return
        board = self._config.board
        self.set_pointer(
            surface_x * (board.width / surface_width),
            surface_y * (board.height / surface_height),
        )

    def update(self, timestamp_ms: float) -> FrameResult:
        """
        Advance the game by one frame.

        Args:
            timestamp_ms: Current clock value in milliseconds.

        Returns:
            FrameResult with what happened this frame.
        """
        if not self.is_running:
            return FrameResult(
                timestamp_ms=timestamp_ms,
                delta_score=0,
                game_over=self.is_over,
                killer_id=self._killer_id
            )

        score_before = self._scorer.score
        self._frames += 1

        # 1. Spawn
        spawned = None
        if self._spawner.should_spawn(timestamp_ms, self._last_spawn_ms, len(self._enemies)):
            spawned = self._spawner.spawn(self._player.radius)
            self._enemies.append(spawned)
            self._last_spawn_ms = timestamp_ms

        # 2. Move
        movement = self._rules.movement
        movement.move_player(self._player, self._pointer)
        movement.move_enemies(self._enemies)
        self._enemies = movement.cull_offscreen(self._enemies)

        # 3. Collide
        outcome = self._rules.collision.resolve(self._player, self._enemies, self._scorer)

        if outcome.died:
            self._state = STATE_OVER
            self._killer_id = outcome.killer_id
            if self._on_game_over is not None:
                self._on_game_over(self._scorer.score)

        return FrameResult(
            timestamp_ms=timestamp_ms,
            delta_score=self._scorer.score - score_before,
            eaten=outcome.eaten,
            spawned=spawned,
            game_over=outcome.died,
            killer_id=outcome.killer_id
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "eaten": self._scorer.eaten,
            "frames": self._frames,
            "player_radius": self._player.radius,
            "enemy_count": len(self._enemies),
            "state": self._state,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with board size, entities, pointer, and score.
        """
        return {
            "board_width": self._config.board.width,
            "board_height": self._config.board.height,
            "player": self._player.to_dict(),
            "enemies": [e.to_dict() for e in self._enemies],
            "pointer": self._pointer,
            "score": self._scorer.score,
            "state": self._state,
        }
