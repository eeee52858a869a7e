"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the fish game.
One step is one frame; the reward is the points scored that frame.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from pesta_ikan.fish_core.config_loader import GameConfig, load_config
from pesta_ikan.fish_core.game import FishGame
from pesta_ikan.fish_core.state_snapshot import SnapshotBuilder


class FishEnv(gym.Env):
    """
    Pesta Ikan as a Gymnasium environment.

    Action Space:
        Box(low=-1.0, high=1.0, shape=(2,), dtype=float32)
        Pointer target, (-1, -1) top-left to (+1, +1) bottom-right of the board.

    Observation Space:
        Dict with player scalars and fixed-size enemy arrays.

    Reward:
        Points scored this frame.

    Info:
        Contains score, eaten, frames, player_radius, enemy_count, state.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        max_frames: Optional[int] = None,
    ):
        """
        Initialize fish environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            max_frames: Override the truncation limit from config.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._max_frames = max_frames or self._config.loop.max_frames
        self._frame_ms = self._config.loop.frame_ms
        self._clock_ms = 0.0

        self._game = FishGame(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)

        # Initialize renderer (lazy)
        self._renderer = None

        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(2,), dtype=np.float32)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        n = self._config.enemies.max_count
        board = self._config.board
        # Gaps run corner to corner across the board plus its cull margin
        margin = board.offscreen_margin
        far = float(math.hypot(board.width + 2 * margin, board.height + 2 * margin))

        return spaces.Dict({
            "player_x": spaces.Box(low=0, high=board.width, shape=(), dtype=np.float32),
            "player_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "player_radius": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "pointer_x": spaces.Box(low=0, high=board.width, shape=(), dtype=np.float32),
            "pointer_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "eaten": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "enemy_count": spaces.Box(low=0, high=n, shape=(), dtype=np.int32),
            "nearest_threat_distance": spaces.Box(low=-1, high=far, shape=(), dtype=np.float32),
            "nearest_prey_distance": spaces.Box(low=-1, high=far, shape=(), dtype=np.float32),
            "enemy_x": spaces.Box(low=-np.inf, high=np.inf, shape=(n,), dtype=np.float32),
            "enemy_y": spaces.Box(low=-np.inf, high=np.inf, shape=(n,), dtype=np.float32),
            "enemy_dx": spaces.Box(low=-np.inf, high=np.inf, shape=(n,), dtype=np.float32),
            "enemy_dy": spaces.Box(low=-np.inf, high=np.inf, shape=(n,), dtype=np.float32),
            "enemy_radius": spaces.Box(low=0, high=self._config.enemies.max_radius, shape=(n,), dtype=np.float32),
            "enemy_edible": spaces.MultiBinary(n),
            "enemy_mask": spaces.MultiBinary(n),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._clock_ms = 0.0
        self._game.start(self._clock_ms, seed=seed)

        obs = self._snapshot_builder.build(self._game).to_obs_dict()
        info = self._game.get_info()
        info["delta_score"] = 0
        return obs, info

    def action_to_pointer(self, action: Union[np.ndarray, Tuple[float, float]]) -> Tuple[float, float]:
        """Map a normalised action to board coordinates."""
        ax, ay = np.clip(np.asarray(action, dtype=np.float32).reshape(2), -1.0, 1.0)
        board = self._config.board
        return (float(ax + 1.0) / 2.0 * board.width, float(ay + 1.0) / 2.0 * board.height)

    def step(
        self,
        action: Union[np.ndarray, Tuple[float, float]]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: Pointer target in [-1, 1]^2.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        self._game.set_pointer(*self.action_to_pointer(action))

        self._clock_ms += self._frame_ms
        result = self._game.update(self._clock_ms)

        obs = self._snapshot_builder.build(self._game).to_obs_dict()
        terminated = self._game.is_over
        truncated = (not terminated) and self._game.frames >= self._max_frames

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["killer_id"] = result.killer_id

        if self.render_mode == "human":
            self.render()

        return obs, float(result.delta_score), terminated, truncated, info

    def _init_renderer(self) -> None:
        from pesta_ikan.fish_core.render_pygame import FishRenderer
        self._renderer = FishRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode is None:
            return None

        if self._renderer is None:
            self._init_renderer()

        render_data = self._game.get_render_data()
        if self.render_mode == "rgb_array":
            return self._renderer.render_to_array(render_data)

        self._renderer.render_to_screen(render_data)
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> FishGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
