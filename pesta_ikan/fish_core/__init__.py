"""
Fish Core - The game loop.

Main exports:
- FishGame: Frame-by-frame game simulation
- FishEnv: Gymnasium environment for scripted or learning agents
- EnemySpawner: Edge spawning of enemy fish
- Entity: Circular game object (player or enemy)
- GameConfig: Configuration loaded from game_config.yaml
"""

from pesta_ikan.fish_core.config_loader import GameConfig, load_config, get_config
from pesta_ikan.fish_core.entities import Entity, make_player
from pesta_ikan.fish_core.spawner import EnemySpawner
from pesta_ikan.fish_core.game import FishGame, FrameResult
from pesta_ikan.fish_core.env_gym import FishEnv

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Entity",
    "make_player",
    "EnemySpawner",
    "FishGame",
    "FrameResult",
    "FishEnv",
]
