"""
Pesta Ikan
==========

Eat smaller fish, avoid bigger fish, grow.

- fish_core: the game loop (spawning, movement, collisions, scoring,
  rendering) plus a Gymnasium wrapper for headless play
- leaderboard: the score table, its HTTP API and the client the game uses

All tunable parameters live in game_config.yaml.
"""

__version__ = "1.0.0"
