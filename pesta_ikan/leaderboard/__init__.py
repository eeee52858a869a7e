"""
Leaderboard - score table, HTTP API, and client.

Main exports:
- create_app: FastAPI application with GET/POST /scores
- DatabaseStorage: SQLAlchemy storage for the scores table
- LeaderboardClient: Cached blocking client
- BackgroundLeaderboard: Non-blocking wrapper for frame loops
"""

from pesta_ikan.leaderboard.schemas import ScoreInput, ScoreOut, ErrorMessage, USERNAME_MAX_LENGTH
from pesta_ikan.leaderboard.storage import DatabaseStorage, ScoreStorage, make_engine
from pesta_ikan.leaderboard.api import create_app
from pesta_ikan.leaderboard.client import LeaderboardClient, LeaderboardError, BackgroundLeaderboard

__all__ = [
    "ScoreInput",
    "ScoreOut",
    "ErrorMessage",
    "USERNAME_MAX_LENGTH",
    "DatabaseStorage",
    "ScoreStorage",
    "make_engine",
    "create_app",
    "LeaderboardClient",
    "LeaderboardError",
    "BackgroundLeaderboard",
]
