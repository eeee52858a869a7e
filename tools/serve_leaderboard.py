"""
Leaderboard Server
==================

Serve the scores API with uvicorn.

Usage:
    python -m tools.serve_leaderboard [--host HOST] [--port PORT] [--database-url URL]
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from pesta_ikan.fish_core.config_loader import load_config
from pesta_ikan.leaderboard.api import create_app
from pesta_ikan.leaderboard.storage import DatabaseStorage


def main():
    parser = argparse.ArgumentParser(description="Run the Pesta Ikan leaderboard API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--database-url", default=None,
                        help="SQLAlchemy URL (default: DATABASE_URL or game_config.yaml)")
    parser.add_argument("--config", default=None, help="Path to game_config.yaml")
    parser.add_argument("--log-level", default="info", help="Log level (default: info)")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    storage = DatabaseStorage(database_url=args.database_url or config.leaderboard.database_url)
    storage.create_tables()

    app = create_app(storage=storage, config=config)
    print(f"Leaderboard running on http://{args.host}:{args.port}/scores")
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
