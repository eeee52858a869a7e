"""
Score storage.

A single ``scores`` table. Rows are inserted once at game over and never
updated or deleted; reads return the top scores, highest first.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import Column, DateTime, Integer, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

from pesta_ikan.leaderboard.schemas import USERNAME_MAX_LENGTH, ScoreInput

logger = logging.getLogger(__name__)

Base = declarative_base()


class Score(Base):
    """A leaderboard entry."""
    __tablename__ = "scores"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(USERNAME_MAX_LENGTH), nullable=False)
    score = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Score(username='{self.username}', score={self.score})>"


def make_engine(database_url: str) -> Engine:
    """
    Create an engine for ``database_url``.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


class ScoreStorage(ABC):
    """Storage interface used by the API."""

    @abstractmethod
    def get_scores(self, limit: int = 10) -> List[Score]:
        """Top ``limit`` scores, highest first."""

    @abstractmethod
    def create_score(self, score: ScoreInput) -> Score:
        """Insert a score and return the stored row."""


class DatabaseStorage(ScoreStorage):
    """SQLAlchemy-backed storage."""

    def __init__(self, engine: Optional[Engine] = None, database_url: Optional[str] = None):
        """
        Args:
            engine: Engine to use. Built from ``database_url`` if None.
            database_url: SQLAlchemy URL, used only when no engine is given.
        """
        if engine is None:
            if database_url is None:
                raise ValueError("DatabaseStorage needs an engine or a database_url")
            engine = make_engine(database_url)

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_tables(self) -> None:
        Base.metadata.create_all(self._engine)

    def get_scores(self, limit: int = 10) -> List[Score]:
        with self._session_factory() as session:
            return (
                session.query(Score)
                .order_by(Score.score.desc(), Score.id.asc())
                .limit(limit)
                .all()
            )

    def create_score(self, score: ScoreInput) -> Score:
        with self._session_factory() as session:
            row = Score(username=score.username, score=score.score)
            session.add(row)
            session.commit()
            # Load the server-side created_at
            session.refresh(row)
            logger.info("Stored score %d for %s (id=%d)", row.score, row.username, row.id)
            return row
