"""
Leaderboard client.

``LeaderboardClient`` talks to the API and caches the top-scores list until
a successful submission invalidates it. ``BackgroundLeaderboard`` runs the
same calls on a worker thread so a frame loop never blocks on the network;
results come back as messages from ``poll()``.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.leaderboard.schemas import ErrorMessage, ScoreOut

logger = logging.getLogger(__name__)

_FAILURES = {
    "fetch": "Failed to fetch leaderboard",
    "submit": "Failed to submit score",
}


class LeaderboardError(Exception):
    """A leaderboard request failed; the message is fit to show the player."""


class LeaderboardClient:
    """Blocking client for the scores API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        config: Optional[GameConfig] = None,
    ):
        if config is None:
            config = get_config()

        self._base_url = (base_url or config.leaderboard.api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else config.leaderboard.request_timeout
        self._top_n = config.leaderboard.top_n
        self._session = session or requests.Session()
        self._cache: Optional[List[ScoreOut]] = None

    @property
    def scores_url(self) -> str:
        return f"{self._base_url}/scores"

    @property
    def cached(self) -> Optional[List[ScoreOut]]:
        """Last fetched list, or None when nothing is cached."""
        return self._cache

    def invalidate(self) -> None:
        self._cache = None

    def list_scores(self, force: bool = False) -> List[ScoreOut]:
        """
        Top scores, highest first.

        Args:
            force: Refetch even if a cached list exists.

        Raises:
            LeaderboardError: If the request or the response is bad.
        """
        if self._cache is not None and not force:
            return self._cache

        try:
            res = self._session.get(self.scores_url, timeout=self._timeout)
        except requests.RequestException as e:
            raise LeaderboardError(_FAILURES["fetch"]) from e

        if not res.ok:
            raise LeaderboardError(_FAILURES["fetch"])

        try:
            scores = [ScoreOut.model_validate(item) for item in res.json()]
        except (ValueError, TypeError, ValidationError) as e:
            raise LeaderboardError(_FAILURES["fetch"]) from e

        # The server already ranks them; keep the display right regardless
        scores.sort(key=lambda s: s.score, reverse=True)
        self._cache = scores[:self._top_n]
        return self._cache

    def submit_score(self, username: str, score: int) -> ScoreOut:
        """
        Record a finished game.

        Raises:
            LeaderboardError: With the server's message on a 400, a generic
                one otherwise.
        """
        try:
            res = self._session.post(
                self.scores_url,
                json={"username": username, "score": score},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise LeaderboardError(_FAILURES["submit"]) from e

        if not res.ok:
            if res.status_code == 400:
                try:
                    error = ErrorMessage.model_validate(res.json())
                except (ValueError, ValidationError):
                    raise LeaderboardError(_FAILURES["submit"])
                raise LeaderboardError(error.message)
            raise LeaderboardError(_FAILURES["submit"])

        try:
            created = ScoreOut.model_validate(res.json())
        except (ValueError, ValidationError) as e:
            raise LeaderboardError(_FAILURES["submit"]) from e

        self.invalidate()
        return created

    def close(self) -> None:
        self._session.close()


class BackgroundLeaderboard:
    """
    Runs leaderboard calls on a daemon worker thread.

    Messages returned by ``poll()``:
    - ``{"type": "SCORES", "scores": [ScoreOut, ...]}``
    - ``{"type": "SUBMITTED", "score": ScoreOut}``
    - ``{"type": "ERROR", "during": "fetch" | "submit", "message": str}``
    """

    def __init__(self, client: LeaderboardClient):
        self._client = client
        self._jobs: "queue.Queue[Optional[Dict[str, Any]]]" = queue.Queue()
        self.inbox: "queue.Queue[Dict[str, Any]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def _ensure_worker(self) -> None:
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self._work_loop, daemon=True)
            self._thread.start()

    def _work_loop(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                break
            kind = job["kind"]
            try:
                if kind == "fetch":
                    scores = self._client.list_scores(force=job.get("force", False))
                    self.inbox.put({"type": "SCORES", "scores": scores})
                elif kind == "submit":
                    created = self._client.submit_score(job["username"], job["score"])
                    self.inbox.put({"type": "SUBMITTED", "score": created})
            except LeaderboardError as e:
                self.inbox.put({"type": "ERROR", "during": kind, "message": str(e)})
            except Exception:
                # Anything else is a bug, but the worker must keep serving jobs
                logger.exception("Leaderboard %s job failed", kind)
                self.inbox.put({"type": "ERROR", "during": kind, "message": _FAILURES[kind]})

    def request_scores(self, force: bool = False) -> None:
        self._ensure_worker()
        self._jobs.put({"kind": "fetch", "force": force})

    def submit(self, username: str, score: int) -> None:
        """Fire and forget; the outcome arrives through ``poll()``."""
        self._ensure_worker()
        self._jobs.put({"kind": "submit", "username": username, "score": score})

    def poll(self) -> List[Dict[str, Any]]:
        msgs: List[Dict[str, Any]] = []
        while True:
            try:
                msgs.append(self.inbox.get_nowait())
            except queue.Empty:
                break
        return msgs

    def close(self, timeout: float = 1.0) -> None:
        if self._thread is not None and self._thread.is_alive():
            self._jobs.put(None)
            self._thread.join(timeout)
        self._thread = None
        self._client.close()
