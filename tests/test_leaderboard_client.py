"""
Tests for the leaderboard client against a stubbed HTTP session.
"""

import pytest
import requests

from pesta_ikan.fish_core.config_loader import load_config
from pesta_ikan.leaderboard.client import (
    BackgroundLeaderboard,
    LeaderboardClient,
    LeaderboardError,
)


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Records requests and replays canned responses."""

    def __init__(self, get=None, post=None):
        self.get_response = get
        self.post_response = post
        self.calls = []
        self.closed = False

    def _reply(self, response):
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, timeout=None):
        self.calls.append(("GET", url, None))
        return self._reply(self.get_response)

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json))
        return self._reply(self.post_response)

    def close(self):
        self.closed = True


def row(id, username, score):
    return {"id": id, "username": username, "score": score, "createdAt": "2026-01-01T00:00:00Z"}


@pytest.fixture
def config():
    return load_config()


def make_client(config, session):
    return LeaderboardClient(base_url="http://scores.test/", session=session, config=config)


class TestListScores:
    """Fetching and caching the top list."""

    def test_sorted_and_trimmed(self, config):
        rows = [row(i, f"fish{i}", (i * 37) % 101) for i in range(1, 13)]
        session = FakeSession(get=FakeResponse(200, rows))
        client = make_client(config, session)

        scores = client.list_scores()

        assert len(scores) == config.leaderboard.top_n
        values = [s.score for s in scores]
        assert values == sorted(values, reverse=True)
        assert session.calls[0][1] == "http://scores.test/scores"

    def test_cached_until_forced(self, config):
        session = FakeSession(get=FakeResponse(200, [row(1, "Nemo", 5)]))
        client = make_client(config, session)

        client.list_scores()
        client.list_scores()
        assert len(session.calls) == 1

        client.list_scores(force=True)
        assert len(session.calls) == 2

    def test_network_error(self, config):
        session = FakeSession(get=requests.ConnectionError("down"))
        client = make_client(config, session)

        with pytest.raises(LeaderboardError, match="Failed to fetch leaderboard"):
            client.list_scores()

    def test_server_error(self, config):
        session = FakeSession(get=FakeResponse(500, {"message": "boom"}))
        with pytest.raises(LeaderboardError, match="Failed to fetch leaderboard"):
            make_client(config, session).list_scores()

    def test_bad_payload(self, config):
        session = FakeSession(get=FakeResponse(200, [{"nope": 1}]))
        with pytest.raises(LeaderboardError):
            make_client(config, session).list_scores()


class TestSubmitScore:
    """Posting a finished game."""

    def test_success_invalidates_cache(self, config):
        session = FakeSession(
            get=FakeResponse(200, [row(1, "Nemo", 5)]),
            post=FakeResponse(201, row(2, "Dory", 30)),
        )
        client = make_client(config, session)
        client.list_scores()
        assert client.cached is not None

        created = client.submit_score("Dory", 30)

        assert created.id == 2
        assert created.score == 30
        assert client.cached is None
        assert session.calls[-1] == ("POST", "http://scores.test/scores", {"username": "Dory", "score": 30})

    def test_validation_message_passed_through(self, config):
        session = FakeSession(
            post=FakeResponse(400, {"message": "Username is required", "field": "username"})
        )
        client = make_client(config, session)

        with pytest.raises(LeaderboardError, match="Username is required"):
            client.submit_score("", 3)

    def test_server_error(self, config):
        session = FakeSession(post=FakeResponse(500, ValueError("not json")))
        with pytest.raises(LeaderboardError, match="Failed to submit score"):
            make_client(config, session).submit_score("Nemo", 3)

    def test_failure_keeps_cache(self, config):
        session = FakeSession(
            get=FakeResponse(200, [row(1, "Nemo", 5)]),
            post=requests.Timeout("slow"),
        )
        client = make_client(config, session)
        client.list_scores()

        with pytest.raises(LeaderboardError):
            client.submit_score("Nemo", 3)
        assert client.cached is not None


class TestBackgroundLeaderboard:
    """Worker thread delivers results through the inbox."""

    def test_submit_reports_success(self, config):
        session = FakeSession(post=FakeResponse(201, row(4, "Nemo", 12)))
        bg = BackgroundLeaderboard(make_client(config, session))

        bg.submit("Nemo", 12)
        msg = bg.inbox.get(timeout=2)
        bg.close()

        assert msg["type"] == "SUBMITTED"
        assert msg["score"].score == 12
        assert session.closed

    def test_submit_reports_error(self, config):
        session = FakeSession(post=requests.ConnectionError("down"))
        bg = BackgroundLeaderboard(make_client(config, session))

        bg.submit("Nemo", 12)
        msg = bg.inbox.get(timeout=2)
        bg.close()

        assert msg == {"type": "ERROR", "during": "submit", "message": "Failed to submit score"}

    def test_fetch_then_poll(self, config):
        session = FakeSession(get=FakeResponse(200, [row(1, "Nemo", 5)]))
        bg = BackgroundLeaderboard(make_client(config, session))

        bg.request_scores()
        first = bg.inbox.get(timeout=2)
        bg.close()

        assert first["type"] == "SCORES"
        assert [s.username for s in first["scores"]] == ["Nemo"]
        assert bg.poll() == []

    def test_unexpected_failure_keeps_worker(self, config):
        """A job that blows up still reports an error and later jobs run."""
        session = FakeSession(
            get=RuntimeError("decoder bug"),
            post=FakeResponse(201, row(5, "Nemo", 20)),
        )
        bg = BackgroundLeaderboard(make_client(config, session))

        bg.request_scores()
        failed = bg.inbox.get(timeout=2)
        worker = bg._thread
        bg.submit("Nemo", 20)
        submitted = bg.inbox.get(timeout=2)
        assert bg._thread is worker and worker.is_alive()
        bg.close()

        assert failed == {"type": "ERROR", "during": "fetch", "message": "Failed to fetch leaderboard"}
        assert submitted["type"] == "SUBMITTED"
        assert submitted["score"].score == 20
