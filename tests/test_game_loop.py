"""
Tests for the frame loop: lifecycle, spawning, growth, and game over.
"""

import pytest

from pesta_ikan.fish_core.config_loader import load_config
from pesta_ikan.fish_core.entities import Entity
from pesta_ikan.fish_core.game import FishGame, STATE_IDLE, STATE_OVER, STATE_RUNNING


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    return FishGame(config=config, seed=42)


def drop_on_player(game, id, radius):
    """Place an enemy right on top of the player."""
    player = game.player
    enemy = Entity(id=id, x=player.x, y=player.y, radius=radius, color="#ef4444")
    game.enemies.append(enemy)
    return enemy


def run_frames(game, frames, start_ms=0.0, frame_ms=1000 / 60):
    results = []
    for i in range(1, frames + 1):
        results.append(game.update(start_ms + i * frame_ms))
        if game.is_over:
            break
    return results


class TestLifecycle:
    """Idle, running, and over states."""

    def test_idle_until_started(self, game):
        result = game.update(5000)
        assert game.state == STATE_IDLE
        assert game.frames == 0
        assert game.enemies == []
        assert result.delta_score == 0

    def test_start_resets(self, game, config):
        game.start(0)
        run_frames(game, 200)
        game.start(10_000)

        assert game.state == STATE_RUNNING
        assert game.score == 0
        assert game.enemies == []
        assert game.frames == 0
        assert game.player.position == config.board_center
        assert game.player.radius == config.player.initial_radius

    def test_stop_returns_to_idle(self, game):
        game.start(0)
        game.stop()
        assert game.state == STATE_IDLE
        game.update(5000)
        assert game.frames == 0


class TestSpawning:
    """Enemies join the board over time."""

    def test_first_spawn_after_interval(self, game):
        game.start(0)
        assert game.update(1000).spawned is None
        result = game.update(1001)
        assert result.spawned is not None
        assert game.enemies == [result.spawned]

    def test_interval_measured_from_start(self, game):
        game.start(50_000)
        assert game.update(50_500).spawned is None
        assert game.update(51_001).spawned is not None

    def test_population_capped(self, game, config):
        game.start(0)
        for i in range(1, 3000):
            game.update(i * 1001)
            assert len(game.enemies) <= config.enemies.max_count
            if game.is_over:
                break


class TestEating:
    """Growth and scoring through the frame loop."""

    def test_eat_scores_and_grows(self, game, config):
        game.start(0)
        drop_on_player(game, 98, 5)

        result = game.update(1)

        assert result.delta_score == 5
        assert game.score == 5
        assert game.eaten == 1
        assert game.enemies == []
        assert game.player.radius > config.player.initial_radius

    def test_radius_never_shrinks(self, game):
        game.start(0)
        game.set_pointer(100, 100)
        last = game.player.radius
        for i in range(1, 5000):
            game.update(i * 17)
            assert game.player.radius >= last
            last = game.player.radius
            if game.is_over:
                break

    def test_player_stays_on_board(self, game, config):
        game.start(0)
        game.set_pointer(-1000, config.board.height + 1000)
        for i in range(1, 600):
            game.update(i * 17)
            p = game.player
            assert p.radius <= p.x <= config.board.width - p.radius
            assert p.radius <= p.y <= config.board.height - p.radius
            if game.is_over:
                break


class TestGameOver:
    """Contact with an equal or bigger fish ends the session."""

    def test_bigger_fish_ends_game(self, config):
        finals = []
        game = FishGame(config=config, seed=1, on_game_over=finals.append)
        game.start(0)
        drop_on_player(game, 99, 50)

        result = game.update(1)

        assert result.game_over
        assert result.killer_id == 99
        assert game.state == STATE_OVER
        assert game.is_over
        assert game.killer_id == 99
        assert finals == [0]

    def test_final_score_reported(self, config):
        finals = []
        game = FishGame(config=config, seed=1, on_game_over=finals.append)
        game.start(0)
        drop_on_player(game, 98, 8)
        game.update(1)
        drop_on_player(game, 99, 80)
        game.update(2)

        assert finals == [8]

    def test_no_updates_after_game_over(self, game):
        game.start(0)
        drop_on_player(game, 99, 50)
        game.update(1)

        frames = game.frames
        position = game.player.position
        game.set_pointer(0, 0)
        result = game.update(10_000)

        assert game.frames == frames
        assert game.player.position == position
        assert result.delta_score == 0
        assert result.game_over

    def test_callback_fires_once(self, config):
        finals = []
        game = FishGame(config=config, seed=1, on_game_over=finals.append)
        game.start(0)
        drop_on_player(game, 99, 50)
        game.update(1)
        game.update(2)
        game.update(3)
        assert len(finals) == 1


class TestPointer:
    """Pointer mapping from a scaled display."""

    def test_surface_scaling(self, game):
        game.pointer_from_surface(480, 340, 960, 680)
        assert game.pointer == pytest.approx((600, 400))

    def test_surface_corner(self, game, config):
        game.pointer_from_surface(960, 0, 960, 640)
        assert game.pointer == pytest.approx((config.board.width, 0))

    def test_zero_size_surface_ignored(self, game):
        game.set_pointer(10, 20)
        game.pointer_from_surface(5, 5, 0, 0)
        assert game.pointer == (10, 20)


class TestDeterminism:
    """Same seed and inputs, same game."""

    def test_same_seed_same_enemies(self, config):
        a = FishGame(config=config, seed=7)
        b = FishGame(config=config, seed=7)
        a.start(0)
        b.start(0)
        for i in range(1, 400):
            a.update(i * 17)
            b.update(i * 17)

        assert [e.position for e in a.enemies] == [e.position for e in b.enemies]
        assert a.score == b.score

    def test_render_data(self, game, config):
        game.start(0)
        data = game.get_render_data()
        assert data["board_width"] == config.board.width
        assert data["board_height"] == config.board.height
        assert data["player"]["color"] == config.player.color
        assert data["enemies"] == []
        assert data["state"] == STATE_RUNNING
