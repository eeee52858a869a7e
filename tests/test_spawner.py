"""
Tests for enemy spawning.
"""

from dataclasses import replace

import pytest

from pesta_ikan.fish_core.config_loader import load_config
from pesta_ikan.fish_core.spawner import EnemySpawner


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def spawner(config):
    return EnemySpawner(config, seed=42)


class TestSpawnTiming:
    """Interval and population cap."""

    def test_interval_is_strict(self, spawner):
        """Exactly one interval after the last spawn is not enough."""
        assert not spawner.should_spawn(1000, 0, 0)
        assert spawner.should_spawn(1001, 0, 0)

    def test_cap_blocks_spawn(self, spawner, config):
        cap = config.enemies.max_count
        assert spawner.should_spawn(5000, 0, cap - 1)
        assert not spawner.should_spawn(5000, 0, cap)


class TestSpawnPlacement:
    """Enemies enter from an edge and swim inward."""

    def test_spawn_outside_an_edge(self, spawner, config):
        board = config.board
        offset = board.spawn_offset

        for _ in range(200):
            enemy = spawner.spawn(15)
            if enemy.x == -offset:
                assert enemy.dx > 0
                assert 0 <= enemy.y <= board.height
            elif enemy.x == board.width + offset:
                assert enemy.dx < 0
                assert 0 <= enemy.y <= board.height
            elif enemy.y == -offset:
                assert enemy.dy > 0
                assert 0 <= enemy.x <= board.width
            elif enemy.y == board.height + offset:
                assert enemy.dy < 0
                assert 0 <= enemy.x <= board.width
            else:
                pytest.fail(f"Enemy spawned off the edges: {enemy}")

    def test_speeds_in_range(self, spawner, config):
        enemies = config.enemies
        board = config.board

        for _ in range(200):
            enemy = spawner.spawn(15)
            horizontal = enemy.x in (-board.spawn_offset, board.width + board.spawn_offset)
            inward, drift = (enemy.dx, enemy.dy) if horizontal else (enemy.dy, enemy.dx)
            assert enemies.min_inward_speed <= abs(inward) <= enemies.max_inward_speed
            assert abs(drift) <= enemies.max_drift_speed

    def test_colors_from_palette(self, spawner, config):
        for _ in range(50):
            assert spawner.spawn(15).color in config.enemies.colors

    def test_ids_increase_from_one(self, spawner):
        ids = [spawner.spawn(15).id for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_reset_restarts_ids(self, spawner):
        spawner.spawn(15)
        spawner.spawn(15)
        spawner.reset(7)
        assert spawner.spawn(15).id == 1


class TestSpawnSize:
    """Enemy radius follows the player."""

    def test_radius_clamped_high(self, spawner, config):
        for _ in range(50):
            assert spawner.roll_radius(1000) == config.enemies.max_radius

    def test_radius_clamped_low(self, spawner, config):
        for _ in range(50):
            assert spawner.roll_radius(1) == config.enemies.min_radius

    def test_smaller_only(self, config):
        config = replace(config, enemies=replace(config.enemies, smaller_chance=1.0))
        spawner = EnemySpawner(config, seed=1)
        for _ in range(100):
            # 0.6 * 1.5 is the largest possible multiple
            assert spawner.roll_radius(40) <= 40 * 0.9 + 1e-9

    def test_larger_only(self, config):
        config = replace(config, enemies=replace(config.enemies, smaller_chance=0.0))
        spawner = EnemySpawner(config, seed=1)
        for _ in range(100):
            assert spawner.roll_radius(40) >= 40 * 0.75 - 1e-9


class TestDeterminism:
    """Same seed, same enemies."""

    def test_same_seed_same_sequence(self, config):
        a = EnemySpawner(config, seed=123)
        b = EnemySpawner(config, seed=123)
        for _ in range(20):
            assert a.spawn(15) == b.spawn(15)

    def test_reseed_replays(self, config):
        spawner = EnemySpawner(config, seed=9)
        first = [spawner.spawn(15) for _ in range(5)]
        spawner.reset(9)
        again = [spawner.spawn(15) for _ in range(5)]
        assert first == again
