"""
Tests for the play tool entry point and its widgets.
"""

import pygame
import pytest

from tools import play_human
from tools.widgets import TextInput


@pytest.fixture
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 20)


def key(char, code=None):
    return pygame.event.Event(pygame.KEYDOWN, key=code or ord(char), unicode=char)


class TestMain:
    """Startup of the play tool."""

    def test_bad_config_exits_before_window(self, monkeypatch, capsys):
        def broken_config():
            raise ValueError("fps must be positive, got 0")

        def no_window(*args, **kwargs):
            pytest.fail("window opened despite a broken config")

        monkeypatch.setattr(play_human, "load_config", broken_config)
        monkeypatch.setattr(play_human, "HumanPlayer", no_window)
        monkeypatch.setattr("sys.argv", ["play_human", "--offline"])

        assert play_human.main() == 1
        assert "fps must be positive" in capsys.readouterr().out

    def test_missing_config_exits(self, monkeypatch):
        def missing_config():
            raise FileNotFoundError("Config file not found: game_config.yaml")

        monkeypatch.setattr(play_human, "load_config", missing_config)
        monkeypatch.setattr("sys.argv", ["play_human"])

        assert play_human.main() == 1


class TestTextInput:
    """Name entry box."""

    def test_length_capped(self, font):
        box = TextInput((0, 0, 200, 40), font, max_length=15)
        for char in "abcdefghijklmnopqrstuvwxyz":
            box.handle_event(key(char))
        assert box.text == "abcdefghijklmno"

    def test_enter_submits_trimmed_value(self, font):
        box = TextInput((0, 0, 200, 40), font, max_length=15)
        for char in " Nemo ":
            box.handle_event(key(char))

        assert box.handle_event(key("\r", pygame.K_RETURN))
        assert box.value() == "Nemo"

    def test_backspace(self, font):
        box = TextInput((0, 0, 200, 40), font)
        box.handle_event(key("a"))
        box.handle_event(key("b"))
        box.handle_event(key("", pygame.K_BACKSPACE))
        assert box.text == "a"
