"""
Human Play Mode
===============

Play Pesta Ikan in a window with mouse (or arrow key) control.
Scores are sent to the leaderboard API when a game ends.

Controls:
    - Mouse: Steer your fish
    - Arrows/WASD: Steer without a mouse
    - M: Mute/unmute music
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--username NAME] [--api-url URL] [--offline]
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import pygame

from pesta_ikan.fish_core.config_loader import load_config, GameConfig
from pesta_ikan.fish_core.game import FishGame
from pesta_ikan.fish_core.render_pygame import FishRenderer
from pesta_ikan.leaderboard.client import BackgroundLeaderboard, LeaderboardClient
from pesta_ikan.leaderboard.schemas import USERNAME_MAX_LENGTH, ScoreOut
from tools.widgets import Button, TextInput, ToastStack


SCREEN_MENU = "menu"
SCREEN_READY = "ready"
SCREEN_PLAYING = "playing"
SCREEN_OVER = "over"

KEY_STEER_SPEED = 12.0  # board pixels per frame

BG_TOP = (34, 211, 238)
BG_BOTTOM = (79, 70, 229)
PANEL = (15, 23, 42)
CARD = (255, 255, 255)
TEXT_DARK = (30, 41, 59)
TEXT_MUTED = (100, 116, 139)
PRIMARY = (14, 165, 233)
DESTRUCTIVE = (239, 68, 68)
GOLD = (250, 204, 21)
MEDALS = [(250, 204, 21), (203, 213, 225), (253, 186, 116)]


class HumanPlayer:
    """
    Pygame front end: name entry, leaderboard, and the game itself.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        username: str = "",
        api_url: Optional[str] = None,
        offline: bool = False,
        music_path: Optional[str] = None,
        window_width: int = 960,
        window_height: int = 680,
        target_fps: Optional[int] = None
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._window_width = window_width
        self._window_height = window_height
        self._target_fps = target_fps or config.loop.fps

        # Game
        self._game = FishGame(config=config, seed=seed, on_game_over=self._on_game_over)

        # Leaderboard
        self._leaderboard: Optional[BackgroundLeaderboard] = None
        if not offline:
            self._leaderboard = BackgroundLeaderboard(
                LeaderboardClient(base_url=api_url, config=config)
            )
        self._scores: List[ScoreOut] = []
        self._scores_loading = False
        self._scores_error = False

        # Pygame
        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Pesta Ikan!")
        self._clock = pygame.time.Clock()

        self._font_huge = pygame.font.Font(None, 72)
        self._font_large = pygame.font.Font(None, 44)
        self._font_medium = pygame.font.Font(None, 30)
        self._font_small = pygame.font.Font(None, 22)

        self._renderer = FishRenderer(config)
        self._bg_surface = self._create_gradient_background()
        self._toasts = ToastStack(self._font_medium, self._font_small)
        self._calculate_layout()
        self._build_widgets()

        # Music
        self._muted = False
        self._music_loaded = self._load_music(music_path)

        # State
        self._running = True
        self._screen_name = SCREEN_MENU
        self._username = ""
        self._final_score = 0
        self._keys_held = set()

        if username.strip():
            self._name_input.text = username.strip()[:USERNAME_MAX_LENGTH]
            self._join()
        else:
            self._enter_menu()

    # ---------------- Setup ----------------
    def _create_gradient_background(self) -> pygame.Surface:
        surface = pygame.Surface((self._window_width, self._window_height))
        for y in range(self._window_height):
            t = y / self._window_height
            color = tuple(int(BG_TOP[i] * (1 - t) + BG_BOTTOM[i] * t) for i in range(3))
            pygame.draw.line(surface, color, (0, y), (self._window_width, y))
        return surface

    def _calculate_layout(self) -> None:
        """Fit the board into the window, keeping its aspect ratio."""
        board = self._config.board
        margin = 20
        scale = min(
            (self._window_width - 2 * margin) / board.width,
            (self._window_height - 2 * margin) / board.height
        )
        w, h = int(board.width * scale), int(board.height * scale)
        self._board_rect = pygame.Rect(
            (self._window_width - w) // 2, (self._window_height - h) // 2, w, h
        )

    def _build_widgets(self) -> None:
        cx = self._window_width // 4
        self._name_input = TextInput(
            (cx - 170, 330, 340, 52), self._font_large,
            placeholder="e.g. Sharky McChomp", max_length=USERNAME_MAX_LENGTH
        )
        self._play_button = Button((cx - 170, 400, 340, 56), "Start Playing",
                                   self._font_large, PRIMARY, CARD)

        mid_x = self._window_width // 2
        mid_y = self._window_height // 2
        self._start_button = Button((mid_x - 150, mid_y + 40, 300, 56), "Start Game",
                                    self._font_large, PRIMARY, CARD)
        self._change_button = Button((mid_x - 150, mid_y + 106, 300, 40), "Change Player",
                                     self._font_medium, (226, 232, 240), TEXT_DARK)
        self._board_button = Button((mid_x - 150, mid_y + 90, 140, 52), "Leaderboard",
                                    self._font_medium, (226, 232, 240), TEXT_DARK)
        self._retry_button = Button((mid_x + 10, mid_y + 90, 140, 52), "Try Again",
                                    self._font_medium, PRIMARY, CARD)

    def _load_music(self, music_path: Optional[str]) -> bool:
        if not music_path:
            return False
        if not os.path.exists(music_path):
            print(f"Music file not found: {music_path}")
            return False
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(music_path)
        except pygame.error as e:
            print(f"Music disabled: {e}")
            return False
        return True

    # ---------------- Screen changes ----------------
    def _enter_menu(self) -> None:
        self._screen_name = SCREEN_MENU
        self._game.stop()
        self._refresh_scores()

    def _refresh_scores(self) -> None:
        if self._leaderboard is None:
            return
        self._scores_loading = True
        self._scores_error = False
        self._leaderboard.request_scores()

    def _join(self) -> None:
        name = self._name_input.value()
        if not name:
            return
        self._username = name
        self._screen_name = SCREEN_READY
        self._update_music()

    def _exit_to_menu(self) -> None:
        self._username = ""
        self._name_input.clear()
        self._enter_menu()
        self._update_music()

    def _start_game(self) -> None:
        self._game.start(pygame.time.get_ticks(), seed=self._seed)
        self._final_score = 0
        self._screen_name = SCREEN_PLAYING
        if self._seed is None:
            print(f"\n=== {self._username} dives in ===\n")
        else:
            print(f"\n=== {self._username} dives in (seed {self._seed}) ===\n")

    def _on_game_over(self, final_score: int) -> None:
        """Called by the game the frame the player is eaten."""
        self._final_score = final_score
        self._screen_name = SCREEN_OVER
        print(f"\nGAME OVER - {self._username} scored {final_score}")

        if self._leaderboard is None:
            self._toasts.push("Game Over!", f"You scored {final_score} points.")
            return
        self._leaderboard.submit(self._username, final_score)

    def _update_music(self) -> None:
        if not self._music_loaded:
            return
        pygame.mixer.music.set_volume(0.0 if self._muted else 1.0)
        joined = self._screen_name != SCREEN_MENU
        busy = pygame.mixer.music.get_busy()
        if joined and not self._muted and not busy:
            pygame.mixer.music.play(loops=-1)
        elif not joined and busy:
            pygame.mixer.music.stop()

    # ---------------- Loop ----------------
    def run(self) -> int:
        """Run the window loop. Returns the last final score."""
        print("=== Pesta Ikan ===")
        print("Eat smaller fish to grow. Avoid bigger fish or get eaten!")
        print("Mouse or arrows to steer, M to mute, ESC to quit")
        print()

        try:
            while self._running:
                self._handle_events()
                self._handle_network()

                if self._screen_name == SCREEN_PLAYING:
                    self._steer_with_keys()
                    self._game.update(pygame.time.get_ticks())

                self._render()
                self._clock.tick(self._target_fps)
        finally:
            if self._leaderboard is not None:
                self._leaderboard.close()
            pygame.quit()

        return self._final_score

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                    continue
                if event.key == pygame.K_m and self._screen_name != SCREEN_MENU:
                    self._muted = not self._muted
                    self._update_music()
                self._keys_held.add(event.key)
            elif event.type == pygame.KEYUP:
                self._keys_held.discard(event.key)

            if self._screen_name == SCREEN_MENU:
                if self._name_input.handle_event(event) or self._play_button.is_clicked(event):
                    self._join()

            elif self._screen_name == SCREEN_READY:
                if self._start_button.is_clicked(event):
                    self._start_game()
                elif self._change_button.is_clicked(event):
                    self._exit_to_menu()

            elif self._screen_name == SCREEN_PLAYING:
                if event.type == pygame.MOUSEMOTION:
                    self._pointer_from_mouse(event.pos)

            elif self._screen_name == SCREEN_OVER:
                if self._retry_button.is_clicked(event):
                    self._start_game()
                elif self._board_button.is_clicked(event):
                    self._exit_to_menu()

    def _pointer_from_mouse(self, pos) -> None:
        r = self._board_rect
        self._game.pointer_from_surface(pos[0] - r.x, pos[1] - r.y, r.width, r.height)

    def _steer_with_keys(self) -> None:
        dx = dy = 0.0
        held = self._keys_held
        if pygame.K_LEFT in held or pygame.K_a in held:
            dx -= KEY_STEER_SPEED
        if pygame.K_RIGHT in held or pygame.K_d in held:
            dx += KEY_STEER_SPEED
        if pygame.K_UP in held or pygame.K_w in held:
            dy -= KEY_STEER_SPEED
        if pygame.K_DOWN in held or pygame.K_s in held:
            dy += KEY_STEER_SPEED
        if dx == 0.0 and dy == 0.0:
            return

        board = self._config.board
        px, py = self._game.pointer
        self._game.set_pointer(
            max(0.0, min(board.width, px + dx)),
            max(0.0, min(board.height, py + dy)),
        )

    def _handle_network(self) -> None:
        if self._leaderboard is None:
            return
        for msg in self._leaderboard.poll():
            kind = msg["type"]
            if kind == "SCORES":
                self._scores = msg["scores"]
                self._scores_loading = False
            elif kind == "SUBMITTED":
                self._toasts.push("Game Over!", f"You scored {msg['score'].score} points.")
            elif kind == "ERROR":
                if msg["during"] == "fetch":
                    self._scores_loading = False
                    self._scores_error = True
                else:
                    self._toasts.push(
                        "Error saving score",
                        "Could not save your score to the leaderboard.",
                        destructive=True
                    )
                print(f"Leaderboard error: {msg['message']}")

    # ---------------- Drawing ----------------
    def _render(self) -> None:
        screen = self._screen
        screen.blit(self._bg_surface, (0, 0))

        if self._screen_name == SCREEN_MENU:
            self._draw_menu(screen)
        else:
            self._draw_board(screen)
            if self._screen_name == SCREEN_READY:
                self._draw_ready(screen)
            elif self._screen_name == SCREEN_PLAYING:
                self._draw_hud(screen)
            elif self._screen_name == SCREEN_OVER:
                self._draw_game_over(screen)
            self._draw_mute_badge(screen)

        self._toasts.draw(screen)
        pygame.display.flip()

    def _draw_board(self, screen: pygame.Surface) -> None:
        frame = self._renderer.render(self._game.get_render_data())
        scaled = pygame.transform.smoothscale(frame, self._board_rect.size)
        screen.blit(scaled, self._board_rect)
        pygame.draw.rect(screen, CARD, self._board_rect, width=4, border_radius=6)

    def _draw_centered(self, screen, font, text, color, y, x: Optional[int] = None) -> None:
        img = font.render(text, True, color)
        center_x = self._window_width // 2 if x is None else x
        screen.blit(img, img.get_rect(center=(center_x, y)))

    def _draw_overlay(self, screen: pygame.Surface, alpha: int) -> pygame.Rect:
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        screen.blit(overlay, (0, 0))

        card = pygame.Rect(0, 0, 420, 380)
        card.center = (self._window_width // 2, self._window_height // 2)
        pygame.draw.rect(screen, CARD, card, border_radius=18)
        return card

    def _draw_menu(self, screen: pygame.Surface) -> None:
        cx = self._window_width // 4
        self._draw_centered(screen, self._font_huge, "Pesta", CARD, 130, cx)
        self._draw_centered(screen, self._font_huge, "Ikan!", GOLD, 190, cx)
        self._draw_centered(screen, self._font_small,
                            "Eat smaller fish to grow. Don't get eaten!", CARD, 240, cx)
        self._draw_centered(screen, self._font_small, "ENTER YOUR PLAYER NAME", CARD, 310, cx)

        self._name_input.draw(screen)
        self._play_button.bg = PRIMARY if self._name_input.value() else TEXT_MUTED
        self._play_button.draw(screen)

        self._draw_leaderboard_panel(screen)

    def _draw_leaderboard_panel(self, screen: pygame.Surface) -> None:
        panel = pygame.Rect(self._window_width // 2 + 20, 60, self._window_width // 2 - 60,
                            self._window_height - 120)
        layer = pygame.Surface(panel.size, pygame.SRCALPHA)
        layer.fill((*PANEL, 90))
        screen.blit(layer, panel.topleft)

        screen.blit(self._font_large.render("Leaderboard", True, CARD), (panel.x + 20, panel.y + 20))
        tag = self._font_small.render("Top 10", True, CARD)
        screen.blit(tag, (panel.right - tag.get_width() - 20, panel.y + 30))

        top = panel.y + 80
        if self._leaderboard is None:
            self._draw_centered(screen, self._font_medium, "Offline mode", CARD, top + 40, panel.centerx)
            return
        if self._scores_loading and not self._scores:
            self._draw_centered(screen, self._font_medium, "Loading...", CARD, top + 40, panel.centerx)
            return
        if self._scores_error and not self._scores:
            self._draw_centered(screen, self._font_medium, "Could not load leaderboard",
                                CARD, top + 40, panel.centerx)
            return
        if not self._scores:
            self._draw_centered(screen, self._font_medium, "No champions yet. Be the first!",
                                CARD, top + 40, panel.centerx)
            return

        row_h = min(48, (panel.bottom - top - 10) // len(self._scores))
        for index, entry in enumerate(self._scores):
            row = pygame.Rect(panel.x + 16, top + index * row_h, panel.width - 32, row_h - 6)
            pygame.draw.rect(screen, CARD, row, border_radius=10)

            badge = MEDALS[index] if index < 3 else (241, 245, 249)
            pygame.draw.circle(screen, badge, (row.x + 22, row.centery), 14)
            self._draw_centered(screen, self._font_small, str(index + 1), TEXT_DARK,
                                row.centery, row.x + 22)

            name = self._font_medium.render(entry.username, True, TEXT_DARK)
            screen.blit(name, name.get_rect(midleft=(row.x + 48, row.centery)))
            value = self._font_medium.render(f"{entry.score:,}", True, PRIMARY)
            screen.blit(value, value.get_rect(midright=(row.right - 14, row.centery)))

    def _draw_ready(self, screen: pygame.Surface) -> None:
        card = self._draw_overlay(screen, 100)
        self._draw_centered(screen, self._font_large, "Ready to Fish?", PRIMARY, card.y + 50)
        self._draw_centered(screen, self._font_small,
                            "Eat smaller fish to grow. Avoid bigger fish or get eaten!",
                            TEXT_MUTED, card.y + 90)
        self._draw_centered(screen, self._font_small, "PLAYING AS", PRIMARY, card.y + 135)
        self._draw_centered(screen, self._font_large, self._username, TEXT_DARK, card.y + 170)
        self._start_button.draw(screen)
        self._change_button.draw(screen)

    def _draw_hud(self, screen: pygame.Surface) -> None:
        box = pygame.Rect(self._board_rect.x + 20, self._board_rect.y + 20, 150, 70)
        pygame.draw.rect(screen, CARD, box, border_radius=14)
        screen.blit(self._font_small.render("SCORE", True, TEXT_MUTED), (box.x + 16, box.y + 10))
        screen.blit(self._font_large.render(f"{self._game.score:,}", True, PRIMARY),
                    (box.x + 16, box.y + 30))

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        card = self._draw_overlay(screen, 150)
        self._draw_centered(screen, self._font_huge, "OM NOM NOM!", DESTRUCTIVE, card.y + 60)
        self._draw_centered(screen, self._font_medium, "You were eaten by a bigger fish.",
                            TEXT_MUTED, card.y + 110)
        self._draw_centered(screen, self._font_small, "FINAL SCORE", TEXT_MUTED, card.y + 160)
        self._draw_centered(screen, self._font_huge, f"{self._final_score:,}", PRIMARY, card.y + 205)
        self._board_button.draw(screen)
        self._retry_button.draw(screen)

    def _draw_mute_badge(self, screen: pygame.Surface) -> None:
        if not self._music_loaded:
            return
        label = "M: Sound off" if self._muted else "M: Sound on"
        img = self._font_small.render(label, True, CARD)
        screen.blit(img, img.get_rect(topright=(self._window_width - 16, 12)))


def main():
    parser = argparse.ArgumentParser(description="Play Pesta Ikan interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--username", default="", help="Skip the name screen")
    parser.add_argument("--api-url", default=None, help="Leaderboard API base URL")
    parser.add_argument("--offline", action="store_true", help="Play without the leaderboard")
    parser.add_argument("--music", default=None, help="Background music file (looped)")
    parser.add_argument("--width", type=int, default=960, help="Window width (default: 960)")
    parser.add_argument("--height", type=int, default=680, help="Window height (default: 680)")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")

    args = parser.parse_args()

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Config error: {e}")
        return 1

    player = HumanPlayer(
        config=config,
        seed=args.seed,
        username=args.username,
        api_url=args.api_url,
        offline=args.offline,
        music_path=args.music,
        window_width=args.width,
        window_height=args.height,
        target_fps=args.fps
    )
    score = player.run()
    print(f"\nLast Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
