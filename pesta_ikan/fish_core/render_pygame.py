"""
Pygame Renderer
===============

Draws the pond: enemies as outlined circles, the player with eyes that
follow the pointer. Works on any surface, so it serves both the human
window and off-screen RGB array rendering.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import numpy as np

import pygame

from pesta_ikan.fish_core.config_loader import GameConfig, get_config


WATER_COLOR = (224, 242, 254)
ENEMY_OUTLINE = (0, 0, 0, 26)
PLAYER_OUTLINE = (255, 255, 255)
EYE_WHITE = (255, 255, 255)
EYE_PUPIL = (0, 0, 0)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert '#rrggbb' to an RGB tuple."""
    c = pygame.Color(color)
    return (c.r, c.g, c.b)


class FishRenderer:
    """
    Renders the board at board resolution.

    Callers scale the result to their window; ``render_to_array`` does so
    for observation images.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._size = (config.board.width, config.board.height)
        self._surface = pygame.Surface(self._size)
        self._window: Optional[pygame.Surface] = None

    @property
    def surface(self) -> pygame.Surface:
        """Board-sized surface holding the last rendered frame."""
        return self._surface

    def draw(self, surface: Optional[pygame.Surface], render_data: Dict[str, Any]) -> None:
        """
        Draw one frame onto ``surface``.

        A missing surface is ignored, there is nothing to draw on.

        Args:
            surface: Target surface at board resolution.
            render_data: Output of FishGame.get_render_data().
        """
        if surface is None:
            return

        surface.fill(WATER_COLOR)

        for enemy in render_data["enemies"]:
            self._draw_enemy(surface, enemy)

        self._draw_player(surface, render_data["player"], render_data["pointer"])

    def _draw_enemy(self, surface: pygame.Surface, enemy: Dict[str, Any]) -> None:
        center = (int(enemy["x"]), int(enemy["y"]))
        radius = max(1, int(enemy["radius"]))
        pygame.draw.circle(surface, hex_to_rgb(enemy["color"]), center, radius)

        # Faint outline needs alpha, so draw it on its own layer
        layer = pygame.Surface((radius * 2 + 4, radius * 2 + 4), pygame.SRCALPHA)
        pygame.draw.circle(layer, ENEMY_OUTLINE, (radius + 2, radius + 2), radius, 2)
        surface.blit(layer, (center[0] - radius - 2, center[1] - radius - 2))

    def _draw_player(
        self,
        surface: pygame.Surface,
        player: Dict[str, Any],
        pointer: Tuple[float, float]
    ) -> None:
        x, y, r = player["x"], player["y"], player["radius"]
        pygame.draw.circle(surface, hex_to_rgb(player["color"]), (int(x), int(y)), int(r))
        pygame.draw.circle(surface, PLAYER_OUTLINE, (int(x), int(y)), int(r), 3)

        # Eyes look toward the pointer
        look_x = (pointer[0] - x) * 0.05
        look_y = (pointer[1] - y) * 0.05
        for side in (1, -1):
            eye_x = x + look_x + side * r * 0.3
            eye_y = y + look_y - r * 0.3
            pygame.draw.circle(surface, EYE_WHITE, (int(eye_x), int(eye_y)), max(1, int(r * 0.25)))

            pupil_x = x + look_x * 1.5 + side * r * 0.3
            pupil_y = y + look_y * 1.5 - r * 0.3
            pygame.draw.circle(surface, EYE_PUPIL, (int(pupil_x), int(pupil_y)), max(1, int(r * 0.1)))

    def render(self, render_data: Dict[str, Any]) -> pygame.Surface:
        """Draw onto the internal board surface and return it."""
        self.draw(self._surface, render_data)
        return self._surface

    def render_to_array(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render to an RGB array.

        Args:
            render_data: Output of FishGame.get_render_data().
            width: Output width. Board width if None.
            height: Output height. Board height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        frame = self.render(render_data)
        size = (width or self._size[0], height or self._size[1])
        if size != self._size:
            frame = pygame.transform.smoothscale(frame, size)
        # surfarray is (W, H, 3)
        return np.ascontiguousarray(
            np.transpose(pygame.surfarray.array3d(frame), (1, 0, 2)),
            dtype=np.uint8
        )

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """Show the frame in a window, opening it on first use."""
        if self._window is None:
            pygame.init()
            self._window = pygame.display.set_mode(self._size)
            pygame.display.set_caption("Pesta Ikan")

        pygame.event.pump()
        self.draw(self._window, render_data)
        pygame.display.flip()

    def close(self) -> None:
        if self._window is not None:
            pygame.display.quit()
            self._window = None
