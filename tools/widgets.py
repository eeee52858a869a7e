"""
Small pygame widgets for the play tool: buttons, a text box, and toasts.
"""

from __future__ import annotations

import time
from typing import List, Optional, Tuple

import pygame


class Button:
    def __init__(self, rect, text, font, bg, fg):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.fg = fg

    def draw(self, surface):
        pygame.draw.rect(surface, self.bg, self.rect, border_radius=12)
        pygame.draw.rect(surface, (255, 255, 255), self.rect, width=2, border_radius=12)
        txt = self.font.render(self.text, True, self.fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))

    def is_clicked(self, event):
        return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos)


class TextInput:
    """Single-line text box with a length cap."""

    def __init__(self, rect, font, placeholder="", max_length: Optional[int] = None):
        self.rect = pygame.Rect(rect)
        self.font = font
        self.placeholder = placeholder
        self.max_length = max_length
        self.text = ""
        self.active = True

    def handle_event(self, event) -> bool:
        """Feed an event. Returns True when Enter is pressed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.active = self.rect.collidepoint(event.pos)

        if event.type == pygame.KEYDOWN and self.active:
            if event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                return True
            elif event.unicode and event.unicode.isprintable():
                if self.max_length is None or len(self.text) < self.max_length:
                    self.text += event.unicode
        return False

    def draw(self, surface):
        bg = (255, 255, 255) if self.active else (235, 240, 245)
        pygame.draw.rect(surface, bg, self.rect, border_radius=10)
        pygame.draw.rect(surface, (14, 165, 233), self.rect, width=2, border_radius=10)

        if not self.text:
            img = self.font.render(self.placeholder, True, (148, 163, 184))
        else:
            img = self.font.render(self.text, True, (30, 41, 59))

        surface.blit(img, img.get_rect(midleft=(self.rect.x + 12, self.rect.centery)))

    def value(self):
        return self.text.strip()

    def clear(self):
        self.text = ""


class ToastStack:
    """Short-lived notifications in the bottom-right corner."""

    def __init__(self, font_title, font_body, lifetime: float = 4.0):
        self._font_title = font_title
        self._font_body = font_body
        self._lifetime = lifetime
        self._toasts: List[Tuple[float, str, str, bool]] = []

    def push(self, title: str, description: str = "", destructive: bool = False) -> None:
        self._toasts.append((time.time(), title, description, destructive))

    def draw(self, surface: pygame.Surface) -> None:
        now = time.time()
        self._toasts = [t for t in self._toasts if now - t[0] < self._lifetime]

        w, h = surface.get_size()
        y = h - 20
        for _, title, description, destructive in reversed(self._toasts):
            box = pygame.Rect(0, 0, 340, 64 if description else 40)
            box.bottomright = (w - 20, y)
            bg = (239, 68, 68) if destructive else (255, 255, 255)
            fg = (255, 255, 255) if destructive else (15, 23, 42)
            pygame.draw.rect(surface, bg, box, border_radius=10)
            pygame.draw.rect(surface, (203, 213, 225), box, width=1, border_radius=10)
            surface.blit(self._font_title.render(title, True, fg), (box.x + 14, box.y + 10))
            if description:
                surface.blit(self._font_body.render(description, True, fg), (box.x + 14, box.y + 36))
            y = box.top - 10
