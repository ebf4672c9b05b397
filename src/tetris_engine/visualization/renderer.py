from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from tetris_engine.game import Position


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 0, 240),    # J
        5: (240, 160, 0),  # L
        6: (240, 0, 0),    # Z
        7: (0, 240, 0),    # S
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, header: int = 40, footer: int = 28) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header
        self.footer = footer
        self._fonts: Dict[int, pygame.font.Font] = {}

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 2,
            height * self.cell_size + self.margin * 2 + self.header + self.footer,
        )

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        size = self.cell_size
        surf = pygame.Surface((w * size, h * size))
        surf.fill((30, 30, 36))
        for y, x in np.ndindex(h, w):
            v = int(state[y, x])
            rect = pygame.Rect(x * size, y * size, size - 1, size - 1)
            pygame.draw.rect(surf, _color_for_value(v), rect)
            if v < 0:
                # Falling piece
                pygame.draw.rect(surf, (255, 255, 255), rect, width=2)
        return surf

    def _text(self, screen: pygame.Surface, message: str, center: Tuple[int, int], size: int = 30) -> None:
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.SysFont(None, size)
        text = font.render(message, True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=center))

    def draw(self, screen: pygame.Surface, state: np.ndarray, score: int = 0,
             playing: bool = True, game_over: bool = False,
             position: Optional[Position] = None) -> None:
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin + self.header))
        mid_x = screen.get_width() // 2
        self._text(screen, f"Score: {score}", (mid_x, self.margin + self.header // 2 - 8))
        if game_over:
            self._text(screen, "Game Over! Enter to restart", (mid_x, screen.get_height() // 2))
        elif not playing:
            self._text(screen, "Press Enter to start", (mid_x, screen.get_height() // 2))
        self._text(screen, status_line(playing, position), (mid_x, screen.get_height() - self.footer // 2 - 4), size=20)
        pygame.display.flip()


def status_line(playing: bool, position: Optional[Position]) -> str:
    state = "Playing" if playing else "Not Playing"
    if position is None:
        return f"{state} | no piece"
    return f"{state} | piece at ({position.x}, {position.y})"
