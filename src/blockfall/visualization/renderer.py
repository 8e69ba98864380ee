from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from blockfall.game import Variant


Color = Tuple[int, int, int]

PALETTE: Dict[Variant, Color] = {
    Variant.NONE: (0, 0, 0),
    Variant.Z: (204, 102, 102),
    Variant.S: (102, 204, 102),
    Variant.I: (102, 102, 204),
    Variant.T: (204, 204, 102),
    Variant.O: (204, 102, 204),
    Variant.L: (102, 204, 204),
    Variant.J: (218, 170, 0),
}

BACKGROUND: Color = (0, 0, 0)
STATUS_BG: Color = (255, 255, 255)
STATUS_FG: Color = (20, 20, 26)


def color_for_value(v: int) -> Color:
    # Negative codes mark the falling piece, same colour as when locked
    return PALETTE[Variant(abs(int(v)))]


def _brighter(c: Color) -> Color:
    return tuple(min(255, int(ch / 0.7)) for ch in c)  # type: ignore[return-value]


def _darker(c: Color) -> Color:
    return tuple(int(ch * 0.7) for ch in c)  # type: ignore[return-value]


def to_screen_rows(state: np.ndarray) -> np.ndarray:
    """Engine rows count up from the bottom; screens draw from the top."""
    return state[::-1]


def rgb_array(state: np.ndarray, cell: int = 12) -> np.ndarray:
    rows = to_screen_rows(state)
    h, w = rows.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            if rows[y, x] != 0:
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(rows[y, x])
    return img


class Renderer:
    """Draws the board under a status bar, with a button row underneath."""

    def __init__(self, cell_size: int = 24, status_height: int = 28, button_height: int = 40) -> None:
        self.cell_size = cell_size
        self.status_height = status_height
        self.button_height = button_height
        self.pause_button: Optional[pygame.Rect] = None
        self.quit_button: Optional[pygame.Rect] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size,
            self.status_height + height * self.cell_size + self.button_height,
        )

    def cell_rect(self, screen_x: int, screen_y: int) -> pygame.Rect:
        return pygame.Rect(
            screen_x * self.cell_size,
            self.status_height + screen_y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def layout_buttons(self, width: int, height: int) -> None:
        board_w, _ = self.window_size(width, height)
        top = self.status_height + height * self.cell_size + 6
        button_h = self.button_height - 12
        self.pause_button = pygame.Rect(board_w // 2 - 118, top, 120, button_h)
        self.quit_button = pygame.Rect(board_w // 2 + 10, top, 70, button_h)

    def _draw_square(self, surf: pygame.Surface, rect: pygame.Rect, color: Color) -> None:
        pygame.draw.rect(surf, color, rect)
        light, dark = _brighter(color), _darker(color)
        pygame.draw.line(surf, light, rect.topleft, (rect.right - 1, rect.top))
        pygame.draw.line(surf, light, rect.topleft, (rect.left, rect.bottom - 1))
        pygame.draw.line(surf, dark, (rect.left + 1, rect.bottom - 1), (rect.right - 1, rect.bottom - 1))
        pygame.draw.line(surf, dark, (rect.right - 1, rect.bottom - 1), (rect.right - 1, rect.top + 1))

    def draw_board(self, screen: pygame.Surface, state: np.ndarray) -> None:
        rows = to_screen_rows(state)
        h, w = rows.shape
        board_area = pygame.Rect(0, self.status_height, w * self.cell_size, h * self.cell_size)
        pygame.draw.rect(screen, BACKGROUND, board_area)
        for y in range(h):
            for x in range(w):
                v = int(rows[y, x])
                if v != 0:
                    self._draw_square(screen, self.cell_rect(x, y), color_for_value(v))

    def draw_status(self, screen: pygame.Surface, font: pygame.font.Font, text: str) -> None:
        bar = pygame.Rect(0, 0, screen.get_width(), self.status_height)
        pygame.draw.rect(screen, STATUS_BG, bar)
        img = font.render(f" {text}", True, STATUS_FG)
        screen.blit(img, (4, (self.status_height - img.get_height()) // 2))

    def draw_buttons(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        if self.pause_button is None or self.quit_button is None:
            return
        bottom = pygame.Rect(0, self.pause_button.top - 6, screen.get_width(), self.button_height)
        pygame.draw.rect(screen, STATUS_BG, bottom)
        for rect, label in ((self.pause_button, "Pause/Resume"), (self.quit_button, "Quit")):
            pygame.draw.rect(screen, (225, 225, 232), rect)
            pygame.draw.rect(screen, (120, 120, 130), rect, 1)
            img = font.render(label, True, STATUS_FG)
            screen.blit(img, img.get_rect(center=rect.center))

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, state: np.ndarray, status_text: str) -> None:
        screen.fill(BACKGROUND)
        self.draw_status(screen, font, status_text)
        self.draw_board(screen, state)
        self.draw_buttons(screen, font)
        pygame.display.flip()
