from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import COLS, ROWS, GameSnapshot, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (0, 0, 0),
        1: (0, 240, 240),    # I cyan
        2: (0, 0, 240),      # J blue
        3: (240, 160, 0),    # L orange
        4: (240, 240, 0),    # O yellow
        5: (0, 240, 0),      # S green
        6: (160, 0, 240),    # T purple
        7: (240, 0, 0),      # Z red
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Paints a ``GameSnapshot``: board, falling piece, preview and score panel."""

    grid_color = (34, 34, 34)
    panel_color = (245, 245, 245)
    text_color = (30, 30, 36)

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_cells * cell_size
        self.preview_cell = max(8, cell_size // 2)
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def board_size(self) -> Tuple[int, int]:
        return COLS * self.cell_size, ROWS * self.cell_size

    @property
    def window_size(self) -> Tuple[int, int]:
        board_w, board_h = self.board_size
        return board_w + self.panel_width + self.margin * 3, board_h + self.margin * 2

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 36)
        return self._font, self._big_font

    def _draw_block(self, surf: pygame.Surface, x: int, y: int, size: int, value: int) -> None:
        rect = pygame.Rect(x + 1, y + 1, size - 2, size - 2)
        pygame.draw.rect(surf, _color_for_value(value), rect)
        # White border for depth
        pygame.draw.rect(surf, (255, 255, 255), rect, 2 if size >= 20 else 1)

    def _grid_surface(self, board: np.ndarray, piece: Optional[Piece], ghost_y: Optional[int]) -> pygame.Surface:
        width, height = self.board_size
        c = self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill(_color_for_value(0))
        for row in range(ROWS + 1):
            pygame.draw.line(surf, self.grid_color, (0, row * c), (width, row * c))
        for col in range(COLS + 1):
            pygame.draw.line(surf, self.grid_color, (col * c, 0), (col * c, height))

        for y in range(ROWS):
            for x in range(COLS):
                v = int(board[y, x])
                if v:
                    self._draw_block(surf, x * c, y * c, c, v)

        if piece is not None:
            if ghost_y is not None and ghost_y != piece.y:
                for x, y in piece.at(piece.x, ghost_y).cells():
                    if y >= 0:
                        rect = pygame.Rect(x * c + 4, y * c + 4, c - 8, c - 8)
                        pygame.draw.rect(surf, _color_for_value(piece.color), rect, 2)
            for x, y in piece.cells():
                if y >= 0:
                    self._draw_block(surf, x * c, y * c, c, piece.color)
        return surf

    def _preview_surface(self, piece: Optional[Piece]) -> pygame.Surface:
        pc = self.preview_cell
        surf = pygame.Surface((pc * 5, pc * 4))
        surf.fill(self.panel_color)
        if piece is None:
            return surf
        off_x = (surf.get_width() - piece.width * pc) // 2
        off_y = (surf.get_height() - piece.height * pc) // 2
        for x, y in piece.at(0, 0).cells():
            self._draw_block(surf, off_x + x * pc, off_y + y * pc, pc, piece.color)
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font, _ = self._fonts()
        board_w, board_h = self.board_size
        x0 = self.margin * 2 + board_w
        y0 = self.margin
        pygame.draw.rect(screen, self.panel_color, pygame.Rect(x0, y0, self.panel_width, board_h))

        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines}",
            "Next:",
        ]
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, self.text_color), (x0 + 10, y0 + 10 + i * 24))
        screen.blit(self._preview_surface(snapshot.next_piece), (x0 + 10, y0 + 10 + len(lines) * 24))

        controls = [
            "Enter  start",
            "P      pause",
            "<- ->  move",
            "Up     rotate",
            "Down   soft drop",
            "Space  hard drop",
        ]
        y_text = y0 + board_h - len(controls) * 20 - 10
        for i, txt in enumerate(controls):
            screen.blit(font.render(txt, True, (90, 90, 100)), (x0 + 10, y_text + i * 20))

    def _draw_banner(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font, big_font = self._fonts()
        board_w, board_h = self.board_size
        center = (self.margin + board_w // 2, self.margin + board_h // 2)
        if snapshot.game_over:
            title = "Game Over"
            detail = f"Score {snapshot.score}  Lines {snapshot.lines}  Level {snapshot.level}"
        elif snapshot.paused:
            title, detail = "Paused", "Press P to resume"
        elif not snapshot.running:
            title, detail = "Falling Blocks", "Press Enter to start"
        else:
            return
        title_img = big_font.render(title, True, (255, 255, 255))
        detail_img = font.render(detail, True, (220, 220, 220))
        screen.blit(title_img, title_img.get_rect(center=(center[0], center[1] - 18)))
        screen.blit(detail_img, detail_img.get_rect(center=(center[0], center[1] + 14)))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, ghost_y: Optional[int] = None) -> None:
        grid_surf = self._grid_surface(snapshot.board, snapshot.current, ghost_y)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, snapshot)
        self._draw_banner(screen, snapshot)


def state_to_rgb(state: np.ndarray, cell: int = 12) -> np.ndarray:
    """Render a ``get_state()`` grid into an RGB image without a display."""
    h, w = state.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(state[y, x]))
    return img
