from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from block_blast.game import GameEvent, Phase, Piece, PieceColor
from block_blast.game.pieces import PALETTE

Color = Tuple[int, int, int]

BACKGROUND = (15, 15, 20)
EMPTY_CELL = (40, 40, 48)
FLASH = (255, 255, 255)
GHOST_INVALID = (220, 120, 120)


def _color_for_value(v: int) -> Color:
    if v == 0:
        return EMPTY_CELL
    return tuple(pygame.Color(PALETTE[PieceColor(v)]))[:3]


class Renderer:
    """Draws snapshots of the board and tray. Never mutates game state.

    Subscribed to engine events, it flashes the cells of completed lines
    before they are cleared; ``clear_delay_ms`` paces that flash.
    """

    def __init__(self, screen: pygame.Surface, grid_size: int = 8, cell_size: int = 40,
                 margin: int = 20, clear_delay_ms: int = 300) -> None:
        self.screen = screen
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.margin = margin
        self.clear_delay_ms = clear_delay_ms
        self.tray_x = margin * 2 + grid_size * cell_size

    def cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(self.margin + col * self.cell_size, self.margin + row * self.cell_size,
                           self.cell_size - 1, self.cell_size - 1)

    def pixel_to_cell(self, x: int, y: int) -> Tuple[int, int]:
        return (y - self.margin) // self.cell_size, (x - self.margin) // self.cell_size

    def draw_board(self, grid: np.ndarray, highlight: Sequence[Tuple[int, int]] = ()) -> None:
        self.screen.fill(BACKGROUND)
        h, w = grid.shape
        for row in range(h):
            for col in range(w):
                pygame.draw.rect(self.screen, _color_for_value(int(grid[row, col])), self.cell_rect(row, col))
        for row, col in highlight:
            pygame.draw.rect(self.screen, FLASH, self.cell_rect(row, col))

    def draw_tray(self, pieces: List[Optional[Piece]], selected: int) -> None:
        small = self.cell_size // 2
        for idx, piece in enumerate(pieces):
            off_y = self.margin + idx * small * 5
            if piece is None:
                continue
            color = pygame.Color(PALETTE[piece.color])
            for dr, dc in piece.filled_cells():
                rect = pygame.Rect(self.tray_x + dc * small, off_y + dr * small, small - 1, small - 1)
                pygame.draw.rect(self.screen, color, rect)
            if idx == selected:
                outline = pygame.Rect(self.tray_x - 2, off_y - 2, piece.cols * small + 4, piece.rows * small + 4)
                pygame.draw.rect(self.screen, FLASH, outline, 2)

    def draw_ghost(self, piece: Piece, row: int, col: int, valid: bool) -> None:
        color = pygame.Color(PALETTE[piece.color]) if valid else GHOST_INVALID
        for r, c in piece.cells_at(row, col):
            if 0 <= r < self.grid_size and 0 <= c < self.grid_size:
                pygame.draw.rect(self.screen, color, self.cell_rect(r, c), 2)

    def draw_text(self, font: pygame.font.Font, lines: List[str], y0: int) -> None:
        for i, txt in enumerate(lines):
            img = font.render(txt, True, (230, 230, 230))
            self.screen.blit(img, (self.tray_x, y0 + i * 20))

    def on_event(self, event: GameEvent) -> None:
        if event.phase == Phase.LINES_DETECTED:
            self.draw_board(event.session.grid.clone_state(), highlight=event.payload["cells"])
            pygame.display.flip()
            pygame.time.delay(self.clear_delay_ms)
