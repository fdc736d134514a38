"""Game-over detection.

A session is over when no piece left in the tray fits anywhere on the grid.
The search is exhaustive over every anchor that keeps the piece's bounding
box on the board: at most 3 pieces x 64 anchors, each check touching at most
9 cells, so it runs after every placement without caching.
"""

from __future__ import annotations

from .grid import GameGrid
from .pieces import Piece
from .tray import Tray


def piece_fits_anywhere(grid: GameGrid, piece: Piece) -> bool:
    max_row = grid.size - piece.rows
    max_col = grid.size - piece.cols
    for row in range(max_row + 1):
        for col in range(max_col + 1):
            if grid.can_place(piece, row, col):
                return True
    return False


def evaluate(grid: GameGrid, tray: Tray) -> bool:
    """Return True if at least one tray piece has a legal anchor."""
    for _, piece in tray.pieces():
        if piece_fits_anywhere(grid, piece):
            return True
    return False


def is_game_over(grid: GameGrid, tray: Tray) -> bool:
    return not evaluate(grid, tray)
