from __future__ import annotations

from typing import Union

import numpy as np

from .grid import GameGrid
from .pieces import Piece

FILLED = "█"
EMPTY = "·"


def _rows(cells: np.ndarray) -> str:
    return "\n".join("".join(FILLED if cell else EMPTY for cell in row) for row in cells)


def render_grid(grid: Union[GameGrid, np.ndarray]) -> str:
    cells = grid.grid if isinstance(grid, GameGrid) else grid
    return _rows(cells)


def render_piece(piece: Piece) -> str:
    return _rows(piece.shape)


def print_grid(grid: Union[GameGrid, np.ndarray]) -> None:
    print(render_grid(grid))


def print_piece(piece: Piece) -> None:
    print(render_piece(piece))


def format_score(score: int) -> str:
    return f"{score:,}"
