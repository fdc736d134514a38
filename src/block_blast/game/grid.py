from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .pieces import Piece, filled_cells


Cell = Tuple[int, int]

EMPTY = 0


class GameGrid:
    """Square occupancy grid for block placement.

    The grid uses 0 for empty cells and positive integers for filled cells.
    A filled cell holds the ``PieceColor`` value of the piece that filled it.
    Cells are addressed as (row, col) with (0, 0) in the top-left corner.
    """

    def __init__(self, size: int = 8) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty(self, row: int, col: int) -> bool:
        return self.is_inside(row, col) and bool(self.grid[row, col] == EMPTY)

    def can_place(self, piece: Piece, row: int, col: int) -> bool:
        for dr, dc in filled_cells(piece):
            if not self.is_empty(row + dr, col + dc):
                return False
        return True

    def place(self, piece: Piece, row: int, col: int) -> List[Cell]:
        """Fill the piece's cells with its color. Assumes ``can_place`` holds."""
        value = int(piece.color)
        placed: List[Cell] = []
        for dr, dc in filled_cells(piece):
            self.grid[row + dr, col + dc] = value
            placed.append((row + dr, col + dc))
        return placed

    def find_complete_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def find_complete_cols(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(np.all(self.grid != EMPTY, axis=0))]

    def cells_to_clear(self, rows: Sequence[int], cols: Sequence[int]) -> List[Cell]:
        """Union of all cells in ``rows`` and ``cols``; intersections appear once."""
        cells = set()
        for r in rows:
            cells.update((int(r), c) for c in range(self.size))
        for c in cols:
            cells.update((r, int(c)) for r in range(self.size))
        return sorted(cells)

    def clear(self, cells: Iterable[Cell]) -> None:
        for r, c in cells:
            self.grid[r, c] = EMPTY

    def valid_anchors(self, piece: Piece) -> List[Cell]:
        anchors: List[Cell] = []
        for row in range(self.size - piece.rows + 1):
            for col in range(self.size - piece.cols + 1):
                if self.can_place(piece, row, col):
                    anchors.append((row, col))
        return anchors

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_filled_ratio(self) -> float:
        return self.filled_count() / float(self.size * self.size)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
