from __future__ import annotations

import random
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import UnknownPieceError


Offset = Tuple[int, int]
Shape = np.ndarray

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


class PieceColor(IntEnum):
    """Color families. Values double as the occupied-cell marker on the grid."""

    CYAN = 1
    YELLOW = 2
    ORANGE = 3
    PURPLE = 4
    RED = 5
    GREEN = 6


PALETTE: Dict[PieceColor, str] = {
    PieceColor.CYAN: "#00D4FF",
    PieceColor.YELLOW: "#FFD700",
    PieceColor.ORANGE: "#FF8C00",
    PieceColor.PURPLE: "#B388FF",
    PieceColor.RED: "#FF5252",
    PieceColor.GREEN: "#00E676",
}


class PieceType(IntEnum):
    LINE3H = 0
    LINE4H = 1
    LINE3V = 2
    LINE4V = 3
    SQUARE2 = 4
    SQUARE3 = 5
    L_SHAPE1 = 6
    L_SHAPE2 = 7
    L_SHAPE3 = 8
    L_SHAPE4 = 9
    T_SHAPE1 = 10
    T_SHAPE2 = 11
    T_SHAPE3 = 12
    T_SHAPE4 = 13
    Z_SHAPE1 = 14
    Z_SHAPE2 = 15
    S_SHAPE1 = 16
    S_SHAPE2 = 17


def _shape(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


CATALOG: Dict[PieceType, Tuple[Shape, PieceColor]] = {
    PieceType.LINE3H: (_shape([[1, 1, 1]]), PieceColor.CYAN),
    PieceType.LINE4H: (_shape([[1, 1, 1, 1]]), PieceColor.CYAN),
    PieceType.LINE3V: (_shape([[1], [1], [1]]), PieceColor.CYAN),
    PieceType.LINE4V: (_shape([[1], [1], [1], [1]]), PieceColor.CYAN),
    PieceType.SQUARE2: (_shape([[1, 1], [1, 1]]), PieceColor.YELLOW),
    PieceType.SQUARE3: (_shape([[1, 1, 1], [1, 1, 1], [1, 1, 1]]), PieceColor.YELLOW),
    PieceType.L_SHAPE1: (_shape([[1, 0], [1, 0], [1, 1]]), PieceColor.ORANGE),
    PieceType.L_SHAPE2: (_shape([[1, 1, 1], [1, 0, 0]]), PieceColor.ORANGE),
    PieceType.L_SHAPE3: (_shape([[1, 1], [0, 1], [0, 1]]), PieceColor.ORANGE),
    PieceType.L_SHAPE4: (_shape([[0, 0, 1], [1, 1, 1]]), PieceColor.ORANGE),
    PieceType.T_SHAPE1: (_shape([[1, 1, 1], [0, 1, 0]]), PieceColor.PURPLE),
    PieceType.T_SHAPE2: (_shape([[0, 1], [1, 1], [0, 1]]), PieceColor.PURPLE),
    PieceType.T_SHAPE3: (_shape([[0, 1, 0], [1, 1, 1]]), PieceColor.PURPLE),
    PieceType.T_SHAPE4: (_shape([[1, 0], [1, 1], [1, 0]]), PieceColor.PURPLE),
    PieceType.Z_SHAPE1: (_shape([[1, 1, 0], [0, 1, 1]]), PieceColor.RED),
    PieceType.Z_SHAPE2: (_shape([[0, 1], [1, 1], [1, 0]]), PieceColor.RED),
    PieceType.S_SHAPE1: (_shape([[0, 1, 1], [1, 1, 0]]), PieceColor.GREEN),
    PieceType.S_SHAPE2: (_shape([[1, 0], [1, 1], [0, 1]]), PieceColor.GREEN),
}


@dataclass(frozen=True)
class Piece:
    """Immutable piece value. Two pieces of the same type are interchangeable."""

    kind: PieceType

    def __post_init__(self) -> None:
        try:
            kind = PieceType(self.kind)
        except ValueError:
            raise UnknownPieceError(self.kind) from None
        object.__setattr__(self, "kind", kind)

    @classmethod
    def from_name(cls, name: str) -> "Piece":
        """Look up a catalog piece by name.

        Accepts snake_case (``"t_shape2"``) as well as camelCase (``"tShape2"``).
        """
        try:
            key = _CAMEL_BOUNDARY.sub("_", name).upper()
            return cls(PieceType[key])
        except (KeyError, TypeError):
            raise UnknownPieceError(name) from None

    @property
    def name(self) -> str:
        return self.kind.name.lower()

    @property
    def shape(self) -> Shape:
        return CATALOG[self.kind][0]

    @property
    def color(self) -> PieceColor:
        return CATALOG[self.kind][1]

    @property
    def rows(self) -> int:
        return int(self.shape.shape[0])

    @property
    def cols(self) -> int:
        return int(self.shape.shape[1])

    @property
    def size(self) -> int:
        return int(np.count_nonzero(self.shape))

    def filled_cells(self) -> List[Offset]:
        return filled_cells(self)

    def cells_at(self, row: int, col: int) -> List[Offset]:
        return [(row + dr, col + dc) for dr, dc in filled_cells(self)]


def filled_cells(piece: Piece) -> List[Offset]:
    """Row-major (row, col) offsets of the filled cells, relative to the top-left."""
    s = piece.shape
    cells: List[Offset] = []
    for dr in range(s.shape[0]):
        for dc in range(s.shape[1]):
            if s[dr, dc]:
                cells.append((dr, dc))
    return cells


def create_random(rng: Optional[random.Random] = None) -> Piece:
    chooser = rng if rng is not None else random
    return Piece(chooser.choice(list(PieceType)))
