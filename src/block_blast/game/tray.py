from __future__ import annotations

import random
from typing import Iterator, List, Optional, Tuple

from .errors import EmptySlotError
from .pieces import Piece, create_random


class Tray:
    """Fixed row of slots holding the pieces still to be placed.

    Slot indices are stable: placing a piece leaves ``None`` behind, and the
    slots are only replaced together when the whole tray is refilled.
    """

    def __init__(self, size: int = 3, rng: Optional[random.Random] = None) -> None:
        self.size = int(size)
        self.rng = rng
        self.slots: List[Optional[Piece]] = [None] * self.size

    def generate(self) -> None:
        self.slots = [create_random(self.rng) for _ in range(self.size)]

    def remove_at(self, index: int) -> Piece:
        if not 0 <= index < self.size:
            raise IndexError(f"Tray slot {index} out of range 0..{self.size - 1}")
        piece = self.slots[index]
        if piece is None:
            raise EmptySlotError(index)
        self.slots[index] = None
        return piece

    def is_fully_depleted(self) -> bool:
        return all(piece is None for piece in self.slots)

    def refill_if_depleted(self) -> bool:
        if not self.is_fully_depleted():
            return False
        self.generate()
        return True

    def pieces(self) -> List[Tuple[int, Piece]]:
        return [(i, p) for i, p in enumerate(self.slots) if p is not None]

    @property
    def remaining(self) -> int:
        return sum(1 for p in self.slots if p is not None)

    def __getitem__(self, index: int) -> Optional[Piece]:
        return self.slots[index]

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Optional[Piece]]:
        return iter(self.slots)
