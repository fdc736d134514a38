from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for engine errors."""


class UnknownPieceError(BlockBlastError, KeyError):
    """Raised when a piece is requested that is not part of the catalog."""

    def __init__(self, name: object) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown piece type: {self.name!r}"


class EmptySlotError(BlockBlastError):
    """Raised when removing a piece from a tray slot that is already empty."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Tray slot {index} is empty")
        self.index = index
