"""The six falling pieces and their rotation states."""

from __future__ import annotations

import copy
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable

from .position import Position

BLOCK_SIZE = 3
SPAWN_POSITION = Position(4, 0)


class Piece(ABC):
    """A piece drawn in a square block of cells.

    Rotation states are 1 (0°), 2 (90°), 3 (180°) and 4 (270°).
    Each non-zero cell of ``block`` holds the piece ``id``.
    """

    id: int = 0

    def __init__(self) -> None:
        self.size = BLOCK_SIZE
        self.position = SPAWN_POSITION
        self._rotation_state = 1
        self.left_bound = 0
        self.right_bound = self.size
        self.down_bound = self.size
        self.block: list[list[int]] = []
        self.reset_block()
        self.fill_block()

    @property
    def rotation_state(self) -> int:
        return self._rotation_state

    @rotation_state.setter
    def rotation_state(self, rotation: int) -> None:
        self._rotation_state = rotation
        self.reset_block()
        self.fill_block()

    def clone(self) -> Piece:
        """Return an independent copy of this piece."""
        twin = copy.copy(self)
        twin.block = [row[:] for row in self.block]
        return twin

    @abstractmethod
    def fill_block(self) -> None:
        """Mark the cells and bounds for the current rotation state."""

    def reset_block(self) -> None:
        """Empty every cell of the block."""
        self.block = [[0] * self.size for _ in range(self.size)]

    def format(self) -> str:
        """Render the block as rows of space-separated values."""
        return "".join("".join(f"{v} " for v in row) + "\n" for row in self.block)

    def _place(self, cells: Iterable[tuple[int, int]], left: int, right: int, down: int) -> None:
        for row, col in cells:
            self.block[row][col] = self.id
        self.left_bound = left
        self.right_bound = right
        self.down_bound = down


class LPiece(Piece):
    id = 1

    def fill_block(self) -> None:
        state = self.rotation_state
        if state == 2:
            self._place([(0, 2), (1, 0), (1, 1), (1, 2)], 0, 2, 1)
        elif state == 3:
            self._place([(0, 0), (0, 1), (1, 1), (2, 1)], 0, 1, 2)
        elif state == 4:
            self._place([(0, 0), (0, 1), (0, 2), (1, 0)], 0, 2, 1)
        else:
            self._place([(0, 0), (1, 0), (2, 0), (2, 1)], 0, 1, 2)


class IPiece(Piece):
    id = 2

    def fill_block(self) -> None:
        state = self.rotation_state
        if state in (1, 3):
            self._place([(0, 1), (1, 1), (2, 1)], 1, 1, 2)
        elif state in (2, 4):
            self._place([(1, 0), (1, 1), (1, 2)], 1, 2, 1)


class ZPiece(Piece):
    id = 3

    def fill_block(self) -> None:
        state = self.rotation_state
        if state in (1, 3):
            self._place([(0, 0), (0, 1), (1, 1), (1, 2)], 0, 2, 1)
        elif state in (2, 4):
            self._place([(2, 0), (0, 1), (1, 1), (1, 0)], 0, 1, 2)


class SPiece(Piece):
    id = 4

    def fill_block(self) -> None:
        state = self.rotation_state
        if state in (1, 3):
            self._place([(0, 1), (0, 2), (1, 1), (1, 0)], 0, 2, 1)
        elif state in (2, 4):
            self._place([(0, 0), (1, 0), (1, 1), (2, 1)], 0, 1, 2)


class OPiece(Piece):
    id = 5

    def fill_block(self) -> None:
        self._place([(0, 0), (0, 1), (1, 0), (1, 1)], 0, 1, 1)


class TPiece(Piece):
    id = 6

    def fill_block(self) -> None:
        state = self.rotation_state
        if state == 2:
            self._place([(0, 0), (1, 0), (2, 0), (1, 1)], 0, 1, 2)
        elif state == 3:
            self._place([(2, 2), (2, 1), (2, 0), (1, 1)], 0, 2, 2)
        elif state == 4:
            self._place([(0, 2), (1, 2), (2, 2), (1, 1)], 1, 2, 2)
        else:
            self._place([(0, 0), (0, 1), (0, 2), (1, 1)], 0, 2, 1)


PIECE_TYPES: tuple[type[Piece], ...] = (LPiece, IPiece, ZPiece, SPiece, OPiece, TPiece)


def random_piece(rng: random.Random | None = None) -> Piece:
    """Return a new piece of a randomly chosen kind at the spawn position."""
    chooser = rng if rng is not None else random
    return PIECE_TYPES[chooser.randrange(len(PIECE_TYPES))]()