"""Cell coordinates on a playing grid."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A column/row location; rows grow downwards."""

    col: int
    row: int

    def moved(self, step: Position) -> Position:
        """Return this position shifted by ``step``."""
        return Position(self.col + step.col, self.row + step.row)