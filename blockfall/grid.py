"""The playing field: a matrix of cell values and its rendering."""

from __future__ import annotations

import pygame

from .pieces import Piece

CELL_COLORS: tuple[tuple[int, int, int, int], ...] = (
    (0, 0, 0, 255),        # empty
    (255, 64, 0, 255),     # red
    (0, 0, 255, 255),      # blue
    (255, 255, 0, 255),    # yellow
    (0, 255, 0, 255),      # light green
    (255, 255, 255, 255),  # white
    (255, 0, 102, 255),    # pink
    (153, 0, 204, 255),    # purple
    (255, 102, 0, 255),    # orange
    (0, 255, 255, 255),    # light blue
    (128, 255, 0, 255),    # green
    (0, 255, 255, 255),    # cyan
)


class Grid:
    """A rows-by-columns field of cell values; 0 means empty."""

    def __init__(self, num_rows: int, num_cols: int, cell_size: int) -> None:
        self.num_rows = num_rows
        self.num_cols = num_cols
        self.cell_size = cell_size
        self.left_margin = 0
        self.top_margin = 0
        self.cells: list[list[int]] = []
        self.initialize()

    def initialize(self) -> None:
        """Empty every cell."""
        self.cells = [[0] * self.num_cols for _ in range(self.num_rows)]

    def _piece_cells(self, piece: Piece):
        pos = piece.position
        for r, row in enumerate(piece.block):
            for c, value in enumerate(row):
                gr, gc = r + pos.row, c + pos.col
                if value > 0 and 0 <= gr < self.num_rows and 0 <= gc < self.num_cols:
                    yield gr, gc, value

    def add_piece(self, piece: Piece) -> None:
        """Write the piece's occupied cells into the grid."""
        for row, col, value in self._piece_cells(piece):
            self.cells[row][col] = value

    def erase_piece(self, piece: Piece) -> None:
        """Clear the cells the piece occupies."""
        for row, col, _ in self._piece_cells(piece):
            self.cells[row][col] = 0

    def format(self) -> str:
        """Render the values under a separator line."""
        lines = ["=" * 23]
        lines.extend("".join(f"{v} " for v in row) for row in self.cells)
        return "\n".join(lines) + "\n"

    def draw(self, surface: pygame.Surface) -> None:
        """Paint every cell as a square with a one-pixel gap."""
        size = self.cell_size
        for row, values in enumerate(self.cells):
            for col, value in enumerate(values):
                rect = pygame.Rect(
                    self.left_margin + col * size + 1,
                    self.top_margin + row * size + 1,
                    size - 1,
                    size - 1,
                )
                pygame.draw.rect(surface, CELL_COLORS[value], rect)

    def set_margins(self, left: int, top: int) -> None:
        """Set the drawing offset of the grid on the surface."""
        self.left_margin = left
        self.top_margin = top