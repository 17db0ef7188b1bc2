"""Game rules: falling pieces, collisions, line clearing and scoring."""

from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum, auto
from typing import Protocol

import pygame

from .grid import Grid
from .pieces import SPAWN_POSITION, OPiece, Piece, random_piece
from .position import Position

ROTATE_SOUND = "rotate"
LINE_SOUND = "line"
GAME_OVER_SOUND = "game_over"
MUSIC = "music"

NEXT_PIECE_POSITION = Position(1, 1)

STEP_RIGHT = Position(1, 0)
STEP_LEFT = Position(-1, 0)
STEP_DOWN = Position(0, 1)
STEP_DOWN_FAST = Position(0, 2)

POINTS_PER_PIECE = 2
POINTS_PER_LINE = 100

TEXT_COLOR = (255, 255, 255)

FontProvider = Callable[[int], "pygame.font.Font"]


class Key(Enum):
    """Commands a player can give with a single key press."""

    ROTATE = auto()
    LEFT = auto()
    RIGHT = auto()
    RESTART = auto()


class SoundPlayer(Protocol):
    def play(self, name: str) -> None:
        """Play the sound or music registered under ``name``."""


class _Silence:
    def play(self, name: str) -> None:
        pass


class Game(ABC):
    """A game driven by a loop of input, update and draw."""

    @abstractmethod
    def input(self, pressed_key: Key | None, down_held: bool) -> None:
        """Take the key pressed this frame and whether 'down' is held."""

    @abstractmethod
    def update(self) -> None:
        """Advance the game logic by one step."""

    @abstractmethod
    def draw(self, surface: pygame.Surface, font: FontProvider) -> None:
        """Render the game onto ``surface``."""


class Tetris(Game):
    """Falling-block puzzle on a grid, with a preview of the next piece."""

    def __init__(
        self,
        num_rows: int = 20,
        num_cols: int = 10,
        cell_size: int = 30,
        rng: random.Random | None = None,
        sounds: SoundPlayer | None = None,
        line_clear_delay: float = 0.75,
    ) -> None:
        self.num_rows = num_rows
        self.num_cols = num_cols
        self.cell_size = cell_size
        self.rng = rng if rng is not None else random.Random()
        self.sounds: SoundPlayer = sounds if sounds is not None else _Silence()
        self.line_clear_delay = line_clear_delay

        self.grid = Grid(num_rows, num_cols, cell_size)
        self.grid.set_margins(140, 10)
        self.next_piece_grid = Grid(4, 4, 20)
        self.next_piece_grid.set_margins(25, 50)

        self.piece: Piece = random_piece(self.rng)
        self._rot_stat = self.piece.rotation_state

        self.next_piece: Piece = random_piece(self.rng)
        self.next_piece.position = NEXT_PIECE_POSITION
        self.next_piece_grid.add_piece(self.next_piece)

        self.score = 0
        self.game_over = False
        self._move_left = False
        self._move_right = False
        self._move_down = False
        self._rotate = False
        self._piece_arrived = False

    def input(self, pressed_key: Key | None, down_held: bool = False) -> None:
        """Record the requested moves for the next update."""
        if pressed_key is Key.ROTATE:
            self._rotate = True
        if pressed_key is Key.RIGHT:
            self._move_right = True
        if pressed_key is Key.LEFT:
            self._move_left = True
        if down_held:
            self._move_down = True
        if self.game_over and pressed_key is Key.RESTART:
            self.game_over = False
            self.restart()

    def update(self) -> None:
        """Drop the piece one row, apply requested moves and clear lines."""
        if self._piece_arrived:
            self._piece_arrived = False
            if not self.game_over:
                self._spawn_next_piece()
        else:
            self.grid.erase_piece(self.piece)
            self.move_piece(STEP_DOWN)

        if self._rotate:
            self._rotate = False
            self.rotate_piece()
        if self._move_left:
            self._move_left = False
            self.move_piece(STEP_LEFT)
        if self._move_right:
            self._move_right = False
            self.move_piece(STEP_RIGHT)
        if self._move_down:
            self._move_down = False
            self.move_piece(STEP_DOWN_FAST)

        self.score += POINTS_PER_LINE * self.delete_full_lines(self.grid)

        if self.piece_arrived():
            self._piece_arrived = True

        self.grid.add_piece(self.piece)
        self.next_piece_grid.add_piece(self.next_piece)

    def _spawn_next_piece(self) -> None:
        self.score += POINTS_PER_PIECE
        self.piece = self.next_piece.clone()
        self.piece.position = SPAWN_POSITION

        self.next_piece_grid.erase_piece(self.next_piece)
        self.next_piece = random_piece(self.rng)
        self.next_piece.position = NEXT_PIECE_POSITION

        if self.check_collision(self.piece):
            self.game_over = True
            self.sounds.play(GAME_OVER_SOUND)

    def draw(self, surface: pygame.Surface, font: FontProvider) -> None:
        """Draw both grids and the text panel; ``font`` maps a size to a font."""
        self.grid.draw(surface)
        self.next_piece_grid.draw(surface)
        for text, position, size in self._text_lines():
            surface.blit(font(size).render(text, True, TEXT_COLOR), position)

    def _text_lines(self) -> list[tuple[str, tuple[int, int], int]]:
        lines = [
            ("Score :", (30, 165), 25),
            (" Next piece ", (15, 15), 25),
            (str(self.score), (30, 190), 25),
            ("Press [R] to rotate", (7, 540), 14),
            ("Press [N] to restart", (7, 560), 14),
            ("Press [Arrows] to move", (7, 580), 14),
        ]
        if self.game_over:
            lines += [
                ("Game Over", (20, 300), 29),
                ("Press [N]", (30, 350), 22),
                ("to restart", (30, 390), 20),
            ]
        return lines

    def move_piece(self, step: Position) -> None:
        """Shift the current piece by ``step`` unless it would collide."""
        if self.game_over:
            return
        new_pos = self.piece.position.moved(step)
        candidate = self.piece.clone()
        candidate.position = new_pos
        if not self.check_collision(candidate) and not self.check_boundaries(new_pos):
            self.piece.position = new_pos

    def rotate_piece(self) -> None:
        """Turn the current piece a quarter turn if there is room."""
        if self.game_over or isinstance(self.piece, OPiece):
            return
        self._rot_stat = self._rot_stat % 4 + 1
        candidate = self.piece.clone()
        candidate.rotation_state = self._rot_stat
        if not self.check_collision(candidate) and not self.check_boundaries(candidate.position):
            self.piece.rotation_state = self._rot_stat
            self.sounds.play(ROTATE_SOUND)

    def check_boundaries(self, new_pos: Position) -> bool:
        """Return True if the current piece at ``new_pos`` leaves the grid."""
        piece = self.piece
        return (
            new_pos.row + piece.down_bound + 1 > self.grid.num_rows
            or new_pos.row < 0
            or new_pos.col + piece.right_bound + 1 > self.grid.num_cols
            or new_pos.col + piece.left_bound < 0
        )

    def check_collision(self, piece: Piece) -> bool:
        """Return True if an occupied cell of ``piece`` overlaps the grid's."""
        pos = piece.position
        cells = self.grid.cells
        for r, row in enumerate(piece.block):
            grid_row = r + pos.row
            if not 0 <= grid_row < self.num_rows:
                continue
            for c, value in enumerate(row):
                grid_col = c + pos.col
                if 0 <= grid_col < self.num_cols and value and cells[grid_row][grid_col]:
                    return True
        return False

    def delete_full_lines(self, grid: Grid) -> int:
        """Remove full lines, shifting the rows above down; return how many."""
        first = self.first_non_empty_line(grid)
        if first is None:
            return 0
        deleted = 0
        for index in range(grid.num_rows):
            if not self.is_line_full(grid, index):
                continue
            if self.line_clear_delay > 0:
                time.sleep(self.line_clear_delay)
            deleted += 1
            self.sounds.play(LINE_SOUND)
            if index != 0:
                self._shift_down(grid, first, index)
        return deleted

    @staticmethod
    def _shift_down(grid: Grid, first: int, index: int) -> None:
        for row in range(index, max(first, 1) - 1, -1):
            grid.cells[row] = grid.cells[row - 1][:]
        if first == 0:
            grid.cells[0] = [0] * grid.num_cols

    def first_non_empty_line(self, grid: Grid) -> int | None:
        """Return the index of the topmost row holding a block, or None."""
        return next((i for i, row in enumerate(grid.cells) if any(row)), None)

    def is_line_full(self, grid: Grid, line_index: int) -> bool:
        """Return True if every cell of the row is occupied."""
        return all(grid.cells[line_index])

    def piece_arrived(self) -> bool:
        """Return True if the current piece cannot drop any further."""
        new_pos = self.piece.position.moved(STEP_DOWN)
        candidate = self.piece.clone()
        candidate.position = new_pos
        return self.check_boundaries(new_pos) or self.check_collision(candidate)

    def restart(self) -> None:
        """Empty the grid and start the music again."""
        self.grid.initialize()
        self.sounds.play(MUSIC)