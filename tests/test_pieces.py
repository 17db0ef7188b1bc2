import random

import pytest

from blockfall.pieces import (
    PIECE_TYPES,
    IPiece,
    LPiece,
    OPiece,
    Piece,
    SPiece,
    TPiece,
    ZPiece,
    random_piece,
)
from blockfall.position import Position


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value


def _filled(piece):
    return {
        (r, c)
        for r, row in enumerate(piece.block)
        for c, value in enumerate(row)
        if value
    }


def _piece_at(index, state):
    piece = random_piece(_FixedRng(index))
    piece.rotation_state = state
    return piece


def test_base_piece_is_abstract():
    with pytest.raises(TypeError):
        Piece()


def test_ids_follow_source_numbering():
    ids = [random_piece(_FixedRng(index)).id for index in range(6)]
    assert ids == [1, 2, 3, 4, 5, 6]


def test_new_piece_starts_at_spawn_with_rotation_one():
    piece = TPiece()
    assert piece.position == Position(4, 0)
    assert piece.rotation_state == 1
    assert piece.size == 3


def test_l_piece_default_block():
    assert LPiece().block == [[1, 0, 0], [1, 0, 0], [1, 1, 0]]


def test_t_piece_default_block():
    assert TPiece().block == [[6, 6, 6], [0, 6, 0], [0, 0, 0]]


@pytest.mark.parametrize("index", range(6))
@pytest.mark.parametrize("state", [1, 2, 3, 4])
def test_filled_cells_carry_piece_id(index, state):
    piece = _piece_at(index, state)
    values = {v for row in piece.block for v in row if v}
    assert values == {index + 1}


@pytest.mark.parametrize("index", range(6))
@pytest.mark.parametrize("state", [1, 2, 3, 4])
def test_cell_counts(index, state):
    piece = _piece_at(index, state)
    expected = 3 if index == 1 else 4
    assert len(_filled(piece)) == expected


@pytest.mark.parametrize("index", range(6))
@pytest.mark.parametrize("state", [1, 2, 3, 4])
def test_right_and_down_bounds_match_cells(index, state):
    piece = _piece_at(index, state)
    cells = _filled(piece)
    assert piece.right_bound == max(c for _, c in cells)
    assert piece.down_bound == max(r for r, _ in cells)
    assert piece.left_bound <= min(c for _, c in cells)


def test_o_piece_same_in_every_rotation():
    piece = OPiece()
    first = [row[:] for row in piece.block]
    for state in (2, 3, 4):
        piece.rotation_state = state
        assert piece.block == first


@pytest.mark.parametrize("cls", [IPiece, ZPiece, SPiece])
def test_two_state_pieces_repeat_after_half_turn(cls):
    a, b = cls(), cls()
    b.rotation_state = 3
    assert a.block == b.block
    a.rotation_state = 2
    b.rotation_state = 4
    assert a.block == b.block


def test_rotation_changes_block():
    piece = LPiece()
    before = [row[:] for row in piece.block]
    piece.rotation_state = 2
    assert piece.block != before
    piece.rotation_state = 1
    assert piece.block == before


def test_out_of_range_rotation_empties_two_state_piece():
    piece = IPiece()
    piece.rotation_state = 0
    assert _filled(piece) == set()


def test_clone_is_independent():
    piece = ZPiece()
    piece.position = Position(2, 5)
    twin = piece.clone()
    assert type(twin) is ZPiece
    assert twin.block == piece.block
    assert twin.position == Position(2, 5)
    twin.rotation_state = 2
    twin.position = Position(0, 0)
    assert piece.rotation_state == 1
    assert piece.position == Position(2, 5)
    assert piece.block != twin.block


def test_format_lists_rows():
    text = OPiece().format()
    assert text.splitlines() == ["5 5 0 ", "5 5 0 ", "0 0 0 "]


def test_random_piece_uses_given_rng():
    kinds = [type(random_piece(_FixedRng(index))).__name__ for index in range(6)]
    assert kinds == [cls.__name__ for cls in PIECE_TYPES]
    assert random_piece(_FixedRng(0)).block == [[1, 0, 0], [1, 0, 0], [1, 1, 0]]
    assert random_piece(_FixedRng(5)).block == [[6, 6, 6], [0, 6, 0], [0, 0, 0]]


def test_random_piece_is_reproducible_with_seed():
    kinds_a = [type(random_piece(r)) for r in [random.Random(7)] * 20]
    rng = random.Random(7)
    kinds_b = [type(random_piece(rng)) for _ in range(20)]
    assert kinds_a == kinds_b
    assert set(kinds_b) <= set(PIECE_TYPES)