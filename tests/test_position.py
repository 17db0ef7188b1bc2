import dataclasses

import pytest

from blockfall.position import Position


def test_fields_follow_column_then_row_order():
    pos = Position(4, 0)
    assert pos.col == 4
    assert pos.row == 0


def test_moved_adds_step_componentwise():
    assert Position(4, 0).moved(Position(0, 1)) == Position(4, 1)
    assert Position(4, 0).moved(Position(-1, 0)) == Position(3, 0)


def test_moved_leaves_original_unchanged():
    pos = Position(2, 3)
    pos.moved(Position(1, 1))
    assert pos == Position(2, 3)


def test_moved_by_zero_is_identity():
    pos = Position(7, 5)
    assert pos.moved(Position(0, 0)) == pos


def test_moves_compose():
    start = Position(1, 1)
    a, b = Position(2, -1), Position(-3, 4)
    assert start.moved(a).moved(b) == start.moved(b).moved(a)


def test_position_is_immutable():
    pos = Position(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        pos.col = 5
    assert pos.col == 1
    assert pos.moved(Position(0, 0)) == Position(1, 2)