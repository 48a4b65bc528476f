from __future__ import annotations

import pytest

from tetris_core.game.board import Board
from tetris_core.game.pieceset import PieceKind, Shape, get_shape_for_kind
from tetris_core.game.rotation import Direction, rotate_shape


@pytest.fixture
def board() -> Board:
    return Board.empty(h=20, w=10)


@pytest.fixture
def square() -> Shape:
    return Shape.from_rows([[2, 2], [2, 2]])


@pytest.fixture
def vertical_i() -> Shape:
    # occupies frame column 2, rows 0..3
    return rotate_shape(get_shape_for_kind(PieceKind.I), Direction.CLOCKWISE)


@pytest.fixture
def bar() -> Shape:
    # 1 wide, 4 tall, in frame column 0
    return Shape.from_rows([[1, 0, 0, 0]] * 4)
