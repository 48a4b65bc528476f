from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from tetris_core.game.constants import CLASSIC_NUM_PIECES
from tetris_core.game.errors import InvalidPieceKindError
from tetris_core.game.pieceset import (
    PieceKind,
    PieceSet,
    Shape,
    default_piece_set,
    get_bounds,
    get_shape_for_kind,
)


def test_classic_set_has_seven_4x4_tetrominoes() -> None:
    ps = default_piece_set()
    assert ps.kinds() == tuple(PieceKind)
    for kind in PieceKind:
        shape = ps.shape(kind)
        assert shape.size == 4
        assert shape.cell_count() == 4
        assert set(np.unique(shape.cells)) == {0, kind.board_id}


def test_get_shape_for_kind_accepts_index_and_name() -> None:
    assert get_shape_for_kind(0) == get_shape_for_kind(PieceKind.I)
    assert get_shape_for_kind("t") == get_shape_for_kind(PieceKind.T)


@pytest.mark.parametrize("bad", [-1, 7, 100, "X", None, True])
def test_get_shape_for_kind_rejects_unknown(bad: object) -> None:
    with pytest.raises(InvalidPieceKindError):
        get_shape_for_kind(bad)  # type: ignore[arg-type]


def test_invalid_index_message_names_the_range() -> None:
    with pytest.raises(InvalidPieceKindError, match="between 0 and 6"):
        PieceKind.coerce(9)


def test_shape_is_immutable() -> None:
    shape = get_shape_for_kind(PieceKind.O)
    assert not shape.cells.flags.writeable
    with pytest.raises(ValueError):
        shape.cells[0, 0] = 1


def test_shape_copies_its_input() -> None:
    raw = np.zeros((2, 2), dtype=np.int64)
    raw[0, 0] = 3
    shape = Shape(raw)
    raw[1, 1] = 3
    assert shape.cell_count() == 1


def test_shape_must_be_square() -> None:
    with pytest.raises(ValueError, match="square"):
        Shape.from_rows([[1, 1, 1]])


def test_shape_equality_and_hash() -> None:
    a = Shape.from_rows([[0, 1], [1, 1]])
    b = Shape.from_rows([[0, 1], [1, 1]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != Shape.from_rows([[1, 1], [1, 0]])


def test_get_bounds_of_i_piece() -> None:
    b = get_bounds(get_shape_for_kind(PieceKind.I))
    assert (b.min_row, b.max_row, b.min_col, b.max_col) == (1, 1, 0, 3)
    assert (b.width, b.height) == (4, 1)


def test_get_bounds_of_empty_shape() -> None:
    b = get_bounds(Shape(np.zeros((4, 4))))
    assert (b.min_row, b.max_row, b.min_col, b.max_col) == (4, -1, 4, -1)
    assert b.width == 0


def test_colors_follow_board_ids() -> None:
    ps = default_piece_set()
    assert ps.color_of(PieceKind.I) == (0, 255, 255)
    assert ps.color_of_board_id(PieceKind.L.board_id) == (255, 165, 0)
    assert ps.color_of_board_id(0) is None


def test_with_value_retags_cells() -> None:
    shape = get_shape_for_kind(PieceKind.S).with_value(9)
    assert set(np.unique(shape.cells)) == {0, 9}


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "pieces.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_from_yaml_rejects_missing_kinds(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        'pieces:\n  O:\n    shape: ["....", ".##.", ".##.", "...."]\n',
    )
    with pytest.raises(ValueError, match="missing kinds"):
        PieceSet.from_yaml(p)


def test_from_yaml_rejects_wrong_row_width(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        'pieces:\n  O:\n    shape: ["...", ".##.", ".##.", "...."]\n',
    )
    with pytest.raises(ValueError, match="length 4"):
        PieceSet.from_yaml(p)


def test_from_yaml_checks_expected_cells(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        'expected_cells: 4\npieces:\n  O:\n    shape: ["....", ".#..", "....", "...."]\n',
    )
    with pytest.raises(ValueError, match="expected 4 filled cells"):
        PieceSet.from_yaml(p)


def test_classic_piece_count_matches_kinds() -> None:
    assert len(PieceKind) == CLASSIC_NUM_PIECES
    with pytest.raises(InvalidPieceKindError, match="between 0 and 6"):
        PieceKind.coerce(CLASSIC_NUM_PIECES)
