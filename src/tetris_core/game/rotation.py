# src/tetris_core/game/rotation.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np

from tetris_core.game.board import Board
from tetris_core.game.collision import is_position_valid
from tetris_core.game.events import ROTATION_FAILED, ROTATION_KICKED, EventSink, sink_or_null
from tetris_core.game.kicks import SIMPLE_KICKS, srs_kicks, transition_label
from tetris_core.game.pieceset import PieceKind, Shape


class Direction(Enum):
    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"

    @property
    def step(self) -> int:
        return 1 if self is Direction.CLOCKWISE else -1

    @classmethod
    def coerce(cls, direction: object) -> "Direction":
        if isinstance(direction, Direction):
            return direction
        s = str(direction).strip().lower()
        mapping = {
            "cw": cls.CLOCKWISE,
            "clockwise": cls.CLOCKWISE,
            "right": cls.CLOCKWISE,
            "ccw": cls.COUNTER_CLOCKWISE,
            "counterclockwise": cls.COUNTER_CLOCKWISE,
            "counter_clockwise": cls.COUNTER_CLOCKWISE,
            "left": cls.COUNTER_CLOCKWISE,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise ValueError(f"unknown rotation direction {direction!r}") from e


DirectionLike = Union[Direction, str]


@dataclass(frozen=True)
class RotationResult:
    """
    Outcome of a rotation attempt.

    On failure shape/col/row (and rotation, for SRS) are exactly the inputs.
    rotation is None for the simple rule, which does not track rotation state.
    """

    shape: Shape
    col: int
    row: int
    valid: bool
    rotation: Optional[int] = None


def rotate_shape(shape: Shape, direction: DirectionLike) -> Shape:
    """
    Exact quarter turn of an N x N shape.

    clockwise:         (i, j) -> (j, N-1-i)
    counter-clockwise: (i, j) -> (N-1-j, i)
    """
    d = Direction.coerce(direction)
    k = -1 if d is Direction.CLOCKWISE else 1
    return Shape(np.rot90(shape.cells, k=k))


def rotate_180(shape: Shape) -> Shape:
    return rotate_shape(rotate_shape(shape, Direction.CLOCKWISE), Direction.CLOCKWISE)


def rotation_preview(shape: Shape, direction: DirectionLike, times: int = 1) -> Shape:
    out = shape
    for _ in range(max(0, int(times))):
        out = rotate_shape(out, direction)
    return out


def attempt_rotation(
        board: Board,
        shape: Shape,
        col: int,
        row: int,
        direction: DirectionLike,
        *,
        kicks: Sequence[int] = SIMPLE_KICKS,
        events: Optional[EventSink] = None,
) -> RotationResult:
    """
    Rotate in place if possible, otherwise try horizontal kicks in order.
    First valid candidate wins; if none is valid the original placement is returned.
    """
    d = Direction.coerce(direction)
    rotated = rotate_shape(shape, d)

    if is_position_valid(board, rotated, col, row):
        return RotationResult(shape=rotated, col=col, row=row, valid=True)

    sink = sink_or_null(events)
    for kick in kicks:
        nc = col + int(kick)
        if is_position_valid(board, rotated, nc, row):
            sink.emit(ROTATION_KICKED, direction=d.value, d_col=int(kick), d_row=0)
            return RotationResult(shape=rotated, col=nc, row=row, valid=True)

    sink.emit(ROTATION_FAILED, direction=d.value, col=col, row=row)
    return RotationResult(shape=shape, col=col, row=row, valid=False)


def attempt_rotation_srs(
        board: Board,
        shape: Shape,
        col: int,
        row: int,
        direction: DirectionLike,
        rotation: int,
        *,
        kind: Union[PieceKind, int, str, None] = None,
        events: Optional[EventSink] = None,
) -> RotationResult:
    """
    SRS-style rotation: candidates come from the per-transition kick table
    (I-piece table for kind I, the JLSTZ table for everything else), tried in
    table order. Rotation state reverts together with shape and offset on failure.
    """
    cur = int(rotation)
    if cur < 0 or cur > 3:
        raise ValueError(f"rotation state must be in 0..3, got {rotation!r}")

    d = Direction.coerce(direction)
    nxt = (cur + d.step) % 4
    rotated = rotate_shape(shape, d)
    is_i = kind is not None and PieceKind.coerce(kind) is PieceKind.I

    sink = sink_or_null(events)
    for d_col, d_row in srs_kicks(cur, nxt, is_i_piece=is_i):
        nc = col + d_col
        nr = row + d_row
        if is_position_valid(board, rotated, nc, nr):
            if d_col or d_row:
                sink.emit(
                    ROTATION_KICKED,
                    direction=d.value,
                    transition=transition_label(cur, nxt),
                    d_col=d_col,
                    d_row=d_row,
                )
            return RotationResult(shape=rotated, col=nc, row=nr, valid=True, rotation=nxt)

    sink.emit(ROTATION_FAILED, direction=d.value, transition=transition_label(cur, nxt), col=col, row=row)
    return RotationResult(shape=shape, col=col, row=row, valid=False, rotation=cur)


def can_rotate_at_all(board: Board, shape: Shape, col: int, row: int) -> bool:
    """True if at least one direction succeeds under the simple kick rule."""
    if attempt_rotation(board, shape, col, row, Direction.CLOCKWISE).valid:
        return True
    return attempt_rotation(board, shape, col, row, Direction.COUNTER_CLOCKWISE).valid


__all__ = [
    "Direction",
    "DirectionLike",
    "RotationResult",
    "rotate_shape",
    "rotate_180",
    "rotation_preview",
    "attempt_rotation",
    "attempt_rotation_srs",
    "can_rotate_at_all",
]
