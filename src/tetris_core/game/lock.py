# src/tetris_core/game/lock.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tetris_core.game.board import Board
from tetris_core.game.events import LINES_CLEARED, PIECE_LOCKED, EventSink, sink_or_null
from tetris_core.game.pieceset import Shape


@dataclass(frozen=True)
class LockResult:
    """
    lines_cleared: number of rows removed by this lock (0..board height)
    cleared_rows: their indices in the post-merge board, top to bottom
    cells_written: occupied cells of the shape that landed inside the board
    """

    lines_cleared: int
    cleared_rows: Tuple[int, ...] = ()
    cells_written: int = 0


def merge_piece(board: Board, shape: Shape, col: int, row: int) -> int:
    """
    Write every in-bounds occupied cell of the shape into the board.
    Cells outside the board (e.g. above the top) are dropped silently.
    Returns the number of cells written.
    """
    written = 0
    for yy, xx, v in shape.occupied():
        x = col + xx
        y = row + yy
        if board.in_bounds(x, y):
            board.grid[y, x] = v
            written += 1
    return written


def get_completed_rows(board: Board) -> List[int]:
    return board.completed_rows()


def is_row_complete(board: Board, row: int) -> bool:
    return board.is_row_complete(row)


def has_completed_rows_in_range(board: Board, start_row: int, end_row: int) -> bool:
    return board.has_completed_rows_in_range(start_row, end_row)


def clear_lines(board: Board) -> int:
    """
    Remove every full row in one pass and compact the board downwards.

    Detection is a single snapshot of the current board: rows are never
    re-scanned after compaction.
    """
    return board.clear_full_lines()


def lock_piece(
        board: Board,
        shape: Shape,
        col: int,
        row: int,
        *,
        events: Optional[EventSink] = None,
) -> LockResult:
    """Merge the shape into the board (mutates it) and clear completed rows."""
    written = merge_piece(board, shape, col, row)
    full = board.completed_rows()
    cleared = board.remove_rows(full)

    sink = sink_or_null(events)
    sink.emit(PIECE_LOCKED, col=int(col), row=int(row), cells=written)
    if cleared > 0:
        sink.emit(LINES_CLEARED, count=cleared, rows=tuple(full))

    return LockResult(lines_cleared=cleared, cleared_rows=tuple(full), cells_written=written)


def line_clear_bonus(lines_cleared: int) -> int:
    """Score multiplier for simultaneous clears: single 1, double 3, triple 5, four 8."""
    return {1: 1, 2: 3, 3: 5, 4: 8}.get(int(lines_cleared), 0)


__all__ = [
    "LockResult",
    "merge_piece",
    "get_completed_rows",
    "is_row_complete",
    "has_completed_rows_in_range",
    "clear_lines",
    "lock_piece",
    "line_clear_bonus",
]
