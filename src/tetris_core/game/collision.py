# src/tetris_core/game/collision.py
from __future__ import annotations

from typing import Tuple

from tetris_core.game.board import Board
from tetris_core.game.constants import EMPTY_CELL
from tetris_core.game.pieceset import Shape


def is_position_valid(board: Board, shape: Shape, col: int, row: int) -> bool:
    """
    True iff every occupied cell of `shape`, placed with its top-left corner at
    (col, row), lands inside the board on an empty cell.

    Rows above the board (row < 0) are out of bounds exactly like rows below it.
    Pure: never touches board or shape.
    """
    m = shape.cells
    n = m.shape[0]
    grid = board.grid
    for yy in range(n):
        for xx in range(n):
            if m[yy, xx] == EMPTY_CELL:
                continue
            x = col + xx
            y = row + yy
            if x < 0 or x >= board.w or y < 0 or y >= board.h:
                return False
            if grid[y, x] != EMPTY_CELL:
                return False
    return True


def collides(board: Board, shape: Shape, col: int, row: int) -> bool:
    return not is_position_valid(board, shape, col, row)


def can_move_down(board: Board, shape: Shape, col: int, row: int) -> bool:
    return is_position_valid(board, shape, col, row + 1)


def can_move_left(board: Board, shape: Shape, col: int, row: int) -> bool:
    return is_position_valid(board, shape, col - 1, row)


def can_move_right(board: Board, shape: Shape, col: int, row: int) -> bool:
    return is_position_valid(board, shape, col + 1, row)


def can_rotate(board: Board, rotated: Shape, col: int, row: int) -> bool:
    """`rotated` is the already-rotated shape; no kicks are tried here."""
    return is_position_valid(board, rotated, col, row)


def ghost_row(board: Board, shape: Shape, col: int, row: int) -> int:
    """
    Lowest row the shape reaches by falling straight down from (col, row).
    Returns `row` unchanged when it cannot move down at all.
    """
    r = int(row)
    while is_position_valid(board, shape, col, r + 1):
        r += 1
    return r


def hard_drop_distance(board: Board, shape: Shape, col: int, row: int) -> int:
    return ghost_row(board, shape, col, row) - int(row)


def place_piece(board: Board, shape: Shape, col: int, row: int) -> bool:
    """
    Write the shape into the board only if the position is valid.
    Returns False (board untouched) otherwise. Does not clear lines.
    """
    if not is_position_valid(board, shape, col, row):
        return False
    for yy, xx, v in shape.occupied():
        board.grid[row + yy, col + xx] = v
    return True


def spawn_position(board: Board, shape: Shape) -> Tuple[int, int]:
    """
    Spawn column/row for a shape: the shared 4-wide frame is centred on the
    board (col = w // 2 - 2 for a 10-wide board), top row 0.
    """
    return (board.w // 2) - (shape.size // 2), 0


def can_spawn(board: Board, shape: Shape) -> bool:
    """False means the spawn area is blocked, i.e. the game is over."""
    col, row = spawn_position(board, shape)
    return is_position_valid(board, shape, col, row)


__all__ = [
    "is_position_valid",
    "collides",
    "can_move_down",
    "can_move_left",
    "can_move_right",
    "can_rotate",
    "ghost_row",
    "hard_drop_distance",
    "place_piece",
    "spawn_position",
    "can_spawn",
]
