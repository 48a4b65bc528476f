# src/tetris_core/game/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from tetris_core.game.constants import BOARD_HEIGHT, BOARD_WIDTH, CELL_DTYPE, EMPTY_CELL


@dataclass
class Board:
    """
    Locked-block occupancy grid.

    Contracts:
      - grid has shape (h, w) for the whole lifetime of the board.
      - 0 = empty, >=1 = color/board id of the piece that occupied the cell.
      - row 0 is the top row, row h-1 the bottom row.
      - mutation happens in place (grid identity never changes), so a host that
        holds a reference to board.grid always sees the current contents.
    """

    h: int
    w: int
    grid: np.ndarray

    def __post_init__(self) -> None:
        if int(self.h) <= 0 or int(self.w) <= 0:
            raise ValueError(f"board dimensions must be positive, got h={self.h} w={self.w}")
        g = np.asarray(self.grid, dtype=CELL_DTYPE)
        if g.shape != (int(self.h), int(self.w)):
            raise ValueError(f"grid shape {g.shape} does not match board ({self.h}, {self.w})")
        self.h, self.w = int(self.h), int(self.w)
        self.grid = g

    @classmethod
    def empty(cls, *, h: int = BOARD_HEIGHT, w: int = BOARD_WIDTH) -> "Board":
        return cls(h=int(h), w=int(w), grid=np.zeros((int(h), int(w)), dtype=CELL_DTYPE))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Board":
        grid = np.asarray([list(r) for r in rows], dtype=CELL_DTYPE)
        if grid.ndim != 2:
            raise ValueError("board rows must form a 2D grid")
        h, w = grid.shape
        return cls(h=int(h), w=int(w), grid=grid)

    def reset(self) -> None:
        self.grid.fill(EMPTY_CELL)

    def copy(self) -> "Board":
        return Board(h=self.h, w=self.w, grid=self.grid.copy())

    def snapshot(self) -> np.ndarray:
        """Read-only copy for handing the board to another thread or a renderer."""
        out = self.grid.copy()
        out.setflags(write=False)
        return out

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.w and 0 <= row < self.h

    # ---- row introspection ---------------------------------------------------------

    def is_row_complete(self, row: int) -> bool:
        if row < 0 or row >= self.h:
            return False
        return bool(np.all(self.grid[row] != EMPTY_CELL))

    def completed_rows(self) -> List[int]:
        """Indices of fully occupied rows, top to bottom."""
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        return [int(r) for r in np.flatnonzero(full)]

    def has_completed_rows_in_range(self, start_row: int, end_row: int) -> bool:
        """Inclusive range, clamped to the board."""
        start = max(0, int(start_row))
        end = min(self.h - 1, int(end_row))
        if start > end:
            return False
        return bool(np.any(np.all(self.grid[start : end + 1] != EMPTY_CELL, axis=1)))

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid != EMPTY_CELL))

    def is_range_empty(self, start_row: int, end_row: int) -> bool:
        """Inclusive range; rows past the bottom are ignored."""
        start = max(0, int(start_row))
        end = min(self.h - 1, int(end_row))
        if start > end:
            return True
        return not bool(np.any(self.grid[start : end + 1] != EMPTY_CELL))

    # ---- compaction ----------------------------------------------------------------

    def remove_rows(self, rows: Iterable[int]) -> int:
        """
        Remove the given rows and shift everything above them down.

        Single pass: surviving rows keep their relative order and the same number
        of empty rows is inserted at the top. Duplicate and out-of-range indices
        are ignored.
        """
        drop = np.zeros(self.h, dtype=bool)
        for r in rows:
            ri = int(r)
            if 0 <= ri < self.h:
                drop[ri] = True
        removed = int(drop.sum())
        if removed <= 0:
            return 0
        kept = self.grid[~drop].copy()
        self.grid[:removed] = EMPTY_CELL
        self.grid[removed:] = kept
        return removed

    def clear_full_lines(self) -> int:
        return self.remove_rows(self.completed_rows())

    def to_string(self) -> str:
        return "\n".join(
            " ".join("." if int(c) == EMPTY_CELL else str(int(c)) for c in row) for row in self.grid
        )


__all__ = ["Board"]
