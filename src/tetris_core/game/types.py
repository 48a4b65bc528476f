# src/tetris_core/game/types.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

from tetris_core.game.pieceset import PieceKind, Shape


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()
    ROT_CW = auto()
    ROT_CCW = auto()
    HOLD = auto()


@dataclass(frozen=True)
class ActivePiece:
    """
    The falling piece. shape already reflects the rotation; rotation is the
    SRS state index (0=spawn, 1=R, 2=180, 3=L).
    """

    kind: PieceKind
    shape: Shape
    col: int
    row: int
    rotation: int = 0

    def moved(self, d_col: int, d_row: int) -> "ActivePiece":
        return replace(self, col=self.col + int(d_col), row=self.row + int(d_row))


@dataclass(frozen=True)
class State:
    """
    Render-facing snapshot.

    grid is a read-only copy of the LOCKED board (no active overlay); the
    renderer draws the active piece and ghost itself.
    """

    grid: np.ndarray
    score: int
    lines: int
    level: int
    game_over: bool
    drop_interval: float

    active: Optional[ActivePiece]
    ghost_row: Optional[int]
    next_kinds: Tuple[PieceKind, ...]
    held_kind: Optional[PieceKind]
    can_hold: bool


__all__ = ["Action", "ActivePiece", "State"]
