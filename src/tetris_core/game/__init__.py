# src/tetris_core/game/__init__.py
from __future__ import annotations

from tetris_core.game.board import Board
from tetris_core.game.collision import (
    can_move_down,
    can_move_left,
    can_move_right,
    can_rotate,
    can_spawn,
    ghost_row,
    hard_drop_distance,
    is_position_valid,
    place_piece,
    spawn_position,
)
from tetris_core.game.errors import HoldUnavailableError, InvalidPieceKindError, TetrisCoreError
from tetris_core.game.events import EventSink, LoggingEventSink, NullEventSink, RecordingEventSink
from tetris_core.game.game import TetrisGame
from tetris_core.game.lock import (
    LockResult,
    get_completed_rows,
    has_completed_rows_in_range,
    is_row_complete,
    line_clear_bonus,
    lock_piece,
)
from tetris_core.game.piece_rules import BagPieceRule, NextHoldManager, UniformPieceRule
from tetris_core.game.pieceset import PieceKind, PieceSet, Shape, ShapeBounds, get_bounds, get_shape_for_kind
from tetris_core.game.rotation import (
    Direction,
    RotationResult,
    attempt_rotation,
    attempt_rotation_srs,
    can_rotate_at_all,
    rotate_180,
    rotate_shape,
    rotation_preview,
)
from tetris_core.game.rules import ScoreManager, ScoreState, drop_interval, soft_drop_interval
from tetris_core.game.types import Action, ActivePiece, State

__all__ = [
    "Board",
    "PieceKind",
    "PieceSet",
    "Shape",
    "ShapeBounds",
    "get_bounds",
    "get_shape_for_kind",
    "is_position_valid",
    "can_move_down",
    "can_move_left",
    "can_move_right",
    "can_rotate",
    "can_spawn",
    "ghost_row",
    "hard_drop_distance",
    "place_piece",
    "spawn_position",
    "Direction",
    "RotationResult",
    "rotate_shape",
    "rotate_180",
    "rotation_preview",
    "attempt_rotation",
    "attempt_rotation_srs",
    "can_rotate_at_all",
    "LockResult",
    "lock_piece",
    "get_completed_rows",
    "is_row_complete",
    "has_completed_rows_in_range",
    "line_clear_bonus",
    "ScoreManager",
    "ScoreState",
    "drop_interval",
    "soft_drop_interval",
    "BagPieceRule",
    "UniformPieceRule",
    "NextHoldManager",
    "TetrisGame",
    "Action",
    "ActivePiece",
    "State",
    "EventSink",
    "NullEventSink",
    "RecordingEventSink",
    "LoggingEventSink",
    "TetrisCoreError",
    "InvalidPieceKindError",
    "HoldUnavailableError",
]
