# src/tetris_core/__init__.py
from .config import GameConfig, ScoreConfig
from .game import (
    Board,
    Direction,
    PieceKind,
    ScoreManager,
    Shape,
    TetrisGame,
    attempt_rotation,
    attempt_rotation_srs,
    get_shape_for_kind,
    is_position_valid,
    lock_piece,
    rotate_shape,
)

__all__ = [
    "Board",
    "Direction",
    "GameConfig",
    "PieceKind",
    "ScoreConfig",
    "ScoreManager",
    "Shape",
    "TetrisGame",
    "attempt_rotation",
    "attempt_rotation_srs",
    "get_shape_for_kind",
    "is_position_valid",
    "lock_piece",
    "rotate_shape",
]
