# src/tetris_core/game/errors.py
from __future__ import annotations


class TetrisCoreError(Exception):
    """Base class for errors raised by the rules engine."""


class InvalidPieceKindError(TetrisCoreError, ValueError):
    """A piece kind outside the classic seven was requested."""


class HoldUnavailableError(TetrisCoreError, RuntimeError):
    """Hold is disabled or was already used for the current piece."""


__all__ = ["TetrisCoreError", "InvalidPieceKindError", "HoldUnavailableError"]
