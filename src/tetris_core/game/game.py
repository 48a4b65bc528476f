# src/tetris_core/game/game.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np

from tetris_core.config.game import GameConfig
from tetris_core.game.board import Board
from tetris_core.game.collision import ghost_row, is_position_valid, spawn_position
from tetris_core.game.events import SPAWN_BLOCKED, EventSink, sink_or_null
from tetris_core.game.lock import lock_piece
from tetris_core.game.piece_rules import NextHoldManager, make_piece_rule
from tetris_core.game.pieceset import PieceKind, PieceSet, default_piece_set
from tetris_core.game.rotation import Direction, attempt_rotation, attempt_rotation_srs
from tetris_core.game.rules import ScoreManager
from tetris_core.game.types import Action, ActivePiece, State


class TetrisGame:
    """
    Step-driven engine wiring board, catalog, collision, rotation, lock and scoring.

    Contracts:

      - No timers: the host calls tick() every state.drop_interval milliseconds
        and step() for each input event.
      - board.grid is the authoritative LOCKED board; State.grid is a read-only copy.
      - step()/tick() return cleared_lines (0..height) for this call as an event metric.
      - A blocked spawn ends the game (game_over=True); it is not an exception.
      - Failed moves/rotations leave the active piece untouched.
    """

    def __init__(
            self,
            config: Optional[GameConfig] = None,
            *,
            piece_set: Optional[PieceSet] = None,
            rng: Optional[np.random.Generator] = None,
            events: Optional[EventSink] = None,
    ) -> None:
        self.cfg = config or GameConfig()
        self.pieces = piece_set or default_piece_set()
        self.events = sink_or_null(events)

        self._rng: np.random.Generator = rng if rng is not None else np.random.default_rng(self.cfg.seed)

        self.board = Board.empty(h=self.cfg.board.height, w=self.cfg.board.width)
        self.scoring = ScoreManager(self.cfg.score, events=self.events)
        self.queue = NextHoldManager(
            rule=make_piece_rule(self.cfg.piece_rule),
            rng=self._rng,
            queue_size=self.cfg.next_queue_size,
            enable_hold=self.cfg.enable_hold,
            events=self.events,
        )

        self.active: Optional[ActivePiece] = None
        self.game_over = False

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng
        self.queue.rng = rng

    def reset(self) -> State:
        self.board.reset()
        self.scoring.reset()
        self.queue.reset()
        self.game_over = False
        self.active = None
        self._spawn(self.queue.next_piece())
        return self.state()

    def step(self, action: Any) -> Tuple[State, int, bool, Dict[str, object]]:
        """
        Apply one input and return (state, cleared_lines, game_over, info).
        """
        if self.game_over or self.active is None:
            return self.state(), 0, True, {}

        a = self._normalize_action(action)
        cleared_lines = 0
        info: Dict[str, object] = {}

        if a == Action.LEFT:
            info["moved"] = self._try_move(d_col=-1, d_row=0)
        elif a == Action.RIGHT:
            info["moved"] = self._try_move(d_col=+1, d_row=0)
        elif a == Action.SOFT_DROP:
            if not self._try_move(d_col=0, d_row=+1):
                cleared_lines = self._lock_and_advance()
                info["locked"] = True
        elif a == Action.HARD_DROP:
            ap = self.active
            target = ghost_row(self.board, ap.shape, ap.col, ap.row)
            info["drop_distance"] = target - ap.row
            self.active = ap.moved(0, target - ap.row)
            cleared_lines = self._lock_and_advance()
            info["locked"] = True
        elif a == Action.ROT_CW:
            info["rotated"] = self._rotate(Direction.CLOCKWISE)
        elif a == Action.ROT_CCW:
            info["rotated"] = self._rotate(Direction.COUNTER_CLOCKWISE)
        elif a == Action.HOLD:
            info["held"] = self._hold()

        return self.state(), int(cleared_lines), bool(self.game_over), info

    def tick(self) -> Tuple[State, int, bool]:
        """One gravity step: fall one row, or lock when resting."""
        state, cleared, over, _ = self.step(Action.SOFT_DROP)
        return state, cleared, over

    def state(self) -> State:
        ap = self.active
        ghost = None
        if ap is not None and not self.game_over:
            ghost = ghost_row(self.board, ap.shape, ap.col, ap.row)
        return State(
            grid=self.board.snapshot(),
            score=self.scoring.score,
            lines=self.scoring.total_lines_cleared,
            level=self.scoring.level,
            game_over=self.game_over,
            drop_interval=self.scoring.get_drop_interval(),
            active=ap,
            ghost_row=ghost,
            next_kinds=self.queue.peek(),
            held_kind=self.queue.held,
            can_hold=self.queue.can_hold() and not self.game_over,
        )

    # ---- internals -----------------------------------------------------------------

    def _normalize_action(self, action: Any) -> Action:
        if isinstance(action, Action):
            return action
        s = str(action).strip().lower()
        mapping = {
            "left": Action.LEFT,
            "right": Action.RIGHT,
            "soft_drop": Action.SOFT_DROP,
            "down": Action.SOFT_DROP,
            "hard_drop": Action.HARD_DROP,
            "drop": Action.HARD_DROP,
            "rot_cw": Action.ROT_CW,
            "rotate_cw": Action.ROT_CW,
            "cw": Action.ROT_CW,
            "rot_ccw": Action.ROT_CCW,
            "rotate_ccw": Action.ROT_CCW,
            "ccw": Action.ROT_CCW,
            "hold": Action.HOLD,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise ValueError(f"unknown action {action!r}") from e

    def _spawn(self, kind: PieceKind) -> None:
        shape = self.pieces.shape(kind)
        col, row = spawn_position(self.board, shape)
        self.active = ActivePiece(kind=kind, shape=shape, col=col, row=row, rotation=0)
        if not is_position_valid(self.board, shape, col, row):
            self.game_over = True
            self.events.emit(SPAWN_BLOCKED, kind=kind.name, col=col, row=row)

    def _try_move(self, *, d_col: int, d_row: int) -> bool:
        ap = self.active
        if ap is None:
            return False
        if not is_position_valid(self.board, ap.shape, ap.col + d_col, ap.row + d_row):
            return False
        self.active = ap.moved(d_col, d_row)
        return True

    def _rotate(self, direction: Direction) -> bool:
        ap = self.active
        if ap is None:
            return False
        if self.cfg.rotation.system == "srs":
            res = attempt_rotation_srs(
                self.board, ap.shape, ap.col, ap.row, direction, ap.rotation, kind=ap.kind, events=self.events
            )
            rotation = int(res.rotation if res.rotation is not None else ap.rotation)
        else:
            res = attempt_rotation(self.board, ap.shape, ap.col, ap.row, direction, events=self.events)
            rotation = (ap.rotation + direction.step) % 4 if res.valid else ap.rotation
        if not res.valid:
            return False
        self.active = ActivePiece(kind=ap.kind, shape=res.shape, col=res.col, row=res.row, rotation=rotation)
        return True

    def _hold(self) -> bool:
        ap = self.active
        if ap is None or not self.queue.can_hold():
            return False
        self._spawn(self.queue.hold(ap.kind))
        return True

    def _lock_and_advance(self) -> int:
        ap = self.active
        if ap is None:
            raise RuntimeError("no active piece to lock")
        result = lock_piece(self.board, ap.shape, ap.col, ap.row, events=self.events)
        self.scoring.clear_lines(result.lines_cleared)
        self.active = None
        self._spawn(self.queue.next_piece())
        return int(result.lines_cleared)


__all__ = ["TetrisGame"]
