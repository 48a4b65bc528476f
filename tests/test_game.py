from __future__ import annotations

import numpy as np
import pytest

from tetris_core.config.game import GameConfig, RotationConfig
from tetris_core.game.events import LINES_CLEARED, SPAWN_BLOCKED, RecordingEventSink
from tetris_core.game.game import TetrisGame
from tetris_core.game.pieceset import PieceKind, get_shape_for_kind
from tetris_core.game.rotation import Direction, rotate_shape
from tetris_core.game.types import Action, ActivePiece


def _game(**cfg: object) -> tuple[TetrisGame, RecordingEventSink]:
    events = RecordingEventSink()
    game = TetrisGame(GameConfig(seed=3, **cfg), events=events)  # type: ignore[arg-type]
    game.reset()
    return game, events


def test_reset_spawns_at_top_centre() -> None:
    game, _ = _game()
    state = game.state()
    assert state.active is not None
    assert (state.active.col, state.active.row, state.active.rotation) == (3, 0, 0)
    assert state.active.shape == get_shape_for_kind(state.active.kind)
    assert len(state.next_kinds) == 5
    assert not state.game_over
    assert state.drop_interval == pytest.approx(1000.0)
    assert not state.grid.flags.writeable


def test_moves_and_failed_moves() -> None:
    game, _ = _game()
    assert game.active is not None
    start = game.active
    _, _, _, info = game.step("left")
    assert info["moved"]
    assert game.active.col == start.col - 1
    for _ in range(10):
        game.step(Action.LEFT)
    at_wall = game.active
    _, _, _, info = game.step(Action.LEFT)
    assert not info["moved"]
    assert game.active == at_wall


def test_rotation_tracks_state() -> None:
    game, _ = _game()
    _, _, _, info = game.step(Action.ROT_CW)
    assert info["rotated"]
    assert game.active is not None and game.active.rotation == 1
    game.step("ccw")
    assert game.active.rotation == 0


def test_simple_rotation_system() -> None:
    game, _ = _game(rotation=RotationConfig(system="simple"))
    game.step(Action.ROT_CCW)
    assert game.active is not None and game.active.rotation == 3


def test_hard_drop_locks_and_spawns_next() -> None:
    game, _ = _game()
    upcoming = game.queue.peek()[0]
    state, cleared, over, info = game.step(Action.HARD_DROP)
    assert cleared == 0 and not over
    assert info["locked"]
    assert info["drop_distance"] > 0
    assert int(np.count_nonzero(state.grid)) == 4
    assert state.active is not None and state.active.kind == upcoming


def test_tick_falls_then_locks() -> None:
    game, _ = _game()
    assert game.active is not None
    row = game.active.row
    game.tick()
    assert game.active.row == row + 1
    for _ in range(25):
        game.tick()
    assert game.board.grid.any()


def test_tetris_scores_through_the_engine() -> None:
    game, events = _game()
    game.board.grid[16:20, :9] = 2
    vertical_i = rotate_shape(get_shape_for_kind(PieceKind.I), Direction.CLOCKWISE)
    game.active = ActivePiece(kind=PieceKind.I, shape=vertical_i, col=7, row=0, rotation=1)

    state, cleared, over, _ = game.step(Action.HARD_DROP)

    assert cleared == 4
    assert not over
    assert state.score == 800
    assert state.lines == 4
    assert game.board.is_empty()
    assert LINES_CLEARED in events.names()


def test_blocked_spawn_ends_the_game() -> None:
    game, events = _game()
    game.board.grid[0:4, :9] = 1
    state, _, over, _ = game.step(Action.HARD_DROP)
    assert over and state.game_over
    assert SPAWN_BLOCKED in events.names()
    assert state.ghost_row is None
    assert game.step(Action.LEFT)[2] is True


def test_hold_through_the_engine() -> None:
    game, _ = _game()
    assert game.active is not None
    first = game.active.kind
    _, _, _, info = game.step("hold")
    assert info["held"]
    assert game.queue.held == first
    _, _, _, info = game.step("hold")
    assert not info["held"]


def test_unknown_action_is_rejected() -> None:
    game, _ = _game()
    with pytest.raises(ValueError, match="unknown action"):
        game.step("teleport")


def test_set_rng_reseeds_the_piece_stream() -> None:
    a = TetrisGame(GameConfig(seed=0))
    b = TetrisGame(GameConfig(seed=0))
    a.set_rng(np.random.default_rng(99))
    b.set_rng(np.random.default_rng(99))
    sa, sb = a.reset(), b.reset()
    assert sa.active is not None and sb.active is not None
    assert sa.active.kind == sb.active.kind
    assert sa.next_kinds == sb.next_kinds


def test_locking_without_an_active_piece_raises() -> None:
    game = TetrisGame(GameConfig(seed=1))
    assert game.active is None
    with pytest.raises(RuntimeError, match="no active piece"):
        game._lock_and_advance()
