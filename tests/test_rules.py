from __future__ import annotations

import pytest

from tetris_core.config.game import ScoreConfig
from tetris_core.game.events import LEVEL_UP, RecordingEventSink
from tetris_core.game.rules import (
    ScoreManager,
    ScoreState,
    clear_lines,
    drop_interval,
    level_for_lines,
    score_for_clears,
    soft_drop_interval,
)


def test_default_table_is_convex() -> None:
    cfg = ScoreConfig()
    assert score_for_clears(4, cfg) > 4 * score_for_clears(1, cfg)
    assert [score_for_clears(n, cfg) for n in range(5)] == [0, 100, 300, 500, 800]


def test_counts_missing_from_the_table_score_nothing() -> None:
    state = clear_lines(ScoreState(), 5, ScoreConfig())
    assert state.score == 0
    assert state.total_lines_cleared == 5


def test_level_follows_cumulative_lines() -> None:
    cfg = ScoreConfig()
    assert level_for_lines(0, cfg) == 1
    assert level_for_lines(9, cfg) == 1
    assert level_for_lines(10, cfg) == 2
    assert level_for_lines(35, cfg) == 4


def test_drop_interval_decays_and_floors() -> None:
    cfg = ScoreConfig()
    assert drop_interval(1, cfg) == pytest.approx(1000.0)
    assert drop_interval(2, cfg) == pytest.approx(900.0)
    assert drop_interval(3, cfg) == pytest.approx(810.0)
    assert drop_interval(200, cfg) == pytest.approx(50.0)
    intervals = [drop_interval(level, cfg) for level in range(1, 40)]
    assert all(b <= a for a, b in zip(intervals, intervals[1:]))


def test_clear_lines_is_monotonic() -> None:
    cfg = ScoreConfig()
    state = ScoreState.initial(cfg)
    for count in [0, 1, 4, 0, 2, 3, 1, 4, 4, 0, 1]:
        nxt = clear_lines(state, count, cfg)
        assert nxt.score >= state.score
        assert nxt.total_lines_cleared >= state.total_lines_cleared
        assert nxt.level >= state.level
        state = nxt
    assert state.total_lines_cleared == 20
    assert state.level == 3


def test_clear_lines_rejects_negative_counts() -> None:
    with pytest.raises(ValueError, match=">= 0"):
        clear_lines(ScoreState(), -1, ScoreConfig())


def test_custom_config() -> None:
    cfg = ScoreConfig(
        initial_score=50,
        score_table={1: 40, 2: 100, 3: 300, 4: 1200},
        initial_level=3,
        lines_per_level=5,
    )
    mgr = ScoreManager(cfg)
    assert (mgr.score, mgr.level) == (50, 3)
    mgr.clear_lines(4)
    mgr.clear_lines(1)
    assert mgr.score == 50 + 1200 + 40
    assert mgr.level == 4
    assert mgr.get_drop_interval() == pytest.approx(1000.0 * 0.9 ** 3)


def test_manager_emits_level_up_and_resets() -> None:
    events = RecordingEventSink()
    mgr = ScoreManager(events=events)
    for _ in range(3):
        mgr.clear_lines(4)
    assert mgr.level == 2
    assert events.names() == [LEVEL_UP]
    _, payload = events.events[0]
    assert payload["level"] == 2
    assert payload["drop_interval"] == pytest.approx(900.0)

    mgr.reset()
    assert (mgr.score, mgr.level, mgr.total_lines_cleared) == (0, 1, 0)


def test_soft_drop_interval_divides_and_floors() -> None:
    cfg = ScoreConfig()
    assert soft_drop_interval(1, cfg) == pytest.approx(50.0)
    assert soft_drop_interval(1, cfg, multiplier=10) == pytest.approx(100.0)
    assert soft_drop_interval(2, cfg, multiplier=2) == pytest.approx(450.0)
    assert soft_drop_interval(30, cfg, multiplier=2) == pytest.approx(50.0)
    mgr = ScoreManager(cfg)
    assert mgr.get_soft_drop_interval(4) == pytest.approx(250.0)
    with pytest.raises(ValueError, match="multiplier must be > 0"):
        soft_drop_interval(1, cfg, multiplier=0)
