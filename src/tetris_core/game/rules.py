# src/tetris_core/game/rules.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from tetris_core.config.game import ScoreConfig
from tetris_core.game.events import LEVEL_UP, EventSink, sink_or_null


@dataclass(frozen=True)
class ScoreState:
    score: int = 0
    level: int = 1
    total_lines_cleared: int = 0

    @classmethod
    def initial(cls, cfg: ScoreConfig) -> "ScoreState":
        return cls(score=int(cfg.initial_score), level=int(cfg.initial_level), total_lines_cleared=0)


def score_for_clears(cleared: int, cfg: ScoreConfig) -> int:
    if cleared <= 0:
        return 0
    return cfg.points_for(cleared)


def level_for_lines(total_lines: int, cfg: ScoreConfig) -> int:
    return int(cfg.initial_level) + int(total_lines) // int(cfg.lines_per_level)


def drop_interval(level: int, cfg: ScoreConfig) -> float:
    """Milliseconds between gravity steps at `level`, never below cfg.min_drop_interval."""
    raw = float(cfg.base_drop_interval) * float(cfg.decay_factor) ** (int(level) - 1)
    return max(float(cfg.min_drop_interval), raw)


def soft_drop_interval(level: int, cfg: ScoreConfig, multiplier: float = 20.0) -> float:
    """Gravity interval while soft drop is held: drop_interval / multiplier, same floor."""
    m = float(multiplier)
    if m <= 0.0:
        raise ValueError(f"soft drop multiplier must be > 0, got {multiplier!r}")
    return max(float(cfg.min_drop_interval), drop_interval(level, cfg) / m)


def clear_lines(state: ScoreState, count: int, cfg: ScoreConfig) -> ScoreState:
    """
    Pure transition for a lines-cleared event.

    Score and total lines never decrease; level is recomputed from cumulative
    lines, so it never decreases either.
    """
    n = int(count)
    if n < 0:
        raise ValueError(f"lines cleared must be >= 0, got {count!r}")
    total = state.total_lines_cleared + n
    return replace(
        state,
        score=state.score + score_for_clears(n, cfg),
        total_lines_cleared=total,
        level=max(state.level, level_for_lines(total, cfg)),
    )


class ScoreManager:
    """
    Stateful wrapper around clear_lines() for hosts that keep one score per game.
    """

    def __init__(self, cfg: Optional[ScoreConfig] = None, *, events: Optional[EventSink] = None) -> None:
        self.cfg = cfg or ScoreConfig()
        self.events = sink_or_null(events)
        self.state = ScoreState.initial(self.cfg)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def total_lines_cleared(self) -> int:
        return self.state.total_lines_cleared

    def clear_lines(self, count: int) -> ScoreState:
        before = self.state
        self.state = clear_lines(before, count, self.cfg)
        if self.state.level > before.level:
            self.events.emit(
                LEVEL_UP,
                level=self.state.level,
                total_lines=self.state.total_lines_cleared,
                drop_interval=self.get_drop_interval(),
            )
        return self.state

    def get_drop_interval(self) -> float:
        return drop_interval(self.state.level, self.cfg)

    def get_soft_drop_interval(self, multiplier: float = 20.0) -> float:
        return soft_drop_interval(self.state.level, self.cfg, multiplier)

    def reset(self) -> None:
        self.state = ScoreState.initial(self.cfg)


__all__ = [
    "ScoreState",
    "ScoreManager",
    "score_for_clears",
    "level_for_lines",
    "drop_interval",
    "soft_drop_interval",
    "clear_lines",
]
