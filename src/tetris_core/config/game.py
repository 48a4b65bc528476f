# src/tetris_core/config/game.py
from __future__ import annotations

from typing import Dict, Literal

from pydantic import Field, field_validator, model_validator

from tetris_core.config.base import ConfigBase

PieceRuleName = Literal["uniform", "bag7"]
RotationSystem = Literal["simple", "srs"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise TypeError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise TypeError(f"{where} must be an int-like value, got {value!r}") from e


class BoardConfig(ConfigBase):
    width: int = Field(default=10, ge=1)
    height: int = Field(default=20, ge=1)


class ScoreConfig(ConfigBase):
    """
    Scoring and pacing.

    level = initial_level + total_lines // lines_per_level
    drop interval (ms) = max(min_drop_interval, base_drop_interval * decay_factor ** (level - 1))
    """

    initial_score: int = Field(default=0, ge=0)
    score_table: Dict[int, int] = Field(default_factory=lambda: {1: 100, 2: 300, 3: 500, 4: 800})
    initial_level: int = Field(default=1, ge=1)
    lines_per_level: int = Field(default=10, ge=1)
    base_drop_interval: float = Field(default=1000.0, gt=0.0)
    decay_factor: float = Field(default=0.9, gt=0.0, lt=1.0)
    min_drop_interval: float = Field(default=50.0, gt=0.0)

    @field_validator("score_table", mode="before")
    @classmethod
    def _score_table_int_keys(cls, v: object) -> object:
        if not isinstance(v, dict):
            return v
        return {_as_int(k, where="score.score_table key"): val for k, val in v.items()}

    @field_validator("score_table")
    @classmethod
    def _score_table_values(cls, v: Dict[int, int]) -> Dict[int, int]:
        for lines, points in v.items():
            if lines <= 0:
                raise ValueError(f"score_table keys must be >= 1 (lines cleared), got {lines}")
            if points < 0:
                raise ValueError(f"score_table values must be >= 0, got {points} for {lines} lines")
        return v

    @model_validator(mode="after")
    def _min_interval_below_base(self) -> "ScoreConfig":
        if self.min_drop_interval > self.base_drop_interval:
            raise ValueError(
                f"min_drop_interval ({self.min_drop_interval}) must not exceed "
                f"base_drop_interval ({self.base_drop_interval})"
            )
        return self

    def points_for(self, lines: int) -> int:
        return int(self.score_table.get(int(lines), 0))


class RotationConfig(ConfigBase):
    system: RotationSystem = "srs"

    @field_validator("system", mode="before")
    @classmethod
    def _system_lower(cls, v: object) -> str:
        return str(v).strip().lower()


class GameConfig(ConfigBase):
    """
    Engine-facing config for TetrisGame.

    Host concerns (frame rate, key repeat, rendering) do not belong here.
    """

    seed: int = Field(default=12345, ge=0)
    piece_rule: PieceRuleName = "bag7"
    next_queue_size: int = Field(default=5, ge=1)
    enable_hold: bool = True
    board: BoardConfig = Field(default_factory=BoardConfig)
    score: ScoreConfig = Field(default_factory=ScoreConfig)
    rotation: RotationConfig = Field(default_factory=RotationConfig)

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> int:
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()


__all__ = [
    "PieceRuleName",
    "RotationSystem",
    "BoardConfig",
    "ScoreConfig",
    "RotationConfig",
    "GameConfig",
]
