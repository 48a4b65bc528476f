# src/tetris_core/config/__init__.py
from __future__ import annotations

from tetris_core.config.game import BoardConfig, GameConfig, RotationConfig, ScoreConfig
from tetris_core.config.io import load_game_config, load_score_config, load_yaml

__all__ = [
    "BoardConfig",
    "GameConfig",
    "RotationConfig",
    "ScoreConfig",
    "load_game_config",
    "load_score_config",
    "load_yaml",
]
