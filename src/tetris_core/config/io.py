# src/tetris_core/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_core.config.game import GameConfig, ScoreConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_game_config(path: Path) -> GameConfig:
    return GameConfig.model_validate(load_yaml(path))


def load_score_config(path: Path) -> ScoreConfig:
    """Accepts either a bare score mapping or a full game config with a `score:` section."""
    data = load_yaml(path)
    if "score" in data and isinstance(data["score"], dict):
        data = data["score"]
    return ScoreConfig.model_validate(data)


__all__ = [
    "to_plain_dict",
    "load_yaml",
    "load_game_config",
    "load_score_config",
]
