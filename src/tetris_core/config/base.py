# src/tetris_core/config/base.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ConfigBase(BaseModel):
    """
    Root of every tetris_core config model: unknown keys are rejected and
    instances are immutable once validated.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


__all__ = ["ConfigBase"]
