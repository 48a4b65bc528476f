# src/tetris_core/game/events.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

ROTATION_KICKED = "rotation_kicked"
ROTATION_FAILED = "rotation_failed"
PIECE_LOCKED = "piece_locked"
LINES_CLEARED = "lines_cleared"
LEVEL_UP = "level_up"
SPAWN_BLOCKED = "spawn_blocked"
HOLD_USED = "hold_used"


@runtime_checkable
class EventSink(Protocol):
    def emit(self, name: str, **payload: Any) -> None:
        raise NotImplementedError


class NullEventSink:
    def emit(self, name: str, **payload: Any) -> None:
        _ = name
        _ = payload


class RecordingEventSink:
    """Keeps every event in order; handy for replays and assertions."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, name: str, **payload: Any) -> None:
        self.events.append((str(name), dict(payload)))

    def names(self) -> List[str]:
        return [n for n, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


class LoggingEventSink:
    def __init__(self, logger: logging.Logger, *, level: int = logging.DEBUG) -> None:
        self.logger = logger
        self.level = int(level)

    def emit(self, name: str, **payload: Any) -> None:
        if not self.logger.isEnabledFor(self.level):
            return
        details = " ".join(f"{k}={v!r}" for k, v in sorted(payload.items()))
        self.logger.log(self.level, "%s %s", name, details)


_NULL = NullEventSink()


def sink_or_null(events: Optional[EventSink]) -> EventSink:
    return _NULL if events is None else events


__all__ = [
    "EventSink",
    "NullEventSink",
    "RecordingEventSink",
    "LoggingEventSink",
    "sink_or_null",
    "ROTATION_KICKED",
    "ROTATION_FAILED",
    "PIECE_LOCKED",
    "LINES_CLEARED",
    "LEVEL_UP",
    "SPAWN_BLOCKED",
    "HOLD_USED",
]
