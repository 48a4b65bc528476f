# src/tetris_core/utils/logging.py
from __future__ import annotations

import logging
from typing import Optional

from tetris_core.game.events import LoggingEventSink

DEFAULT_EVENT_LOGGER = "tetris_core.events"


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """
    Configure a non-propagating logger with exactly one handler.
    Calling it again for the same name replaces the previous handler.
    """
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False

    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(lvl)

    handler: Optional[logging.Handler] = None

    if use_rich:
        try:
            from rich.logging import RichHandler  # type: ignore

            handler = RichHandler(
                rich_tracebacks=True,
                show_time=True,
                show_level=True,
                show_path=False,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        except ImportError:
            handler = None

    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s"))

    logger.addHandler(handler)
    return logger


def setup_event_logging(
        *,
        name: str = DEFAULT_EVENT_LOGGER,
        use_rich: bool = True,
        level: str = "debug",
) -> LoggingEventSink:
    """
    Event sink for hosts that want engine events (line clears, kicks, level ups)
    in their log output. Pass the result as `events=` to TetrisGame or the core functions.
    """
    logger = setup_logger(name=name, use_rich=use_rich, level=level)
    return LoggingEventSink(logger, level=logger.level)


__all__ = ["setup_logger", "setup_event_logging", "DEFAULT_EVENT_LOGGER"]
