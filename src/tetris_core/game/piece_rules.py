# src/tetris_core/game/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from tetris_core.game.errors import HoldUnavailableError
from tetris_core.game.events import HOLD_USED, EventSink, sink_or_null
from tetris_core.game.pieceset import PieceKind


class PieceRule(ABC):
    """
    Piece selection rule interface.

    Lifecycle:
      - reset(rng=..., kinds=...) is called once per game
      - next_piece() is called whenever the queue needs another piece

    The RNG is owned by the caller and injected; rules never create their own streams.
    """

    @abstractmethod
    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        raise NotImplementedError

    @abstractmethod
    def next_piece(self) -> PieceKind:
        raise NotImplementedError


@dataclass
class UniformPieceRule(PieceRule):
    _rng: np.random.Generator | None = None
    _kinds: Tuple[PieceKind, ...] = ()

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        self._rng = rng
        self._kinds = tuple(PieceKind.coerce(k) for k in kinds)
        if not self._kinds:
            raise ValueError("UniformPieceRule requires non-empty kinds")

    def next_piece(self) -> PieceKind:
        if self._rng is None or not self._kinds:
            raise RuntimeError("UniformPieceRule.reset() must be called before next_piece()")
        i = int(self._rng.integers(0, len(self._kinds)))
        return self._kinds[i]


@dataclass
class BagPieceRule(PieceRule):
    """
    7-bag randomizer: every kind appears exactly once per shuffled bag.
    Deterministic w.r.t. the injected RNG.
    """

    _rng: np.random.Generator | None = None
    _kinds: Tuple[PieceKind, ...] = ()
    _bag: List[PieceKind] = field(default_factory=list)

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[PieceKind]) -> None:
        self._rng = rng
        self._kinds = tuple(PieceKind.coerce(k) for k in kinds)
        if not self._kinds:
            raise ValueError("BagPieceRule requires non-empty kinds")
        self._bag = []

    def _refill(self) -> None:
        if self._rng is None or not self._kinds:
            raise RuntimeError("BagPieceRule.reset() must be called before _refill()")
        self._bag = list(self._kinds)
        self._rng.shuffle(self._bag)

    def next_piece(self) -> PieceKind:
        if self._rng is None or not self._kinds:
            raise RuntimeError("BagPieceRule.reset() must be called before next_piece()")
        if not self._bag:
            self._refill()
        return self._bag.pop()


def make_piece_rule(name: str) -> PieceRule:
    n = str(name).strip().lower()
    if n == "bag7":
        return BagPieceRule()
    if n == "uniform":
        return UniformPieceRule()
    raise ValueError(f"unknown piece rule {name!r} (expected 'bag7' or 'uniform')")


class NextHoldManager:
    """
    Next-piece queue plus a single hold slot.

    Hold may be used once per piece; taking the next piece from the queue
    re-arms it.
    """

    def __init__(
            self,
            *,
            rule: PieceRule,
            rng: np.random.Generator,
            queue_size: int = 5,
            enable_hold: bool = True,
            events: Optional[EventSink] = None,
    ) -> None:
        if int(queue_size) < 1:
            raise ValueError(f"queue_size must be >= 1, got {queue_size}")
        self.rule = rule
        self.rng = rng
        self.queue_size = int(queue_size)
        self.enable_hold = bool(enable_hold)
        self.events = sink_or_null(events)

        self._queue: Deque[PieceKind] = deque()
        self._held: PieceKind | None = None
        self._hold_used = False
        self.reset()

    def reset(self) -> None:
        self.rule.reset(rng=self.rng, kinds=list(PieceKind))
        self._queue.clear()
        self._held = None
        self._hold_used = False
        self._fill()

    def _fill(self) -> None:
        while len(self._queue) < self.queue_size:
            self._queue.append(self.rule.next_piece())

    def next_piece(self) -> PieceKind:
        kind = self._queue.popleft()
        self._fill()
        self._hold_used = False
        return kind

    def peek(self) -> Tuple[PieceKind, ...]:
        return tuple(self._queue)

    @property
    def held(self) -> PieceKind | None:
        return self._held

    def can_hold(self) -> bool:
        return self.enable_hold and not self._hold_used

    def hold(self, current: PieceKind) -> PieceKind:
        """
        Put `current` on hold and return the piece to play instead: the previously
        held one, or the next queued piece on the first hold.
        """
        if not self.enable_hold:
            raise HoldUnavailableError("hold is disabled")
        if self._hold_used:
            raise HoldUnavailableError("hold was already used for this piece")

        cur = PieceKind.coerce(current)
        if self._held is None:
            self._held = cur
            out = self.next_piece()
        else:
            out, self._held = self._held, cur
        self._hold_used = True
        self.events.emit(HOLD_USED, held=self._held.name, released=out.name)
        return out


__all__ = [
    "PieceRule",
    "UniformPieceRule",
    "BagPieceRule",
    "make_piece_rule",
    "NextHoldManager",
]
