# src/tetris_core/game/kicks.py
from __future__ import annotations

from typing import Dict, Tuple

# Offsets are (d_col, d_row) with rows growing downwards, tried in order.
Kick = Tuple[int, int]
KickTable = Dict[str, Tuple[Kick, ...]]

# Horizontal-only kicks for the simple rotation rule. Order matters: right first,
# then left, then two columns.
SIMPLE_KICKS: Tuple[int, ...] = (1, -1, 2, -2)

# Rotation state labels: spawn, right (cw), 180, left (ccw).
ROTATION_STATES: Tuple[str, ...] = ("0", "R", "2", "L")

JLSTZ_KICKS: KickTable = {
    "0->R": ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    "R->0": ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    "R->2": ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    "2->R": ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    "2->L": ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    "L->2": ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    "L->0": ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    "0->L": ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
}

I_KICKS: KickTable = {
    "0->R": ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    "R->0": ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    "R->2": ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    "2->R": ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    "2->L": ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    "L->2": ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    "L->0": ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    "0->L": ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
}

NO_KICK: Tuple[Kick, ...] = ((0, 0),)


def transition_label(from_state: int, to_state: int) -> str:
    return f"{ROTATION_STATES[int(from_state) % 4]}->{ROTATION_STATES[int(to_state) % 4]}"


def srs_kicks(from_state: int, to_state: int, *, is_i_piece: bool) -> Tuple[Kick, ...]:
    """Kick candidates for one transition; unknown transitions fall back to no offset."""
    table = I_KICKS if is_i_piece else JLSTZ_KICKS
    return table.get(transition_label(from_state, to_state), NO_KICK)


__all__ = [
    "Kick",
    "KickTable",
    "SIMPLE_KICKS",
    "ROTATION_STATES",
    "JLSTZ_KICKS",
    "I_KICKS",
    "NO_KICK",
    "transition_label",
    "srs_kicks",
]
