# src/tetris_core/game/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import yaml

from tetris_core.game.constants import CELL_DTYPE, CLASSIC_NUM_PIECES, EMPTY_CELL, SHAPE_SIZE
from tetris_core.game.errors import InvalidPieceKindError
from tetris_core.utils.paths import pieces_dir


class PieceKind(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6

    @property
    def board_id(self) -> int:
        """Cell value written into the board for this kind (0 is reserved for empty)."""
        return int(self.value) + 1

    @classmethod
    def coerce(cls, kind: object) -> "PieceKind":
        """
        Accept a PieceKind, an index 0..6 or a kind name ("I".."L").
        Anything else is a programming error.
        """
        if isinstance(kind, PieceKind):
            return kind
        if isinstance(kind, bool):
            raise InvalidPieceKindError(f"invalid piece kind {kind!r}")
        if isinstance(kind, (int, np.integer)):
            idx = int(kind)
            if idx < 0 or idx >= CLASSIC_NUM_PIECES:
                raise InvalidPieceKindError(
                    f"invalid piece index {idx}. must be between 0 and {CLASSIC_NUM_PIECES - 1}"
                )
            return cls(idx)
        if isinstance(kind, str):
            try:
                return cls[kind.strip().upper()]
            except KeyError as e:
                raise InvalidPieceKindError(
                    f"unknown piece kind {kind!r}. known kinds={[k.name for k in cls]!r}"
                ) from e
        raise InvalidPieceKindError(f"invalid piece kind {kind!r} ({type(kind).__name__})")


@dataclass(frozen=True, eq=False)
class Shape:
    """
    Immutable square cell matrix (0 = empty, >0 = occupied with a color tag).

    The backing array is read-only; every transform returns a new Shape.
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        raw = np.array(self.cells, copy=True)
        if raw.ndim != 2 or raw.shape[0] != raw.shape[1] or raw.shape[0] == 0:
            raise ValueError(f"shape must be a non-empty square matrix, got shape {raw.shape}")
        if np.any(raw < 0):
            raise ValueError("shape cells must be non-negative")
        top = int(np.iinfo(CELL_DTYPE).max)
        if np.any(raw > top):
            raise ValueError(f"shape cells must be <= {top}, got {int(raw.max())}")
        arr = raw.astype(CELL_DTYPE)
        arr.setflags(write=False)
        object.__setattr__(self, "cells", arr)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Shape":
        return cls(np.asarray([list(r) for r in rows]))

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def occupied(self) -> List[Tuple[int, int, int]]:
        """(row, col, value) for every non-empty cell, row-major."""
        rows, cols = np.nonzero(self.cells != EMPTY_CELL)
        return [(int(r), int(c), int(self.cells[r, c])) for r, c in zip(rows, cols)]

    def cell_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def with_value(self, value: int) -> "Shape":
        v = int(value)
        if v <= 0:
            raise ValueError(f"cell value must be >= 1, got {v}")
        return Shape(np.where(self.cells != EMPTY_CELL, v, EMPTY_CELL))

    def to_rows(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(int(c) for c in row) for row in self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Shape({[list(r) for r in self.to_rows()]!r})"


@dataclass(frozen=True)
class ShapeBounds:
    """
    Inclusive bounding box of the occupied cells in shape-local coordinates.
    An empty shape yields min_row=min_col=size and max_row=max_col=-1.
    """

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def width(self) -> int:
        return max(0, self.max_col - self.min_col + 1)

    @property
    def height(self) -> int:
        return max(0, self.max_row - self.min_row + 1)


def get_bounds(shape: Shape) -> ShapeBounds:
    rows, cols = np.nonzero(shape.cells != EMPTY_CELL)
    if rows.size == 0:
        n = shape.size
        return ShapeBounds(min_row=n, max_row=-1, min_col=n, max_col=-1)
    return ShapeBounds(
        min_row=int(rows.min()),
        max_row=int(rows.max()),
        min_col=int(cols.min()),
        max_col=int(cols.max()),
    )


def _parse_color(v: object) -> Optional[Tuple[int, int, int]]:
    if v is None:
        return None
    if not isinstance(v, (list, tuple)) or len(v) != 3:
        raise ValueError(f"color must be a 3-item list/tuple, got {v!r}")
    r, g, b = v
    for c in (r, g, b):
        if not isinstance(c, int) or not (0 <= c <= 255):
            raise ValueError(f"color components must be ints in [0,255], got {v!r}")
    return int(r), int(g), int(b)


def _parse_shape(rows: Sequence[str], *, size: int, value: int) -> Shape:
    if not isinstance(rows, (list, tuple)) or len(rows) != size:
        raise ValueError(f"shape must be a list of {size} strings, got {rows!r}")

    out: List[List[int]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) != size:
            raise ValueError(f"shape rows must be strings of length {size}, got {r!r}")
        out.append([value if ch == "#" else EMPTY_CELL for ch in r])

    shape = Shape(np.asarray(out))
    if shape.cell_count() <= 0:
        raise ValueError("shape must have at least one filled cell ('#')")
    return shape


@dataclass(frozen=True)
class PieceDef:
    kind: PieceKind
    shape: Shape  # spawn orientation, cells tagged with kind.board_id
    color: Optional[Tuple[int, int, int]] = None

    @property
    def board_id(self) -> int:
        return self.kind.board_id


@dataclass(frozen=True)
class PieceSet:
    """
    Canonical spawn shapes + colors for the closed set of seven kinds, loaded from YAML.

    Asset contract:
      - exactly the kinds I, O, T, S, Z, J, L
      - every shape is size x size ('#' = filled) so all rotations share one frame
      - the cell value of each shape is the kind's board id (I=1 .. L=7)
    """

    pieces: Dict[PieceKind, PieceDef]
    size: int = SHAPE_SIZE

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def from_yaml(cls, path: Path) -> "PieceSet":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        size = data.get("size", SHAPE_SIZE)
        if not isinstance(size, int) or size <= 0:
            raise ValueError(f"size must be a positive int, got {size!r}")

        expected_cells = data.get("expected_cells", None)
        if expected_cells is not None and not isinstance(expected_cells, int):
            raise TypeError(f"expected_cells must be int, got {type(expected_cells)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        pieces: Dict[PieceKind, PieceDef] = {}
        for name, spec in pieces_node.items():
            kind = PieceKind.coerce(str(name))
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {name!r} must be a mapping, got {type(spec)!r}")

            shape = _parse_shape(spec.get("shape"), size=size, value=kind.board_id)
            if expected_cells is not None and shape.cell_count() != expected_cells:
                raise ValueError(f"{name!r}: expected {expected_cells} filled cells, got {shape.cell_count()}")

            pieces[kind] = PieceDef(kind=kind, shape=shape, color=_parse_color(spec.get("color")))

        missing = [k.name for k in PieceKind if k not in pieces]
        if missing:
            raise ValueError(f"piece YAML is missing kinds {missing!r}")

        return cls(pieces=pieces, size=size)

    def kinds(self) -> Tuple[PieceKind, ...]:
        return tuple(sorted(self.pieces))

    def get(self, kind: Union[PieceKind, int, str]) -> PieceDef:
        return self.pieces[PieceKind.coerce(kind)]

    def shape(self, kind: Union[PieceKind, int, str]) -> Shape:
        return self.get(kind).shape

    def color_of(self, kind: Union[PieceKind, int, str]) -> Optional[Tuple[int, int, int]]:
        return self.get(kind).color

    def color_of_board_id(self, board_id: int) -> Optional[Tuple[int, int, int]]:
        bid = int(board_id)
        if bid <= 0:
            return None
        return self.color_of(bid - 1)


@lru_cache(maxsize=1)
def default_piece_set() -> PieceSet:
    return PieceSet.from_yaml(PieceSet.default_classic7_path())


def get_shape_for_kind(kind: Union[PieceKind, int, str], piece_set: Optional[PieceSet] = None) -> Shape:
    """Canonical spawn shape for a kind. Raises InvalidPieceKindError for unknown kinds."""
    ps = piece_set or default_piece_set()
    return ps.shape(kind)


__all__ = [
    "PieceKind",
    "Shape",
    "ShapeBounds",
    "PieceDef",
    "PieceSet",
    "default_piece_set",
    "get_bounds",
    "get_shape_for_kind",
]
