# src/tetris_core/game/constants.py
from __future__ import annotations

import numpy as np

# Board / cell encoding
EMPTY_CELL: int = 0
BOARD_WIDTH: int = 10
BOARD_HEIGHT: int = 20

# Board grids and shapes share one integer dtype so any shape tag fits on the board
CELL_DTYPE = np.int16

# All shapes (and all their rotations) share one SHAPE_SIZE x SHAPE_SIZE frame
SHAPE_SIZE: int = 4

CLASSIC_NUM_PIECES: int = 7
