from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .pieces import Color, Coordinate, TetrominoType, color_for


logger = logging.getLogger(__name__)

BOARD_ROWS = 20
BOARD_COLS = 10
EMPTY = 0


class GameGrid:
    """Fixed 20x10 playfield.

    Each cell holds 0 when empty or the ``TetrominoType`` value of the piece
    occupying it. Colour is looked up from the type, so a cell is occupied
    exactly when it has a colour and clearing a cell resets both at once.
    Row 0 is the top of the board.
    """

    def __init__(self, height: int = BOARD_ROWS, width: int = BOARD_COLS) -> None:
        self.height = int(height)
        self.width = int(width)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_empty(self, row: int, col: int) -> bool:
        """True for an in-bounds empty cell; out-of-bounds cells are never empty."""
        return self.is_inside(row, col) and self.grid[row, col] == EMPTY

    def value_at(self, row: int, col: int) -> int:
        return int(self.grid[row, col])

    def fill(self, cells: Iterable[Coordinate], kind: TetrominoType) -> None:
        value = int(kind)
        for row, col in cells:
            self.grid[row, col] = value

    def clear(self, cells: Iterable[Coordinate]) -> None:
        for row, col in cells:
            self.grid[row, col] = EMPTY

    def occupied(self) -> np.ndarray:
        return self.grid != EMPTY

    def colors(self) -> List[List[Optional[Color]]]:
        return [[color_for(int(v)) for v in row] for row in self.grid]

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != EMPTY, axis=1))[0]]

    def clear_full_rows(self) -> Tuple[int, ...]:
        """Remove full rows, drop the rest down and pad empty rows on top.

        Returns the indices the cleared rows had before removal.
        """
        full = np.where(np.all(self.grid != EMPTY, axis=1))[0]
        if full.size == 0:
            return ()
        num = int(full.size)
        kept = np.delete(self.grid, full, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        logger.debug("Cleared rows %s", full.tolist())
        return tuple(int(r) for r in full)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def render_text(self) -> str:
        return "\n".join(
            "".join("#" if v != EMPTY else "-" for v in row) for row in self.grid
        )

    def __str__(self) -> str:
        return self.render_text()
