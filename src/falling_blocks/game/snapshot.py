"""
Read-only State Views
=====================

Immutable views of a game session taken between ticks and commands. The
presentation layer only ever reads these; nothing here refers back to the
live engine objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .pieces import ActivePiece, Color, Coordinate, TetrominoType


@dataclass(frozen=True)
class PieceView:
    """One piece as seen by a renderer."""
    kind: TetrominoType
    rotation: int
    offset: Coordinate
    color: Color
    cells: Tuple[Coordinate, ...]

    @classmethod
    def of(cls, piece: ActivePiece) -> "PieceView":
        return cls(
            kind=piece.kind,
            rotation=piece.rotation,
            offset=(piece.row, piece.col),
            color=piece.color,
            cells=tuple(piece.cells()),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a renderer needs for one frame.

    ``grid`` holds 0 for empty cells and the piece type value otherwise,
    ``colors`` the matching RGB triple or None. Both are copies.
    """
    grid: np.ndarray
    colors: Tuple[Tuple[Optional[Color], ...], ...]
    current: PieceView
    next: PieceView
    held: Optional[PieceView]
    can_swap: bool
    ghost: Tuple[Coordinate, ...]
    score: int
    level: int
    lines_cleared: int
    piece_counts: Tuple[int, ...]       # I, L, J, S, Z, O, T
    clear_counts: Tuple[int, ...]       # single, double, triple, tetris
    last_cleared_rows: Tuple[int, ...]
    danger: bool
    paused: bool
    game_over: bool
    colored_board: bool

    @property
    def occupied(self) -> np.ndarray:
        return self.grid != 0

    def display_color(self, row: int, col: int) -> Optional[Color]:
        """Cell colour, flattened to white for locked cells when the board is uncoloured."""
        color = self.colors[row][col]
        if color is None or self.colored_board:
            return color
        if (row, col) in self.current.cells:
            return color
        return (255, 255, 255)
