"""Collision checks and piece movement against a ``GameGrid``.

Every mutating operation validates the whole candidate footprint first and
only then clears the old cells and writes the new ones. A rejected move
leaves both the grid and the piece untouched.
"""

from __future__ import annotations

from typing import Iterable, List

from .grid import GameGrid
from .pieces import ROTATION_COUNT, ActivePiece, Coordinate


def can_occupy(grid: GameGrid, piece: ActivePiece, cells: Iterable[Coordinate]) -> bool:
    """True when every cell is on the board and empty or part of ``piece`` itself."""
    own = set(piece.cells())
    for row, col in cells:
        if not grid.is_inside(row, col):
            return False
        if not grid.is_empty(row, col) and (row, col) not in own:
            return False
    return True


def can_spawn(grid: GameGrid, piece: ActivePiece) -> bool:
    return all(grid.is_empty(row, col) for row, col in piece.cells())


def _try_place(grid: GameGrid, piece: ActivePiece, rotation: int, row: int, col: int) -> bool:
    target = piece.cells(rotation=rotation, row=row, col=col)
    if not can_occupy(grid, piece, target):
        return False
    grid.clear(piece.cells())
    piece.rotation = rotation
    piece.row = row
    piece.col = col
    grid.fill(target, piece.kind)
    return True


def try_shift(grid: GameGrid, piece: ActivePiece, d_row: int, d_col: int) -> bool:
    return _try_place(grid, piece, piece.rotation, piece.row + d_row, piece.col + d_col)


def move_left(grid: GameGrid, piece: ActivePiece) -> bool:
    return try_shift(grid, piece, 0, -1)


def move_right(grid: GameGrid, piece: ActivePiece) -> bool:
    return try_shift(grid, piece, 0, 1)


def move_down(grid: GameGrid, piece: ActivePiece) -> bool:
    return try_shift(grid, piece, 1, 0)


def next_rotation(rotation: int, clockwise: bool = True) -> int:
    step = 1 if clockwise else ROTATION_COUNT - 1
    return (rotation + step) % ROTATION_COUNT


def rotate(grid: GameGrid, piece: ActivePiece, clockwise: bool = True) -> bool:
    """Rotate in place around the anchor. There are no wall kicks."""
    return _try_place(grid, piece, next_rotation(piece.rotation, clockwise), piece.row, piece.col)


def drop_distance(grid: GameGrid, piece: ActivePiece) -> int:
    """Rows the piece can still fall, probing a read-only view of the grid."""
    distance = 0
    while can_occupy(grid, piece, piece.cells(row=piece.row + distance + 1)):
        distance += 1
    return distance


def ghost_cells(grid: GameGrid, piece: ActivePiece) -> List[Coordinate]:
    """Cells the piece would rest on if hard-dropped now."""
    return piece.cells(row=piece.row + drop_distance(grid, piece))
