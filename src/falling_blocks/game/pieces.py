from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, List, Optional, Tuple


class TetrominoType(IntEnum):
    # 0 is the empty cell value on the grid
    I = 1
    L = 2
    J = 3
    S = 4
    Z = 5
    O = 6
    T = 7


Coordinate = Tuple[int, int]  # (row, col)
Orientation = Tuple[Coordinate, ...]
Color = Tuple[int, int, int]

ROTATION_COUNT = 4
SPAWN_OFFSET: Coordinate = (0, 3)

# Pieces that leave an overhang when dealt first on an empty board
OVERHANG_TYPES: FrozenSet[TetrominoType] = frozenset(
    {TetrominoType.S, TetrominoType.Z, TetrominoType.O}
)


@dataclass(frozen=True)
class PieceSpec:
    """Static definition of one piece type."""

    kind: TetrominoType
    color: Color
    orientations: Tuple[Orientation, ...]
    spawn_offset: Coordinate = SPAWN_OFFSET

    def orientation(self, rotation: int) -> Orientation:
        if not 0 <= rotation < ROTATION_COUNT:
            raise ValueError(f"Invalid rotation index: {rotation}")
        return self.orientations[rotation]


_I_FLAT = ((0, 0), (0, 1), (0, 2), (0, 3))
_I_TALL = ((0, 0), (1, 0), (2, 0), (3, 0))
_S_FLAT = ((1, 0), (1, 1), (0, 1), (0, 2))
_S_TALL = ((0, 0), (1, 0), (1, 1), (2, 1))
_Z_FLAT = ((0, 0), (0, 1), (1, 1), (1, 2))
_Z_TALL = ((1, 0), (2, 0), (0, 1), (1, 1))
_O_SQUARE = ((0, 0), (0, 1), (1, 0), (1, 1))

CATALOG: Dict[TetrominoType, PieceSpec] = {
    TetrominoType.I: PieceSpec(
        TetrominoType.I, (0, 255, 255), (_I_FLAT, _I_TALL, _I_FLAT, _I_TALL)
    ),
    TetrominoType.L: PieceSpec(
        TetrominoType.L,
        (255, 127, 0),
        (
            ((1, 1), (1, 0), (1, 2), (0, 2)),
            ((0, 0), (1, 0), (2, 0), (2, 1)),
            ((0, 0), (0, 1), (0, 2), (1, 0)),
            ((0, 0), (0, 1), (1, 1), (2, 1)),
        ),
    ),
    TetrominoType.J: PieceSpec(
        TetrominoType.J,
        (0, 0, 255),
        (
            ((0, 0), (1, 0), (1, 1), (1, 2)),
            ((0, 0), (0, 1), (1, 0), (2, 0)),
            ((0, 0), (0, 1), (0, 2), (1, 2)),
            ((0, 1), (1, 1), (2, 1), (2, 0)),
        ),
    ),
    TetrominoType.S: PieceSpec(
        TetrominoType.S, (0, 255, 0), (_S_FLAT, _S_TALL, _S_FLAT, _S_TALL)
    ),
    TetrominoType.Z: PieceSpec(
        TetrominoType.Z, (255, 0, 0), (_Z_FLAT, _Z_TALL, _Z_FLAT, _Z_TALL)
    ),
    TetrominoType.O: PieceSpec(
        TetrominoType.O, (255, 255, 0), (_O_SQUARE,) * ROTATION_COUNT
    ),
    TetrominoType.T: PieceSpec(
        TetrominoType.T,
        (128, 0, 128),
        (
            ((1, 0), (1, 1), (0, 1), (1, 2)),
            ((0, 0), (1, 0), (2, 0), (1, 1)),
            ((0, 0), (0, 1), (0, 2), (1, 1)),
            ((1, 0), (0, 1), (1, 1), (2, 1)),
        ),
    ),
}


def piece_spec(kind: TetrominoType) -> PieceSpec:
    return CATALOG[TetrominoType(kind)]


def color_for(kind: int) -> Optional[Color]:
    """Display color for a grid value, None for the empty cell."""
    if kind == 0:
        return None
    return CATALOG[TetrominoType(kind)].color


@dataclass
class ActivePiece:
    """A piece instance: type, rotation index and anchor offset on the board."""

    kind: TetrominoType
    rotation: int = 0  # 0..3
    row: int = SPAWN_OFFSET[0]
    col: int = SPAWN_OFFSET[1]

    @classmethod
    def spawn(cls, kind: TetrominoType) -> "ActivePiece":
        row, col = piece_spec(kind).spawn_offset
        return cls(kind=TetrominoType(kind), rotation=0, row=row, col=col)

    @property
    def color(self) -> Color:
        return piece_spec(self.kind).color

    def cells(
        self,
        rotation: Optional[int] = None,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ) -> List[Coordinate]:
        """Absolute board cells, optionally for a candidate rotation/anchor."""
        rotation = self.rotation if rotation is None else rotation
        row = self.row if row is None else row
        col = self.col if col is None else col
        return [(row + dr, col + dc) for dr, dc in piece_spec(self.kind).orientation(rotation)]

    def respawned(self) -> "ActivePiece":
        return ActivePiece.spawn(self.kind)

    def copy(self) -> "ActivePiece":
        return ActivePiece(self.kind, self.rotation, self.row, self.col)
