"""
Tests for the piece catalog.
"""

import pytest

from falling_blocks.game import ActivePiece, TetrominoType, piece_spec
from falling_blocks.game.pieces import CATALOG, OVERHANG_TYPES, SPAWN_OFFSET


class TestCatalog:
    def test_seven_types(self):
        assert len(CATALOG) == 7
        assert set(CATALOG) == set(TetrominoType)

    @pytest.mark.parametrize("kind", list(TetrominoType))
    def test_four_rotations_of_four_cells(self, kind):
        spec = piece_spec(kind)
        assert len(spec.orientations) == 4
        for shape in spec.orientations:
            assert len(shape) == 4
            assert len(set(shape)) == 4

    def test_o_piece_identical_in_all_rotations(self):
        spec = piece_spec(TetrominoType.O)
        assert len(set(spec.orientations)) == 1

    def test_colors_are_distinct_and_not_white(self):
        colors = [spec.color for spec in CATALOG.values()]
        assert len(set(colors)) == 7
        assert (255, 255, 255) not in colors

    def test_overhang_types(self):
        assert OVERHANG_TYPES == {TetrominoType.S, TetrominoType.Z, TetrominoType.O}

    def test_bad_rotation_index_raises(self):
        with pytest.raises(ValueError):
            piece_spec(TetrominoType.T).orientation(4)


class TestActivePiece:
    def test_spawn_uses_default_anchor(self):
        piece = ActivePiece.spawn(TetrominoType.L)
        assert piece.rotation == 0
        assert (piece.row, piece.col) == SPAWN_OFFSET
        assert piece.color == (255, 127, 0)

    def test_cells_are_offset_by_anchor(self):
        piece = ActivePiece(TetrominoType.I, rotation=0, row=5, col=2)
        assert piece.cells() == [(5, 2), (5, 3), (5, 4), (5, 5)]
        assert piece.cells(rotation=1) == [(5, 2), (6, 2), (7, 2), (8, 2)]

    def test_respawned_resets_rotation_and_offset(self):
        piece = ActivePiece(TetrominoType.T, rotation=2, row=11, col=7)
        fresh = piece.respawned()
        assert fresh == ActivePiece.spawn(TetrominoType.T)
        assert piece.rotation == 2

    def test_copy_is_independent(self):
        piece = ActivePiece.spawn(TetrominoType.J)
        other = piece.copy()
        other.row += 3
        assert piece.row == 0
