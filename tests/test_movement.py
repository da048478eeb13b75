"""
Tests for collision, translation, rotation and the ghost projection.
"""

import numpy as np
import pytest

from falling_blocks.game import ActivePiece, GameGrid, TetrominoType
from falling_blocks.game import movement


def _board_with(piece):
    grid = GameGrid()
    grid.fill(piece.cells(), piece.kind)
    return grid


def _assert_rejected(grid, piece, operation, *args):
    grid_before = grid.clone_state()
    piece_before = piece.copy()
    assert operation(grid, piece, *args) is False
    assert np.array_equal(grid.grid, grid_before)
    assert piece == piece_before


class TestTranslation:
    def test_move_left_right_down(self):
        piece = ActivePiece.spawn(TetrominoType.T)
        grid = _board_with(piece)

        assert movement.move_left(grid, piece)
        assert piece.col == 2
        assert movement.move_right(grid, piece)
        assert movement.move_right(grid, piece)
        assert piece.col == 4
        assert movement.move_down(grid, piece)
        assert piece.row == 1

        expected = GameGrid()
        expected.fill(piece.cells(), piece.kind)
        assert np.array_equal(grid.grid, expected.grid)

    def test_left_wall_rejects(self):
        piece = ActivePiece(TetrominoType.I, 0, 5, 0)
        grid = _board_with(piece)
        _assert_rejected(grid, piece, movement.move_left)

    def test_right_wall_rejects(self):
        piece = ActivePiece(TetrominoType.I, 1, 5, 9)
        grid = _board_with(piece)
        _assert_rejected(grid, piece, movement.move_right)

    def test_floor_rejects(self):
        piece = ActivePiece(TetrominoType.O, 0, 18, 4)
        grid = _board_with(piece)
        _assert_rejected(grid, piece, movement.move_down)

    def test_locked_block_rejects(self):
        piece = ActivePiece(TetrominoType.O, 0, 10, 4)
        grid = _board_with(piece)
        grid.fill([(11, 6)], TetrominoType.Z)
        _assert_rejected(grid, piece, movement.move_right)

    def test_own_cells_do_not_block(self):
        piece = ActivePiece(TetrominoType.I, 1, 0, 0)
        grid = _board_with(piece)
        # every step down overlaps three of the piece's own cells
        for _ in range(16):
            assert movement.move_down(grid, piece)
        assert piece.row == 16
        assert int(grid.occupied().sum()) == 4


class TestRotation:
    def test_next_rotation_wraps(self):
        assert movement.next_rotation(3, clockwise=True) == 0
        assert movement.next_rotation(0, clockwise=False) == 3
        assert movement.next_rotation(2, clockwise=False) == 1

    def test_rotate_counter_clockwise(self):
        piece = ActivePiece.spawn(TetrominoType.T)
        grid = _board_with(piece)
        assert movement.rotate(grid, piece, clockwise=False)
        assert piece.rotation == 3
        assert sorted(map(tuple, np.argwhere(grid.occupied()))) == sorted(piece.cells())

    def test_o_rotation_is_noop_success(self):
        piece = ActivePiece(TetrominoType.O, 0, 6, 4)
        grid = _board_with(piece)
        before = grid.clone_state()
        assert movement.rotate(grid, piece, clockwise=True)
        assert np.array_equal(grid.grid, before)

    def test_rotation_out_of_bounds_rejected(self):
        piece = ActivePiece(TetrominoType.I, 0, 19, 3)
        grid = _board_with(piece)
        _assert_rejected(grid, piece, movement.rotate, True)

    def test_rotation_into_block_rejected(self):
        piece = ActivePiece(TetrominoType.I, 0, 5, 3)
        grid = _board_with(piece)
        grid.fill([(6, 3)], TetrominoType.L)
        _assert_rejected(grid, piece, movement.rotate, True)

    def test_rotation_against_right_wall_has_no_kick(self):
        piece = ActivePiece(TetrominoType.I, 1, 5, 9)
        grid = _board_with(piece)
        _assert_rejected(grid, piece, movement.rotate, False)


class TestGhost:
    def test_ghost_on_empty_board(self):
        piece = ActivePiece.spawn(TetrominoType.I)
        grid = _board_with(piece)
        before = grid.clone_state()

        assert movement.ghost_cells(grid, piece) == [(19, 3), (19, 4), (19, 5), (19, 6)]
        assert np.array_equal(grid.grid, before)
        assert piece == ActivePiece.spawn(TetrominoType.I)

    def test_ghost_rests_on_stack(self):
        piece = ActivePiece.spawn(TetrominoType.O)
        grid = _board_with(piece)
        grid.fill([(12, 4)], TetrominoType.T)
        assert movement.drop_distance(grid, piece) == 10
        assert movement.ghost_cells(grid, piece) == [(10, 3), (10, 4), (11, 3), (11, 4)]

    @pytest.mark.parametrize("kind", list(TetrominoType))
    def test_ghost_touches_floor_on_empty_board(self, kind):
        piece = ActivePiece.spawn(kind)
        grid = _board_with(piece)
        assert max(r for r, _ in movement.ghost_cells(grid, piece)) == 19
