"""
Shared fixtures and board-building helpers.
"""

import pytest

from falling_blocks.game import ActivePiece, FallingBlockGame, GameConfig, TetrominoType


@pytest.fixture
def config():
    return GameConfig(random_seed=42)


@pytest.fixture
def game(config):
    return FallingBlockGame(config)


def place_current(game, kind, rotation=0, row=0, col=3, clear_board=True):
    """Replace the live piece with a hand-picked one, optionally on an empty board."""
    if clear_board:
        game.grid.reset()
    else:
        game.grid.clear(game.current_piece.cells())
    piece = ActivePiece(TetrominoType(kind), rotation, row, col)
    game.current_piece = piece
    game.grid.fill(piece.cells(), piece.kind)
    return piece


def fill_cells(grid, cells, kind=TetrominoType.T):
    grid.fill(list(cells), kind)


def assert_color_invariant(snapshot):
    for r, row in enumerate(snapshot.colors):
        for c, color in enumerate(row):
            assert (color is not None) == bool(snapshot.occupied[r, c])
