"""Game module for Falling Blocks.

Exports the deterministic game engine and supporting classes:
- TetrominoType / ActivePiece: Piece catalog and piece instances
- GameGrid: 20x10 board and line clearing
- Randomizer: Classic and bag piece sequences
- ScoringRules: Line-clear table, leveling and gravity pacing
- GameConfig: Session configuration and its JSON loader
- FallingBlockGame: Game state machine
- GameSnapshot: Read-only view for renderers
"""

from .pieces import ActivePiece, TetrominoType, piece_spec
from .grid import GameGrid
from .randomizer import Randomizer
from .rules import ScoringRules
from .config import GameConfig, load_config
from .snapshot import GameSnapshot, PieceView
from .core import Command, EmptySlot, FallingBlockGame, GamePhase, Holding

__all__ = [
    "ActivePiece",
    "TetrominoType",
    "piece_spec",
    "GameGrid",
    "Randomizer",
    "ScoringRules",
    "GameConfig",
    "load_config",
    "GameSnapshot",
    "PieceView",
    "Command",
    "EmptySlot",
    "FallingBlockGame",
    "GamePhase",
    "Holding",
]
