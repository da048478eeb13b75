from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, List, Optional, Tuple, Union

from . import movement
from .config import GameConfig
from .grid import GameGrid
from .pieces import ActivePiece, Coordinate, TetrominoType
from .randomizer import Bag, Randomizer
from .rules import ScoringRules
from .snapshot import GameSnapshot, PieceView


logger = logging.getLogger(__name__)

DANGER_ROWS = 5


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP_PRESS = 4
    SOFT_DROP_RELEASE = 5
    HARD_DROP = 6
    HOLD = 7
    PAUSE_TOGGLE = 8
    RESET = 9
    TICK = 10


class GamePhase(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class EmptySlot:
    pass


@dataclass(frozen=True)
class Holding:
    piece: ActivePiece


HoldSlot = Union[EmptySlot, Holding]


class FallingBlockGame:
    """
    One game session: the board, the pieces in play and every counter.

    Gravity ticks and player commands are applied one at a time by the
    owner. While paused only ``pause_toggle`` is accepted; after game over
    only ``reset`` is.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.randomizer = Randomizer(self.config, self.rng)
        self.grid = GameGrid()
        self.bag: Bag = []
        self.current_piece: ActivePiece
        self.next_piece: ActivePiece
        self.hold_slot: HoldSlot = EmptySlot()
        self.can_swap = True
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.piece_counts: List[int] = [0] * len(TetrominoType)
        self.clear_counts: List[int] = [0] * 4
        self.down_presses = 0
        self.gravity_ticks = 0
        self.last_cleared_rows: Tuple[int, ...] = ()
        self.paused = False
        self.game_over = False
        self._new_session()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def _new_session(self) -> None:
        self.grid.reset()
        self.bag = self.randomizer.new_bag(first_spawn=True) if self.config.modern_piece_rng else []
        first, self.bag = self.randomizer.next_piece(self.bag, first_spawn=True)
        second, self.bag = self.randomizer.next_piece(self.bag, first_spawn=True)
        self.current_piece = ActivePiece.spawn(first)
        self.next_piece = ActivePiece.spawn(second)
        self.hold_slot = EmptySlot()
        self.can_swap = True
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.piece_counts = [0] * len(TetrominoType)
        self.clear_counts = [0] * 4
        self.down_presses = 0
        self.gravity_ticks = 0
        self.last_cleared_rows = ()
        self.paused = False
        self.game_over = False
        self._spawn(self.current_piece)

    def reset(self, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> bool:
        """Start over from an empty board. Ignored while paused."""
        if self.paused:
            return False
        if config is not None:
            self.config = config
            if seed is None:
                seed = config.random_seed
        if seed is not None:
            self.rng.seed(seed)
            self.config = self.config.with_seed(seed)
        self.randomizer.config = self.config
        self._new_session()
        logger.debug("Game reset")
        return True

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.paused:
            return GamePhase.PAUSED
        return GamePhase.PLAYING

    @property
    def is_playing(self) -> bool:
        return self.phase is GamePhase.PLAYING

    @property
    def held_piece(self) -> Optional[ActivePiece]:
        if isinstance(self.hold_slot, Holding):
            return self.hold_slot.piece
        return None

    # ------------------------------------------------------------------
    # Spawning and locking
    # ------------------------------------------------------------------
    def _count_spawn(self, kind: TetrominoType) -> None:
        self.piece_counts[int(kind) - 1] += 1

    def _spawn(self, piece: ActivePiece) -> bool:
        """Write a fresh piece onto the board, or end the game if it does not fit.

        A colliding spawn writes none of its cells.
        """
        self._count_spawn(piece.kind)
        if not movement.can_spawn(self.grid, piece):
            self.game_over = True
            logger.info(
                "Game over: %s could not spawn (score=%d, lines=%d)",
                piece.kind.name, self.score, self.lines_cleared,
            )
            return False
        self.grid.fill(piece.cells(), piece.kind)
        return True

    def _draw_next(self) -> None:
        kind, self.bag = self.randomizer.next_piece(self.bag)
        self.next_piece = ActivePiece.spawn(kind)

    def _lock(self) -> int:
        cleared = self.grid.clear_full_rows()
        lines = len(cleared)
        self.score += self.rules.score_for_lines(lines, self.level)
        if lines:
            self.clear_counts[lines - 1] += 1
        self.lines_cleared += lines
        self.level = self.rules.level_for_lines(self.lines_cleared)
        self.score += self.down_presses
        self.down_presses = 0
        self.last_cleared_rows = cleared
        logger.debug(
            "Locked %s at %s, cleared %d (score=%d, level=%d)",
            self.current_piece.kind.name, (self.current_piece.row, self.current_piece.col),
            lines, self.score, self.level,
        )

        self.current_piece = self.next_piece
        self._draw_next()
        self.can_swap = True
        self._spawn(self.current_piece)
        return lines

    def _step_down(self) -> bool:
        """Move the live piece one row down, locking it when it cannot move."""
        if movement.move_down(self.grid, self.current_piece):
            return True
        self._lock()
        return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def move_left(self) -> bool:
        if not self.is_playing:
            return False
        return movement.move_left(self.grid, self.current_piece)

    def move_right(self) -> bool:
        if not self.is_playing:
            return False
        return movement.move_right(self.grid, self.current_piece)

    def rotate(self, clockwise: bool = True) -> bool:
        if not self.is_playing:
            return False
        return movement.rotate(self.grid, self.current_piece, clockwise)

    def soft_drop_press(self) -> bool:
        if not self.is_playing:
            return False
        self.down_presses += 1
        return self._step_down()

    def soft_drop_release(self) -> None:
        if self.is_playing:
            self.down_presses = 0

    def hard_drop(self) -> int:
        """Drop and lock the piece; scores one point per row fallen."""
        if not self.is_playing:
            return 0
        steps = 0
        while movement.move_down(self.grid, self.current_piece):
            steps += 1
        self.score += steps
        self._lock()
        return steps

    def hold(self) -> bool:
        """Swap the live piece with the hold slot, once per lock."""
        if not self.config.holding_enabled or not self.can_swap or not self.is_playing:
            return False

        outgoing = self.current_piece
        self.grid.clear(outgoing.cells())

        if isinstance(self.hold_slot, Holding):
            incoming = self.hold_slot.piece.respawned()
        else:
            incoming = self.next_piece

        if not movement.can_spawn(self.grid, incoming):
            self.grid.fill(outgoing.cells(), outgoing.kind)
            logger.debug("Hold rejected: %s does not fit", incoming.kind.name)
            return False

        if isinstance(self.hold_slot, EmptySlot):
            self._draw_next()
            self._count_spawn(incoming.kind)

        self.hold_slot = Holding(outgoing)
        self.current_piece = incoming
        self.grid.fill(incoming.cells(), incoming.kind)
        self.can_swap = False
        logger.debug("Held %s, now playing %s", outgoing.kind.name, incoming.kind.name)
        return True

    def pause_toggle(self) -> GamePhase:
        if not self.game_over:
            self.paused = not self.paused
        return self.phase

    def tick(self) -> bool:
        """Advance the gravity clock; every ``ceil(level / 5)`` ticks the piece falls a row."""
        if not self.is_playing:
            return False
        self.gravity_ticks += 1
        if self.gravity_ticks < self.rules.gravity_interval(self.level):
            return False
        self.gravity_ticks = 0
        return self._step_down()

    def apply(self, command: Command) -> object:
        handlers: Dict[Command, Callable[[], object]] = {
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.ROTATE_CW: lambda: self.rotate(True),
            Command.ROTATE_CCW: lambda: self.rotate(False),
            Command.SOFT_DROP_PRESS: self.soft_drop_press,
            Command.SOFT_DROP_RELEASE: self.soft_drop_release,
            Command.HARD_DROP: self.hard_drop,
            Command.HOLD: self.hold,
            Command.PAUSE_TOGGLE: self.pause_toggle,
            Command.RESET: self.reset,
            Command.TICK: self.tick,
        }
        try:
            handler = handlers[Command(command)]
        except ValueError as exc:
            raise ValueError(f"Unknown command: {command!r}") from exc
        return handler()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def ghost_cells(self) -> List[Coordinate]:
        if self.game_over:
            return []
        return movement.ghost_cells(self.grid, self.current_piece)

    def in_danger(self) -> bool:
        """True when a locked cell sits in the top rows of the board."""
        live = set(self.current_piece.cells())
        for row in range(DANGER_ROWS):
            for col in range(self.grid.width):
                if not self.grid.is_empty(row, col) and (row, col) not in live:
                    return True
        return False

    def snapshot(self) -> GameSnapshot:
        held = self.held_piece
        grid = self.grid.clone_state()
        grid.flags.writeable = False
        return GameSnapshot(
            grid=grid,
            colors=tuple(tuple(row) for row in self.grid.colors()),
            current=PieceView.of(self.current_piece),
            next=PieceView.of(self.next_piece),
            held=PieceView.of(held) if held is not None else None,
            can_swap=self.can_swap,
            ghost=tuple(self.ghost_cells()),
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared,
            piece_counts=tuple(self.piece_counts),
            clear_counts=tuple(self.clear_counts),
            last_cleared_rows=self.last_cleared_rows,
            danger=self.in_danger(),
            paused=self.paused,
            game_over=self.game_over,
            colored_board=self.config.colored_board,
        )
