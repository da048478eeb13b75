from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .config import GameConfig
from .pieces import OVERHANG_TYPES, TetrominoType


logger = logging.getLogger(__name__)

Bag = List[TetrominoType]


class Randomizer:
    """
    Piece sequence source.

    Classic mode draws every type uniformly at random. Modern mode deals from
    a shuffled bag holding ``bag_amount`` copies of all seven types and
    refills it only once it is empty. Pieces are dealt from the end of the
    bag.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)

    def new_bag(self, first_spawn: bool = False) -> Bag:
        """
        Build a freshly shuffled bag.

        With ``first_piece_no_overhang`` on and ``first_spawn`` set, the piece
        about to be dealt is never S, Z or O. An offending last element is
        swapped with a randomly chosen compliant one, so the repair always
        terminates.
        """
        bag: Bag = list(TetrominoType) * max(1, self.config.bag_amount)
        self.rng.shuffle(bag)

        if first_spawn and self.config.first_piece_no_overhang and bag[-1] in OVERHANG_TYPES:
            candidates = [i for i, kind in enumerate(bag) if kind not in OVERHANG_TYPES]
            swap = self.rng.choice(candidates)
            bag[-1], bag[swap] = bag[swap], bag[-1]

        logger.debug("New bag of %d pieces (first_spawn=%s)", len(bag), first_spawn)
        return bag

    def classic_piece(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def next_piece(self, bag: Bag, first_spawn: bool = False) -> Tuple[TetrominoType, Bag]:
        """Return the next piece type and the bag left after dealing it."""
        if not self.config.modern_piece_rng:
            return self.classic_piece(), bag

        if not bag:
            bag = self.new_bag(first_spawn)
        kind = bag.pop()
        return kind, bag
