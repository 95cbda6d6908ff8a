from __future__ import annotations

import logging
import random
from typing import List, Tuple

from magic_square.constants import SCRAMBLE_ACTIVATIONS
from magic_square.systems.board_ops import blank_cells, clamp_size, toggle_plus

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """Deals the starting grid for a round.

    The first round of every level starts blank. Later rounds start blank and
    receive ``activations`` random activations, so undoing those same
    activations always gets back to the blank board.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        activations: int = SCRAMBLE_ACTIVATIONS,
    ) -> None:
        self._rng = rng or random.Random()
        self._activations = max(0, int(activations))
        self.last_scramble: List[Tuple[int, int]] = []

    def generate(self, size: int, round_number: int) -> List[bool]:
        size = clamp_size(size)
        cells = blank_cells()
        self.last_scramble = []
        if round_number <= 1:
            logger.debug("generate(%d, round %d): no scramble", size, round_number)
            return cells
        for _ in range(self._activations):
            # Repeats are allowed; the same cell twice cancels out.
            x = self._rng.randrange(size)
            y = self._rng.randrange(size)
            toggle_plus(cells, size, x, y)
            self.last_scramble.append((x, y))
        logger.debug("generate(%d, round %d): scramble %s", size, round_number, self.last_scramble)
        return cells
