from dataclasses import dataclass, field
from typing import List

from magic_square.constants import BACKING_CELLS, MIN_GRID_SIZE


def _blank_backing() -> List[bool]:
    return [False] * BACKING_CELLS


@dataclass(slots=True)
class Board:
    """Cell grid for the current puzzle.

    ``cells`` always has room for the largest board; only the first
    ``size * size`` entries (index ``x + y * size``) belong to the puzzle.
    ``solved`` is the win flag and freezes the board until the next round.
    """

    size: int = MIN_GRID_SIZE
    cells: List[bool] = field(default_factory=_blank_backing)
    solved: bool = False
