import logging
from typing import Iterable, List, Optional, Tuple

from esper import World

from magic_square.components.board import Board
from magic_square.events.bus import EventBus, EVENT_BOARD_CHANGED, EVENT_BOARD_SOLVED
from magic_square.systems.board_ops import (
    cell_index,
    clamp_size,
    in_bounds,
    is_solved,
    normalize_cells,
    render_grid,
    toggle_plus,
)

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the cell grid: the plus-shaped toggle rule and win detection.

    Counters are not touched here. The board only reports what happened,
    through its return values and ``EVENT_BOARD_CHANGED`` / ``EVENT_BOARD_SOLVED``.
    """

    def __init__(self, world: World, event_bus: EventBus, size: int = 2):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self._ensure_board_entity(size)

    def _ensure_board_entity(self, size: int) -> int:
        existing = list(self.world.get_component(Board))
        if existing:
            return existing[0][0]
        return self.world.create_entity(Board(size=clamp_size(size)))

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def solved(self) -> bool:
        return self.board.solved

    def cell(self, x: int, y: int) -> bool:
        board = self.board
        if not in_bounds(x, y, board.size):
            return False
        return board.cells[cell_index(x, y, board.size)]

    def cells(self) -> List[bool]:
        """Copy of the active ``size * size`` region in index order."""
        board = self.board
        return list(board.cells[:board.size * board.size])

    def activate(self, x: int, y: int) -> None:
        board = self.board
        if board.solved:
            return
        toggled: List[Tuple[int, int]] = toggle_plus(board.cells, board.size, x, y)
        if toggled:
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason="activate", positions=toggled)
        logger.debug("activate(%d, %d) [ %s ]", x, y, self.render_grid())
        if is_solved(board.cells, board.size):
            board.solved = True
            self.event_bus.emit(EVENT_BOARD_SOLVED, size=board.size)

    def is_solved(self) -> bool:
        board = self.board
        return is_solved(board.cells, board.size)

    def reset(self) -> None:
        board = self.board
        board.cells = normalize_cells(())
        board.solved = False
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="reset", positions=self._all_positions())

    def resize(self, size: int) -> None:
        board = self.board
        board.size = clamp_size(size)
        self.reset()

    def load_grid(self, values: Iterable[object], size: Optional[int] = None) -> None:
        board = self.board
        if size is not None:
            board.size = clamp_size(size)
        board.cells = normalize_cells(values)
        board.solved = is_solved(board.cells, board.size)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="load", positions=self._all_positions())

    def render_grid(self) -> str:
        board = self.board
        return render_grid(board.cells, board.size)

    def _all_positions(self) -> List[Tuple[int, int]]:
        size = self.board.size
        return [(x, y) for y in range(size) for x in range(size)]
