from __future__ import annotations

import random
from typing import Iterable, Tuple

from magic_square.components.game_rules import GameRules
from magic_square.events.bus import EventBus
from magic_square.systems.board import BoardSystem
from magic_square.systems.persistence_system import PersistenceSystem
from magic_square.systems.progression_system import ProgressionSystem
from magic_square.utils.store import MemoryStore
from magic_square.world import create_world


def build_systems(
    *,
    seed: int = 0,
    rules: GameRules | None = None,
    store: MemoryStore | None = None,
) -> Tuple[EventBus, BoardSystem, ProgressionSystem, PersistenceSystem]:
    """Create a world with the board, progression and persistence systems attached."""

    rules = rules or GameRules()
    bus = EventBus()
    world = create_world(bus, rules=rules, rng=random.Random(seed))
    board = BoardSystem(world, bus, size=rules.grid_size(1))
    progression = ProgressionSystem(world, bus, board, rules=rules)
    persistence = PersistenceSystem(world, bus, store=store or MemoryStore(), rules=rules)
    return bus, board, progression, persistence


def fill_board(board: BoardSystem, off: Iterable[Tuple[int, int]] = ()) -> None:
    """Turn every cell of the active region on except the given positions."""

    size = board.size
    off_set = set(off)
    cells = [(x, y) not in off_set for y in range(size) for x in range(size)]
    board.load_grid(cells)
