"""The session object handed to the presentation layer."""
from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable, List

from esper import World

from magic_square.components.game_rules import GameRules
from magic_square.components.game_state import GameMode
from magic_square.events.bus import (
    EVENT_CELL_ACTIVATE,
    EVENT_GAME_RESET_REQUEST,
    EVENT_RESET_TAP,
    EVENT_ROUND_ADVANCE_REQUEST,
    EVENT_ROUND_SKIP_REQUEST,
    EventBus,
)
from magic_square.systems.board import BoardSystem
from magic_square.systems.persistence_system import PersistenceSystem
from magic_square.systems.progression_system import ProgressionSystem
from magic_square.utils.game_state import get_game_mode
from magic_square.utils.state_codec import GameSnapshot
from magic_square.utils.store import JsonFileStore, KeyValueStore, MemoryStore
from magic_square.world import create_world


class GameSession:
    """One game of Magic Square: world, event bus and the systems driving it.

    Input methods publish on the bus exactly as a UI would, and the read-only
    properties expose everything a view needs to draw the board and the
    score line. Nothing here raises for bad input.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        progression: ProgressionSystem,
        persistence: PersistenceSystem,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.progression = progression
        self.persistence = persistence

    @classmethod
    def create(
        cls,
        *,
        store: KeyValueStore | None = None,
        save_path: Path | str | None = None,
        rules: GameRules | None = None,
        rng: random.Random | None = None,
    ) -> "GameSession":
        """Wire up a session.

        ``store`` wins over ``save_path``. With neither, state is kept in memory
        only; pass a path or store to keep it across restarts.
        """
        rules = rules or GameRules()
        event_bus = EventBus()
        world = create_world(event_bus, rules=rules, rng=rng)
        board_system = BoardSystem(world, event_bus, size=rules.grid_size(1))
        progression = ProgressionSystem(world, event_bus, board_system, rules=rules)
        if store is None:
            store = JsonFileStore(save_path) if save_path is not None else MemoryStore()
        persistence = PersistenceSystem(world, event_bus, store=store, rules=rules)
        return cls(world, event_bus, board_system, progression, persistence)

    # Input surface -----------------------------------------------------

    def activate(self, x: int, y: int) -> None:
        self.event_bus.emit(EVENT_CELL_ACTIVATE, x=x, y=y)

    def advance(self) -> None:
        self.event_bus.emit(EVENT_ROUND_ADVANCE_REQUEST)

    def skip_round(self) -> None:
        self.event_bus.emit(EVENT_ROUND_SKIP_REQUEST)

    def reset(self) -> None:
        self.event_bus.emit(EVENT_GAME_RESET_REQUEST)

    def reset_request(self) -> None:
        self.event_bus.emit(EVENT_RESET_TAP)

    def restore(self, snapshot: GameSnapshot | None = None) -> None:
        """Restore ``snapshot``, or whatever the store holds when none is given."""
        if snapshot is None:
            self.persistence.load()
        else:
            self.persistence.restore(snapshot)

    def new_game(self) -> None:
        """Reset everything and deal the first round."""
        self.progression.reset(reason="new_game")
        self.progression.start_round()

    def snapshot(self) -> GameSnapshot:
        return self.persistence.snapshot()

    def subscribe(self, name: str, fn: Callable[..., Any]) -> None:
        self.event_bus.subscribe(name, fn)

    # Output surface ----------------------------------------------------

    @property
    def level(self) -> int:
        return self.progression.progress.level

    @property
    def round(self) -> int:
        return self.progression.progress.round

    @property
    def move(self) -> int:
        return self.progression.progress.move

    @property
    def grid_size(self) -> int:
        return self.progression.grid_size

    @property
    def rounds_in_level(self) -> int:
        return self.progression.rounds_in_level

    @property
    def level_label(self) -> str:
        return self.progression.level_label

    def cell(self, x: int, y: int) -> bool:
        return self.board_system.cell(x, y)

    def cells(self) -> List[bool]:
        return self.board_system.cells()

    @property
    def is_solved(self) -> bool:
        return self.progression.is_solved

    @property
    def is_game_over(self) -> bool:
        return self.progression.is_game_over

    @property
    def is_last_round_of_level(self) -> bool:
        return self.progression.is_last_round_of_level

    @property
    def is_level_over(self) -> bool:
        return self.progression.is_level_over

    @property
    def show_continue(self) -> bool:
        return self.progression.show_continue

    @property
    def show_game_over(self) -> bool:
        return self.progression.show_game_over

    @property
    def mode(self) -> GameMode | None:
        return get_game_mode(self.world)
