from __future__ import annotations

import logging

from esper import World

from magic_square.components.board import Board
from magic_square.components.game_progress import GameProgress
from magic_square.components.game_rules import GameRules
from magic_square.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_MOVE_MADE,
    EVENT_ROUND_STARTED,
    EVENT_ROUND_WON,
    EVENT_STATE_RESTORED,
    EventBus,
)
from magic_square.systems.board_ops import clamp_size, get_board, is_solved, normalize_cells
from magic_square.utils.state_codec import GameSnapshot, decode, encode
from magic_square.utils.store import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class PersistenceSystem:
    """Mirrors the session into a key-value store after every state change."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: KeyValueStore | None = None,
        rules: GameRules | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store: KeyValueStore = store if store is not None else MemoryStore()
        self.rules = rules or getattr(world, "rules", None) or GameRules()

        for event_name in (
            EVENT_MOVE_MADE,
            EVENT_ROUND_WON,
            EVENT_ROUND_STARTED,
            EVENT_GAME_OVER,
            EVENT_GAME_RESET,
        ):
            self.event_bus.subscribe(event_name, self._on_state_changed)

    def _progress(self) -> GameProgress:
        for _, progress in self.world.get_component(GameProgress):
            return progress
        raise RuntimeError("GameProgress component not found")

    def snapshot(self) -> GameSnapshot:
        progress = self._progress()
        board = get_board(self.world)
        return GameSnapshot(
            level=progress.level,
            move=progress.move,
            round=progress.round,
            cells=list(board.cells),
        )

    def restore(self, snapshot: GameSnapshot | None = None) -> None:
        if snapshot is None:
            snapshot = decode(None, max_level=self.rules.max_game_level)
        progress = self._progress()
        board: Board = get_board(self.world)
        progress.level = max(1, min(snapshot.level, self.rules.max_game_level))
        progress.round = max(1, snapshot.round)
        progress.move = max(0, snapshot.move)
        progress.game_over = False
        board.size = clamp_size(self.rules.grid_size(progress.level))
        board.cells = normalize_cells(snapshot.cells)
        board.solved = is_solved(board.cells, board.size)
        logger.debug("Restored level=%d round=%d move=%d", progress.level, progress.round, progress.move)
        self.event_bus.emit(
            EVENT_STATE_RESTORED,
            level=progress.level,
            round=progress.round,
            move=progress.move,
        )

    def load(self) -> GameSnapshot:
        """Restore from the store, falling back to defaults for anything missing."""
        snapshot = decode(self.store.read(), max_level=self.rules.max_game_level)
        self.restore(snapshot)
        return snapshot

    def save(self) -> None:
        self.store.write(encode(self.snapshot()))

    def _on_state_changed(self, sender, **payload) -> None:
        self.save()
