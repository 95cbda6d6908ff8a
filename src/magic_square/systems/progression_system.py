"""Level, round and move bookkeeping for a Magic Square session."""
from __future__ import annotations

import logging
import random
from typing import Any

from esper import World

from magic_square.components.game_progress import GameProgress
from magic_square.components.game_rules import GameRules
from magic_square.components.game_state import GameMode
from magic_square.events.bus import (
    EVENT_CELL_ACTIVATE,
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_GAME_RESET_REQUEST,
    EVENT_LEVEL_ADVANCED,
    EVENT_MOVE_MADE,
    EVENT_RESET_TAP,
    EVENT_ROUND_ADVANCE_REQUEST,
    EVENT_ROUND_SKIP_REQUEST,
    EVENT_ROUND_STARTED,
    EVENT_ROUND_WON,
    EVENT_STATE_RESTORED,
    EventBus,
)
from magic_square.systems.board import BoardSystem
from magic_square.systems.puzzle_generator import PuzzleGenerator
from magic_square.utils.game_state import get_game_mode, set_game_mode
from magic_square.utils.reset_gesture import ResetTapCounter

logger = logging.getLogger(__name__)


class ProgressionSystem:
    """Drives the round state machine: playing, round won, game over.

    Every operation is total. Requests that do not fit the current state
    (advancing an unsolved round, anything after game over) are ignored.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        *,
        rules: GameRules | None = None,
        generator: PuzzleGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.rules = rules or getattr(world, "rules", None) or GameRules()
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.generator = generator or PuzzleGenerator(
            rng=self._rng,
            activations=self.rules.scramble_activations,
        )
        self._reset_gesture = ResetTapCounter(threshold=self.rules.reset_tap_threshold)
        self._progress_entity = self._ensure_progress_entity()
        if get_game_mode(self.world) is None:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self._sync_board_size()

        self.event_bus.subscribe(EVENT_CELL_ACTIVATE, self._on_cell_activate)
        self.event_bus.subscribe(EVENT_ROUND_ADVANCE_REQUEST, self._on_advance_request)
        self.event_bus.subscribe(EVENT_ROUND_SKIP_REQUEST, self._on_skip_request)
        self.event_bus.subscribe(EVENT_GAME_RESET_REQUEST, self._on_reset_request)
        self.event_bus.subscribe(EVENT_RESET_TAP, self._on_reset_tap)
        self.event_bus.subscribe(EVENT_STATE_RESTORED, self._on_state_restored)

    def _ensure_progress_entity(self) -> int:
        existing = list(self.world.get_component(GameProgress))
        if existing:
            return existing[0][0]
        return self.world.create_entity(GameProgress())

    @property
    def progress(self) -> GameProgress:
        return self.world.component_for_entity(self._progress_entity, GameProgress)

    @property
    def reset_gesture(self) -> ResetTapCounter:
        return self._reset_gesture

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def grid_size(self) -> int:
        return self.rules.grid_size(self.progress.level)

    @property
    def rounds_in_level(self) -> int:
        return self.rules.rounds_in_level(self.progress.level)

    @property
    def is_last_round_of_level(self) -> bool:
        return self.progress.round >= self.rounds_in_level

    @property
    def is_level_over(self) -> bool:
        return self.progress.round > self.rounds_in_level

    @property
    def is_game_over(self) -> bool:
        return self.progress.game_over

    @property
    def is_solved(self) -> bool:
        return self.board_system.solved

    @property
    def level_label(self) -> str:
        return self.rules.level_label(self.progress.level)

    @property
    def show_continue(self) -> bool:
        return self.is_solved and not self.is_game_over

    @property
    def show_game_over(self) -> bool:
        return self.is_solved and self.is_game_over

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def activate(self, x: int, y: int) -> None:
        progress = self.progress
        progress.move += 1
        self.board_system.activate(x, y)
        self.event_bus.emit(EVENT_MOVE_MADE, x=x, y=y, move=progress.move)
        self._log_state()
        if self.board_system.solved and get_game_mode(self.world) == GameMode.PLAYING:
            self._enter_round_won()

    def advance(self) -> None:
        if self.progress.game_over or get_game_mode(self.world) != GameMode.ROUND_WON:
            return
        self._next_round()

    def skip_round(self) -> None:
        if self.progress.game_over:
            return
        self._next_round()

    def start_round(self) -> None:
        """Deal a fresh board for the current level and round."""
        progress = self.progress
        progress.move = 0
        cells = self.generator.generate(self.grid_size, progress.round)
        self.board_system.load_grid(cells, size=self.grid_size)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("Round %d of %d started at %s", progress.round, self.rounds_in_level, self.level_label)
        self.event_bus.emit(
            EVENT_ROUND_STARTED,
            level=progress.level,
            round=progress.round,
            size=self.grid_size,
        )
        # The generator can, in principle, deal an already-solved board; treat it as won.
        if self.board_system.solved:
            self._enter_round_won()

    def reset(self, reason: str = "reset") -> None:
        progress = self.progress
        progress.level = 1
        progress.round = 1
        progress.move = 0
        progress.game_over = False
        self._reset_gesture.reset()
        self.board_system.resize(self.grid_size)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("Game reset (%s)", reason)
        self.event_bus.emit(EVENT_GAME_RESET, reason=reason)

    def reset_request(self) -> None:
        if self._reset_gesture.register():
            self.reset(reason="reset_gesture")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_cell_activate(self, sender: Any, **payload: Any) -> None:
        try:
            x = int(payload.get("x"))
            y = int(payload.get("y"))
        except (TypeError, ValueError):
            return
        self.activate(x, y)

    def _on_advance_request(self, sender: Any, **payload: Any) -> None:
        self.advance()

    def _on_skip_request(self, sender: Any, **payload: Any) -> None:
        self.skip_round()

    def _on_reset_request(self, sender: Any, **payload: Any) -> None:
        self.reset(reason=payload.get("reason") or "reset")

    def _on_reset_tap(self, sender: Any, **payload: Any) -> None:
        self.reset_request()

    def _on_state_restored(self, sender: Any, **payload: Any) -> None:
        self._reset_gesture.reset()
        mode = GameMode.ROUND_WON if self.board_system.solved else GameMode.PLAYING
        set_game_mode(self.world, self.event_bus, mode)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_round(self) -> None:
        progress = self.progress
        previous_level = progress.level
        previous_round = progress.round
        progress.round += 1
        if self.is_level_over:
            progress.level += 1
            progress.round = 1
        if progress.level > self.rules.max_game_level:
            progress.level = previous_level
            progress.round = previous_round
            self._enter_game_over()
            return
        if progress.level != previous_level:
            logger.info("%s completed, moving to %s", self.rules.level_label(previous_level), self.level_label)
            self.event_bus.emit(EVENT_LEVEL_ADVANCED, previous_level=previous_level, level=progress.level)
        self.start_round()

    def _enter_round_won(self) -> None:
        progress = self.progress
        set_game_mode(self.world, self.event_bus, GameMode.ROUND_WON)
        logger.info("Round %d of %s won in %d moves", progress.round, self.level_label, progress.move)
        self.event_bus.emit(
            EVENT_ROUND_WON,
            level=progress.level,
            round=progress.round,
            move=progress.move,
        )

    def _enter_game_over(self) -> None:
        progress = self.progress
        progress.game_over = True
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("Game over after %s", self.level_label)
        self.event_bus.emit(EVENT_GAME_OVER, level=progress.level, round=progress.round)

    def _sync_board_size(self) -> None:
        if self.board_system.size != self.grid_size:
            self.board_system.resize(self.grid_size)

    def _log_state(self) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        progress = self.progress
        logger.debug(
            "move=%d round=%d/%d level=%d last_round=%s grid=%s",
            progress.move,
            progress.round,
            self.rounds_in_level,
            progress.level,
            self.is_last_round_of_level,
            self.level_label,
        )
