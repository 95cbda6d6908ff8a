from __future__ import annotations

from dataclasses import dataclass

from magic_square.constants import (
    MAX_GAME_LEVEL,
    MAX_GRID_SIZE,
    MAX_ROUNDS_PER_LEVEL,
    RESET_TAP_THRESHOLD,
    SCRAMBLE_ACTIVATIONS,
)


@dataclass(frozen=True, slots=True)
class GameRules:
    """Balance constants plus the per-level quantities derived from them."""

    max_rounds_per_level: int = MAX_ROUNDS_PER_LEVEL
    max_game_level: int = MAX_GAME_LEVEL
    scramble_activations: int = SCRAMBLE_ACTIVATIONS
    reset_tap_threshold: int = RESET_TAP_THRESHOLD

    def __post_init__(self) -> None:
        if self.max_game_level < 1:
            raise ValueError("max_game_level must be at least 1")
        if self.grid_size(self.max_game_level) > MAX_GRID_SIZE:
            raise ValueError(
                f"max_game_level {self.max_game_level} needs a grid larger than {MAX_GRID_SIZE}x{MAX_GRID_SIZE}"
            )
        if self.max_rounds_per_level < 1:
            raise ValueError("max_rounds_per_level must be at least 1")
        if self.scramble_activations < 0:
            raise ValueError("scramble_activations cannot be negative")
        if self.reset_tap_threshold < 0:
            raise ValueError("reset_tap_threshold cannot be negative")

    @staticmethod
    def grid_size(level: int) -> int:
        return level + 1

    def rounds_in_level(self, level: int) -> int:
        # Floored at 1: with the defaults the last level is a single final round.
        return max(1, self.max_rounds_per_level - level + 1)

    @staticmethod
    def level_label(level: int) -> str:
        size = level + 1
        return f"{size}x{size}"
