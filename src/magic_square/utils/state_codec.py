"""Persisted snapshot shape and the defaults applied when loading it."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from magic_square.constants import (
    KEY_GAME_BOXES,
    KEY_GAME_LEVEL,
    KEY_GAME_MOVE,
    KEY_GAME_ROUND,
    MAX_GAME_LEVEL,
)
from magic_square.systems.board_ops import blank_cells, normalize_cells


@dataclass(slots=True)
class GameSnapshot:
    level: int = 1
    move: int = 1
    round: int = 1
    cells: List[bool] = field(default_factory=blank_cells)


def _floored_int(value: Any, floor: int = 1) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return floor
    return max(floor, number)


def encode(snapshot: GameSnapshot) -> Dict[str, Any]:
    return {
        KEY_GAME_LEVEL: snapshot.level,
        KEY_GAME_MOVE: snapshot.move,
        KEY_GAME_ROUND: snapshot.round,
        KEY_GAME_BOXES: list(normalize_cells(snapshot.cells)),
    }


def decode(payload: Mapping[str, Any] | None, *, max_level: int = MAX_GAME_LEVEL) -> GameSnapshot:
    """Build a snapshot from stored values, never failing.

    Missing integers load as 1 (so a fresh store yields level 1, move 1,
    round 1), every integer is floored at 1, and the cell array falls back
    to all-off when it is absent, not a list, or holds anything but bools.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    boxes = payload.get(KEY_GAME_BOXES)
    if isinstance(boxes, (list, tuple)) and all(isinstance(box, bool) for box in boxes):
        cells = normalize_cells(boxes)
    else:
        cells = blank_cells()
    return GameSnapshot(
        level=min(_floored_int(payload.get(KEY_GAME_LEVEL)), max(1, max_level)),
        move=_floored_int(payload.get(KEY_GAME_MOVE)),
        round=_floored_int(payload.get(KEY_GAME_ROUND)),
        cells=cells,
    )
