from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from esper import World

from magic_square.components.board import Board
from magic_square.constants import BACKING_CELLS, MAX_GRID_SIZE, MIN_GRID_SIZE

Position = Tuple[int, int]

# Self first, then the four orthogonal neighbours.
PLUS_OFFSETS: Tuple[Position, ...] = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def clamp_size(size: int) -> int:
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(size)))


def blank_cells() -> List[bool]:
    return [False] * BACKING_CELLS


def normalize_cells(values: Iterable[object]) -> List[bool]:
    """Coerce to bools and pad or truncate to the backing length."""
    cells = [bool(value) for value in values][:BACKING_CELLS]
    cells.extend([False] * (BACKING_CELLS - len(cells)))
    return cells


def cell_index(x: int, y: int, size: int) -> int:
    return x + y * size


def in_bounds(x: int, y: int, size: int) -> bool:
    return 0 <= x < size and 0 <= y < size


def plus_positions(x: int, y: int, size: int) -> List[Position]:
    """Cells an activation at (x, y) touches, edge cells clipped."""
    positions: List[Position] = []
    for dx, dy in PLUS_OFFSETS:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, size):
            positions.append((nx, ny))
    return positions


def toggle_plus(cells: List[bool], size: int, x: int, y: int) -> List[Position]:
    """Flip (x, y) and its in-range neighbours in place. Returns the flipped positions."""
    positions = plus_positions(x, y, size)
    for px, py in positions:
        idx = cell_index(px, py, size)
        cells[idx] = not cells[idx]
    return positions


def is_solved(cells: Sequence[bool], size: int) -> bool:
    return all(cells[:size * size])


def render_grid(cells: Sequence[bool], size: int) -> str:
    """One token per row, ``X`` for on and ``_`` for off."""
    rows = []
    for y in range(size):
        rows.append("".join("X" if cells[cell_index(x, y, size)] else "_" for x in range(size)))
    return " ".join(rows)
