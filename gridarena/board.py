"""Board-level primitives for the GridArena engine.

A board is a fixed-capacity, row-major numpy ``int8`` array of
``size * size`` cell codes (see :class:`~gridarena.models.Mark`). Position
``p`` maps to ``(p // size, p % size)``. Copies never share storage.
"""
from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .errors import OccupiedError, OutOfRangeError
from .models import Mark

__all__ = ["BoardState", "NEIGHBOUR_OFFSETS"]

NEIGHBOUR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class BoardState:
    """Square grid of marks with a validated placement primitive."""

    __slots__ = ("size", "_cells", "_occupancy")

    def __init__(self, size: int, cells: Sequence[int] | np.ndarray | None = None):
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        self.size = size
        capacity = size * size
        if cells is None:
            self._cells = np.zeros(capacity, dtype=np.int8)
        else:
            arr = np.array(cells, dtype=np.int8).reshape(-1)
            if arr.shape[0] != capacity:
                raise ValueError(
                    f"expected {capacity} cells for a {size}x{size} board, got {arr.shape[0]}"
                )
            if not np.isin(arr, (Mark.EMPTY, Mark.SELF, Mark.OTHER)).all():
                raise ValueError("cells must hold EMPTY, SELF or OTHER codes")
            self._cells = arr
        self._occupancy = int(np.count_nonzero(self._cells))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "BoardState":
        """Build a board from text rows using ``.``, ``X`` (SELF) and ``O`` (OTHER)."""
        codes = {".": Mark.EMPTY, "X": Mark.SELF, "O": Mark.OTHER}
        grid = [row.replace(" ", "") for row in rows]
        return cls(len(grid), [codes[ch] for row in grid for ch in row])

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self.size * self.size

    def in_range(self, pos: int) -> bool:
        return 0 <= pos < self.capacity

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def rc(self, pos: int) -> tuple[int, int]:
        return divmod(pos, self.size)

    @property
    def center(self) -> int | None:
        """Centre cell index; only odd-sized boards have one."""
        if self.size % 2 == 0:
            return None
        mid = self.size // 2
        return self.index(mid, mid)

    @property
    def corners(self) -> tuple[int, int, int, int]:
        last = self.size - 1
        return (0, last, self.index(last, 0), self.index(last, last))

    def neighbours(self, pos: int) -> list[int]:
        row, col = self.rc(pos)
        return [
            self.index(row + dr, col + dc)
            for dr, dc in NEIGHBOUR_OFFSETS
            if self.in_bounds(row + dr, col + dc)
        ]

    def has_occupied_neighbour(self, pos: int) -> bool:
        return any(self._cells[n] != Mark.EMPTY for n in self.neighbours(pos))

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get(self, pos: int) -> Mark:
        if not self.in_range(pos):
            raise OutOfRangeError("Position outside board", position=pos, capacity=self.capacity)
        return Mark(int(self._cells[pos]))

    def get_rc(self, row: int, col: int) -> Mark:
        return Mark(int(self._cells[self.index(row, col)]))

    def place(self, pos: int, mark: Mark) -> None:
        """Write ``mark`` into an empty cell.

        Raises:
            OutOfRangeError: ``pos`` is outside the board.
            OccupiedError: the cell already holds a mark.
        """
        if mark is Mark.EMPTY:
            raise ValueError("cannot place an EMPTY mark")
        if not self.in_range(pos):
            raise OutOfRangeError("Position outside board", position=pos, capacity=self.capacity)
        if self._cells[pos] != Mark.EMPTY:
            raise OccupiedError("Cell already occupied", position=pos)
        self._cells[pos] = mark
        self._occupancy += 1

    def flip(self, pos: int, mark: Mark) -> None:
        """Change the owner of an occupied cell; occupancy is unchanged."""
        if self._cells[pos] == Mark.EMPTY:
            raise ValueError(f"cannot flip empty cell {pos}")
        self._cells[pos] = mark

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def occupancy(self) -> int:
        return self._occupancy

    def is_full(self) -> bool:
        return self._occupancy == self.capacity

    def count(self, mark: Mark) -> int:
        return int(np.count_nonzero(self._cells == mark))

    def empty_cells(self) -> list[int]:
        return np.flatnonzero(self._cells == Mark.EMPTY).tolist()

    def cells_of(self, mark: Mark) -> list[int]:
        return np.flatnonzero(self._cells == mark).tolist()

    def values(self, positions: np.ndarray) -> np.ndarray:
        """Vectorised read of many cells at once (returns a new array)."""
        return self._cells[positions]

    def to_list(self) -> list[int]:
        return self._cells.tolist()

    def copy(self) -> "BoardState":
        return BoardState(self.size, self._cells.copy())

    # ------------------------------------------------------------------
    # Symmetries
    # ------------------------------------------------------------------

    def rotated_180(self) -> "BoardState":
        return BoardState(self.size, self._cells[::-1].copy())

    def swapped(self) -> "BoardState":
        """Board with SELF and OTHER exchanged."""
        swapped = self._cells.copy()
        swapped[self._cells == Mark.SELF] = Mark.OTHER
        swapped[self._cells == Mark.OTHER] = Mark.SELF
        return BoardState(self.size, swapped)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash((self.size, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"BoardState(size={self.size}, occupancy={self._occupancy})"
