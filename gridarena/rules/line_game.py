"""K-in-a-row rules: win detection and the line-game rules host."""

from __future__ import annotations

import numpy as np

from ..board import BoardState
from ..config import LineGameConfig
from ..errors import OutOfRangeError, OccupiedError
from ..models import GameStatus, GameVariant, Mark
from .evaluation import LINE_AXES, evaluate_line_move
from .interfaces import AppliedMove, RulesEngine


def _build_windows(size: int, k: int) -> tuple[np.ndarray, np.ndarray]:
    """Every run of ``k`` consecutive cells, plus the axis index of each run.

    Order is fixed: rows, then columns, then principal diagonals, then
    anti-diagonals; within each, by starting cell in row-major order.
    """
    windows: list[list[int]] = []
    axes: list[int] = []
    for axis_idx, (dr, dc) in enumerate(LINE_AXES):
        for row in range(size):
            for col in range(size):
                end_r = row + dr * (k - 1)
                end_c = col + dc * (k - 1)
                if not (0 <= end_r < size and 0 <= end_c < size):
                    continue
                windows.append([(row + dr * i) * size + (col + dc * i) for i in range(k)])
                axes.append(axis_idx)
    return np.array(windows, dtype=np.intp), np.array(axes, dtype=np.intp)


class WinDetector:
    """Finds uniform non-empty windows of ``run_length`` cells."""

    def __init__(self, board_size: int, run_length: int):
        if not 1 <= run_length <= board_size:
            raise ValueError(f"run_length must be in [1, {board_size}], got {run_length}")
        self.board_size = board_size
        self.run_length = run_length
        self._windows, self._window_axes = _build_windows(board_size, run_length)
        self._through: list[np.ndarray] = [
            np.flatnonzero((self._windows == pos).any(axis=1))
            for pos in range(board_size * board_size)
        ]

    @property
    def window_count(self) -> int:
        return int(self._windows.shape[0])

    def _uniform(self, values: np.ndarray) -> np.ndarray:
        return (values == values[:, :1]).all(axis=1) & (values[:, 0] != Mark.EMPTY)

    def find_winner(self, board: BoardState) -> Mark | None:
        """Mark of the first uniform window in scan order, or ``None``."""
        values = board.values(self._windows)
        hits = self._uniform(values)
        if not hits.any():
            return None
        first = int(np.argmax(hits))
        return Mark(int(values[first, 0]))

    def has_win(self, board: BoardState, mark: Mark) -> bool:
        return bool((board.values(self._windows) == mark).all(axis=1).any())

    def completed_axes(self, board: BoardState, position: int, mark: Mark) -> set[int]:
        """Axes on which a window through ``position`` is uniformly ``mark``."""
        idx = self._through[position]
        if idx.size == 0:
            return set()
        full = (board.values(self._windows[idx]) == mark).all(axis=1)
        return {int(axis) for axis in self._window_axes[idx][full]}

    def completes_run(self, board: BoardState, position: int, mark: Mark) -> bool:
        """Whether ``mark`` at the empty ``position`` would complete a window."""
        idx = self._through[position]
        if idx.size == 0:
            return False
        values = board.values(self._windows[idx])
        # The candidate cell itself is empty; count it as ``mark``.
        values[self._windows[idx] == position] = mark
        return bool((values == mark).all(axis=1).any())


class LineGameRules(RulesEngine):
    """Rules host for the K-in-a-row variant."""

    variant = GameVariant.LINE

    def __init__(self, config: LineGameConfig | None = None):
        self.config = config or LineGameConfig()
        self.board_size = self.config.board_size
        self.detector = WinDetector(self.config.board_size, self.config.run_length)

    def legal_moves(self, board: BoardState, mark: Mark) -> list[int]:
        return board.empty_cells()

    def validate(self, board: BoardState, position: int, mark: Mark) -> None:
        if not board.in_range(position):
            raise OutOfRangeError("Position outside board", position=position, capacity=board.capacity)
        if board.get(position) is not Mark.EMPTY:
            raise OccupiedError("Cell already occupied", position=position)

    def apply(self, board: BoardState, position: int, mark: Mark) -> AppliedMove:
        board.place(position, mark)
        return AppliedMove(position=position, mark=mark)

    def terminal_status(
        self,
        board: BoardState,
        mover: Mark,
        consecutive_passes: int = 0,
    ) -> GameStatus | None:
        winner = self.detector.find_winner(board)
        if winner is not None:
            return GameStatus.win_for(winner)
        if board.is_full():
            return GameStatus.DRAW
        return None

    def is_winning_move(self, board: BoardState, position: int, mark: Mark) -> bool:
        if board.get(position) is not Mark.EMPTY:
            return False
        return self.detector.completes_run(board, position, mark)

    def is_fork(self, board: BoardState, position: int, mark: Mark) -> bool:
        """Whether the stone at ``position`` completes runs on two or more axes."""
        return len(self.detector.completed_axes(board, position, mark)) >= 2

    def evaluate(self, board: BoardState, position: int, mark: Mark) -> float:
        return float(
            evaluate_line_move(
                board,
                position,
                mark,
                window=self.config.evaluation_window,
                centre_bonus=self.config.centre_bonus,
            )
        )
