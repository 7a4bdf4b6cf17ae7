"""Flip-capture rules: 8-direction capture computation and the capture-game rules host.

A placement on an empty cell captures along a direction when walking outward
finds a non-empty run of opponent discs closed by one of the mover's own
discs (before the edge or an empty cell). A placement is legal iff it
captures along at least one direction; every captured disc changes owner.
A side with no legal placement passes; two consecutive passes or a full
board end the game, decided by disc count.
"""

from __future__ import annotations

import logging

from ..board import NEIGHBOUR_OFFSETS, BoardState
from ..config import CaptureGameConfig
from ..errors import IllegalMoveError, InvariantViolation, OccupiedError, OutOfRangeError
from ..models import GameStatus, GameVariant, Mark
from .evaluation import evaluate_capture_move
from .interfaces import AppliedMove, RulesEngine

logger = logging.getLogger(__name__)

DIRECTIONS = NEIGHBOUR_OFFSETS


def standard_opening(size: int) -> BoardState:
    """Four centre discs: OTHER on the main diagonal, SELF on the anti-diagonal."""
    board = BoardState(size)
    lo = size // 2 - 1
    hi = size // 2
    board.place(board.index(lo, lo), Mark.OTHER)
    board.place(board.index(lo, hi), Mark.SELF)
    board.place(board.index(hi, lo), Mark.SELF)
    board.place(board.index(hi, hi), Mark.OTHER)
    return board


class CaptureEngine:
    """Legality and flip application for the capture game."""

    def __init__(self, board_size: int = 8):
        self.board_size = board_size

    def flips_for(self, board: BoardState, position: int, mark: Mark) -> list[int]:
        """Cells that ``mark`` would capture by playing ``position`` (empty if illegal)."""
        if board.get(position) is not Mark.EMPTY:
            return []
        opponent = mark.opponent
        row, col = board.rc(position)
        flipped: list[int] = []
        for dr, dc in DIRECTIONS:
            run: list[int] = []
            r, c = row + dr, col + dc
            while board.in_bounds(r, c) and board.get_rc(r, c) is opponent:
                run.append(board.index(r, c))
                r += dr
                c += dc
            if run and board.in_bounds(r, c) and board.get_rc(r, c) is mark:
                flipped.extend(run)
        return flipped

    def is_legal(self, board: BoardState, position: int, mark: Mark) -> bool:
        return bool(self.flips_for(board, position, mark))

    def legal_moves(self, board: BoardState, mark: Mark) -> list[int]:
        return [pos for pos in board.empty_cells() if self.is_legal(board, pos, mark)]

    def apply(self, board: BoardState, position: int, mark: Mark) -> list[int]:
        """Place ``mark`` and flip every captured disc. Returns the flipped cells."""
        flipped = self.flips_for(board, position, mark)
        if not flipped:
            raise IllegalMoveError("Placement captures nothing", position=position)
        board.place(position, mark)
        for pos in flipped:
            board.flip(pos, mark)
        return flipped


class CaptureGameRules(RulesEngine):
    """Rules host for the flip-capture variant."""

    variant = GameVariant.CAPTURE

    def __init__(self, config: CaptureGameConfig | None = None):
        self.config = config or CaptureGameConfig()
        self.board_size = self.config.board_size
        self.engine = CaptureEngine(self.board_size)

    def new_board(self) -> BoardState:
        return standard_opening(self.board_size)

    def legal_moves(self, board: BoardState, mark: Mark) -> list[int]:
        return self.engine.legal_moves(board, mark)

    def validate(self, board: BoardState, position: int, mark: Mark) -> None:
        if not board.in_range(position):
            raise OutOfRangeError("Position outside board", position=position, capacity=board.capacity)
        if board.get(position) is not Mark.EMPTY:
            raise OccupiedError("Cell already occupied", position=position)
        if not self.engine.is_legal(board, position, mark):
            raise IllegalMoveError("Placement captures nothing", position=position)

    def apply(self, board: BoardState, position: int, mark: Mark) -> AppliedMove:
        self.validate(board, position, mark)
        before = board.count(mark)
        flipped = self.engine.apply(board, position, mark)
        if board.count(mark) != before + 1 + len(flipped):
            raise InvariantViolation(
                "Disc count drifted during flip application",
                context={"position": position, "flipped": len(flipped)},
            )
        logger.debug("capture %s at %d flipped %s", mark.name, position, flipped)
        return AppliedMove(position=position, mark=mark, flipped=tuple(flipped))

    @staticmethod
    def pieces(board: BoardState) -> tuple[int, int]:
        """(SELF discs, OTHER discs)."""
        return board.count(Mark.SELF), board.count(Mark.OTHER)

    def decide_by_count(self, board: BoardState) -> GameStatus:
        self_pieces, other_pieces = self.pieces(board)
        if self_pieces > other_pieces:
            return GameStatus.SELF_WIN
        if other_pieces > self_pieces:
            return GameStatus.OTHER_WIN
        return GameStatus.DRAW

    def terminal_status(
        self,
        board: BoardState,
        mover: Mark,
        consecutive_passes: int = 0,
    ) -> GameStatus | None:
        if board.is_full() or consecutive_passes >= 2:
            return self.decide_by_count(board)
        return None

    def is_winning_move(self, board: BoardState, position: int, mark: Mark) -> bool:
        """Whether ``position`` leaves a decided game that ``mark`` leads.

        "Decided" means the board is full or neither side has a legal
        placement, so the game will end on the following passes.
        """
        flipped = self.engine.flips_for(board, position, mark)
        if not flipped:
            return False
        trial = board.copy()
        trial.place(position, mark)
        for pos in flipped:
            trial.flip(pos, mark)
        if not trial.is_full() and (
            self.engine.legal_moves(trial, Mark.SELF) or self.engine.legal_moves(trial, Mark.OTHER)
        ):
            return False
        return trial.count(mark) > trial.count(mark.opponent)

    def evaluate(self, board: BoardState, position: int, mark: Mark) -> float:
        flips = len(self.engine.flips_for(board, position, mark))
        return evaluate_capture_move(board, position, flips, self.config.weights)
