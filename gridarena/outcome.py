"""Post-game scoring: rarity tier and win-pattern label.

Runs once, when a session leaves ACTIVE. Only a human (SELF) win earns a
rarity tier; any win gets a pattern label; a draw gets neither.

Line game:
    base tier from the human's move count (fewer is better), then one
    promotion each for Hard difficulty, a fast finish and a fork, capped
    at DIAMOND. Pattern precedence: fork, center-control, corner-trap
    (two or more corners), defensive.

Capture game:
    base tier from the final disc margin, then one promotion each for Hard
    difficulty and a fast finish, capped at DIAMOND. Pattern:
    corner-control with three or more corners, else mobility.
"""

from __future__ import annotations

import logging
from typing import Optional, cast

from .board import BoardState
from .models import Difficulty, GameStatus, GameVariant, Mark, Outcome, RarityTier, WinPattern
from .rules.capture_game import CaptureGameRules
from .rules.interfaces import RulesEngine
from .rules.line_game import LineGameRules

logger = logging.getLogger(__name__)


def corners_held(board: BoardState, mark: Mark) -> int:
    return sum(1 for pos in board.corners if board.get(pos) is mark)


class OutcomeClassifier:
    """Pure mapping from a terminal session's metrics to an :class:`Outcome`."""

    def __init__(self, rules: RulesEngine):
        self.rules = rules

    def classify(
        self,
        board: BoardState,
        status: GameStatus,
        difficulty: Difficulty,
        player_moves: int,
        total_thinking_time: int,
        last_move: Optional[int] = None,
    ) -> Outcome:
        """Score a terminal board.

        Args:
            board: Final board.
            status: Terminal status; must not be ACTIVE.
            difficulty: Difficulty the session was played at.
            player_moves: Number of human placements.
            total_thinking_time: Milliseconds from start to the human's last move.
            last_move: Cell of the final placement, used for fork detection.
        """
        if not status.is_terminal:
            raise ValueError("cannot classify an active session")
        if self.rules.variant is GameVariant.LINE:
            return self._classify_line(
                board, status, difficulty, player_moves, total_thinking_time, last_move
            )
        return self._classify_capture(
            board, status, difficulty, player_moves, total_thinking_time
        )

    # ------------------------------------------------------------------
    # Line game
    # ------------------------------------------------------------------

    def line_pattern(self, board: BoardState, winner: Mark, last_move: Optional[int]) -> WinPattern:
        rules = cast(LineGameRules, self.rules)
        if last_move is not None and board.get(last_move) is winner and rules.is_fork(board, last_move, winner):
            return WinPattern.FORK
        center = board.center
        if center is not None and board.get(center) is winner:
            return WinPattern.CENTER_CONTROL
        if corners_held(board, winner) >= 2:
            return WinPattern.CORNER_TRAP
        return WinPattern.DEFENSIVE

    def line_tier(
        self,
        difficulty: Difficulty,
        player_moves: int,
        total_thinking_time: int,
        pattern: WinPattern,
    ) -> RarityTier:
        config = self.rules.config
        bonus = 0
        if difficulty is Difficulty.HARD:
            bonus += 1
        if total_thinking_time < config.fast_win_ms:
            bonus += 1
        if pattern is WinPattern.FORK:
            bonus += 1
        return config.base_tier_for_moves(player_moves).promoted(bonus)

    def _classify_line(
        self,
        board: BoardState,
        status: GameStatus,
        difficulty: Difficulty,
        player_moves: int,
        total_thinking_time: int,
        last_move: Optional[int],
    ) -> Outcome:
        if status is GameStatus.DRAW:
            return Outcome(
                status=status,
                total_thinking_time=total_thinking_time,
                player_moves=player_moves,
            )
        winner = Mark.SELF if status is GameStatus.SELF_WIN else Mark.OTHER
        pattern = self.line_pattern(board, winner, last_move)
        tier = None
        if status is GameStatus.SELF_WIN:
            tier = self.line_tier(difficulty, player_moves, total_thinking_time, pattern)
        return Outcome(
            status=status,
            rarity_tier=tier,
            win_pattern=pattern,
            total_thinking_time=total_thinking_time,
            player_moves=player_moves,
        )

    # ------------------------------------------------------------------
    # Capture game
    # ------------------------------------------------------------------

    @staticmethod
    def capture_pattern(board: BoardState, winner: Mark) -> WinPattern:
        if corners_held(board, winner) >= 3:
            return WinPattern.CORNER_CONTROL
        return WinPattern.MOBILITY

    def capture_tier(
        self,
        difficulty: Difficulty,
        margin: int,
        total_thinking_time: int,
    ) -> RarityTier:
        config = self.rules.config
        bonus = 0
        if difficulty is Difficulty.HARD:
            bonus += 1
        if total_thinking_time < config.fast_win_ms:
            bonus += 1
        return config.base_tier_for_margin(margin).promoted(bonus)

    def _classify_capture(
        self,
        board: BoardState,
        status: GameStatus,
        difficulty: Difficulty,
        player_moves: int,
        total_thinking_time: int,
    ) -> Outcome:
        self_pieces, other_pieces = CaptureGameRules.pieces(board)
        pattern = None
        tier = None
        if status is not GameStatus.DRAW:
            winner = Mark.SELF if status is GameStatus.SELF_WIN else Mark.OTHER
            pattern = self.capture_pattern(board, winner)
        if status is GameStatus.SELF_WIN:
            tier = self.capture_tier(difficulty, self_pieces - other_pieces, total_thinking_time)
        return Outcome(
            status=status,
            rarity_tier=tier,
            win_pattern=pattern,
            total_thinking_time=total_thinking_time,
            player_moves=player_moves,
            self_pieces=self_pieces,
            other_pieces=other_pieces,
        )
