"""Tiered computer opponent.

Each turn runs the same decision sequence against the variant's rules host:

1. win-now: the first legal cell (ascending) that wins for the AI is played
2. block-now: the first legal cell that would win for the opponent is taken
3. otherwise a weighted draw between a random candidate and the evaluator
   argmax, with the weight set by the difficulty profile

Steps 1 and 2 never consult the randomness provider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..board import BoardState
from ..errors import InvariantViolation
from ..models import AIBranch, GameVariant
from .base import BaseAI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIDecision:
    """Chosen reply. ``position`` is ``None`` only for a capture-game pass."""
    position: int | None
    branch: AIBranch
    score: float | None = None

    @property
    def is_pass(self) -> bool:
        return self.position is None


class TieredAI(BaseAI):
    """Win-now, block-now, then heuristic-or-random."""

    def select_move(self, board: BoardState) -> AIDecision:
        legal = self.get_valid_moves(board)
        if not legal:
            if self.rules.variant is GameVariant.LINE:
                # The session only asks for a reply while a cell is empty.
                raise InvariantViolation(
                    "Line-game AI found no candidate cell",
                    context={"occupancy": board.occupancy, "capacity": board.capacity},
                )
            logger.debug("%r has no legal placement; passing", self)
            return AIDecision(position=None, branch=AIBranch.PASS)

        winning = self.find_winning_cell(board, legal)
        if winning is not None:
            logger.debug("win-now at %d", winning)
            return AIDecision(position=winning, branch=AIBranch.WIN_NOW)

        blocking = self.find_blocking_cell(board, legal)
        if blocking is not None:
            logger.debug("block-now at %d", blocking)
            return AIDecision(position=blocking, branch=AIBranch.BLOCK_NOW)

        if self.should_pick_random_move():
            pool = self.candidate_pool(board, legal)
            position = self.get_random_element(pool)
            logger.debug("random branch picked %d from %d candidates", position, len(pool))
            return AIDecision(position=position, branch=AIBranch.RANDOM)

        position, score = self.best_by_evaluation(board, legal)
        logger.debug("heuristic branch picked %d (score=%.1f)", position, score)
        return AIDecision(position=position, branch=AIBranch.HEURISTIC, score=score)

    def find_winning_cell(self, board: BoardState, legal: list[int]) -> int | None:
        for pos in legal:
            if self.rules.is_winning_move(board, pos, self.mark):
                return pos
        return None

    def find_blocking_cell(self, board: BoardState, legal: list[int]) -> int | None:
        opponent = self.mark.opponent
        for pos in legal:
            if self.rules.is_winning_move(board, pos, opponent):
                return pos
        return None

    @staticmethod
    def candidate_pool(board: BoardState, legal: list[int]) -> list[int]:
        """Legal cells touching an occupied cell, or every legal cell if none do."""
        adjacent = [pos for pos in legal if board.has_occupied_neighbour(pos)]
        return adjacent or legal

    def best_by_evaluation(self, board: BoardState, legal: list[int]) -> tuple[int, float]:
        scores = [self.rules.evaluate(board, pos, self.mark) for pos in legal]
        best = max(scores)
        tied = [pos for pos, score in zip(legal, scores) if score == best]
        if self.random_tiebreak and len(tied) > 1:
            return self.get_random_element(tied), best
        return tied[0], best
