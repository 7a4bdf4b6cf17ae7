"""
Base AI Player class for GridArena
Abstract base class that all computer opponents inherit from
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..board import BoardState
from ..models import Difficulty, Mark
from ..providers import RandomnessProvider
from ..rules.interfaces import RulesEngine


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(
        self,
        mark: Mark,
        difficulty: Difficulty,
        rules: RulesEngine,
        randomness: RandomnessProvider,
        randomness_rate: float = 0.0,
        random_tiebreak: bool = False,
        profile_id: str = "",
    ):
        """
        Initialize AI player

        Args:
            mark: The mark this AI plays
            difficulty: Difficulty tier the AI was built for
            rules: Rules host for the variant being played
            randomness: Injected randomness provider; every stochastic
                choice goes through it so seeded games replay exactly
            randomness_rate: Probability of taking the random branch
            random_tiebreak: Break evaluator ties randomly instead of by
                lowest index
            profile_id: Identifier of the difficulty profile in use
        """
        self.mark = mark
        self.difficulty = difficulty
        self.rules = rules
        self.randomness = randomness
        self.randomness_rate = randomness_rate
        self.random_tiebreak = random_tiebreak
        self.profile_id = profile_id

    @abstractmethod
    def select_move(self, board: BoardState) -> Optional[Any]:
        """
        Select a move for the current board

        Args:
            board: Read-only view of the current board

        Returns:
            Selected move or None if the AI must pass
        """
        pass

    def get_valid_moves(self, board: BoardState) -> List[int]:
        return self.rules.legal_moves(board, self.mark)

    def should_pick_random_move(self) -> bool:
        """
        Determine if AI should pick a random move based on randomness setting

        Returns:
            True if should pick random move
        """
        if not self.randomness_rate:
            return False
        return self.randomness.random() < self.randomness_rate

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the injected provider.

        Args:
            items: List of items

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.randomness.choice(items)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(mark={self.mark.name}, "
            f"difficulty={self.difficulty.value}, profile={self.profile_id!r})"
        )
