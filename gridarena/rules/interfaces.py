"""Rules capability interface shared by both game variants.

The session orchestrator and the AI are written once against
:class:`RulesEngine`; each variant supplies legality, move application,
terminal detection and move evaluation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..board import BoardState
from ..models import GameStatus, GameVariant, Mark


@dataclass(frozen=True)
class AppliedMove:
    """A placement that has been written to a board."""
    position: int
    mark: Mark
    flipped: tuple[int, ...] = ()


class RulesEngine(ABC):
    """Abstract rules host for one game variant."""

    variant: GameVariant
    board_size: int

    def new_board(self) -> BoardState:
        """Empty board with the variant's initial placement applied."""
        return BoardState(self.board_size)

    @abstractmethod
    def legal_moves(self, board: BoardState, mark: Mark) -> list[int]:
        """All positions ``mark`` may play, in ascending order."""

    @abstractmethod
    def validate(self, board: BoardState, position: int, mark: Mark) -> None:
        """Raise a :class:`~gridarena.errors.ValidationError` if the move is not allowed.

        Never mutates ``board``.
        """

    @abstractmethod
    def apply(self, board: BoardState, position: int, mark: Mark) -> AppliedMove:
        """Validate and write the move to ``board``."""

    @abstractmethod
    def terminal_status(
        self,
        board: BoardState,
        mover: Mark,
        consecutive_passes: int = 0,
    ) -> GameStatus | None:
        """Terminal status after ``mover`` acted, or ``None`` if play continues."""

    @abstractmethod
    def is_winning_move(self, board: BoardState, position: int, mark: Mark) -> bool:
        """Whether playing ``position`` wins for ``mark``. ``board`` is not mutated."""

    @abstractmethod
    def evaluate(self, board: BoardState, position: int, mark: Mark) -> float:
        """Heuristic value of ``mark`` playing ``position`` (higher is better)."""

    def has_legal_move(self, board: BoardState, mark: Mark) -> bool:
        return bool(self.legal_moves(board, mark))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(variant={self.variant.value}, size={self.board_size})"
