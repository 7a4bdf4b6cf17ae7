"""Deterministic test doubles and board builders shared across test modules."""

from gridarena.board import BoardState
from gridarena.models import Mark
from gridarena.providers import RandomnessProvider, SeededRandomness

PLAYER = "alice"


class FixedRandomness(RandomnessProvider):
    """Provider that always returns the same draws."""

    def __init__(self, value: float = 0.0, index: int = 0):
        self.value = value
        self.index = index

    def random(self) -> float:
        return self.value

    def randbelow(self, n: int) -> int:
        return min(self.index, n - 1)


class ForbiddenRandomness(RandomnessProvider):
    """Provider that fails the test if it is ever consulted."""

    def random(self) -> float:
        raise AssertionError("randomness provider must not be consulted")

    def randbelow(self, n: int) -> int:
        raise AssertionError("randomness provider must not be consulted")


def board_with(size: int, self_cells=(), other_cells=()) -> BoardState:
    """Board with the given SELF and OTHER cells filled."""
    board = BoardState(size)
    for pos in self_cells:
        board.place(pos, Mark.SELF)
    for pos in other_cells:
        board.place(pos, Mark.OTHER)
    return board


def random_board(size: int, seed: int, fill: float = 0.4) -> BoardState:
    """Board with roughly ``fill`` of its cells occupied, reproducibly."""
    rng = SeededRandomness(seed)
    board = BoardState(size)
    for pos in range(board.capacity):
        if rng.random() < fill:
            board.place(pos, Mark.SELF if rng.random() < 0.5 else Mark.OTHER)
    return board
