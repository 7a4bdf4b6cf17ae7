"""
Shared pytest fixtures for gridarena tests.

Every fixture that touches randomness or time is deterministic: sessions
get a ManualClock and a SeededRandomness unless a test asks otherwise.
"""

from typing import Callable, Optional

import pytest

from gridarena.board import BoardState
from gridarena.game_session import GameSession, create_session
from gridarena.models import Difficulty, GameVariant
from gridarena.providers import ManualClock, RandomnessProvider, SeededRandomness
from gridarena.rules.capture_game import CaptureGameRules
from gridarena.rules.line_game import LineGameRules
from gridarena.telemetry import EventRecorder, GameEvents

from .helpers import PLAYER


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(0)


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def events(recorder: EventRecorder) -> GameEvents:
    bus = GameEvents()
    bus.subscribe(recorder)
    return bus


@pytest.fixture
def line_rules() -> LineGameRules:
    return LineGameRules()


@pytest.fixture
def capture_rules() -> CaptureGameRules:
    return CaptureGameRules()


@pytest.fixture
def make_session(clock: ManualClock, events: GameEvents) -> Callable[..., GameSession]:
    """Factory for sessions wired to the shared clock and event bus."""

    def _make(
        variant: GameVariant = GameVariant.LINE,
        difficulty: Difficulty = Difficulty.MEDIUM,
        seed: int = 1234,
        initial_board: Optional[BoardState] = None,
        randomness: Optional[RandomnessProvider] = None,
        **kwargs,
    ) -> GameSession:
        return create_session(
            difficulty,
            variant=variant,
            player_id=PLAYER,
            clock=clock,
            randomness=randomness or SeededRandomness(seed),
            initial_board=initial_board,
            events=events,
            **kwargs,
        )

    return _make
