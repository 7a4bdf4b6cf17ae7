"""GridArena game engine.

Single-player board games against a tiered computer opponent:

- the line game (K-in-a-row on a square grid, 9x9 / 5-in-a-row by default)
- the capture game (disc flipping on an 8x8 grid)

The public surface lives in :mod:`gridarena.game_session`; the HTTP adapter
in :mod:`gridarena.main` wraps it for remote callers.
"""

from .game_session import (
    GameSession,
    create_session,
    finalize_outcome,
    legal_moves,
    session_status,
    submit_move,
    submit_pass,
)
from .models import (
    Difficulty,
    GameStatus,
    GameVariant,
    Mark,
    Outcome,
    RarityTier,
    SessionDelta,
    WinPattern,
)

__all__ = [
    "Difficulty",
    "GameSession",
    "GameStatus",
    "GameVariant",
    "Mark",
    "Outcome",
    "RarityTier",
    "SessionDelta",
    "WinPattern",
    "create_session",
    "finalize_outcome",
    "legal_moves",
    "session_status",
    "submit_move",
    "submit_pass",
]

__version__ = "1.0.0"
