"""
Pydantic Models for GridArena Game State
Shared by the session orchestrator, the telemetry bus and the HTTP adapter.
"""

from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field


class Mark(IntEnum):
    """Cell mark. Values are the raw cell codes stored on the board."""
    EMPTY = 0
    SELF = 1
    OTHER = 2

    @property
    def opponent(self) -> "Mark":
        if self is Mark.SELF:
            return Mark.OTHER
        if self is Mark.OTHER:
            return Mark.SELF
        raise ValueError("EMPTY has no opponent")


class GameVariant(str, Enum):
    """Game variant enumeration"""
    LINE = "line"
    CAPTURE = "capture"


class Difficulty(str, Enum):
    """AI difficulty tier"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameStatus(str, Enum):
    """Session status. Every value other than ACTIVE is terminal."""
    ACTIVE = "active"
    SELF_WIN = "self_win"
    OTHER_WIN = "other_win"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE

    @classmethod
    def win_for(cls, mark: Mark) -> "GameStatus":
        return cls.SELF_WIN if mark is Mark.SELF else cls.OTHER_WIN


class RarityTier(IntEnum):
    """Ordered reward tier: BRONZE < SILVER < GOLD < DIAMOND."""
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    DIAMOND = 4

    def promoted(self, steps: int = 1) -> "RarityTier":
        return RarityTier(min(int(self) + steps, int(RarityTier.DIAMOND)))


class WinPattern(str, Enum):
    """Win pattern label attached to an outcome"""
    CENTER_CONTROL = "center-control"
    CORNER_TRAP = "corner-trap"
    DEFENSIVE = "defensive"
    FORK = "fork"
    CORNER_CONTROL = "corner-control"
    MOBILITY = "mobility"


class AIBranch(str, Enum):
    """Which step of the tiered decision procedure produced an AI move."""
    WIN_NOW = "win_now"
    BLOCK_NOW = "block_now"
    RANDOM = "random"
    HEURISTIC = "heuristic"
    PASS = "pass"


class EventKind(str, Enum):
    """Telemetry event kinds, one per session transition."""
    SESSION_CREATED = "session_created"
    MOVE_MADE = "move_made"
    AI_MOVED = "ai_moved"
    PASS_RECORDED = "pass_recorded"
    GAME_FINISHED = "game_finished"


class MoveRecord(BaseModel):
    """One applied placement or pass, in chronological order."""
    mover: Mark
    position: Optional[int] = None
    flipped: List[int] = Field(default_factory=list)
    elapsed_ms: int = 0

    class Config:
        frozen = True

    @property
    def is_pass(self) -> bool:
        return self.position is None


class Outcome(BaseModel):
    """Finalized result of a session, computed once at the terminal transition.

    ``rarity_tier`` is only assigned for a human (SELF) win; ``win_pattern``
    is reported for any win and is ``None`` for a draw.
    """
    status: GameStatus
    rarity_tier: Optional[RarityTier] = None
    win_pattern: Optional[WinPattern] = None
    total_thinking_time: int = Field(0, description="Milliseconds from start to the human's last move")
    player_moves: int = 0
    self_pieces: Optional[int] = None
    other_pieces: Optional[int] = None

    class Config:
        frozen = True


class SessionDelta(BaseModel):
    """Result of one ``submit_move`` / ``submit_pass`` call.

    Covers the human action and, when the game did not end on it, the AI
    reply (a placement or a recorded pass).
    """
    board: List[int]
    status: GameStatus
    human_move: Optional[int] = None
    human_passed: bool = False
    flipped_cells: List[int] = Field(default_factory=list)
    ai_reply: Optional[int] = None
    ai_passed: bool = False
    ai_branch: Optional[AIBranch] = None
    ai_flipped_cells: List[int] = Field(default_factory=list)
    self_pieces: Optional[int] = None
    other_pieces: Optional[int] = None
    consecutive_passes: int = 0
    outcome: Optional[Outcome] = None

    class Config:
        frozen = True


class TelemetryEvent(BaseModel):
    """Immutable snapshot emitted once per session transition."""
    kind: EventKind
    session_id: str
    sequence: int
    variant: GameVariant
    difficulty: Difficulty
    status: GameStatus
    board: List[int]
    mover: Optional[Mark] = None
    position: Optional[int] = None
    flipped: List[int] = Field(default_factory=list)
    ai_branch: Optional[AIBranch] = None
    consecutive_passes: int = 0
    self_pieces: Optional[int] = None
    other_pieces: Optional[int] = None
    elapsed_ms: int = 0
    outcome: Optional[Outcome] = None

    class Config:
        frozen = True


# =============================================================================
# HTTP request / response bodies
# =============================================================================


class CreateSessionRequest(BaseModel):
    """Request body for ``POST /sessions``."""
    variant: GameVariant = GameVariant.LINE
    difficulty: Difficulty = Difficulty.MEDIUM
    player_id: str = Field(alias="playerId", min_length=1)
    seed: Optional[int] = None

    class Config:
        populate_by_name = True


class MoveRequest(BaseModel):
    """Request body for ``POST /sessions/{id}/moves``."""
    actor: str = Field(min_length=1)
    position: int


class PassRequest(BaseModel):
    """Request body for ``POST /sessions/{id}/pass``."""
    actor: str = Field(min_length=1)


class SessionView(BaseModel):
    """Read-only view of a session for API responses."""
    session_id: str = Field(alias="sessionId")
    variant: GameVariant
    difficulty: Difficulty
    board_size: int = Field(alias="boardSize")
    board: List[int]
    status: GameStatus
    legal_moves: List[int] = Field(alias="legalMoves")
    move_count: int = Field(alias="moveCount")
    consecutive_passes: int = Field(0, alias="consecutivePasses")
    self_pieces: Optional[int] = Field(None, alias="selfPieces")
    other_pieces: Optional[int] = Field(None, alias="otherPieces")

    class Config:
        populate_by_name = True
