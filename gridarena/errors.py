"""
GridArena Error Hierarchy

Unified exception hierarchy for the game engine. All custom exceptions
inherit from GridArenaError so callers can catch and filter them in one
place.

Usage:
    from gridarena.errors import ValidationError, StateError

    try:
        session.submit_move(actor, position)
    except ValidationError as e:
        logger.info("Rejected move: %s", e.code)
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    # Base error
    "GridArenaError",
    "IllegalMoveError",
    # Internal invariants
    "InvariantViolation",
    "NotActiveError",
    "OccupiedError",
    "OutOfRangeError",
    "OutcomeNotReadyError",
    "SessionNotFoundError",
    # Session state errors
    "StateError",
    # Validation errors
    "ValidationError",
    "WrongTurnError",
]


class GridArenaError(Exception):
    """Base exception for all GridArena errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "GRIDARENA_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(GridArenaError):
    """Bad input. Raised before any mutation; the session is unchanged."""
    code: str = "VALIDATION_ERROR"


class OutOfRangeError(ValidationError):
    """Position is outside the board."""
    code: str = "OUT_OF_RANGE"

    def __init__(
        self,
        message: str,
        position: int | None = None,
        capacity: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if position is not None:
            self.context["position"] = position
        if capacity is not None:
            self.context["capacity"] = capacity


class OccupiedError(ValidationError):
    """Target cell already holds a mark."""
    code: str = "OCCUPIED"

    def __init__(
        self,
        message: str,
        position: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if position is not None:
            self.context["position"] = position


class IllegalMoveError(ValidationError):
    """Move is well-formed but not allowed by the variant's rules.

    In the capture game this covers placements that flip nothing, and
    passes submitted while a legal placement exists.
    """
    code: str = "ILLEGAL_MOVE"

    def __init__(
        self,
        message: str,
        position: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if position is not None:
            self.context["position"] = position


class ConfigurationError(ValidationError):
    """Invalid configuration."""
    code: str = "CONFIGURATION_ERROR"


# =============================================================================
# Session State Errors
# =============================================================================


class StateError(GridArenaError):
    """Action is not allowed in the session's current state."""
    code: str = "STATE_ERROR"


class NotActiveError(StateError):
    """Move submitted against a finished session."""
    code: str = "NOT_ACTIVE"

    def __init__(
        self,
        message: str,
        status: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if status:
            self.context["status"] = status


class WrongTurnError(StateError):
    """Actor is not the session's expected mover."""
    code: str = "WRONG_TURN"

    def __init__(
        self,
        message: str,
        actor: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if actor:
            self.context["actor"] = actor


class OutcomeNotReadyError(StateError):
    """Outcome requested while the session is still active."""
    code: str = "OUTCOME_NOT_READY"


class SessionNotFoundError(GridArenaError):
    """No session is registered under the given id."""
    code: str = "SESSION_NOT_FOUND"

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if session_id:
            self.context["session_id"] = session_id


# =============================================================================
# Invariant Violations
# =============================================================================


class InvariantViolation(GridArenaError):
    """Internal invariant broken; unreachable through normal gameplay.

    Never caught inside the engine. Examples: the line-game AI finding no
    candidate cell while the session is active, or the human/AI
    alternation count disagreeing with the move log.
    """
    code: str = "INVARIANT_VIOLATION"
