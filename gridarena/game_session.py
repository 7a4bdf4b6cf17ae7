"""Game session state machine and the engine's functional interface.

A session starts ACTIVE with the human (SELF) to move and ends in exactly
one of SELF_WIN, OTHER_WIN or DRAW. Every accepted human action is followed,
inside the same call, by the computer's reply unless the human action ended
the game, so callers never observe a half-finished turn. Once terminal, a
session rejects every further action and its outcome never changes.

Usage:
    from gridarena.game_session import create_session, submit_move

    session = create_session(Difficulty.HARD, variant=GameVariant.LINE, player_id="p1")
    delta = submit_move(session, "p1", 40)
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from .ai.factory import AIFactory
from .ai.policy import AIDecision, TieredAI
from .board import BoardState
from .config import CaptureGameConfig, LineGameConfig
from .errors import (
    ConfigurationError,
    GridArenaError,
    IllegalMoveError,
    InvariantViolation,
    NotActiveError,
    OutcomeNotReadyError,
    ValidationError,
    WrongTurnError,
)
from .metrics import AI_DECISION_LATENCY
from .models import (
    AIBranch,
    Difficulty,
    EventKind,
    GameStatus,
    GameVariant,
    Mark,
    MoveRecord,
    Outcome,
    SessionDelta,
    TelemetryEvent,
)
from .outcome import OutcomeClassifier
from .providers import (
    Clock,
    IdentityVerifier,
    MonotonicClock,
    RandomnessProvider,
    SecureRandomness,
    exact_identity,
)
from .rules.factory import get_rules_engine
from .rules.interfaces import AppliedMove, RulesEngine
from .telemetry import GameEvents

logger = logging.getLogger(__name__)


class GameSession:
    """One human-versus-computer game.

    The session exclusively owns its board. Callers and the AI only ever
    see copies.
    """

    def __init__(
        self,
        session_id: str,
        difficulty: Difficulty,
        player_id: str,
        rules: RulesEngine,
        ai: TieredAI,
        classifier: OutcomeClassifier,
        clock: Clock,
        start_ms: int,
        board: BoardState,
        events: Optional[GameEvents] = None,
        identity_verifier: IdentityVerifier = exact_identity,
    ):
        if board.size != rules.board_size:
            raise ConfigurationError(
                "Initial board does not match the rules' board size",
                context={"board_size": board.size, "expected": rules.board_size},
            )
        self.session_id = session_id
        self.difficulty = Difficulty(difficulty)
        self.player_id = player_id
        self.rules = rules
        self.ai = ai
        self.classifier = classifier
        self.clock = clock
        self.start_ms = start_ms
        self.events = events or GameEvents()
        self.identity_verifier = identity_verifier

        self._board = board
        self.status = GameStatus.ACTIVE
        self.turn = Mark.SELF
        self.move_times: List[int] = []
        self.history: List[MoveRecord] = []
        self.consecutive_passes = 0
        self.outcome: Optional[Outcome] = None

        self.self_pieces: Optional[int] = None
        self.other_pieces: Optional[int] = None
        if self.variant is GameVariant.CAPTURE:
            self.self_pieces = board.count(Mark.SELF)
            self.other_pieces = board.count(Mark.OTHER)
        self._emit(EventKind.SESSION_CREATED)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def variant(self) -> GameVariant:
        return self.rules.variant

    @property
    def board(self) -> BoardState:
        """Copy of the current board."""
        return self._board.copy()

    @property
    def is_active(self) -> bool:
        return self.status is GameStatus.ACTIVE

    @property
    def placements(self) -> int:
        return sum(1 for record in self.history if not record.is_pass)

    def legal_moves(self) -> list[int]:
        """Legal placements for the side to move; empty once the game is over."""
        if not self.is_active:
            return []
        return self.rules.legal_moves(self._board, self.turn)

    def __repr__(self) -> str:
        return (
            f"GameSession(id={self.session_id}, variant={self.variant.value}, "
            f"difficulty={self.difficulty.value}, status={self.status.value})"
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_move(self, actor: str, position: int) -> SessionDelta:
        """Apply a human placement and, unless it ended the game, the AI reply.

        Raises:
            NotActiveError: the session is already finished.
            WrongTurnError: ``actor`` is not the session's player.
            OutOfRangeError, OccupiedError, IllegalMoveError: the placement
                is not allowed. The session is unchanged.
        """
        try:
            self._check_can_act(actor)
            self.rules.validate(self._board, position, Mark.SELF)
        except GridArenaError as exc:
            logger.info("Session %s rejected move %s: %s", self.session_id, position, exc.code)
            raise

        elapsed = self._elapsed()
        applied = self.rules.apply(self._board, position, Mark.SELF)
        self.move_times.append(elapsed)
        self.consecutive_passes = 0
        self._record_placement(applied, elapsed)
        self._emit(
            EventKind.MOVE_MADE,
            mover=Mark.SELF,
            position=position,
            flipped=list(applied.flipped),
            elapsed_ms=elapsed,
        )

        status = self.rules.terminal_status(self._board, Mark.SELF, self.consecutive_passes)
        if status is not None:
            self._finish(status, last_move=position)
            return self._delta(human_move=position, flipped=applied.flipped)

        decision, ai_applied = self._ai_turn()
        return self._delta(
            human_move=position,
            flipped=applied.flipped,
            decision=decision,
            ai_applied=ai_applied,
        )

    def submit_pass(self, actor: str) -> SessionDelta:
        """Record a human pass in the capture game, then let the AI reply.

        Only allowed while the human has no legal placement.
        """
        try:
            self._check_can_act(actor)
            if self.variant is not GameVariant.CAPTURE:
                raise IllegalMoveError("Passing is only allowed in the capture game")
            if self.rules.has_legal_move(self._board, Mark.SELF):
                raise IllegalMoveError("A legal placement is available; passing is not allowed")
        except GridArenaError as exc:
            logger.info("Session %s rejected pass: %s", self.session_id, exc.code)
            raise

        elapsed = self._elapsed()
        self.consecutive_passes += 1
        self.history.append(MoveRecord(mover=Mark.SELF, elapsed_ms=elapsed))
        self._emit(EventKind.PASS_RECORDED, mover=Mark.SELF, elapsed_ms=elapsed)

        status = self.rules.terminal_status(self._board, Mark.SELF, self.consecutive_passes)
        if status is not None:
            self._finish(status, last_move=None)
            return self._delta(human_passed=True)

        decision, ai_applied = self._ai_turn()
        return self._delta(human_passed=True, decision=decision, ai_applied=ai_applied)

    def finalize(self) -> Outcome:
        """Outcome of a finished session.

        Raises:
            OutcomeNotReadyError: the session is still active.
        """
        if self.is_active:
            raise OutcomeNotReadyError(
                "Session is still active",
                context={"session_id": self.session_id},
            )
        if self.outcome is None:
            raise InvariantViolation(
                "Terminal session has no outcome",
                context={"session_id": self.session_id, "status": self.status.value},
            )
        return self.outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_can_act(self, actor: str) -> None:
        if not self.is_active:
            raise NotActiveError("Session is finished", status=self.status.value)
        if self.turn is not Mark.SELF or not self.identity_verifier(actor, self.player_id):
            raise WrongTurnError("Actor is not the expected mover", actor=actor)

    def _elapsed(self) -> int:
        return max(0, self.clock.now_ms() - self.start_ms)

    def _ai_turn(self) -> tuple[AIDecision, Optional[AppliedMove]]:
        self.turn = Mark.OTHER
        with AI_DECISION_LATENCY.labels(
            variant=self.variant.value, difficulty=self.difficulty.value
        ).time():
            decision = self.ai.select_move(self._board.copy())
        elapsed = self._elapsed()

        applied: Optional[AppliedMove] = None
        if decision.is_pass:
            self.consecutive_passes += 1
            self.history.append(MoveRecord(mover=Mark.OTHER, elapsed_ms=elapsed))
            self._emit(
                EventKind.PASS_RECORDED,
                mover=Mark.OTHER,
                ai_branch=AIBranch.PASS,
                elapsed_ms=elapsed,
            )
        else:
            try:
                applied = self.rules.apply(self._board, decision.position, Mark.OTHER)
            except ValidationError as exc:
                raise InvariantViolation(
                    "AI chose a move the rules reject",
                    context={"position": decision.position, "code": exc.code},
                ) from exc
            self.consecutive_passes = 0
            self._record_placement(applied, elapsed)
            self._emit(
                EventKind.AI_MOVED,
                mover=Mark.OTHER,
                position=decision.position,
                flipped=list(applied.flipped),
                ai_branch=decision.branch,
                elapsed_ms=elapsed,
            )

        status = self.rules.terminal_status(self._board, Mark.OTHER, self.consecutive_passes)
        if status is not None:
            self._finish(status, last_move=decision.position)
        else:
            self.turn = Mark.SELF
        return decision, applied

    def _record_placement(self, applied: AppliedMove, elapsed: int) -> None:
        self.history.append(
            MoveRecord(
                mover=applied.mark,
                position=applied.position,
                flipped=list(applied.flipped),
                elapsed_ms=elapsed,
            )
        )
        if self.variant is not GameVariant.CAPTURE:
            return
        gained = 1 + len(applied.flipped)
        lost = len(applied.flipped)
        if applied.mark is Mark.SELF:
            self.self_pieces += gained
            self.other_pieces -= lost
        else:
            self.other_pieces += gained
            self.self_pieces -= lost
        if (self.self_pieces, self.other_pieces) != (
            self._board.count(Mark.SELF),
            self._board.count(Mark.OTHER),
        ):
            raise InvariantViolation(
                "Running piece counts disagree with the board",
                context={"self_pieces": self.self_pieces, "other_pieces": self.other_pieces},
            )

    def _player_moves(self) -> int:
        player_moves = len(self.move_times)
        if self.variant is GameVariant.LINE:
            expected = (self.placements + 1) // 2
            if player_moves != expected:
                raise InvariantViolation(
                    "Human move log disagrees with strict alternation",
                    context={"logged": player_moves, "expected": expected},
                )
        return player_moves

    def _finish(self, status: GameStatus, last_move: Optional[int]) -> None:
        self.status = status
        thinking = self.move_times[-1] if self.move_times else 0
        self.outcome = self.classifier.classify(
            self._board,
            status,
            self.difficulty,
            player_moves=self._player_moves(),
            total_thinking_time=thinking,
            last_move=last_move,
        )
        logger.info(
            "Session %s finished: %s (tier=%s, pattern=%s)",
            self.session_id,
            status.value,
            self.outcome.rarity_tier.name if self.outcome.rarity_tier else None,
            self.outcome.win_pattern.value if self.outcome.win_pattern else None,
        )
        self._emit(EventKind.GAME_FINISHED, outcome=self.outcome)

    def _emit(
        self,
        kind: EventKind,
        mover: Optional[Mark] = None,
        position: Optional[int] = None,
        flipped: Optional[list[int]] = None,
        ai_branch: Optional[AIBranch] = None,
        elapsed_ms: int = 0,
        outcome: Optional[Outcome] = None,
    ) -> None:
        event = TelemetryEvent(
            kind=kind,
            session_id=self.session_id,
            sequence=self.events.next_sequence(),
            variant=self.variant,
            difficulty=self.difficulty,
            status=self.status,
            board=self._board.to_list(),
            mover=mover,
            position=position,
            flipped=flipped or [],
            ai_branch=ai_branch,
            consecutive_passes=self.consecutive_passes,
            self_pieces=self.self_pieces,
            other_pieces=self.other_pieces,
            elapsed_ms=elapsed_ms,
            outcome=outcome,
        )
        self.events.emit(event)

    def _delta(
        self,
        human_move: Optional[int] = None,
        human_passed: bool = False,
        flipped: tuple[int, ...] = (),
        decision: Optional[AIDecision] = None,
        ai_applied: Optional[AppliedMove] = None,
    ) -> SessionDelta:
        return SessionDelta(
            board=self._board.to_list(),
            status=self.status,
            human_move=human_move,
            human_passed=human_passed,
            flipped_cells=list(flipped),
            ai_reply=decision.position if decision is not None else None,
            ai_passed=decision.is_pass if decision is not None else False,
            ai_branch=decision.branch if decision is not None else None,
            ai_flipped_cells=list(ai_applied.flipped) if ai_applied is not None else [],
            self_pieces=self.self_pieces,
            other_pieces=self.other_pieces,
            consecutive_passes=self.consecutive_passes,
            outcome=self.outcome,
        )


# =============================================================================
# Functional interface
# =============================================================================


def create_session(
    difficulty: Difficulty = Difficulty.MEDIUM,
    now: Optional[int] = None,
    *,
    variant: GameVariant = GameVariant.LINE,
    player_id: str = "player",
    clock: Optional[Clock] = None,
    randomness: Optional[RandomnessProvider] = None,
    identity_verifier: IdentityVerifier = exact_identity,
    initial_board: Optional[BoardState] = None,
    line_config: Optional[LineGameConfig] = None,
    capture_config: Optional[CaptureGameConfig] = None,
    events: Optional[GameEvents] = None,
    session_id: Optional[str] = None,
) -> GameSession:
    """Start a new game with the human to move.

    Args:
        difficulty: AI difficulty tier.
        now: Start timestamp in clock milliseconds; read from ``clock`` when omitted.
        variant: Which game to play.
        player_id: Identity the human must present on every action.
        clock: Monotonic clock; defaults to :class:`MonotonicClock`.
        randomness: AI randomness source; defaults to :class:`SecureRandomness`.
        identity_verifier: Check that an actor matches ``player_id``.
        initial_board: Predefined placement. Defaults to the variant's
            opening (empty for the line game, four centre discs for the
            capture game). The board is copied.
        line_config: Line-game rule set; defaults to 9x9, 5-in-a-row.
        capture_config: Capture-game rule set; defaults to 8x8.
        events: Event bus to publish transitions on.
        session_id: Explicit id; a UUID4 is generated when omitted.
    """
    variant = GameVariant(variant)
    difficulty = Difficulty(difficulty)
    clock = clock or MonotonicClock()
    start_ms = now if now is not None else clock.now_ms()
    rules = get_rules_engine(variant, line_config, capture_config)
    board = initial_board.copy() if initial_board is not None else rules.new_board()
    ai = AIFactory.create(rules, difficulty, randomness or SecureRandomness())

    session = GameSession(
        session_id=session_id or str(uuid.uuid4()),
        difficulty=difficulty,
        player_id=player_id,
        rules=rules,
        ai=ai,
        classifier=OutcomeClassifier(rules),
        clock=clock,
        start_ms=start_ms,
        board=board,
        events=events,
        identity_verifier=identity_verifier,
    )
    logger.info(
        "Created %s session %s at %s difficulty",
        variant.value,
        session.session_id,
        difficulty.value,
    )
    return session


def submit_move(session: GameSession, actor_identity: str, position: int) -> SessionDelta:
    return session.submit_move(actor_identity, position)


def submit_pass(session: GameSession, actor_identity: str) -> SessionDelta:
    return session.submit_pass(actor_identity)


def session_status(session: GameSession) -> GameStatus:
    return session.status


def finalize_outcome(session: GameSession) -> Outcome:
    return session.finalize()


def legal_moves(session: GameSession) -> list[int]:
    return session.legal_moves()
