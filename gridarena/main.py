"""
FastAPI adapter for the GridArena engine
Exposes session creation, moves, passes and outcomes over HTTP
"""

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from . import __version__, errors
from .config import ArenaSettings
from .game_session import GameSession, create_session
from .metrics import REJECTED_MOVES, record_event
from .models import (
    CreateSessionRequest,
    MoveRequest,
    Outcome,
    PassRequest,
    SessionDelta,
    SessionView,
)
from .providers import SecureRandomness, SeededRandomness
from .session_store import SessionStore
from .telemetry import GameEvents

settings = ArenaSettings.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="GridArena Game Service",
    description="Single-player line and capture games against a tiered AI",
    version=__version__
)

store = SessionStore(max_sessions=settings.max_sessions)


def _error_response(status_code: int, exc: errors.GridArenaError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


@app.exception_handler(errors.ValidationError)
async def validation_error_handler(request: Request, exc: errors.ValidationError):
    REJECTED_MOVES.labels(code=exc.code).inc()
    return _error_response(400, exc)


@app.exception_handler(errors.StateError)
async def state_error_handler(request: Request, exc: errors.StateError):
    REJECTED_MOVES.labels(code=exc.code).inc()
    return _error_response(409, exc)


@app.exception_handler(errors.SessionNotFoundError)
async def not_found_handler(request: Request, exc: errors.SessionNotFoundError):
    return _error_response(404, exc)


@app.exception_handler(errors.InvariantViolation)
async def invariant_handler(request: Request, exc: errors.InvariantViolation):
    logger.error("Invariant violation on %s: %s", request.url.path, exc)
    return _error_response(500, exc)


def _view(session: GameSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        variant=session.variant,
        difficulty=session.difficulty,
        board_size=session.rules.board_size,
        board=session.board.to_list(),
        status=session.status,
        legal_moves=session.legal_moves(),
        move_count=session.placements,
        consecutive_passes=session.consecutive_passes,
        self_pieces=session.self_pieces,
        other_pieces=session.other_pieces,
    )


@app.get("/")
async def root():
    """Service banner"""
    return {
        "service": "GridArena Game Service",
        "status": "running",
        "version": __version__
    }


@app.get("/health")
async def health_check():
    """Health check for container orchestration"""
    return {"status": "healthy", "sessions": len(store)}


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


@app.post("/sessions", response_model=SessionView, response_model_by_alias=True, status_code=201)
def create_game(request: CreateSessionRequest):
    """Start a new game with the human to move."""
    if request.seed is not None:
        randomness = SeededRandomness(request.seed)
    elif settings.rng_seed is not None:
        randomness = SeededRandomness(settings.rng_seed)
    else:
        randomness = SecureRandomness()

    events = GameEvents()
    events.subscribe(record_event)
    session = create_session(
        request.difficulty,
        variant=request.variant,
        player_id=request.player_id,
        randomness=randomness,
        line_config=settings.line,
        capture_config=settings.capture,
        events=events,
    )
    store.add(session)
    return _view(session)


@app.get("/sessions/{session_id}", response_model=SessionView, response_model_by_alias=True)
def get_game(session_id: str):
    """Current state of a session."""
    with store.locked(session_id) as session:
        return _view(session)


@app.post("/sessions/{session_id}/moves", response_model=SessionDelta)
def post_move(session_id: str, request: MoveRequest):
    """Submit a human placement; the AI reply is applied in the same call."""
    with store.locked(session_id) as session:
        return session.submit_move(request.actor, request.position)


@app.post("/sessions/{session_id}/pass", response_model=SessionDelta)
def post_pass(session_id: str, request: PassRequest):
    """Submit a human pass (capture game, no legal placement only)."""
    with store.locked(session_id) as session:
        return session.submit_pass(request.actor)


@app.get("/sessions/{session_id}/outcome", response_model=Outcome)
def get_outcome(session_id: str):
    """Finalized outcome; 409 while the game is still active."""
    with store.locked(session_id) as session:
        return session.finalize()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
