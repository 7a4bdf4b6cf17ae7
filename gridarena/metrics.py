"""Prometheus metrics for the GridArena service.

Counters and histograms live here so the session layer and the HTTP
adapter share one set of instances. :func:`record_event` is registered as
a telemetry listener, so every counted transition is counted once.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram

from .models import EventKind, TelemetryEvent


MOVES_APPLIED: Final[Counter] = Counter(
    "gridarena_moves_applied_total",
    "Total placements applied, labeled by variant and mover.",
    labelnames=("variant", "mover"),
)

PASSES_RECORDED: Final[Counter] = Counter(
    "gridarena_passes_recorded_total",
    "Total capture-game passes, labeled by mover.",
    labelnames=("mover",),
)

AI_DECISIONS: Final[Counter] = Counter(
    "gridarena_ai_decisions_total",
    "AI replies, labeled by variant, difficulty and decision branch.",
    labelnames=("variant", "difficulty", "branch"),
)

AI_DECISION_LATENCY: Final[Histogram] = Histogram(
    "gridarena_ai_decision_latency_seconds",
    "Wall time spent choosing an AI reply, labeled by variant and difficulty.",
    labelnames=("variant", "difficulty"),
    buckets=(
        0.001,
        0.005,
        0.01,
        0.05,
        0.1,
        0.5,
        1.0,
    ),
)

REJECTED_MOVES: Final[Counter] = Counter(
    "gridarena_rejected_moves_total",
    "Human actions rejected before mutation, labeled by error code.",
    labelnames=("code",),
)

GAME_OUTCOMES: Final[Counter] = Counter(
    "gridarena_game_outcomes_total",
    "Finished sessions, labeled by variant, difficulty and terminal status.",
    labelnames=("variant", "difficulty", "status"),
)

RARITY_TIERS: Final[Counter] = Counter(
    "gridarena_rarity_tiers_total",
    "Rarity tiers awarded to human wins, labeled by variant and tier.",
    labelnames=("variant", "tier"),
)

ACTIVE_SESSIONS: Final[Gauge] = Gauge(
    "gridarena_active_sessions",
    "Sessions currently held by the in-memory store.",
)


def record_event(event: TelemetryEvent) -> None:
    """Telemetry listener that updates the counters above."""
    variant = event.variant.value
    if event.kind is EventKind.MOVE_MADE or event.kind is EventKind.AI_MOVED:
        mover = event.mover.name.lower() if event.mover is not None else "unknown"
        MOVES_APPLIED.labels(variant=variant, mover=mover).inc()
        if event.kind is EventKind.AI_MOVED and event.ai_branch is not None:
            AI_DECISIONS.labels(
                variant=variant,
                difficulty=event.difficulty.value,
                branch=event.ai_branch.value,
            ).inc()
    elif event.kind is EventKind.PASS_RECORDED:
        mover = event.mover.name.lower() if event.mover is not None else "unknown"
        PASSES_RECORDED.labels(mover=mover).inc()
        if event.ai_branch is not None:
            AI_DECISIONS.labels(
                variant=variant,
                difficulty=event.difficulty.value,
                branch=event.ai_branch.value,
            ).inc()
    elif event.kind is EventKind.GAME_FINISHED and event.outcome is not None:
        GAME_OUTCOMES.labels(
            variant=variant,
            difficulty=event.difficulty.value,
            status=event.outcome.status.value,
        ).inc()
        if event.outcome.rarity_tier is not None:
            RARITY_TIERS.labels(
                variant=variant,
                tier=event.outcome.rarity_tier.name.lower(),
            ).inc()
