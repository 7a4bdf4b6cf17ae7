"""Configuration for the GridArena engine.

Board geometry, heuristic weights and reward thresholds are explicit
configuration objects rather than module constants, so the two line-game
rule sets (9x9 / 5-in-a-row and 7x7 / 4-in-a-row) can coexist.

Environment overrides (read by :meth:`ArenaSettings.from_env`):

- ``GRIDARENA_LINE_PRESET``: ``caro9`` (default) or ``compact7``
- ``GRIDARENA_RNG_SEED``: optional integer; when set, new sessions use a
  seeded randomness provider instead of the OS-backed one
- ``GRIDARENA_LOG_LEVEL``: logging level name (default ``INFO``)
- ``GRIDARENA_MAX_SESSIONS``: in-memory session cap (default ``1024``)
"""

from __future__ import annotations

import os
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from .errors import ConfigurationError
from .models import RarityTier

# At most 81 cells per board.
MAX_BOARD_SIZE = 9


class LineGameConfig(BaseModel):
    """K-in-a-row rule set and its reward table."""
    board_size: int = Field(9, ge=3, le=MAX_BOARD_SIZE)
    run_length: int = Field(5, ge=3)
    centre_bonus: int = 50
    evaluation_window: int = Field(5, ge=1)
    # (max player moves, tier), checked in order; anything slower is BRONZE.
    move_tier_thresholds: List[Tuple[int, RarityTier]] = Field(
        default_factory=lambda: [(5, RarityTier.GOLD), (6, RarityTier.SILVER)]
    )
    fast_win_ms: int = Field(5_000, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_run_length(self) -> "LineGameConfig":
        if self.run_length > self.board_size:
            raise ValueError(
                f"run_length {self.run_length} exceeds board_size {self.board_size}"
            )
        return self

    def base_tier_for_moves(self, player_moves: int) -> RarityTier:
        for limit, tier in self.move_tier_thresholds:
            if player_moves <= limit:
                return tier
        return RarityTier.BRONZE


class CaptureWeights(BaseModel):
    """Static positional weights per capture-game cell class."""
    corner: int = 100
    near_centre: int = 20
    edge: int = 10
    interior: int = 5
    c_square: int = -20
    x_square: int = -50

    class Config:
        frozen = True


class CaptureGameConfig(BaseModel):
    """Flip-capture rule set and its reward table."""
    board_size: int = Field(8, ge=4, le=MAX_BOARD_SIZE)
    weights: CaptureWeights = Field(default_factory=CaptureWeights)
    # (minimum winning margin, tier), checked in order; smaller wins are BRONZE.
    score_thresholds: List[Tuple[int, RarityTier]] = Field(
        default_factory=lambda: [
            (50, RarityTier.DIAMOND),
            (35, RarityTier.GOLD),
            (20, RarityTier.SILVER),
            (10, RarityTier.BRONZE),
        ]
    )
    fast_win_ms: int = Field(30_000, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_even_board(self) -> "CaptureGameConfig":
        if self.board_size % 2:
            raise ValueError("capture board_size must be even")
        return self

    def base_tier_for_margin(self, margin: int) -> RarityTier:
        for minimum, tier in self.score_thresholds:
            if margin >= minimum:
                return tier
        return RarityTier.BRONZE


CARO_9X9 = LineGameConfig()

COMPACT_7X7 = LineGameConfig(
    board_size=7,
    run_length=4,
    move_tier_thresholds=[
        (5, RarityTier.DIAMOND),
        (7, RarityTier.GOLD),
        (9, RarityTier.SILVER),
    ],
)

LINE_PRESETS = {
    "caro9": CARO_9X9,
    "compact7": COMPACT_7X7,
}


def get_line_preset(name: str) -> LineGameConfig:
    """Return a named line-game preset."""
    try:
        return LINE_PRESETS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown line-game preset: {name!r}",
            context={"known": ",".join(sorted(LINE_PRESETS))},
        ) from None


class ArenaSettings(BaseModel):
    """Process-wide settings for the service layer."""
    line: LineGameConfig = Field(default_factory=LineGameConfig)
    capture: CaptureGameConfig = Field(default_factory=CaptureGameConfig)
    rng_seed: Optional[int] = None
    log_level: str = "INFO"
    max_sessions: int = Field(1024, ge=1)

    @classmethod
    def from_env(cls) -> "ArenaSettings":
        seed_raw = os.getenv("GRIDARENA_RNG_SEED")
        try:
            rng_seed = int(seed_raw) if seed_raw not in (None, "") else None
            max_sessions = int(os.getenv("GRIDARENA_MAX_SESSIONS", "1024"))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            line=get_line_preset(os.getenv("GRIDARENA_LINE_PRESET", "caro9")),
            rng_seed=rng_seed,
            log_level=os.getenv("GRIDARENA_LOG_LEVEL", "INFO").upper(),
            max_sessions=max_sessions,
        )
