"""Rules engine factory."""

from __future__ import annotations

from ..config import CaptureGameConfig, LineGameConfig
from ..models import GameVariant
from .capture_game import CaptureGameRules
from .interfaces import RulesEngine
from .line_game import LineGameRules


def get_rules_engine(
    variant: GameVariant,
    line_config: LineGameConfig | None = None,
    capture_config: CaptureGameConfig | None = None,
) -> RulesEngine:
    """Return a rules host for ``variant``."""
    if variant is GameVariant.LINE:
        return LineGameRules(line_config)
    if variant is GameVariant.CAPTURE:
        return CaptureGameRules(capture_config)
    raise ValueError(f"Unsupported game variant: {variant}")
