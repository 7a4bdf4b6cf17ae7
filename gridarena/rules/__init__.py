"""Rules hosts for the line game and the capture game."""

from .capture_game import CaptureEngine, CaptureGameRules, standard_opening
from .factory import get_rules_engine
from .interfaces import AppliedMove, RulesEngine
from .line_game import LineGameRules, WinDetector

__all__ = [
    "AppliedMove",
    "CaptureEngine",
    "CaptureGameRules",
    "LineGameRules",
    "RulesEngine",
    "WinDetector",
    "get_rules_engine",
    "standard_opening",
]
