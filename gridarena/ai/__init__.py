"""Computer opponents."""

from .base import BaseAI
from .factory import AIFactory, get_difficulty_profile
from .policy import AIDecision, TieredAI

__all__ = [
    "AIDecision",
    "AIFactory",
    "BaseAI",
    "TieredAI",
    "get_difficulty_profile",
]
