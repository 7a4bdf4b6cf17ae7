"""AI factory for GridArena.

Maps (variant, difficulty) onto a canonical profile and builds the
opponent for a session.

Usage:
    from gridarena.ai.factory import AIFactory, get_difficulty_profile

    ai = AIFactory.create(rules, Difficulty.HARD, randomness=SeededRandomness(7))
    profile = get_difficulty_profile(GameVariant.CAPTURE, Difficulty.EASY)
"""

from __future__ import annotations

import logging
from typing import TypedDict

from ..models import Difficulty, GameVariant, Mark
from ..providers import RandomnessProvider
from ..rules.interfaces import RulesEngine
from .policy import TieredAI

logger = logging.getLogger(__name__)


class DifficultyProfile(TypedDict):
    """Canonical profile for one (variant, difficulty) pair.

    ``randomness`` is the probability of taking the random branch after
    win-now and block-now found nothing.
    """
    randomness: float
    random_tiebreak: bool
    profile_id: str


CANONICAL_DIFFICULTY_PROFILES: dict[GameVariant, dict[Difficulty, DifficultyProfile]] = {
    GameVariant.LINE: {
        Difficulty.EASY: {
            "randomness": 0.70,
            "random_tiebreak": False,
            "profile_id": "line_easy",
        },
        Difficulty.MEDIUM: {
            "randomness": 0.30,
            "random_tiebreak": False,
            "profile_id": "line_medium",
        },
        Difficulty.HARD: {
            # Pure argmax; ties go to the lowest index.
            "randomness": 0.0,
            "random_tiebreak": False,
            "profile_id": "line_hard",
        },
    },
    GameVariant.CAPTURE: {
        Difficulty.EASY: {
            "randomness": 0.60,
            "random_tiebreak": False,
            "profile_id": "capture_easy",
        },
        Difficulty.MEDIUM: {
            "randomness": 0.30,
            "random_tiebreak": False,
            "profile_id": "capture_medium",
        },
        Difficulty.HARD: {
            "randomness": 0.10,
            "random_tiebreak": True,
            "profile_id": "capture_hard",
        },
    },
}


def get_difficulty_profile(variant: GameVariant, difficulty: Difficulty) -> DifficultyProfile:
    """Return the canonical profile for ``variant`` at ``difficulty``."""
    return CANONICAL_DIFFICULTY_PROFILES[GameVariant(variant)][Difficulty(difficulty)]


def get_randomness_for_difficulty(variant: GameVariant, difficulty: Difficulty) -> float:
    return get_difficulty_profile(variant, difficulty)["randomness"]


class AIFactory:
    """Builds the computer opponent for a session."""

    @classmethod
    def create(
        cls,
        rules: RulesEngine,
        difficulty: Difficulty,
        randomness: RandomnessProvider,
        mark: Mark = Mark.OTHER,
    ) -> TieredAI:
        profile = get_difficulty_profile(rules.variant, difficulty)
        logger.debug(
            "Creating %s opponent (randomness=%.2f)",
            profile["profile_id"],
            profile["randomness"],
        )
        return TieredAI(
            mark=mark,
            difficulty=Difficulty(difficulty),
            rules=rules,
            randomness=randomness,
            randomness_rate=profile["randomness"],
            random_tiebreak=profile["random_tiebreak"],
            profile_id=profile["profile_id"],
        )
