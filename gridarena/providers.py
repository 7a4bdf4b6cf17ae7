"""Collaborator capabilities consumed by the engine.

The core never reads the wall clock or a global RNG directly. Sessions
receive a :class:`RandomnessProvider`, a :class:`Clock` and an identity
check at creation time, so tests can inject deterministic versions and
production can use OS-backed ones.
"""

from __future__ import annotations

import random
import secrets
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

IdentityVerifier = Callable[[str, str], bool]


class RandomnessProvider(ABC):
    """Source of uniform random draws."""

    @abstractmethod
    def random(self) -> float:
        """Uniform float in ``[0.0, 1.0)``."""

    @abstractmethod
    def randbelow(self, n: int) -> int:
        """Uniform int in ``[0, n)``."""

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.randbelow(len(items))]


class SeededRandomness(RandomnessProvider):
    """Deterministic provider; the same seed yields the same draw sequence."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._rng = random.Random(self.seed)

    def random(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return self._rng.randrange(n)

    def __repr__(self) -> str:
        return f"SeededRandomness(seed={self.seed})"


class SecureRandomness(RandomnessProvider):
    """OS-backed provider for production play."""

    def __init__(self):
        self._rng = secrets.SystemRandom()

    def random(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return secrets.randbelow(n)


class Clock(ABC):
    """Monotonic millisecond timestamps."""

    @abstractmethod
    def now_ms(self) -> int:
        ...


class MonotonicClock(Clock):
    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock(Clock):
    """Clock that only moves when told to. Used in tests and replays."""

    def __init__(self, start_ms: int = 0):
        self._now = int(start_ms)

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("a monotonic clock cannot move backwards")
        self._now += int(ms)
        return self._now


def exact_identity(actor: str, expected: str) -> bool:
    """Default identity check: the actor id must equal the session's player id."""
    return actor == expected
