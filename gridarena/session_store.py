"""In-memory session registry for the HTTP adapter.

The engine itself performs no locking; this store hands out one lock per
session so concurrent requests against the same game are serialised.
Oldest sessions are evicted once ``max_sessions`` is exceeded.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .errors import SessionNotFoundError
from .game_session import GameSession
from .metrics import ACTIVE_SESSIONS

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    session: GameSession
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    def __init__(self, max_sessions: int = 1024):
        self.max_sessions = max_sessions
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def add(self, session: GameSession) -> None:
        with self._lock:
            self._entries[session.session_id] = _Entry(session)
            while len(self._entries) > self.max_sessions:
                evicted, _entry = self._entries.popitem(last=False)
                logger.info("Evicted session %s (store full)", evicted)
            ACTIVE_SESSIONS.set(len(self._entries))

    def _entry(self, session_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise SessionNotFoundError("Unknown session", session_id=session_id)
        return entry

    def get(self, session_id: str) -> GameSession:
        return self._entry(session_id).session

    @contextmanager
    def locked(self, session_id: str) -> Iterator[GameSession]:
        """Exclusive access to one session for the duration of the block."""
        entry = self._entry(session_id)
        with entry.lock:
            yield entry.session

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            ACTIVE_SESSIONS.set(0)
