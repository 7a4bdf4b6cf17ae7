"""Session event bus.

Each session owns a :class:`GameEvents` instance and emits exactly one
:class:`~gridarena.models.TelemetryEvent` per transition. Listener failures
are logged and never reach the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import List

from .models import TelemetryEvent

logger = logging.getLogger(__name__)

Listener = Callable[[TelemetryEvent], None]


class GameEvents:
    def __init__(self):
        self._listeners: List[Listener] = []
        self._sequence = 0

    @property
    def sequence(self) -> int:
        """Number of events emitted so far."""
        return self._sequence

    def subscribe(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def emit(self, event: TelemetryEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.error(
                    "Event listener failed for %s #%d of session %s",
                    event.kind.value,
                    event.sequence,
                    event.session_id,
                    exc_info=True,
                )


class EventRecorder:
    """Listener that keeps every event it receives. Handy for replay and tests."""

    def __init__(self):
        self.events: List[TelemetryEvent] = []

    def __call__(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [event.kind.value for event in self.events]
