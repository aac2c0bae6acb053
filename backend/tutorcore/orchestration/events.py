"""
EventHub: explicit observer interface for lifecycle notifications.

Callers subscribe a callback and receive every emitted Event. A failing
callback is logged and skipped; it never breaks the emitting operation.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable


logger = logging.getLogger(__name__)


class EventKind(Enum):
    SESSION_CREATED = "session_created"
    SESSION_CLOSED = "session_closed"
    AGENT_SPAWNED = "agent_spawned"
    MESSAGE_PROCESSED = "message_processed"
    MODEL_ROUTED = "model_routed"
    OUTCOME_RECORDED = "outcome_recorded"


@dataclass
class Event:
    kind: EventKind
    payload: dict = field(default_factory=dict)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "payload": self.payload,
            "created_at": self.created_at,
        }


class EventHub:
    """Synchronous fan-out of lifecycle events to subscribers."""

    def __init__(self):
        self._subscribers: list[Callable[[Event], None]] = []

    def subscribe(self, callback: Callable[[Event], None]):
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[Event], None]):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def emit(self, kind, **payload) -> Event:
        """Build an Event and deliver it to every subscriber."""
        event = Event(kind=EventKind(kind), payload=payload)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                logger.error("[EventHub] Subscriber error on %s: %s", event.kind.value, e)
        return event
