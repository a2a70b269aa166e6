"""In-memory run event bus."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

TEST_RUN_COMPLETED = "TestRunCompleted"
TEST_SCAFFOLDS_GENERATED = "TestScaffoldsGenerated"

EventHandler = Callable[["RunEvent"], None]


@dataclass(frozen=True)
class RunEvent:
    """One published event."""

    event_type: str
    timestamp: datetime
    data: Mapping[str, Any] = field(default_factory=dict)


class EventBus:
    """Append-only, process-lifetime event store keyed by event type.

    Subscriptions are recorded but not invoked on publish.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: dict[str, list[RunEvent]] = {}
        self._subscribers: dict[str, list[EventHandler]] = {}

    def publish(self, event_type: str, data: Mapping[str, Any] | None = None) -> RunEvent:
        event = RunEvent(event_type=event_type, timestamp=datetime.now(UTC), data=dict(data or {}))
        with self._lock:
            self._events.setdefault(event_type, []).append(event)
        return event

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)

    def subscriptions(self, event_type: str) -> list[EventHandler]:
        with self._lock:
            return list(self._subscribers.get(event_type, ()))

    def get_events(self, event_type: str | None = None) -> list[RunEvent]:
        """Return events of one type in append order, or all events grouped by type."""
        with self._lock:
            if event_type is not None:
                return list(self._events.get(event_type, ()))
            return [event for events in self._events.values() for event in events]
