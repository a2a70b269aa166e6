"""Event bus exports."""

from .run_events import (
    TEST_RUN_COMPLETED,
    TEST_SCAFFOLDS_GENERATED,
    EventBus,
    EventHandler,
    RunEvent,
)

__all__ = [
    "EventBus",
    "EventHandler",
    "RunEvent",
    "TEST_RUN_COMPLETED",
    "TEST_SCAFFOLDS_GENERATED",
]
