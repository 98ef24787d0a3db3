"""
Domain Events Package

Architectural Intent:
- Contains domain events raised while passing through a checksum gate
- Events are the primary mechanism for feeding logging and telemetry
"""

from venvhooks.domain.events.event_base import DomainEvent
from venvhooks.domain.events.gate_events import (
    GateCheckStartedEvent,
    GateSkippedEvent,
    WorkStartedEvent,
    WorkCompletedEvent,
    WorkFailedEvent,
)

__all__ = [
    "DomainEvent",
    "GateCheckStartedEvent",
    "GateSkippedEvent",
    "WorkStartedEvent",
    "WorkCompletedEvent",
    "WorkFailedEvent",
]
