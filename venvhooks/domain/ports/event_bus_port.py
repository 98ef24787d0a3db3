"""
Event Bus Port

Architectural Intent:
- Abstract interface for publishing gate events
- Allows decoupling of event producers from logging/telemetry consumers
"""

from typing import Protocol, Callable, runtime_checkable
from venvhooks.domain.events.event_base import DomainEvent


@runtime_checkable
class EventBusPort(Protocol):
    def publish(self, events: list[DomainEvent]) -> None: ...

    def subscribe(
        self, event_type: type, handler: Callable[[DomainEvent], None]
    ) -> None: ...
