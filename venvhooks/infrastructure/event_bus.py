"""
Event Bus Infrastructure

Architectural Intent:
- In-memory event bus implementation for publishing gate events
- Handlers run synchronously, in subscription order
- Subscribers are logging and telemetry; a failing subscriber must not fail a hook
"""

import logging
from typing import Callable
from venvhooks.domain.events.event_base import DomainEvent

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[DomainEvent], None]]] = {}

    def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            for event_type, handlers in self._handlers.items():
                if not isinstance(event, event_type):
                    continue
                for handler in handlers:
                    try:
                        handler(event)
                    except Exception:
                        logger.exception(
                            "Handler %r failed for %s", handler, event.event_type
                        )

    def subscribe(
        self, event_type: type, handler: Callable[[DomainEvent], None]
    ) -> None:
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)
