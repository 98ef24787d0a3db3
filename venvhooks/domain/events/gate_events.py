"""
Gate Events

Architectural Intent:
- Immutable records of each transition of a GateRun
- Consumed by logging and telemetry subscribers on the event bus
"""

from dataclasses import dataclass

from venvhooks.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class GateCheckStartedEvent(DomainEvent):
    checksum_path: str = ""


@dataclass(frozen=True)
class GateSkippedEvent(DomainEvent):
    fingerprint: str = ""


@dataclass(frozen=True)
class WorkStartedEvent(DomainEvent):
    stored: str = ""
    current: str = ""


@dataclass(frozen=True)
class WorkCompletedEvent(DomainEvent):
    fingerprint: str = ""
    duration_ms: float = 0.0


@dataclass(frozen=True)
class WorkFailedEvent(DomainEvent):
    exit_code: int = 1
    error_message: str = ""
    duration_ms: float = 0.0
