"""
Gate Run Module

Architectural Intent:
- GateRun aggregate is the consistency boundary for one pass through a checksum gate
- Lifecycle managed through state transitions enforced by domain methods
- All state changes produce new instances to ensure auditability
- Domain events published for cross-context communication (logging, telemetry)

Domain Events:
- GateCheckStartedEvent: stored and current fingerprints are being compared
- GateSkippedEvent: stored fingerprint matched, nothing to do
- WorkStartedEvent: fingerprints differed, the work unit is running
- WorkCompletedEvent: work succeeded and a new checksum was persisted
- WorkFailedEvent: work failed, checksum left untouched
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Optional

from venvhooks.domain.events.event_base import DomainEvent
from venvhooks.domain.events.gate_events import (
    GateCheckStartedEvent,
    GateSkippedEvent,
    WorkStartedEvent,
    WorkCompletedEvent,
    WorkFailedEvent,
)
from venvhooks.domain.value_objects.fingerprint import Fingerprint


class GateRunStatus(Enum):
    PENDING = auto()
    CHECKING = auto()
    SKIPPED = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()


class GateRun:
    __slots__ = (
        "_name",
        "_checksum_path",
        "_status",
        "_stored",
        "_current",
        "_exit_code",
        "_domain_events",
    )

    def __init__(
        self,
        name: str,
        checksum_path: str,
        status: GateRunStatus = GateRunStatus.PENDING,
        stored: Optional[Fingerprint] = None,
        current: Optional[Fingerprint] = None,
        exit_code: Optional[int] = None,
        domain_events: tuple = (),
    ):
        if not name:
            raise ValueError("Gate name cannot be empty")
        self._name = name
        self._checksum_path = checksum_path
        self._status = status
        self._stored = stored
        self._current = current
        self._exit_code = exit_code
        self._domain_events = domain_events

    @property
    def name(self) -> str:
        return self._name

    @property
    def checksum_path(self) -> str:
        return self._checksum_path

    @property
    def status(self) -> GateRunStatus:
        return self._status

    @property
    def stored(self) -> Optional[Fingerprint]:
        return self._stored

    @property
    def current(self) -> Optional[Fingerprint]:
        return self._current

    @property
    def exit_code(self) -> Optional[int]:
        return self._exit_code

    @property
    def domain_events(self) -> tuple:
        return self._domain_events

    def _evolve(self, event: DomainEvent, **changes) -> "GateRun":
        state = {
            "name": self._name,
            "checksum_path": self._checksum_path,
            "status": self._status,
            "stored": self._stored,
            "current": self._current,
            "exit_code": self._exit_code,
        }
        state.update(changes)
        return GateRun(domain_events=self._domain_events + (event,), **state)

    def start_check(self) -> "GateRun":
        if self._status != GateRunStatus.PENDING:
            raise ValueError("Gate check can only start from PENDING state")
        return self._evolve(
            GateCheckStartedEvent(
                aggregate_id=self._name, checksum_path=self._checksum_path
            ),
            status=GateRunStatus.CHECKING,
        )

    def compare(
        self, stored: Optional[Fingerprint], current: Fingerprint
    ) -> "GateRun":
        """Decide between SKIPPED and RUNNING from the two fingerprints."""
        if self._status != GateRunStatus.CHECKING:
            raise ValueError("Gate must be CHECKING to compare fingerprints")
        if stored == current:
            return self._evolve(
                GateSkippedEvent(aggregate_id=self._name, fingerprint=str(current)),
                status=GateRunStatus.SKIPPED,
                stored=stored,
                current=current,
            )
        return self._evolve(
            WorkStartedEvent(
                aggregate_id=self._name,
                stored=str(stored) if stored else "",
                current=str(current),
            ),
            status=GateRunStatus.RUNNING,
            stored=stored,
            current=current,
        )

    def complete(self, fingerprint: Fingerprint, duration_ms: float = 0.0) -> "GateRun":
        if self._status != GateRunStatus.RUNNING:
            raise ValueError("Gate must be RUNNING to complete")
        return self._evolve(
            WorkCompletedEvent(
                aggregate_id=self._name,
                fingerprint=str(fingerprint),
                duration_ms=duration_ms,
            ),
            status=GateRunStatus.COMPLETED,
            current=fingerprint,
            exit_code=0,
        )

    def fail(self, exit_code: int, message: str, duration_ms: float = 0.0) -> "GateRun":
        if self._status != GateRunStatus.RUNNING:
            raise ValueError("Gate must be RUNNING to fail")
        return self._evolve(
            WorkFailedEvent(
                aggregate_id=self._name,
                exit_code=exit_code,
                error_message=message,
                duration_ms=duration_ms,
            ),
            status=GateRunStatus.FAILED,
            exit_code=exit_code,
        )

    def __repr__(self) -> str:
        return (
            f"GateRun(name={self._name}, status={self._status}, "
            f"stored={self._stored}, current={self._current}, "
            f"exit_code={self._exit_code})"
        )
