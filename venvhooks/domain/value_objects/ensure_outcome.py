from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from venvhooks.domain.value_objects.fingerprint import Fingerprint


class GateDecision(Enum):
    SKIPPED = auto()
    RAN = auto()


@dataclass(frozen=True)
class EnsureOutcome:
    """
    Value Object describing a successful pass through a checksum gate.
    """
    decision: GateDecision
    previous: Optional[Fingerprint]
    current: Fingerprint

    @property
    def ran(self) -> bool:
        return self.decision == GateDecision.RAN

    @staticmethod
    def skipped(fingerprint: Fingerprint) -> "EnsureOutcome":
        return EnsureOutcome(
            decision=GateDecision.SKIPPED,
            previous=fingerprint,
            current=fingerprint,
        )

    @staticmethod
    def completed(
        previous: Optional[Fingerprint], current: Fingerprint
    ) -> "EnsureOutcome":
        return EnsureOutcome(
            decision=GateDecision.RAN,
            previous=previous,
            current=current,
        )
