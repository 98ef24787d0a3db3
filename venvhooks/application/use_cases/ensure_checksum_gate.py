"""
Checksum-Gated Executor Use Case

Architectural Intent:
- Decides whether a work unit must run by comparing a stored checksum
  against a fresh fingerprint of the work's inputs
- Persists the post-work fingerprint only after the work succeeds
- Failed work leaves the stored checksum untouched, so the next call retries

Domain Logic:
- stored == current  -> SKIPPED, no side effects
- stored != current  -> run work; success -> store fingerprint(inputs after work)
                                 failure -> raise, checksum unchanged
- Hash failures are raised before any work runs
- The store's lock is held across read, compute, work and write
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from venvhooks.domain.entities.gate_run import GateRun, GateRunStatus
from venvhooks.domain.errors import WorkUnitFailedError
from venvhooks.domain.ports.checksum_store_port import ChecksumStorePort
from venvhooks.domain.ports.content_hasher_port import ContentHasherPort, PathLike
from venvhooks.domain.ports.event_bus_port import EventBusPort
from venvhooks.domain.value_objects.ensure_outcome import EnsureOutcome
from venvhooks.domain.value_objects.fingerprint import Fingerprint

logger = logging.getLogger(__name__)

# Returns an exit status; None counts as success.
WorkUnit = Callable[[], Optional[int]]
# A callable is re-evaluated after the work, which may create optional inputs.
Inputs = Union[Sequence[PathLike], Callable[[], Sequence[PathLike]]]
StoreFactory = Callable[[Union[str, Path]], ChecksumStorePort]


class ChecksumGatedExecutor:
    def __init__(
        self,
        hasher: ContentHasherPort,
        store_factory: StoreFactory,
        event_bus: Optional[EventBusPort] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.hasher = hasher
        self.store_factory = store_factory
        self.event_bus = event_bus
        self._clock = clock

    def ensure(
        self,
        inputs: Inputs,
        checksum_path: Union[str, Path],
        work: WorkUnit,
        extra: str = "",
        name: str = "",
    ) -> EnsureOutcome:
        """Run `work` unless the stored checksum matches the inputs.

        Args:
            inputs: Files/directories whose content the work depends on, or a
                callable returning them.
            checksum_path: Where the checksum record lives.
            work: The work unit. Must return 0 (or None) on success.
            extra: Parameters of the work that affect its outcome; folded
                into the fingerprint after the inputs.
            name: Label used in logs and events. Defaults to the checksum path.

        Raises:
            HashComputationError: an input is missing or unreadable.
            WorkUnitFailedError: the work returned a non-zero status.
        """
        store = self.store_factory(checksum_path)
        run = GateRun(name or store.location, store.location)

        try:
            with store.locked():
                run = run.start_check()
                stored = store.read()
                current = self.hasher.fingerprint(_resolve(inputs), extra)
                run = run.compare(stored, current)

                fields = {
                    "hook": run.name,
                    "checksum_path": run.checksum_path,
                    "stored": str(stored) if stored else None,
                    "current": str(current),
                }
                if run.status == GateRunStatus.SKIPPED:
                    logger.info(
                        "%s is up to date (%s)",
                        run.name,
                        current.short,
                        extra={**fields, "decision": "skip"},
                    )
                    return EnsureOutcome.skipped(current)

                logger.info(
                    "%s changed (%s -> %s), running",
                    run.name,
                    stored.short if stored else "none",
                    current.short,
                    extra={**fields, "decision": "run"},
                )
                started = self._clock()
                try:
                    status = work()
                except Exception as e:
                    run = run.fail(1, str(e), self._elapsed_ms(started))
                    logger.error(
                        "%s raised %s",
                        run.name,
                        type(e).__name__,
                        extra={**fields, "decision": "failed", "exit_code": 1},
                    )
                    raise
                status = status or 0
                if status != 0:
                    elapsed = self._elapsed_ms(started)
                    run = run.fail(status, f"exited with status {status}", elapsed)
                    logger.error(
                        "%s failed with exit status %d, checksum left unchanged",
                        run.name,
                        status,
                        extra={
                            **fields,
                            "decision": "failed",
                            "exit_code": status,
                            "duration_ms": round(elapsed, 1),
                        },
                    )
                    raise WorkUnitFailedError(run.name, status)

                # the work may have modified its own inputs (e.g. patched binaries)
                after = self.hasher.fingerprint(_resolve(inputs), extra)
                store.write(after)
                elapsed = self._elapsed_ms(started)
                run = run.complete(after, elapsed)
                logger.info(
                    "%s done (%s)",
                    run.name,
                    after.short,
                    extra={
                        **fields,
                        "decision": "completed",
                        "current": str(after),
                        "exit_code": 0,
                        "duration_ms": round(elapsed, 1),
                    },
                )
                return EnsureOutcome.completed(stored, after)
        finally:
            if self.event_bus is not None:
                self.event_bus.publish(list(run.domain_events))

    def inspect(
        self,
        inputs: Inputs,
        checksum_path: Union[str, Path],
        extra: str = "",
    ) -> tuple[Optional[Fingerprint], Fingerprint]:
        """Return (stored, current) fingerprints without running anything."""
        store = self.store_factory(checksum_path)
        return store.read(), self.hasher.fingerprint(_resolve(inputs), extra)

    def _elapsed_ms(self, started: float) -> float:
        return (self._clock() - started) * 1000.0


def _resolve(inputs: Inputs) -> Sequence[PathLike]:
    return inputs() if callable(inputs) else inputs
