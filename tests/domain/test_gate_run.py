"""Tests for the GateRun aggregate."""

import pytest
from venvhooks.domain.entities.gate_run import GateRun, GateRunStatus
from venvhooks.domain.events.gate_events import (
    GateCheckStartedEvent,
    GateSkippedEvent,
    WorkStartedEvent,
    WorkCompletedEvent,
    WorkFailedEvent,
)
from venvhooks.domain.value_objects.fingerprint import Fingerprint

OLD = Fingerprint("1" * 64)
NEW = Fingerprint("2" * 64)


def _checking():
    return GateRun("uv-sync", "/project/.venvhooks/uv-sync.sha256").start_check()


class TestGateRunLifecycle:
    def test_initial_state(self):
        run = GateRun("uv-sync", "/project/.venvhooks/uv-sync.sha256")
        assert run.status == GateRunStatus.PENDING
        assert run.domain_events == ()

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            GateRun("", "/x")

    def test_start_check(self):
        run = _checking()
        assert run.status == GateRunStatus.CHECKING
        assert isinstance(run.domain_events[0], GateCheckStartedEvent)
        assert run.domain_events[0].checksum_path == "/project/.venvhooks/uv-sync.sha256"

    def test_start_check_twice_rejected(self):
        with pytest.raises(ValueError, match="PENDING"):
            _checking().start_check()

    def test_matching_fingerprints_skip(self):
        run = _checking().compare(NEW, NEW)
        assert run.status == GateRunStatus.SKIPPED
        assert isinstance(run.domain_events[-1], GateSkippedEvent)

    def test_missing_record_runs(self):
        run = _checking().compare(None, NEW)
        assert run.status == GateRunStatus.RUNNING
        event = run.domain_events[-1]
        assert isinstance(event, WorkStartedEvent)
        assert event.stored == ""
        assert event.current == str(NEW)

    def test_different_fingerprints_run(self):
        run = _checking().compare(OLD, NEW)
        assert run.status == GateRunStatus.RUNNING
        assert run.stored == OLD
        assert run.current == NEW

    def test_compare_requires_checking(self):
        with pytest.raises(ValueError, match="CHECKING"):
            GateRun("x", "/x").compare(OLD, NEW)

    def test_complete(self):
        run = _checking().compare(OLD, NEW).complete(NEW, duration_ms=12.5)
        assert run.status == GateRunStatus.COMPLETED
        assert run.exit_code == 0
        event = run.domain_events[-1]
        assert isinstance(event, WorkCompletedEvent)
        assert event.duration_ms == 12.5

    def test_complete_requires_running(self):
        with pytest.raises(ValueError, match="RUNNING"):
            _checking().compare(NEW, NEW).complete(NEW)

    def test_fail(self):
        run = _checking().compare(OLD, NEW).fail(2, "exited with status 2")
        assert run.status == GateRunStatus.FAILED
        assert run.exit_code == 2
        event = run.domain_events[-1]
        assert isinstance(event, WorkFailedEvent)
        assert event.exit_code == 2

    def test_fail_requires_running(self):
        with pytest.raises(ValueError, match="RUNNING"):
            _checking().fail(1, "boom")

    def test_transitions_return_new_instances(self):
        pending = GateRun("x", "/x")
        checking = pending.start_check()
        assert pending is not checking
        assert pending.status == GateRunStatus.PENDING

    def test_events_carry_aggregate_id(self):
        run = _checking().compare(OLD, NEW).complete(NEW)
        assert {e.aggregate_id for e in run.domain_events} == {"uv-sync"}
        assert [e.event_type for e in run.domain_events] == [
            "GateCheckStartedEvent",
            "WorkStartedEvent",
            "WorkCompletedEvent",
        ]

    def test_event_to_dict(self):
        event = _checking().domain_events[0]
        data = event.to_dict()
        assert data["event_type"] == "GateCheckStartedEvent"
        assert data["aggregate_id"] == "uv-sync"
        assert "occurred_at" in data
