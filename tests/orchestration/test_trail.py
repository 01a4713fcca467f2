"""Tests for StepTrail."""

from datetime import datetime, timezone

import dataclasses

import pytest

from core.domain.enums import StepStatus
from core.domain.value_objects import ExecutionID
from orchestration.models import ExecutionContext
from orchestration.trail import StepTrail


def _context() -> ExecutionContext:
    return ExecutionContext(
        execution_id=ExecutionID.generate(),
        scenario="cable-submit-order",
        environment="SST",
        started_at=datetime.now(timezone.utc),
        order_id="482910375",
        correlation_id="OGW-1",
    )


def test_entries_are_appended_in_order():
    trail = StepTrail()
    trail.passed("SubmitOrder (GenerateContract)", "OGWOrderID: OGW-1", request="POST x\n\n<a/>", response="<b/>")
    trail.failed("SubmitOrder (Fulfillment)", "SOAP Fault: boom")

    steps = trail.steps
    assert [s.name for s in steps] == ["SubmitOrder (GenerateContract)", "SubmitOrder (Fulfillment)"]
    assert [s.status for s in steps] == [StepStatus.PASS, StepStatus.FAILED]
    assert steps[0].request == "POST x\n\n<a/>"
    assert steps[1].response is None
    assert len(trail) == 2


def test_snapshot_is_not_affected_by_later_records():
    trail = StepTrail()
    trail.passed("one", "ok")
    snapshot = trail.steps
    trail.passed("two", "ok")

    assert len(snapshot) == 1
    assert len(trail.steps) == 2


def test_step_results_are_immutable():
    step = StepTrail().record("one", StepStatus.PASS, "ok")

    with pytest.raises(dataclasses.FrozenInstanceError):
        step.status = StepStatus.FAILED  # type: ignore[misc]


def test_record_accepts_status_values():
    step = StepTrail().record("one", "FAILED", "nope")

    assert step.status is StepStatus.FAILED
    assert not step.passed


def test_finalize_packages_identifiers():
    ctx = _context()
    trail = StepTrail()
    trail.passed("one", "ok")

    result = trail.finalize(ctx, success=False, error="boom")

    assert result.success is False
    assert result.error == "boom"
    assert result.order_id == "482910375"
    assert result.correlation_id == "OGW-1"
    assert result.execution_id == str(ctx.execution_id)
    assert result.steps == trail.steps
    assert result.finished_at >= result.started_at
    assert result.dry_run is False
