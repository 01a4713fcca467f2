"""Orchestration models - ExecutionContext, StepResult, PollOutcome, RunResult."""

from dataclasses import dataclass
from datetime import datetime

from core.domain.enums.execution_status import ExecutionStatus
from core.domain.enums.step_status import StepStatus
from core.domain.value_objects import ExecutionID


@dataclass
class ExecutionContext:
    """Per-run mutable state, owned by a single workflow invocation."""

    execution_id: ExecutionID
    scenario: str
    environment: str
    started_at: datetime
    order_id: str | None = None
    correlation_id: str | None = None
    line_ids: tuple[str, ...] = ()
    document_id: str | None = None
    bar_code: str | None = None
    customer_id: str | None = None


    def seed_line_ids(self, line_ids: tuple[str, ...]) -> bool:
        """Set the line ids once; later calls leave them untouched.

        Returns:
            True when the ids were stored by this call
        """
        if self.line_ids:
            return False
        self.line_ids = tuple(line_ids)
        return True

    def template_values(self, **extra: object) -> dict[str, object]:
        """Placeholder values known at this point of the run."""
        values: dict[str, object] = {
            "ORDER_ID": self.order_id or "",
            "OGW_ORDER_ID": self.correlation_id or "",
            "AUFTRAG_ID": self.document_id or "",
            "BAR_CODE": self.bar_code or "",
            "CUSTOMER_ID": self.customer_id or "",
        }
        values.update(extra)
        return values


@dataclass(frozen=True)
class StepResult:
    """One immutable entry of the step trail."""

    name: str
    status: StepStatus
    message: str
    request: str | None = None
    response: str | None = None

    @property
    def passed(self) -> bool:
        return self.status is StepStatus.PASS


@dataclass(frozen=True)
class PollOutcome:
    """Result of one completion-polling cycle."""

    success: bool
    message: str
    attempts: int
    line_ids: tuple[str, ...] | None = None


@dataclass(frozen=True)
class RunResult:
    """Result of a scenario run, returned to the caller for persistence."""

    success: bool
    scenario: str
    environment: str
    execution_id: str
    started_at: datetime
    finished_at: datetime
    steps: tuple[StepResult, ...]
    order_id: str | None = None
    correlation_id: str | None = None
    customer_id: str | None = None
    message: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def status(self) -> ExecutionStatus:
        if self.dry_run:
            return ExecutionStatus.DRY_RUN
        return ExecutionStatus.SUCCESS if self.success else ExecutionStatus.FAILED
