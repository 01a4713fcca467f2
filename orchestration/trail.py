"""Step trail - append-only audit log of one scenario run."""

from core.domain.enums.step_status import StepStatus
from ogw_sdk.utils import utc_now

from .models import ExecutionContext, RunResult, StepResult


class StepTrail:
    """Accumulates step outcomes in execution order.

    Entries are never retried, replaced or reordered once recorded.
    """

    def __init__(self) -> None:
        self._steps: list[StepResult] = []

    def record(
        self,
        name: str,
        status: StepStatus,
        message: str,
        request: str | None = None,
        response: str | None = None,
    ) -> StepResult:
        """Append a step outcome.

        Args:
            name: Human label, may embed a line identifier
            status: PASS or FAILED
            message: Human summary
            request: Verbatim outbound payload
            response: Verbatim inbound payload or formatted output

        Returns:
            The recorded StepResult
        """
        step = StepResult(
            name=name,
            status=StepStatus(status),
            message=message,
            request=request,
            response=response,
        )
        self._steps.append(step)
        return step

    def passed(self, name: str, message: str, request: str | None = None, response: str | None = None) -> StepResult:
        return self.record(name, StepStatus.PASS, message, request, response)

    def failed(self, name: str, message: str, request: str | None = None, response: str | None = None) -> StepResult:
        return self.record(name, StepStatus.FAILED, message, request, response)

    @property
    def steps(self) -> tuple[StepResult, ...]:
        """Snapshot of the trail."""
        return tuple(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def finalize(
        self,
        ctx: ExecutionContext,
        success: bool,
        error: str | None = None,
        message: str | None = None,
    ) -> RunResult:
        """Package the trail with the run's identifiers and outcome."""
        return RunResult(
            success=success,
            scenario=ctx.scenario,
            environment=ctx.environment,
            execution_id=str(ctx.execution_id),
            started_at=ctx.started_at,
            finished_at=utc_now(),
            steps=self.steps,
            order_id=ctx.order_id,
            correlation_id=ctx.correlation_id,
            customer_id=ctx.customer_id,
            message=message,
            error=error,
        )
