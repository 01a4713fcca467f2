"""Orchestrator - runs scenario workflows with eventing and the abort rules."""

import asyncio

from core.application.dtos.connection_dto import ConnectionConfig
from core.application.interfaces import IConsumptionCheck, IStatusStore, ITransactionClient
from core.domain.enums.step_status import StepStatus
from core.domain.exceptions import StepFailedError, WorkflowAbort
from core.domain.value_objects import ExecutionID, OrderId
from core.settings.modules.poll_settings import PollSettings
from core.settings.modules.transport_settings import TransportSettings
from ogw_sdk.logging import get_logger
from ogw_sdk.soap.templates import TemplateSet
from ogw_sdk.utils import generate_numeric_id, utc_now

from .bus import EventBusProtocol
from .events import WORKFLOW_FINISHED, WORKFLOW_STARTED, WORKFLOW_STEP_RECORDED, Event, EventMetadata
from .models import ExecutionContext, RunResult, StepResult
from .poller import CompletionPoller, Sleep
from .trail import StepTrail
from .workflow import StepRuntime, WorkflowDefinition, WorkflowStep


class Orchestrator:
    """Runs one workflow definition per call against a fresh context and trail."""

    def __init__(
        self,
        event_bus: EventBusProtocol,
        client: ITransactionClient,
        status_store: IStatusStore,
        consumption: IConsumptionCheck,
        poll: PollSettings | None = None,
        transport: TransportSettings | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize orchestrator.

        Args:
            event_bus: EventBusProtocol for lifecycle events
            client: Outbound SOAP transport
            status_store: Status-check collaborator
            consumption: Consumption-check extension point
            poll: Poller budget and interval
            transport: Ports of the sibling services
            sleep: Awaitable used by the poller between attempts
        """
        self._event_bus = event_bus
        self._client = client
        self._status_store = status_store
        self._consumption = consumption
        self._poll = poll or PollSettings()
        self._transport = transport or TransportSettings()
        self._sleep = sleep
        self._logger = get_logger("orchestration.orchestrator")

    async def run(
        self,
        workflow: WorkflowDefinition,
        environment: str,
        config: ConnectionConfig,
        templates: TemplateSet | None = None,
        order_id: str | None = None,
        customer_id: str | None = None,
        execution_id: ExecutionID | None = None,
    ) -> RunResult:
        """Run a workflow to completion or to its first hard failure.

        Args:
            workflow: WorkflowDefinition to run
            environment: Environment name, echoed in the result
            config: Connection parameters for this run
            templates: Caller template overrides
            order_id: Client order id (generated for order scenarios when omitted)
            customer_id: Customer id (generated for search scenarios when omitted)
            execution_id: Run id shared with events published before this call

        Returns:
            RunResult with the full or partial step trail; never raises for
            step failures
        """
        ctx = ExecutionContext(
            execution_id=execution_id or ExecutionID.generate(),
            scenario=workflow.scenario,
            environment=environment,
            started_at=utc_now(),
            order_id=order_id,
            customer_id=customer_id,
        )
        if workflow.needs_status_store and not ctx.order_id:
            ctx.order_id = str(OrderId.generate())
        if not workflow.needs_status_store and not ctx.customer_id:
            ctx.customer_id = generate_numeric_id()

        trail = StepTrail()
        runtime = StepRuntime(
            ctx=ctx,
            trail=trail,
            config=config,
            client=self._client,
            status_store=self._status_store,
            poller=CompletionPoller(self._status_store, sleep=self._sleep),
            consumption=self._consumption,
            templates=templates or TemplateSet(),
            poll=self._poll,
            transport=self._transport,
        )

        self._logger.info(
            f"workflow_starting | execution_id={ctx.execution_id} scenario={workflow.scenario} "
            f"environment={environment} steps={len(workflow.steps)}"
        )
        await self._publish(
            WORKFLOW_STARTED,
            ctx,
            {
                "scenario": workflow.scenario,
                "order_id": ctx.order_id,
                "customer_id": ctx.customer_id,
                "dry_run": False,
            },
        )

        error: str | None = None
        for step in workflow.steps:
            error = await self._execute_step(runtime, step)
            if error is not None:
                break

        success = error is None
        result = trail.finalize(
            ctx,
            success=success,
            error=error,
            message=workflow.summary(ctx) if success else None,
        )

        await self._publish(
            WORKFLOW_FINISHED,
            ctx,
            {
                "scenario": workflow.scenario,
                "success": success,
                "step_count": len(result.steps),
                "failed_count": sum(1 for s in result.steps if not s.passed),
                "error": error,
                "message": result.message,
                "dry_run": False,
            },
        )
        duration_ms = int((result.finished_at - result.started_at).total_seconds() * 1000)
        if success:
            self._logger.info(
                f"workflow_finished | execution_id={ctx.execution_id} scenario={workflow.scenario} "
                f"correlation_id={ctx.correlation_id} duration_ms={duration_ms}"
            )
        else:
            self._logger.warning(
                f"workflow_aborted | execution_id={ctx.execution_id} scenario={workflow.scenario} "
                f"error={error} duration_ms={duration_ms}"
            )
        return result

    async def _execute_step(self, runtime: StepRuntime, step: WorkflowStep) -> str | None:
        """Execute one workflow step.

        Returns:
            The abort message, or None when the run may continue
        """
        trail = runtime.trail
        recorded_before = len(trail)
        error: str | None = None

        try:
            await step.action(runtime)
        except WorkflowAbort as exc:
            error = str(exc)
        except Exception as exc:
            self._logger.error(
                f"step_crashed | execution_id={runtime.ctx.execution_id} step={step.name} error={exc!r}",
                exc_info=True,
            )
            error = f"{step.name} failed unexpectedly: {exc}"
            if all(entry.passed for entry in trail.steps[recorded_before:]):
                trail.failed(step.name, error)

        new_entries = trail.steps[recorded_before:]
        for entry in new_entries:
            await self._publish_step(runtime.ctx, entry)

        if error is None:
            failed = next((entry for entry in new_entries if entry.status is StepStatus.FAILED), None)
            if failed is not None:
                error = str(StepFailedError(f"{failed.name}: {failed.message}"))

        if error is not None and step.best_effort:
            self._logger.warning(
                f"best_effort_step_failed | execution_id={runtime.ctx.execution_id} step={step.name} error={error}"
            )
            return None
        if error is not None:
            self._logger.warning(
                f"workflow_step_failed | execution_id={runtime.ctx.execution_id} step={step.name} error={error}"
            )
        return error

    async def _publish_step(self, ctx: ExecutionContext, entry: StepResult) -> None:
        await self._publish(
            WORKFLOW_STEP_RECORDED,
            ctx,
            {"step_name": entry.name, "status": entry.status.value, "message": entry.message},
        )

    async def _publish(self, name: str, ctx: ExecutionContext, payload: dict[str, object]) -> None:
        """Publish a lifecycle event.

        Args:
            name: Event name
            ctx: ExecutionContext of the run
            payload: Event payload
        """
        metadata = EventMetadata(
            execution_id=str(ctx.execution_id),
            scenario=ctx.scenario,
            environment=ctx.environment,
            timestamp=utc_now(),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
