"""
Scenario Service.

Invocation contract of the engine: validates the connection config, handles
dry-runs, selects the workflow and runs it through the orchestrator.
"""
import asyncio
import logging
from typing import List

from core.application.dtos.run_dto import (
    RunRequest,
    ScenarioInfoDTO,
    StatusQueryRequest,
    StatusQueryResponse,
)
from core.application.interfaces import IConsumptionCheck, IStatusStore, ITransactionClient
from core.domain.exceptions import EnvironmentNotConfiguredError, StatusQueryError
from core.domain.value_objects import ExecutionID
from core.settings.modules.app_settings import AppSettings
from ogw_sdk.soap.templates import TemplateSet
from ogw_sdk.utils import utc_now
from orchestration.bus import EventBusProtocol
from orchestration.events import ENVIRONMENT_VALIDATED, WORKFLOW_FINISHED, WORKFLOW_STARTED, Event, EventMetadata
from orchestration.models import RunResult
from orchestration.orchestrator import Orchestrator
from orchestration.poller import Sleep
from orchestration.scenarios import SCENARIOS, get_workflow


logger = logging.getLogger(__name__)

DRY_RUN_MESSAGE = "Dry-run: no external connections were made"


class ScenarioService:
    """
    Application service for scenario runs.

    Responsibilities:
    - Reject unknown scenarios and unconfigured environments before any connection
    - Short-circuit dry-runs
    - Publish validation and dry-run outcomes for the audit log
    - Wire collaborators into a fresh orchestrator run
    """

    def __init__(
        self,
        client: ITransactionClient,
        status_store: IStatusStore,
        consumption: IConsumptionCheck,
        event_bus: EventBusProtocol,
        settings: AppSettings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize scenario service.

        Args:
            client: Outbound SOAP transport
            status_store: Status-check collaborator
            consumption: Consumption-check extension point
            event_bus: Bus receiving run lifecycle events
            settings: Application settings (poll budget, ports)
            sleep: Awaitable used between poll attempts
        """
        self._status_store = status_store
        self._event_bus = event_bus
        self._orchestrator = Orchestrator(
            event_bus=event_bus,
            client=client,
            status_store=status_store,
            consumption=consumption,
            poll=settings.poll,
            transport=settings.transport,
            sleep=sleep,
        )

    def list_scenarios(self) -> List[ScenarioInfoDTO]:
        """Scenario catalogue with overridable template keys."""
        return [
            ScenarioInfoDTO(
                id=workflow.scenario,
                title=workflow.title,
                needs_status_store=workflow.needs_status_store,
                template_keys=workflow.template_keys,
                steps=[step.name for step in workflow.steps],
            )
            for workflow in SCENARIOS.values()
        ]

    async def run(self, request: RunRequest) -> RunResult:
        """Run one scenario against one environment.

        Args:
            request: RunRequest DTO

        Returns:
            RunResult (successful or not) for executed runs and dry-runs

        Raises:
            UnknownScenarioError: If no workflow is registered for the scenario
            EnvironmentNotConfiguredError: If required connection fields are empty
        """
        workflow = get_workflow(request.scenario)
        execution_id = ExecutionID.generate()

        missing = request.config.missing_fields(workflow.needs_status_store)
        await self._publish(
            ENVIRONMENT_VALIDATED,
            execution_id,
            workflow.scenario,
            request.environment,
            {"success": not missing, "missing": missing, "dry_run": request.dry_run},
        )
        if missing:
            raise EnvironmentNotConfiguredError(request.environment, missing)

        if request.dry_run:
            logger.info(f"Dry-run for {workflow.scenario} on {request.environment}: configuration complete")
            now = utc_now()
            result = RunResult(
                success=True,
                scenario=workflow.scenario,
                environment=request.environment,
                execution_id=str(execution_id),
                started_at=now,
                finished_at=now,
                steps=(),
                message=DRY_RUN_MESSAGE,
                dry_run=True,
            )
            await self._publish(
                WORKFLOW_STARTED, execution_id, workflow.scenario, request.environment, {"dry_run": True}
            )
            await self._publish(
                WORKFLOW_FINISHED,
                execution_id,
                workflow.scenario,
                request.environment,
                {"success": True, "message": DRY_RUN_MESSAGE, "dry_run": True},
            )
            return result

        logger.info(
            f"Running {workflow.scenario} on {request.environment} "
            f"({len(request.custom_templates)} template override(s))"
        )
        return await self._orchestrator.run(
            workflow,
            environment=request.environment,
            config=request.config,
            templates=TemplateSet(dict(request.custom_templates)),
            execution_id=execution_id,
        )

    async def execute_status_query(self, request: StatusQueryRequest) -> StatusQueryResponse:
        """Run an ad-hoc status query through the configured status store."""
        try:
            rows = await self._status_store.execute(request.query, request.db)
        except StatusQueryError as e:
            logger.warning(f"Status query failed: {e}")
            return StatusQueryResponse(success=False, error=str(e))
        return StatusQueryResponse(
            success=True,
            rows=list(rows),
            message=f"Query executed successfully. {len(rows)} row(s) returned.",
        )

    async def _publish(
        self,
        name: str,
        execution_id: ExecutionID,
        scenario: str,
        environment: str,
        payload: dict[str, object],
    ) -> None:
        metadata = EventMetadata(
            execution_id=str(execution_id),
            scenario=scenario,
            environment=environment,
            timestamp=utc_now(),
        )
        await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
