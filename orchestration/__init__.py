"""Orchestration layer - scenario workflows, polling and the step trail."""

import asyncio

from core.application.interfaces import IConsumptionCheck, IStatusStore, ITransactionClient
from core.settings.modules.poll_settings import PollSettings
from core.settings.modules.transport_settings import TransportSettings

from .audit import AuditLog, AuditRecord
from .bus import EventBusProtocol, InMemoryEventBus
from .events import Event, EventMetadata
from .models import ExecutionContext, PollOutcome, RunResult, StepResult
from .orchestrator import Orchestrator
from .poller import CompletionPoller, Sleep
from .scenarios import SCENARIOS, get_workflow
from .trail import StepTrail
from .workflow import StepAction, StepRuntime, WorkflowDefinition, WorkflowStep

__all__ = [
    "AuditLog",
    "AuditRecord",
    "CompletionPoller",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "ExecutionContext",
    "InMemoryEventBus",
    "Orchestrator",
    "PollOutcome",
    "RunResult",
    "SCENARIOS",
    "StepAction",
    "StepResult",
    "StepRuntime",
    "StepTrail",
    "WorkflowDefinition",
    "WorkflowStep",
    "create_default_orchestrator",
    "get_workflow",
]


def create_default_orchestrator(
    client: ITransactionClient,
    status_store: IStatusStore,
    consumption: IConsumptionCheck,
    poll: PollSettings | None = None,
    transport: TransportSettings | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Orchestrator:
    """Create a default orchestrator with in-memory event bus.

    Args:
        client: Outbound SOAP transport
        status_store: Status-check collaborator
        consumption: Consumption-check extension point
        poll: Poller budget and interval
        transport: Ports of the sibling services
        sleep: Awaitable used between poll attempts

    Returns:
        Orchestrator instance
    """
    return Orchestrator(
        event_bus=InMemoryEventBus(),
        client=client,
        status_store=status_store,
        consumption=consumption,
        poll=poll,
        transport=transport,
        sleep=sleep,
    )
