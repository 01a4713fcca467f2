"""Workflow definitions - StepRuntime, StepAction, WorkflowStep, WorkflowDefinition."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from core.application.dtos.connection_dto import ConnectionConfig
from core.application.interfaces import IConsumptionCheck, IStatusStore, ITransactionClient
from core.settings.modules.poll_settings import PollSettings
from core.settings.modules.transport_settings import TransportSettings
from ogw_sdk.soap.templates import TemplateSet

from .models import ExecutionContext
from .poller import CompletionPoller
from .trail import StepTrail


@dataclass
class StepRuntime:
    """Everything a step action may touch during one run."""

    ctx: ExecutionContext
    trail: StepTrail
    config: ConnectionConfig
    client: ITransactionClient
    status_store: IStatusStore
    poller: CompletionPoller
    consumption: IConsumptionCheck
    templates: TemplateSet = field(default_factory=TemplateSet)
    poll: PollSettings = field(default_factory=PollSettings)
    transport: TransportSettings = field(default_factory=TransportSettings)


# Step actions record their own trail entries and raise WorkflowAbort after
# recording FAILED.
StepAction = Callable[[StepRuntime], Awaitable[None]]


@dataclass(frozen=True)
class WorkflowStep:
    """A single stage of a workflow (may record several trail entries)."""

    name: str
    action: StepAction
    best_effort: bool = False
    template_keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorkflowDefinition:
    """Ordered, read-only step sequence for one scenario family."""

    scenario: str
    title: str
    steps: tuple[WorkflowStep, ...]
    completion_message: str = "{title} completed successfully. OGWOrderID: {correlation_id}"
    needs_status_store: bool = True

    @property
    def template_keys(self) -> list[str]:
        """Overridable template keys, in step order."""
        keys: list[str] = []
        for step in self.steps:
            for key in step.template_keys:
                if key not in keys:
                    keys.append(key)
        return keys

    def summary(self, ctx: ExecutionContext) -> str:
        return self.completion_message.format(
            title=self.title,
            order_id=ctx.order_id or "",
            correlation_id=ctx.correlation_id or "",
            customer_id=ctx.customer_id or "",
        )
