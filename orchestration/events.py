"""Orchestration events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventMetadata:
    """Metadata for an event."""

    execution_id: str
    scenario: str
    environment: str
    timestamp: datetime


@dataclass
class Event:
    """Run lifecycle event published by the orchestrator."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata


WORKFLOW_STARTED = "workflow.started"
WORKFLOW_STEP_RECORDED = "workflow.step.recorded"
WORKFLOW_FINISHED = "workflow.finished"
ENVIRONMENT_VALIDATED = "environment.validated"
