"""Audit log - bounded in-memory record of run lifecycle events."""

import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime

from core.domain.enums.audit_action import AuditAction
from ogw_sdk.logging import get_logger

from .bus import EventBusProtocol
from .events import ENVIRONMENT_VALIDATED, WORKFLOW_FINISHED, WORKFLOW_STARTED, Event

DEFAULT_MAX_RECORDS = 1000
DRY_RUN_DETAILS = "Dry-run: execution skipped"


@dataclass(frozen=True)
class AuditRecord:
    """One audit entry. ``success`` is unset for RUN_STARTED."""

    id: str
    action: AuditAction
    environment: str
    scenario: str
    execution_id: str
    timestamp: datetime
    dry_run: bool
    success: bool | None = None
    details: str | None = None


class AuditLog:
    """Keeps the newest audit records; the oldest are dropped past ``max_records``.

    Subscribes to the environment-validated, workflow-started and
    workflow-finished events. A finished event maps to RUN_COMPLETED or
    RUN_FAILED depending on its ``success`` flag.
    """

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS) -> None:
        if max_records < 1:
            raise ValueError("max_records must be at least 1")
        self._records: deque[AuditRecord] = deque(maxlen=max_records)
        self._logger = get_logger("orchestration.audit")

    def attach(self, bus: EventBusProtocol) -> None:
        """Subscribe this log to the run lifecycle events of ``bus``."""
        bus.subscribe_many((ENVIRONMENT_VALIDATED, WORKFLOW_STARTED, WORKFLOW_FINISHED), self.handle)

    async def handle(self, event: Event) -> None:
        payload = event.payload
        dry_run = bool(payload.get("dry_run", False))
        success: bool | None = None
        details: str | None = None

        if event.name == ENVIRONMENT_VALIDATED:
            action = AuditAction.ENV_VALIDATED
            success = bool(payload.get("success"))
            missing = payload.get("missing") or []
            if missing:
                details = f"Missing: {', '.join(str(name) for name in missing)}"
        elif event.name == WORKFLOW_STARTED:
            action = AuditAction.RUN_STARTED
        elif event.name == WORKFLOW_FINISHED:
            success = bool(payload.get("success"))
            action = AuditAction.RUN_COMPLETED if success else AuditAction.RUN_FAILED
            if dry_run:
                details = DRY_RUN_DETAILS
            else:
                details = _text(payload.get("error")) or _text(payload.get("message"))
        else:
            return

        record = AuditRecord(
            id=str(uuid.uuid4()),
            action=action,
            environment=event.metadata.environment,
            scenario=event.metadata.scenario,
            execution_id=event.metadata.execution_id,
            timestamp=event.metadata.timestamp,
            dry_run=dry_run,
            success=success,
            details=details,
        )
        self._records.append(record)
        self._logger.info(
            f"audit_recorded | action={action.value} execution_id={record.execution_id} "
            f"environment={record.environment} dry_run={dry_run} success={success}"
        )

    def records(self, environment: str | None = None, execution_id: str | None = None) -> list[AuditRecord]:
        """Records in arrival order, optionally narrowed to one environment or run."""
        return [
            record
            for record in self._records
            if (environment is None or record.environment == environment)
            and (execution_id is None or record.execution_id == execution_id)
        ]


def _text(value: object) -> str | None:
    return str(value) if value else None
