"""Application DTOs for the run audit log."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from core.domain.enums import AuditAction

if TYPE_CHECKING:
    from orchestration.audit import AuditRecord


class AuditRecordDTO(BaseModel):
    """One audit log entry."""

    id: str
    action: AuditAction
    environment: str
    scenario: str
    execution_id: str
    timestamp: datetime
    dry_run: bool
    success: Optional[bool] = None
    details: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_record(cls, record: "AuditRecord") -> "AuditRecordDTO":
        return cls(
            id=record.id,
            action=record.action,
            environment=record.environment,
            scenario=record.scenario,
            execution_id=record.execution_id,
            timestamp=record.timestamp,
            dry_run=record.dry_run,
            success=record.success,
            details=record.details,
        )
