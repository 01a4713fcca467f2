"""
Audit log endpoint.

Lists validation and run lifecycle records kept by the in-memory audit log.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_audit_log
from core.application.dtos import AuditRecordDTO
from orchestration.audit import AuditLog


router = APIRouter()


@router.get(
    "/audit",
    status_code=status.HTTP_200_OK,
    response_model=List[AuditRecordDTO],
    summary="List audit records",
    description="Oldest first; narrow with `environment` or `executionId`",
)
async def list_audit_records(
    environment: Optional[str] = Query(None, description="Environment name, e.g. SST"),
    execution_id: Optional[str] = Query(None, alias="executionId"),
    audit_log: AuditLog = Depends(get_audit_log),
):
    return [
        AuditRecordDTO.from_record(record)
        for record in audit_log.records(environment=environment, execution_id=execution_id)
    ]
