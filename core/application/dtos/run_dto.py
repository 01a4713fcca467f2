"""Application DTOs for scenario runs (invocation contract)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from core.application.dtos.connection_dto import ConnectionConfig, DbConfig
from core.domain.enums import ExecutionStatus, StepStatus

if TYPE_CHECKING:
    from orchestration.models import RunResult


class RunRequest(BaseModel):
    """Request DTO for running one scenario against one environment."""

    scenario: str = Field(
        ...,
        validation_alias=AliasChoices("scenario", "testId"),
        description="Scenario identifier",
    )
    test_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("test_name", "testName"), description="Display name"
    )
    environment: str = Field(..., min_length=1, description="Environment name, e.g. SST")
    config: ConnectionConfig = Field(default_factory=ConnectionConfig)
    custom_templates: Dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("custom_templates", "customTemplates"),
        description="Per-step template overrides keyed by step name",
    )
    dry_run: bool = Field(
        False,
        validation_alias=AliasChoices("dry_run", "dryRun"),
        description="Validate the environment without connecting",
    )

    model_config = {"frozen": True}


class StepResultDTO(BaseModel):
    """One trail entry."""

    name: str
    status: StepStatus
    message: str
    request: Optional[str] = None
    response: Optional[str] = None

    model_config = {"frozen": True}


class RunResultDTO(BaseModel):
    """Response DTO for a scenario run."""

    success: bool
    status: ExecutionStatus
    scenario: str
    environment: str
    execution_id: str
    order_id: Optional[str] = None
    correlation_id: Optional[str] = Field(None, description="Server-assigned OGWOrderID")
    customer_id: Optional[str] = None
    steps: List[StepResultDTO] = Field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None
    dry_run: bool = False
    started_at: datetime
    finished_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_result(cls, result: "RunResult") -> "RunResultDTO":
        return cls(
            success=result.success,
            status=result.status,
            scenario=result.scenario,
            environment=result.environment,
            execution_id=result.execution_id,
            order_id=result.order_id,
            correlation_id=result.correlation_id,
            customer_id=result.customer_id,
            steps=[
                StepResultDTO(
                    name=step.name,
                    status=step.status,
                    message=step.message,
                    request=step.request,
                    response=step.response,
                )
                for step in result.steps
            ],
            message=result.message,
            error=result.error,
            dry_run=result.dry_run,
            started_at=result.started_at,
            finished_at=result.finished_at,
        )


class ScenarioInfoDTO(BaseModel):
    """Scenario catalogue entry."""

    id: str
    title: str
    needs_status_store: bool
    template_keys: List[str] = Field(default_factory=list, description="Overridable step templates")
    steps: List[str] = Field(default_factory=list, description="Ordered step names")

    model_config = {"frozen": True}


class StatusQueryRequest(BaseModel):
    """Request DTO for the status-query boundary."""

    db: DbConfig
    query: str = Field(..., min_length=1)


class StatusQueryResponse(BaseModel):
    """Rows returned by the status store."""

    success: bool
    rows: List[Any] = Field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None

