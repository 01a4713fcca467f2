"""Application DTOs."""

from .audit_dto import AuditRecordDTO
from .connection_dto import AuthConfig, ConnectionConfig, DbConfig, EndpointConfig, UnixConfig
from .run_dto import (
    RunRequest,
    RunResultDTO,
    ScenarioInfoDTO,
    StatusQueryRequest,
    StatusQueryResponse,
    StepResultDTO,
)

__all__ = [
    "AuditRecordDTO",
    "AuthConfig",
    "ConnectionConfig",
    "DbConfig",
    "EndpointConfig",
    "UnixConfig",
    "RunRequest",
    "RunResultDTO",
    "ScenarioInfoDTO",
    "StatusQueryRequest",
    "StatusQueryResponse",
    "StepResultDTO",
]
