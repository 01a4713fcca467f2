"""Application layer - services, interfaces, and DTOs."""

from .dtos import ConnectionConfig, RunRequest, RunResultDTO, StatusQueryRequest, StatusQueryResponse
from .interfaces import IConsumptionCheck, IStatusStore, ITransactionClient

__all__ = [
    # DTOs
    "ConnectionConfig",
    "RunRequest",
    "RunResultDTO",
    "StatusQueryRequest",
    "StatusQueryResponse",
    # Interfaces
    "IConsumptionCheck",
    "IStatusStore",
    "ITransactionClient",
]
