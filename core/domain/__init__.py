"""Domain layer - pure domain types, enums and exceptions."""

from .enums import ExecutionStatus, ScenarioId, StepStatus
from .value_objects import CorrelationId, ExecutionID, OrderId

__all__ = [
    "CorrelationId",
    "ExecutionID",
    "ExecutionStatus",
    "OrderId",
    "ScenarioId",
    "StepStatus",
]
