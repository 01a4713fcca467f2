"""Domain enums."""

from .audit_action import AuditAction
from .execution_status import ExecutionStatus
from .scenario import ScenarioId
from .step_status import StepStatus

__all__ = ["AuditAction", "ExecutionStatus", "ScenarioId", "StepStatus"]
