"""
Execution Status Enum.

Overall outcome of one scenario run.
"""
from enum import Enum


class ExecutionStatus(str, Enum):
    """Execution status values."""

    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry-run"
