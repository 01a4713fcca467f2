"""
Audit Action Enum.

Run lifecycle entries kept in the audit log.
"""
from enum import Enum


class AuditAction(str, Enum):
    """Audit actions, in the order a run produces them."""

    ENV_VALIDATED = "ENV_VALIDATED"
    RUN_STARTED = "RUN_STARTED"
    RUN_COMPLETED = "RUN_COMPLETED"
    RUN_FAILED = "RUN_FAILED"
