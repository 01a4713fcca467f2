"""
Step Status Enum.

Outcome of a single recorded step in the trail.
"""
from enum import Enum


class StepStatus(str, Enum):
    """Step status values (serialized exactly as shown in reports)."""

    PASS = "PASS"
    FAILED = "FAILED"
