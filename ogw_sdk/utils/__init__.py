"""Small helpers shared across layers."""

from .datetime import utc_now, utc_timestamp
from .ids import generate_numeric_id

__all__ = ["generate_numeric_id", "utc_now", "utc_timestamp"]
