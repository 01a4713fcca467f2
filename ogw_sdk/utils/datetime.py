"""Timezone-aware time helpers."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """ISO8601 Z timestamp with millisecond precision (e.g. 2025-09-01T12:34:56.789Z)."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
