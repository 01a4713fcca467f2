from __future__ import annotations

from pydantic import Field

from core.settings.base import OgwBaseSettings


class AuditSettings(OgwBaseSettings):
    """Run audit log retention."""

    max_records: int = Field(1000, ge=1, alias="OGW_AUDIT_MAX_RECORDS")
