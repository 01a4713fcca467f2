from __future__ import annotations

from pydantic import Field

from core.settings.base import OgwBaseSettings


class PollSettings(OgwBaseSettings):
    """
    Completion-poller defaults.
    Loaded from .env file with exact variable name matching.
    """

    max_attempts: int = Field(50, ge=1, alias="OGW_POLL_MAX_ATTEMPTS")
    interval_seconds: float = Field(5.0, ge=0, alias="OGW_POLL_INTERVAL_SECONDS")
