from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base import OgwBaseSettings


class StatusStoreSettings(OgwBaseSettings):
    """
    Status-store collaborator settings.

    ``proxy_url`` points at the HTTP database proxy. ``simulate`` only applies
    when no proxy is configured.
    """

    proxy_url: Optional[str] = Field(None, alias="DB_PROXY_URL")
    simulate: bool = Field(True, alias="OGW_SIMULATE_STATUS_STORE")
    proxy_timeout_seconds: float = Field(30.0, gt=0, alias="OGW_DB_PROXY_TIMEOUT_SECONDS")
