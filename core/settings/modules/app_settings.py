from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from core.settings.modules.audit_settings import AuditSettings
from core.settings.modules.poll_settings import PollSettings
from core.settings.modules.status_store_settings import StatusStoreSettings
from core.settings.modules.transport_settings import TransportSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(extra="ignore")

    poll: PollSettings
    status_store: StatusStoreSettings
    transport: TransportSettings
    audit: AuditSettings = Field(default_factory=AuditSettings)


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        poll=PollSettings(),
        status_store=StatusStoreSettings(),
        transport=TransportSettings(),
        audit=AuditSettings(),
    )
