# Settings package
from core.settings.modules import (
    AppSettings,
    AuditSettings,
    PollSettings,
    StatusStoreSettings,
    TransportSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "AuditSettings",
    "PollSettings",
    "StatusStoreSettings",
    "TransportSettings",
]
