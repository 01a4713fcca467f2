# Settings modules
from .app_settings import AppSettings, get_app_settings
from .audit_settings import AuditSettings
from .poll_settings import PollSettings
from .status_store_settings import StatusStoreSettings
from .transport_settings import TransportSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "AuditSettings",
    "PollSettings",
    "StatusStoreSettings",
    "TransportSettings",
]
