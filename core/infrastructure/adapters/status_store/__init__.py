"""Status-store adapters.

Import-light; ``build_status_store`` wires the configured store.
"""
from core.application.interfaces import IStatusStore
from core.settings.modules.status_store_settings import StatusStoreSettings

from .proxy_status_store import ProxyStatusStore
from .simulated_status_store import SimulatedStatusStore


def build_status_store(settings: StatusStoreSettings) -> IStatusStore:
    """
    Proxy when ``DB_PROXY_URL`` is set, otherwise the simulation if enabled.

    A configured proxy is never replaced by the simulation: its query errors
    reach the poller, which retries them as transient failures.

    Raises:
        ValueError: If no proxy is configured and simulation is disabled
    """
    if settings.proxy_url:
        return ProxyStatusStore(settings.proxy_url, settings.proxy_timeout_seconds)
    if settings.simulate:
        return SimulatedStatusStore()
    raise ValueError("No status store configured: set DB_PROXY_URL or enable simulation")


__all__ = [
    "ProxyStatusStore",
    "SimulatedStatusStore",
    "build_status_store",
]
