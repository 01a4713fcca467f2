"""
FastAPI Dependencies.

Provides dependency injection for the scenario service and its collaborators.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.services.scenario_service import ScenarioService
from core.infrastructure.adapters.consumption import DelayConsumptionCheck
from core.infrastructure.adapters.soap import SoapTransactionClient
from core.infrastructure.adapters.status_store import build_status_store
from core.settings import AppSettings, get_app_settings
from orchestration.audit import AuditLog
from orchestration.bus import InMemoryEventBus

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_transaction_client = None
_status_store = None
_consumption_check = None
_event_bus = None
_audit_log = None
_scenario_service = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_transaction_client():
    global _transaction_client
    if _transaction_client is None:
        transport = get_settings().transport
        _transaction_client = SoapTransactionClient(
            timeout_seconds=transport.request_timeout_seconds,
            verify_ssl=transport.verify_ssl,
        )
        logger.info("Created SoapTransactionClient instance")
    return _transaction_client


def get_status_store():
    global _status_store
    if _status_store is None:
        settings = get_settings().status_store
        _status_store = build_status_store(settings)
        if settings.proxy_url:
            logger.info(f"Using DB proxy status store: {settings.proxy_url}")
        else:
            logger.info("Using SimulatedStatusStore (DB_PROXY_URL not set)")
    return _status_store


def get_consumption_check():
    global _consumption_check
    if _consumption_check is None:
        _consumption_check = DelayConsumptionCheck(get_settings().transport.consumption_wait_seconds)
    return _consumption_check


def get_audit_log() -> AuditLog:
    global _audit_log
    if _audit_log is None:
        _audit_log = AuditLog(get_settings().audit.max_records)
    return _audit_log


def get_event_bus():
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
        get_audit_log().attach(_event_bus)
        logger.info("Created InMemoryEventBus with audit log subscriber")
    return _event_bus


def get_scenario_service() -> ScenarioService:
    global _scenario_service
    if _scenario_service is None:
        _scenario_service = ScenarioService(
            client=get_transaction_client(),
            status_store=get_status_store(),
            consumption=get_consumption_check(),
            event_bus=get_event_bus(),
            settings=get_settings(),
        )
        logger.info("Created ScenarioService instance")
    return _scenario_service


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _transaction_client, _status_store, _consumption_check
    global _event_bus, _audit_log, _scenario_service

    _transaction_client = None
    _status_store = None
    _consumption_check = None
    _event_bus = None
    _audit_log = None
    _scenario_service = None
    get_app_settings.cache_clear()

    logger.info("Dependencies reset")
