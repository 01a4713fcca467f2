"""
Scenario identifiers.

One value per test family the engine can execute.
"""
from enum import Enum


class ScenarioId(str, Enum):
    """Scenario identifiers as sent by the dashboard."""

    CABLE_SUBMIT_ORDER = "cable-submit-order"
    MOBILE_TELESALES_SUBMIT_ORDER = "mobile-telesales-submit-order"
    MOBILE_RETAIL_SUBMIT_ORDER = "mobile-retail-submit-order"
    GET_ORDER = "get-order"
    DSL_SUBMIT_ORDER = "dsl-submit-order"
    SEARCH_CUSTOMER = "search-customer"
    LEGACY_SEARCH = "legacy-search"
