"""Scenario registry: one workflow definition per scenario id."""

from core.domain.enums import ScenarioId
from core.domain.exceptions import UnknownScenarioError

from ..workflow import WorkflowDefinition
from .cable import CABLE_SUBMIT_ORDER
from .dsl import DSL_SUBMIT_ORDER
from .get_order import GET_ORDER
from .mobile_retail import MOBILE_RETAIL_SUBMIT_ORDER
from .mobile_telesales import MOBILE_TELESALES_SUBMIT_ORDER
from .search import LEGACY_SEARCH, SEARCH_CUSTOMER

SCENARIOS: dict[ScenarioId, WorkflowDefinition] = {
    ScenarioId.CABLE_SUBMIT_ORDER: CABLE_SUBMIT_ORDER,
    ScenarioId.MOBILE_TELESALES_SUBMIT_ORDER: MOBILE_TELESALES_SUBMIT_ORDER,
    ScenarioId.MOBILE_RETAIL_SUBMIT_ORDER: MOBILE_RETAIL_SUBMIT_ORDER,
    ScenarioId.GET_ORDER: GET_ORDER,
    ScenarioId.DSL_SUBMIT_ORDER: DSL_SUBMIT_ORDER,
    ScenarioId.SEARCH_CUSTOMER: SEARCH_CUSTOMER,
    ScenarioId.LEGACY_SEARCH: LEGACY_SEARCH,
}


def get_workflow(scenario: "ScenarioId | str") -> WorkflowDefinition:
    """Look up the workflow for ``scenario``.

    Raises:
        UnknownScenarioError: If no workflow is registered for the id
    """
    try:
        return SCENARIOS[ScenarioId(scenario)]
    except (KeyError, ValueError) as exc:
        raise UnknownScenarioError(str(scenario)) from exc


__all__ = [
    "CABLE_SUBMIT_ORDER",
    "DSL_SUBMIT_ORDER",
    "GET_ORDER",
    "LEGACY_SEARCH",
    "MOBILE_RETAIL_SUBMIT_ORDER",
    "MOBILE_TELESALES_SUBMIT_ORDER",
    "SCENARIOS",
    "SEARCH_CUSTOMER",
    "get_workflow",
]
