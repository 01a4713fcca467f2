"""Single-request search scenarios with success-code assertions."""

from core.domain.enums import ScenarioId
from ogw_sdk.soap import envelopes

from .. import steps
from ..workflow import WorkflowDefinition

SEARCH_COMPLETION_MESSAGE = "{title} completed successfully. CustomerID: {customer_id}"

SEARCH_CUSTOMER = WorkflowDefinition(
    scenario=ScenarioId.SEARCH_CUSTOMER.value,
    title="CustomerSearch",
    steps=(steps.search_assertion(steps.CUSTOMER_SEARCH, envelopes.CUSTOMER_SEARCH),),
    completion_message=SEARCH_COMPLETION_MESSAGE,
    needs_status_store=False,
)

LEGACY_SEARCH = WorkflowDefinition(
    scenario=ScenarioId.LEGACY_SEARCH.value,
    title="LegacySearch",
    steps=(steps.search_assertion(steps.LEGACY_SEARCH, envelopes.LEGACY_SEARCH, legacy_port=True),),
    completion_message=SEARCH_COMPLETION_MESSAGE,
    needs_status_store=False,
)
