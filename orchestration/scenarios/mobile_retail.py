"""Mobile retail order: three per-line status rounds, then the CDM."""

from core.domain.enums import ScenarioId
from ogw_sdk.soap import envelopes

from .. import steps
from ..workflow import WorkflowDefinition

MOBILE_RETAIL_SUBMIT_ORDER = WorkflowDefinition(
    scenario=ScenarioId.MOBILE_RETAIL_SUBMIT_ORDER.value,
    title="Mobile Retail Submit Order",
    steps=(
        *steps.submit_order(),
        steps.await_completion("Fulfillment"),
        *steps.status_and_await(
            steps.SET_ORDER_STATUS_EAI, envelopes.SET_ORDER_STATUS_FOR_LINE, "EAI status set"
        ),
        *steps.status_and_await(
            steps.IMPORTED_IN_VORAS, envelopes.SET_ORDER_STATUS_FOR_LINE, "VORAS import status set"
        ),
        *steps.status_and_await(
            steps.VORAS_FINAL_SUCCESS_HANDOUT,
            envelopes.SET_ORDER_STATUS_FOR_LINE,
            "VORAS final success handout sent",
        ),
        steps.download_document(),
    ),
)
