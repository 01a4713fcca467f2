"""Order lookup: a submitted order is read back with GetOrder."""

from core.domain.enums import ScenarioId
from ogw_sdk.soap import envelopes

from .. import steps
from ..workflow import WorkflowDefinition

GET_ORDER = WorkflowDefinition(
    scenario=ScenarioId.GET_ORDER.value,
    title="GetOrder",
    steps=(
        *steps.submit_order(),
        steps.await_completion("Fulfillment"),
        *steps.status_and_await(
            steps.SET_ORDER_STATUS_EAI, envelopes.SET_ORDER_STATUS_FOR_LINE, "EAI status set"
        ),
        steps.get_order(),
        steps.download_document(),
    ),
)
