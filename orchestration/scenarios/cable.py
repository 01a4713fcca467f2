"""Cable order: submit, poll, SetOrderStatus, poll, download the CDM."""

from core.domain.enums import ScenarioId

from .. import steps
from ..workflow import WorkflowDefinition

CABLE_SUBMIT_ORDER = WorkflowDefinition(
    scenario=ScenarioId.CABLE_SUBMIT_ORDER.value,
    title="Cable Submit Order",
    steps=(
        *steps.submit_order(),
        steps.await_completion("Fulfillment"),
        steps.set_order_status(),
        steps.await_completion("SetOrderStatus"),
        steps.download_document(),
    ),
)
