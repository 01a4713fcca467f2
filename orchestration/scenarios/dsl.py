"""DSL order: BAR_CODE lookup and the fixed-network status cycle."""

from core.domain.enums import ScenarioId

from .. import steps
from ..workflow import WorkflowDefinition

DSL_SUBMIT_ORDER = WorkflowDefinition(
    scenario=ScenarioId.DSL_SUBMIT_ORDER.value,
    title="DSL Submit Order",
    steps=(
        *steps.submit_order(),
        steps.await_completion("Fulfillment"),
        steps.lookup_bar_code(),
        *steps.fn_status_cycle(("CUSTOMER_CREATED", "ORDER_COMPLETED")),
        steps.download_document(),
    ),
)
