"""Mobile telesales order.

FRIDA evidence and consumption are interposed after fulfillment, then the
EAI status, document callback and hardware-fulfilment updates run per line.
"""

from core.domain.enums import ScenarioId
from ogw_sdk.soap import envelopes

from .. import steps
from ..workflow import WorkflowDefinition

MOBILE_TELESALES_SUBMIT_ORDER = WorkflowDefinition(
    scenario=ScenarioId.MOBILE_TELESALES_SUBMIT_ORDER.value,
    title="Mobile Telesales Submit Order",
    steps=(
        *steps.submit_order(),
        steps.await_completion("Fulfillment"),
        steps.frida_evidence(),
        steps.consumption_wait(),
        *steps.status_and_await(
            steps.SET_ORDER_STATUS_EAI, envelopes.SET_ORDER_STATUS_FOR_LINE, "EAI status set"
        ),
        steps.lookup_document_id(),
        *steps.status_and_await(
            steps.OM_SEND_DOCUMENT_CALLBACK,
            envelopes.OM_SEND_DOCUMENT_CALLBACK,
            "Document callback sent",
            service="SendDocument",
            soap_action="sendDocumentResponse",
        ),
        *steps.status_and_await(
            steps.HW_FULFILMENT_READY, envelopes.HW_FULFILMENT_READY, "HW Fulfilment Ready sent"
        ),
    ),
)
