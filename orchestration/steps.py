"""Reusable step builders shared by the scenario workflows.

Every builder returns ``WorkflowStep`` objects whose actions render the
step's template (caller override or built-in default), call the gateway,
record one or more trail entries and raise a ``WorkflowAbort`` subclass
after recording FAILED.
"""

import json

from core.domain.exceptions import (
    AssertionFailedError,
    CorrelationNotFoundError,
    PollFailedError,
    StatusQueryError,
    SoapFaultError,
    StepFailedError,
    TransactionError,
)
from core.domain.value_objects import CorrelationId
from ogw_sdk.logging import get_logger
from ogw_sdk.soap import envelopes
from ogw_sdk.soap.extractor import extract_fault, extract_field
from ogw_sdk.utils import utc_timestamp

from .poller import build_status_query, row_value
from .workflow import StepRuntime, WorkflowStep

logger = get_logger("orchestration.steps")

NO_ERROR_CODE = "OGWERR-0000"
SUCCESS_DESCRIPTION = "SUCCESS"

# Stable override keys
GENERATE_CONTRACT = "SubmitOrder (GenerateContract)"
FULFILLMENT = "SubmitOrder (Fulfillment)"
SET_ORDER_STATUS = "SetOrderStatus"
SET_ORDER_STATUS_EAI = "SetOrderStatus_EAI"
FRIDA_EVIDENCE_JSON = "FRIDA Evidence JSON"
OM_SEND_DOCUMENT_CALLBACK = "OMSendDocumentCallback"
HW_FULFILMENT_READY = "HWFulfilmentReady"
IMPORTED_IN_VORAS = "IMPORTED_IN_VORAS"
VORAS_FINAL_SUCCESS_HANDOUT = "VORAS_FINAL_SUCCESS_HANDOUT"
GET_ORDER = "GetOrder"
SET_FN_ORDER_STATUS = "SetFNOrderStatus"
CUSTOMER_SEARCH = "CustomerSearch"
LEGACY_SEARCH = "LegacySearch"


async def send_soap(
    rt: StepRuntime,
    step_name: str,
    fault_label: str,
    url: str,
    soap_action: str,
    payload: str,
) -> tuple[str, str]:
    """POST ``payload`` and classify the answer.

    Args:
        rt: Step runtime
        step_name: Trail entry name used when the call fails
        fault_label: Prefix of the abort message, e.g. "GenerateContract"
        url: Service URL
        soap_action: SOAPAction header
        payload: Rendered request body

    Returns:
        (request text for the trail, response text)

    Raises:
        StepFailedError: If the call could not be completed
        SoapFaultError: If the response is a fault envelope
    """
    request_text = f"POST {url}\n\n{payload}"
    try:
        response = await rt.client.send(url, payload, soap_action, rt.config.auth)
    except TransactionError as exc:
        rt.trail.failed(step_name, f"Network error: {exc}", request=request_text)
        raise StepFailedError(f"{fault_label} network error: {exc}") from exc

    fault = extract_fault(response)
    if fault is not None:
        rt.trail.failed(step_name, f"SOAP Fault: {fault}", request=request_text, response=response)
        raise SoapFaultError(fault_label, fault)
    return request_text, response


def _require_correlation(rt: StepRuntime, step_name: str) -> str:
    if not rt.ctx.correlation_id:
        rt.trail.failed(step_name, "OGWOrderID is not known at this point of the run")
        raise StepFailedError(f"{step_name} needs an OGWOrderID")
    return rt.ctx.correlation_id


def _require_line_ids(rt: StepRuntime, step_name: str) -> tuple[str, ...]:
    if not rt.ctx.line_ids:
        rt.trail.failed(step_name, "No order line ids known at this point of the run")
        raise StepFailedError(f"{step_name} needs order line ids")
    return rt.ctx.line_ids


# --- SubmitOrder -------------------------------------------------------------


async def _generate_contract(rt: StepRuntime) -> None:
    url = rt.config.endpoint.service_url("SubmitOrder")
    payload = rt.templates.render(
        GENERATE_CONTRACT,
        envelopes.SUBMIT_ORDER,
        rt.ctx.template_values(MODE="GenerateContract", OGW_ORDER_ID=""),
    )
    request_text, response = await send_soap(
        rt, GENERATE_CONTRACT, "GenerateContract", url, "SubmitOrder", payload
    )

    correlation_id = extract_field(response, "OGWOrderID")
    if not correlation_id:
        rt.trail.failed(
            GENERATE_CONTRACT, "OGWOrderID not found in response", request=request_text, response=response
        )
        raise CorrelationNotFoundError("OGWOrderID", "GenerateContract")

    rt.ctx.correlation_id = str(CorrelationId(correlation_id))
    logger.info(f"correlation_assigned | order_id={rt.ctx.order_id} correlation_id={correlation_id}")
    rt.trail.passed(GENERATE_CONTRACT, f"OGWOrderID: {correlation_id}", request=request_text, response=response)


async def _fulfillment(rt: StepRuntime) -> None:
    _require_correlation(rt, FULFILLMENT)
    url = rt.config.endpoint.service_url("SubmitOrder")
    payload = rt.templates.render(
        FULFILLMENT, envelopes.SUBMIT_ORDER, rt.ctx.template_values(MODE="Fulfillment")
    )
    request_text, response = await send_soap(rt, FULFILLMENT, "Fulfillment", url, "SubmitOrder", payload)
    rt.trail.passed(FULFILLMENT, "Fulfillment submitted", request=request_text, response=response)


def submit_order() -> tuple[WorkflowStep, WorkflowStep]:
    """GenerateContract (assigns the OGWOrderID) followed by Fulfillment."""
    return (
        WorkflowStep("GenerateContract", _generate_contract, template_keys=(GENERATE_CONTRACT,)),
        WorkflowStep("Fulfillment", _fulfillment, template_keys=(FULFILLMENT,)),
    )


# --- Completion checks -------------------------------------------------------


def await_completion(after: str) -> WorkflowStep:
    """Poll the status store; the first successful check seeds the line ids."""
    step_name = f"DB Check (after {after})"

    async def action(rt: StepRuntime) -> None:
        correlation_id = _require_correlation(rt, step_name)
        query = build_status_query(correlation_id)
        outcome = await rt.poller.wait_for_completion(
            rt.config.db,
            correlation_id,
            f"after {after}",
            max_attempts=rt.poll.max_attempts,
            interval_seconds=rt.poll.interval_seconds,
        )
        if not outcome.success:
            rt.trail.failed(
                step_name, outcome.message, request=query, response=f"Failed after {outcome.attempts} attempts"
            )
            raise PollFailedError(outcome.message, outcome.attempts)

        line_ids = outcome.line_ids or ()
        rt.ctx.seed_line_ids(line_ids)
        rt.trail.passed(
            step_name,
            f"{outcome.message} ({outcome.attempts} attempts)",
            request=query,
            response=f"Order Line IDs: {', '.join(line_ids) or 'N/A'}",
        )

    return WorkflowStep(step_name, action)


# --- Status updates ----------------------------------------------------------


def per_line_status(
    name: str,
    default_template: str,
    pass_message: str,
    service: str = "SetOrderStatus",
    soap_action: str = "SetOrderStatus",
) -> WorkflowStep:
    """One SOAP call per known line id, each recorded as its own trail entry.

    Args:
        name: Override key and trail-name prefix, e.g. "SetOrderStatus_EAI"
        default_template: Built-in template (placeholders OGW_ORDER_ID, ORDER_LINE_ID)
        pass_message: Message recorded for each successful call
        service: Gateway service, becomes ``/VFDE<service>EG/VFDE``
        soap_action: SOAPAction header
    """

    async def action(rt: StepRuntime) -> None:
        _require_correlation(rt, name)
        url = rt.config.endpoint.service_url(service)
        for line_id in _require_line_ids(rt, name):
            step_name = f"{name} (LineID: {line_id})"
            payload = rt.templates.render(name, default_template, rt.ctx.template_values(ORDER_LINE_ID=line_id))
            request_text, response = await send_soap(rt, step_name, name, url, soap_action, payload)
            rt.trail.passed(step_name, pass_message, request=request_text, response=response)

    return WorkflowStep(name, action, template_keys=(name,))


def status_and_await(
    name: str,
    default_template: str,
    pass_message: str,
    service: str = "SetOrderStatus",
    soap_action: str = "SetOrderStatus",
) -> tuple[WorkflowStep, WorkflowStep]:
    """Per-line status update followed by a completion check."""
    return (
        per_line_status(name, default_template, pass_message, service, soap_action),
        await_completion(name),
    )


async def _set_order_status(rt: StepRuntime) -> None:
    _require_correlation(rt, SET_ORDER_STATUS)
    url = rt.config.endpoint.service_url("SetOrderStatus")
    payload = rt.templates.render(SET_ORDER_STATUS, envelopes.SET_ORDER_STATUS, rt.ctx.template_values())
    request_text, response = await send_soap(
        rt, SET_ORDER_STATUS, SET_ORDER_STATUS, url, "SetOrderStatus", payload
    )
    rt.trail.passed(SET_ORDER_STATUS, "Order status set successfully", request=request_text, response=response)


def set_order_status() -> WorkflowStep:
    """Single SetOrderStatus keyed on the OGWOrderID."""
    return WorkflowStep(SET_ORDER_STATUS, _set_order_status, template_keys=(SET_ORDER_STATUS,))


def fn_status_cycle(statuses: tuple[str, ...] = ("CUSTOMER_CREATED", "ORDER_COMPLETED")) -> tuple[WorkflowStep, ...]:
    """SetFNOrderStatus for each status, each followed by a completion check."""
    steps: list[WorkflowStep] = []
    for status in statuses:
        steps.append(_fn_status_step(status))
        steps.append(await_completion(status))
    return tuple(steps)


def _fn_status_step(status: str) -> WorkflowStep:
    step_name = f"SetFNOrderStatus ({status})"

    async def action(rt: StepRuntime) -> None:
        if not rt.ctx.bar_code:
            rt.trail.failed(step_name, "BAR_CODE is not known at this point of the run")
            raise StepFailedError(f"{step_name} needs a BAR_CODE")
        url = rt.config.endpoint.service_url("SetFNOrderStatus")
        payload = rt.templates.render(
            SET_FN_ORDER_STATUS, envelopes.SET_FN_ORDER_STATUS, rt.ctx.template_values(STATUS=status)
        )
        request_text, response = await send_soap(
            rt, step_name, SET_FN_ORDER_STATUS, url, "SetFNOrderStatus", payload
        )
        rt.trail.passed(step_name, f"FN status set to {status}", request=request_text, response=response)

    return WorkflowStep(step_name, action, template_keys=(SET_FN_ORDER_STATUS,))


# --- Evidence ----------------------------------------------------------------


async def _frida_evidence(rt: StepRuntime) -> None:
    step_name = "Create FRIDA Evidence"
    _require_correlation(rt, step_name)
    line_ids = _require_line_ids(rt, step_name)
    timestamp = utc_timestamp()
    documents = [
        rt.templates.render(
            FRIDA_EVIDENCE_JSON,
            envelopes.FRIDA_EVIDENCE,
            rt.ctx.template_values(ORDER_LINE_ID=line_id, TIMESTAMP=timestamp),
        )
        for line_id in line_ids
    ]
    rt.trail.passed(
        step_name,
        f"Created {len(documents)} FRIDA evidence file(s)",
        request=f"Evidence for Order Lines: {', '.join(line_ids)}",
        response="\n\n---\n\n".join(documents),
    )


def frida_evidence() -> WorkflowStep:
    """Render one FRIDA evidence document per line id."""
    return WorkflowStep("Create FRIDA Evidence", _frida_evidence, template_keys=(FRIDA_EVIDENCE_JSON,))


async def _consumption_wait(rt: StepRuntime) -> None:
    step_name = "FRIDA Consumption"
    correlation_id = _require_correlation(rt, step_name)
    line_ids = rt.ctx.line_ids
    request_text = f"Checking FRIDA consumption for {len(line_ids)} evidence files"
    consumed, detail = await rt.consumption.wait_for_consumption(correlation_id, line_ids)
    if not consumed:
        rt.trail.failed(step_name, f"FRIDA evidence not consumed: {detail}", request=request_text, response=detail)
        raise StepFailedError(f"FRIDA evidence not consumed: {detail}")
    rt.trail.passed(step_name, detail, request=request_text, response=detail)


def consumption_wait() -> WorkflowStep:
    """Wait for the evidence consumer through the configured consumption check."""
    return WorkflowStep("FRIDA Consumption", _consumption_wait)


# --- Status-store lookups ----------------------------------------------------


def _lookup_step(step_name: str, column: str, table: str, label: str, attribute: str) -> WorkflowStep:
    async def action(rt: StepRuntime) -> None:
        correlation_id = _require_correlation(rt, step_name)
        escaped = correlation_id.replace("'", "''")
        query = f"SELECT {column} FROM {table} WHERE OGW_ORDER_ID = '{escaped}'"
        try:
            rows = await rt.status_store.execute(query, rt.config.db)
        except StatusQueryError as exc:
            rt.trail.failed(step_name, f"Query failed: {exc}", request=query)
            raise StepFailedError(f"{label} lookup failed: {exc}") from exc

        value = row_value(rows[0], column, 0) if rows else ""
        if not value:
            rt.trail.failed(step_name, f"{label} not found for OGWOrderID {correlation_id}", request=query)
            raise CorrelationNotFoundError(label, table)

        setattr(rt.ctx, attribute, value)
        rt.trail.passed(step_name, f"Retrieved {label}: {value}", request=query, response=f"{label} = {value}")

    return WorkflowStep(step_name, action)


def lookup_document_id() -> WorkflowStep:
    """Fetch the auftragId used by the document callback."""
    return _lookup_step("Get auftragId", "AUFTRAG_ID", "OGW_SEND_DOCUMENT_TRANSACTIONS", "auftragId", "document_id")


def lookup_bar_code() -> WorkflowStep:
    """Fetch the BAR_CODE used by SetFNOrderStatus."""
    return _lookup_step("Query BAR_CODE", "BAR_CODE", "OGW_BARCODE_MAPPING", "BAR_CODE", "bar_code")


# --- Single calls ------------------------------------------------------------


async def _get_order(rt: StepRuntime) -> None:
    correlation_id = _require_correlation(rt, GET_ORDER)
    url = rt.config.endpoint.service_url("GetOrder")
    payload = rt.templates.render(GET_ORDER, envelopes.GET_ORDER, rt.ctx.template_values())
    request_text, response = await send_soap(rt, GET_ORDER, GET_ORDER, url, "GetOrder", payload)
    rt.trail.passed(
        GET_ORDER, f"GetOrder successful for OGWOrderID: {correlation_id}", request=request_text, response=response
    )


def get_order() -> WorkflowStep:
    return WorkflowStep(GET_ORDER, _get_order, template_keys=(GET_ORDER,))


def search_assertion(name: str, default_template: str, legacy_port: bool = False) -> WorkflowStep:
    """Single search request asserting the success code and description.

    Args:
        name: Step name, override key and SOAPAction, e.g. "CustomerSearch"
        default_template: Built-in template (placeholder CUSTOMER_ID)
        legacy_port: Address the plain-HTTP legacy port instead of the endpoint host
    """

    async def action(rt: StepRuntime) -> None:
        customer_id = rt.ctx.customer_id or ""
        if legacy_port:
            url = rt.config.endpoint.sibling_url(rt.transport.legacy_search_port, f"/VFDE{name}EG/VFDE")
        else:
            url = rt.config.endpoint.service_url(name)
        payload = rt.templates.render(name, default_template, rt.ctx.template_values())
        request_text, response = await send_soap(rt, name, name, url, name, payload)

        error_code = extract_field(response, "ErrorCode") or ""
        error_description = extract_field(response, "ErrorDescription") or ""
        logger.info(f"search_result | step={name} customer_id={customer_id} error_code={error_code}")

        if error_code != NO_ERROR_CODE:
            message = f"Unexpected ErrorCode: {error_code}"
            rt.trail.failed(name, message, request=request_text, response=response)
            raise AssertionFailedError(message)
        if error_description != SUCCESS_DESCRIPTION:
            message = f"Unexpected ErrorDescription: {error_description}"
            rt.trail.failed(name, message, request=request_text, response=response)
            raise AssertionFailedError(message)

        rt.trail.passed(
            name,
            f"{name} completed successfully. CustomerID: {customer_id}, "
            f"ErrorCode: {error_code}, ErrorDescription: {error_description}",
            request=request_text,
            response=response,
        )

    return WorkflowStep(name, action, template_keys=(name,))


# --- Supplementary evidence --------------------------------------------------


async def _download_document(rt: StepRuntime) -> None:
    step_name = "Download CDM"
    correlation_id = _require_correlation(rt, step_name)
    url = rt.config.endpoint.sibling_url(rt.transport.cdm_port, f"/getCdm?ID={correlation_id}")
    request_text = f"GET {url}"
    try:
        status, text = await rt.client.get_text(url)
    except TransactionError as exc:
        rt.trail.failed(
            step_name, f"Network error downloading CDM: {exc}", request=request_text, response="Connection failed"
        )
        return

    if not 200 <= status < 300:
        rt.trail.failed(step_name, f"HTTP {status}: Failed to download CDM", request=request_text, response=text)
        return

    try:
        formatted = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        formatted = text
    rt.trail.passed(
        step_name,
        f"CDM downloaded successfully for OGWOrderID: {correlation_id}",
        request=request_text,
        response=formatted,
    )


def download_document() -> WorkflowStep:
    """Best-effort CDM download; a failure is recorded but never aborts the run."""
    return WorkflowStep("Download CDM", _download_document, best_effort=True)
