"""Tests for Orchestrator - abort rules, best-effort steps and events."""

import pytest

from conftest import (
    ACK_OK,
    OGW_ORDER_ID,
    FakeConsumptionCheck,
    FakeStatusStore,
    FakeTransactionClient,
    fault_response,
    status_rows,
)
from core.domain.enums import StepStatus
from core.domain.exceptions import TransactionError
from core.domain.value_objects import ExecutionID
from orchestration import create_default_orchestrator
from orchestration.events import WORKFLOW_FINISHED, WORKFLOW_STARTED, WORKFLOW_STEP_RECORDED
from orchestration.scenarios import CABLE_SUBMIT_ORDER
from orchestration.workflow import StepRuntime, WorkflowDefinition, WorkflowStep


@pytest.mark.asyncio
async def test_cable_run_success(make_orchestrator, connection_config, fake_bus):
    client = FakeTransactionClient()
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is True
    assert result.error is None
    assert result.correlation_id == OGW_ORDER_ID
    assert result.order_id is not None and len(result.order_id) == 9 and result.order_id.isdigit()
    assert result.message == f"Cable Submit Order completed successfully. OGWOrderID: {OGW_ORDER_ID}"
    assert [s.name for s in result.steps] == [
        "SubmitOrder (GenerateContract)",
        "SubmitOrder (Fulfillment)",
        "DB Check (after Fulfillment)",
        "SetOrderStatus",
        "DB Check (after SetOrderStatus)",
        "Download CDM",
    ]
    assert all(s.status is StepStatus.PASS for s in result.steps)
    assert result.steps[0].message == f"OGWOrderID: {OGW_ORDER_ID}"
    assert result.steps[2].message == "All 2 order lines completed successfully (1 attempts)"
    assert result.steps[2].response == "Order Line IDs: 1001, 1002"


@pytest.mark.asyncio
async def test_requests_carry_order_and_correlation_ids(make_orchestrator, connection_config):
    client = FakeTransactionClient()
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config, order_id="482910375")

    generate, fulfillment, set_status = client.calls
    assert generate.url == "https://ogw-sst.example.net:16501/VFDESubmitOrderEG/VFDE"
    assert generate.soap_action == "SubmitOrder"
    assert "<OrderID>482910375</OrderID>" in generate.payload
    assert "<OGWOrderID></OGWOrderID>" in generate.payload
    assert f"<OGWOrderID>{OGW_ORDER_ID}</OGWOrderID>" in fulfillment.payload
    assert "<Mode>Fulfillment</Mode>" in fulfillment.payload
    assert set_status.url.endswith("/VFDESetOrderStatusEG/VFDE")
    assert f"<OGWSubOrderId>{OGW_ORDER_ID}</OGWSubOrderId>" in set_status.payload
    assert generate.credentials.username == "ogw_user"
    assert result.steps[0].request == f"POST {generate.url}\n\n{generate.payload}"


@pytest.mark.asyncio
async def test_fault_in_second_step_stops_the_run(make_orchestrator, connection_config):
    client = FakeTransactionClient(overrides={"<Mode>Fulfillment</Mode>": fault_response("Invalid order")})
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is False
    assert len(result.steps) == 2
    assert result.steps[0].status is StepStatus.PASS
    assert result.steps[1].status is StepStatus.FAILED
    assert result.steps[1].message == "SOAP Fault: Invalid order"
    assert result.error == "Fulfillment SOAP Fault: Invalid order"
    assert result.message is None
    assert len(client.calls) == 2
    assert client.downloads == []


@pytest.mark.asyncio
async def test_missing_correlation_id_aborts(make_orchestrator, connection_config):
    client = FakeTransactionClient(overrides={"<Mode>GenerateContract</Mode>": ACK_OK})
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is False
    assert result.correlation_id is None
    assert len(result.steps) == 1
    assert result.steps[0].message == "OGWOrderID not found in response"
    assert result.error == "OGWOrderID not found in GenerateContract response"


@pytest.mark.asyncio
async def test_transport_error_is_recorded_and_aborts(make_orchestrator, connection_config, transaction_error):
    client = FakeTransactionClient(overrides={"<Mode>Fulfillment</Mode>": transaction_error})
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is False
    assert len(result.steps) == 2
    assert result.steps[1].message.startswith("Network error: ")
    assert result.steps[1].response is None
    assert result.error.startswith("Fulfillment network error")


@pytest.mark.asyncio
async def test_poll_failure_aborts_with_poller_message(make_orchestrator, connection_config):
    store = FakeStatusStore(status_results=[status_rows(("F", "1001", ""))])
    orchestrator = make_orchestrator(store=store)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is False
    assert len(result.steps) == 3
    assert result.steps[2].name == "DB Check (after Fulfillment)"
    assert result.steps[2].status is StepStatus.FAILED
    assert result.steps[2].response == "Failed after 1 attempts"
    assert result.error == "SetOrderStatus failed for OrderLineID 1001"


@pytest.mark.asyncio
async def test_poll_timeout_uses_configured_budget(make_orchestrator, connection_config, recording_sleep):
    store = FakeStatusStore(status_results=[[]])
    orchestrator = make_orchestrator(store=store, max_attempts=3)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.error == "Timeout: Not all order lines reached status C after 3 attempts"
    assert store.status_query_count == 3
    assert recording_sleep.intervals == [5.0, 5.0]


@pytest.mark.asyncio
async def test_document_http_error_is_best_effort(make_orchestrator, connection_config):
    client = FakeTransactionClient(document=(500, "Internal Server Error"))
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is True
    assert result.error is None
    failed = [s for s in result.steps if s.status is StepStatus.FAILED]
    assert len(failed) == 1
    assert failed[0].name == "Download CDM"
    assert failed[0].message == "HTTP 500: Failed to download CDM"
    assert failed[0].response == "Internal Server Error"


@pytest.mark.asyncio
async def test_document_network_error_is_best_effort(make_orchestrator, connection_config):
    client = FakeTransactionClient(document=TransactionError("GET failed: Connection refused"))
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is True
    last = result.steps[-1]
    assert last.status is StepStatus.FAILED
    assert last.message == "Network error downloading CDM: GET failed: Connection refused"
    assert last.response == "Connection failed"


@pytest.mark.asyncio
async def test_document_is_downloaded_from_cdm_port_and_pretty_printed(make_orchestrator, connection_config):
    client = FakeTransactionClient(document=(200, '{"cdm":{"lines":[1,2]}}'))
    orchestrator = make_orchestrator(client=client)

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert client.downloads == [f"http://ogw-sst.example.net:16500/getCdm?ID={OGW_ORDER_ID}"]
    last = result.steps[-1]
    assert last.message == f"CDM downloaded successfully for OGWOrderID: {OGW_ORDER_ID}"
    assert last.request == f"GET http://ogw-sst.example.net:16500/getCdm?ID={OGW_ORDER_ID}"
    assert last.response == '{\n  "cdm": {\n    "lines": [\n      1,\n      2\n    ]\n  }\n}'


@pytest.mark.asyncio
async def test_recorded_failure_without_exception_still_stops(make_orchestrator, connection_config):
    calls: list[str] = []

    async def quietly_failing(rt: StepRuntime) -> None:
        calls.append("first")
        rt.trail.failed("first", "went wrong")

    async def never_reached(rt: StepRuntime) -> None:
        calls.append("second")
        rt.trail.passed("second", "ok")

    workflow = WorkflowDefinition(
        scenario="custom",
        title="Custom",
        steps=(WorkflowStep("first", quietly_failing), WorkflowStep("second", never_reached)),
    )

    result = await make_orchestrator().run(workflow, "SST", connection_config)

    assert calls == ["first"]
    assert result.success is False
    assert result.error == "first: went wrong"
    assert len(result.steps) == 1


@pytest.mark.asyncio
async def test_unexpected_exception_is_packaged(make_orchestrator, connection_config):
    async def passing(rt: StepRuntime) -> None:
        rt.trail.passed("first", "ok")

    async def crashing(rt: StepRuntime) -> None:
        raise RuntimeError("boom")

    workflow = WorkflowDefinition(
        scenario="custom",
        title="Custom",
        steps=(WorkflowStep("first", passing), WorkflowStep("second", crashing)),
    )

    result = await make_orchestrator().run(workflow, "SST", connection_config)

    assert result.success is False
    assert result.error == "second failed unexpectedly: boom"
    assert [(s.name, s.status) for s in result.steps] == [
        ("first", StepStatus.PASS),
        ("second", StepStatus.FAILED),
    ]


@pytest.mark.asyncio
async def test_lifecycle_events_follow_the_trail(make_orchestrator, connection_config, fake_bus):
    result = await make_orchestrator().run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    names = fake_bus.names()
    assert names[0] == WORKFLOW_STARTED
    assert names[-1] == WORKFLOW_FINISHED
    assert names.count(WORKFLOW_STEP_RECORDED) == len(result.steps)

    recorded = [e.payload["step_name"] for e in fake_bus.events if e.name == WORKFLOW_STEP_RECORDED]
    assert recorded == [s.name for s in result.steps]
    finished = fake_bus.events[-1]
    assert finished.payload["success"] is True
    assert finished.metadata.execution_id == result.execution_id
    assert finished.metadata.environment == "SST"


@pytest.mark.asyncio
async def test_failed_step_is_published_before_finish(make_orchestrator, connection_config, fake_bus):
    client = FakeTransactionClient(overrides={"<Mode>Fulfillment</Mode>": fault_response("Invalid order")})

    await make_orchestrator(client=client).run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    recorded = [e.payload for e in fake_bus.events if e.name == WORKFLOW_STEP_RECORDED]
    assert recorded[-1]["status"] == "FAILED"
    assert fake_bus.events[-1].payload["error"] == "Fulfillment SOAP Fault: Invalid order"


@pytest.mark.asyncio
async def test_default_orchestrator_uses_in_memory_bus(connection_config, recording_sleep):
    client = FakeTransactionClient()
    orchestrator = create_default_orchestrator(
        client=client,
        status_store=FakeStatusStore(),
        consumption=FakeConsumptionCheck(),
        sleep=recording_sleep,
    )

    result = await orchestrator.run(CABLE_SUBMIT_ORDER, "SST", connection_config)

    assert result.success is True, result.error
    assert len(client.calls) == 3


@pytest.mark.asyncio
async def test_caller_supplied_execution_id_is_used_for_every_event(make_orchestrator, connection_config, fake_bus):
    execution_id = ExecutionID.generate()

    result = await make_orchestrator().run(CABLE_SUBMIT_ORDER, "SST", connection_config, execution_id=execution_id)

    assert result.execution_id == str(execution_id)
    assert {e.metadata.execution_id for e in fake_bus.events} == {str(execution_id)}
    finished = fake_bus.events[-1]
    assert finished.payload["dry_run"] is False
    assert finished.payload["message"] == result.message
