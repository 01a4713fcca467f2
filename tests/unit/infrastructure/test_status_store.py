"""Tests for the status-store adapters."""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from core.application.dtos.connection_dto import DbConfig
from core.domain.exceptions import StatusQueryError
from core.infrastructure.adapters.status_store import (
    ProxyStatusStore,
    SimulatedStatusStore,
    build_status_store,
)
from core.settings import StatusStoreSettings
from orchestration.poller import CompletionPoller, build_status_query

DB = DbConfig(
    hostname="db-sst.example.net",
    port=1521,
    connectionType="sid",
    sid="OGWSST",
    username="ogw_ro",
    password="ro-pass",
)


@pytest_asyncio.fixture
async def proxy_server():
    received: list[dict] = []

    async def query(request: web.Request) -> web.Response:
        body = await request.json()
        received.append(body)
        if "BROKEN" in body["query"]:
            return web.json_response({"success": False, "error": "ORA-00942: table or view does not exist"})
        if "DOWN" in body["query"]:
            return web.Response(status=503, text="proxy down")
        return web.json_response(
            {"success": True, "rows": [{"MESSAGE_STATUS": "C", "ORDER_LINE_ID": "1001", "ERROR_CODE": None}]}
        )

    app = web.Application()
    app.router.add_post("/api/db/query", query)
    server = test_utils.TestServer(app)
    await server.start_server()
    server.received = received
    yield server
    await server.close()


@pytest.mark.asyncio
async def test_proxy_posts_connection_and_query(proxy_server):
    store = ProxyStatusStore(str(proxy_server.make_url("/api/db/query")))

    rows = await store.execute("SELECT MESSAGE_STATUS FROM T", DB)

    assert rows == [{"MESSAGE_STATUS": "C", "ORDER_LINE_ID": "1001", "ERROR_CODE": None}]
    assert proxy_server.received == [
        {
            "connectionString": "db-sst.example.net:1521:OGWSST",
            "username": "ogw_ro",
            "password": "ro-pass",
            "query": "SELECT MESSAGE_STATUS FROM T",
        }
    ]


@pytest.mark.asyncio
async def test_proxy_reports_query_failure(proxy_server):
    store = ProxyStatusStore(str(proxy_server.make_url("/api/db/query")))

    with pytest.raises(StatusQueryError) as exc_info:
        await store.execute("SELECT BROKEN FROM T", DB)

    assert "ORA-00942" in str(exc_info.value)


@pytest.mark.asyncio
async def test_proxy_reports_http_error(proxy_server):
    store = ProxyStatusStore(str(proxy_server.make_url("/api/db/query")))

    with pytest.raises(StatusQueryError) as exc_info:
        await store.execute("SELECT DOWN FROM T", DB)

    assert "503" in str(exc_info.value)


@pytest.mark.asyncio
async def test_proxy_unreachable(unused_tcp_port):
    store = ProxyStatusStore(f"http://127.0.0.1:{unused_tcp_port}/api/db/query", timeout_seconds=2)

    with pytest.raises(StatusQueryError) as exc_info:
        await store.execute("SELECT 1 FROM DUAL", DB)

    assert str(exc_info.value).startswith("DB proxy unavailable")


def test_service_name_connection_string():
    db = DB.model_copy(update={"connection_type": "serviceName", "service_name": "OGWPDB"})

    assert db.connection_string == "db-sst.example.net:1521/OGWPDB"


@pytest.mark.asyncio
async def test_simulated_store_answers_status_queries():
    store = SimulatedStatusStore(line_ids=("7", "8"))

    rows = await store.execute(build_status_query("OGW-1"), DB)

    assert [row["ORDER_LINE_ID"] for row in rows] == ["7", "8"]
    assert {row["MESSAGE_STATUS"] for row in rows} == {"C"}


@pytest.mark.asyncio
async def test_simulated_store_answers_single_column_lookups():
    store = SimulatedStatusStore()

    rows = await store.execute("SELECT BAR_CODE FROM OGW_BARCODE_MAPPING WHERE OGW_ORDER_ID = 'X'", DB)

    assert rows == [{"BAR_CODE": "SIMULATED_BAR_CODE"}]


def test_build_status_store_combinations():
    assert isinstance(build_status_store(StatusStoreSettings(proxy_url=None, simulate=True)), SimulatedStatusStore)
    assert isinstance(
        build_status_store(StatusStoreSettings(proxy_url="http://proxy/q", simulate=False)), ProxyStatusStore
    )
    with pytest.raises(ValueError):
        build_status_store(StatusStoreSettings(proxy_url=None, simulate=False))


def test_configured_proxy_is_never_replaced_by_the_simulation():
    store = build_status_store(StatusStoreSettings(proxy_url="http://proxy/q", simulate=True))

    assert isinstance(store, ProxyStatusStore)


@pytest.mark.asyncio
async def test_unreachable_proxy_makes_the_poller_time_out(unused_tcp_port):
    sleeps: list[float] = []

    async def no_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    store = build_status_store(
        StatusStoreSettings(
            proxy_url=f"http://127.0.0.1:{unused_tcp_port}/api/db/query",
            simulate=True,
            proxy_timeout_seconds=2,
        )
    )
    poller = CompletionPoller(store, sleep=no_sleep)

    outcome = await poller.wait_for_completion(DB, "OGW-1", "after Fulfillment", max_attempts=3, interval_seconds=5.0)

    assert outcome.success is False
    assert outcome.attempts == 3
    assert outcome.message == "Timeout: Not all order lines reached status C after 3 attempts"
    assert outcome.line_ids is None
    assert sleeps == [5.0, 5.0]
