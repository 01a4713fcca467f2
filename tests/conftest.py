"""Shared fakes and fixtures."""

from collections.abc import Sequence

import pytest

from core.application.dtos.connection_dto import AuthConfig, ConnectionConfig, DbConfig, EndpointConfig
from core.application.interfaces import IConsumptionCheck, IStatusStore, ITransactionClient
from core.domain.exceptions import TransactionError
from core.settings.modules.poll_settings import PollSettings
from core.settings.modules.transport_settings import TransportSettings
from orchestration.orchestrator import Orchestrator

ENVELOPE = (
    '<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" '
    'xmlns:vfde="http://vfde.amdocs.com/"><soapenv:Body>{body}</soapenv:Body></soapenv:Envelope>'
)

OGW_ORDER_ID = "OGW-778899"

GENERATE_CONTRACT_OK = ENVELOPE.format(
    body=f"<vfde:SubmitOrderResponse>\n  <vfde:OGWOrderID> {OGW_ORDER_ID} </vfde:OGWOrderID>\n</vfde:SubmitOrderResponse>"
)
ACK_OK = ENVELOPE.format(body="<vfde:Response><ErrorCode>OGWERR-0000</ErrorCode></vfde:Response>")
SEARCH_OK = ENVELOPE.format(
    body="<vfde:CustomerSearchResponse><ErrorCode>OGWERR-0000</ErrorCode>"
    "<ErrorDescription>SUCCESS</ErrorDescription></vfde:CustomerSearchResponse>"
)


def fault_response(message: str) -> str:
    return ENVELOPE.format(
        body=f"<soapenv:Fault><faultcode>soapenv:Server</faultcode><faultstring>{message}</faultstring></soapenv:Fault>"
    )


def status_rows(*rows: tuple[str, str, str]) -> list[dict[str, str]]:
    return [
        {"MESSAGE_STATUS": status, "ORDER_LINE_ID": line_id, "ERROR_CODE": error_code}
        for status, line_id, error_code in rows
    ]


COMPLETE_ROWS = status_rows(("C", "1001", "OGWERR-0000"), ("C", "1002", "OGWERR-0000"))


class SentRequest:
    def __init__(self, url: str, payload: str, soap_action: str, credentials: AuthConfig) -> None:
        self.url = url
        self.payload = payload
        self.soap_action = soap_action
        self.credentials = credentials


class FakeTransactionClient(ITransactionClient):
    """Fake transport.

    ``overrides`` maps a marker to a response (or exception); the first marker
    found in ``"<SOAPAction>\\n<payload>"`` wins. GenerateContract answers with
    an OGWOrderID by default, every other call with a plain acknowledgement.
    """

    def __init__(
        self,
        overrides: dict[str, object] | None = None,
        document: tuple[int, str] | Exception = (200, '{"cdm":{"orderId":"OGW-778899","lines":2}}'),
    ) -> None:
        self.overrides = overrides or {}
        self.document = document
        self.calls: list[SentRequest] = []
        self.downloads: list[str] = []

    async def send(self, url: str, payload: str, soap_action: str, credentials: AuthConfig) -> str:
        self.calls.append(SentRequest(url, payload, soap_action, credentials))
        haystack = f"{soap_action}\n{payload}"
        for marker, response in self.overrides.items():
            if marker in haystack:
                if isinstance(response, Exception):
                    raise response
                return str(response)
        if "<Mode>GenerateContract</Mode>" in payload:
            return GENERATE_CONTRACT_OK
        if soap_action in ("CustomerSearch", "LegacySearch"):
            return SEARCH_OK
        return ACK_OK

    async def get_text(self, url: str, accept: str = "application/json") -> tuple[int, str]:
        self.downloads.append(url)
        if isinstance(self.document, Exception):
            raise self.document
        return self.document

    @property
    def actions(self) -> list[str]:
        return [call.soap_action for call in self.calls]


class FakeStatusStore(IStatusStore):
    """Fake status store.

    Status queries consume ``status_results`` in order (rows or an exception);
    the last entry repeats. Single-column lookups answer from ``lookups``.
    """

    def __init__(
        self,
        status_results: Sequence[object] | None = None,
        lookups: dict[str, str] | None = None,
    ) -> None:
        self.status_results = list(status_results) if status_results is not None else [COMPLETE_ROWS]
        self.lookups = {"AUFTRAG_ID": "AUF-4711", "BAR_CODE": "BC-0042"} if lookups is None else lookups
        self.queries: list[str] = []
        self.status_query_count = 0

    async def execute(self, query: str, db: DbConfig) -> list:
        self.queries.append(query)
        if "MESSAGE_STATUS" in query:
            index = min(self.status_query_count, len(self.status_results) - 1)
            self.status_query_count += 1
            result = self.status_results[index]
            if isinstance(result, Exception):
                raise result
            return list(result)
        for column, value in self.lookups.items():
            if query.startswith(f"SELECT {column} "):
                return [{column: value}] if value else []
        return []


class FakeConsumptionCheck(IConsumptionCheck):
    def __init__(self, consumed: bool = True, detail: str = "All evidence files consumed") -> None:
        self.consumed = consumed
        self.detail = detail
        self.checked: list[tuple[str, tuple[str, ...]]] = []

    async def wait_for_consumption(self, correlation_id: str, line_ids: Sequence[str]) -> tuple[bool, str]:
        self.checked.append((correlation_id, tuple(line_ids)))
        return self.consumed, self.detail


class FakeEventBus:
    """Fake EventBus for testing."""

    def __init__(self) -> None:
        self.events: list[object] = []

    async def publish(self, event: object) -> None:
        self.events.append(event)

    def subscribe(self, event_name: str, handler: object) -> None:
        pass

    def subscribe_many(self, event_names, handler: object) -> None:
        pass

    def names(self) -> list[str]:
        return [event.name for event in self.events]


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested intervals."""

    def __init__(self) -> None:
        self.intervals: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.intervals.append(seconds)


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(
        auth=AuthConfig(username="ogw_user", password="s3cret"),
        endpoint=EndpointConfig(host="https://ogw-sst.example.net:16501/"),
        db=DbConfig(
            hostname="db-sst.example.net",
            port=1521,
            connectionType="sid",
            sid="OGWSST",
            username="ogw_ro",
            password="ro-pass",
        ),
    )


@pytest.fixture
def fake_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client():
    def _make(**kwargs) -> FakeTransactionClient:
        return FakeTransactionClient(**kwargs)

    return _make


@pytest.fixture
def make_store():
    def _make(**kwargs) -> FakeStatusStore:
        return FakeStatusStore(**kwargs)

    return _make


@pytest.fixture
def make_consumption():
    def _make(**kwargs) -> FakeConsumptionCheck:
        return FakeConsumptionCheck(**kwargs)

    return _make


@pytest.fixture
def make_orchestrator(fake_bus, recording_sleep):
    def _make(
        client: ITransactionClient | None = None,
        store: IStatusStore | None = None,
        consumption: IConsumptionCheck | None = None,
        max_attempts: int = 3,
    ) -> Orchestrator:
        return Orchestrator(
            event_bus=fake_bus,
            client=client or FakeTransactionClient(),
            status_store=store or FakeStatusStore(),
            consumption=consumption or FakeConsumptionCheck(),
            poll=PollSettings(max_attempts=max_attempts, interval_seconds=5.0),
            transport=TransportSettings(),
            sleep=recording_sleep,
        )

    return _make


@pytest.fixture
def transaction_error() -> TransactionError:
    return TransactionError("POST https://ogw-sst.example.net:16501 failed: Connection refused")
