"""Completion poller - bounded fixed-interval polling of the status store."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping

from core.application.dtos.connection_dto import DbConfig
from core.application.interfaces import IStatusStore, StatusRow
from core.domain.exceptions import StatusQueryError
from ogw_sdk.logging import get_logger

from .models import PollOutcome

STATUS_COMPLETE = "C"
STATUS_FAILED = "F"
NO_ERROR_CODE = "OGWERR-0000"

Sleep = Callable[[float], Awaitable[None]]


def build_status_query(correlation_id: str) -> str:
    """Status query for every tracked line of ``correlation_id``."""
    escaped = correlation_id.replace("'", "''")
    return (
        "SELECT M.MESSAGE_STATUS, "
        "EXTRACTVALUE(XMLTYPE(M.MESSAGE_DATA), '//*[local-name()=\"OGWOrderLineId\"]') AS ORDER_LINE_ID, "
        "EXTRACTVALUE(XMLTYPE(M.MESSAGE_DATA), '//*[local-name()=\"ErrorCode\"]') AS ERROR_CODE "
        "FROM set_order_status_req_handler M "
        f"WHERE TRIM(M.CDM_TXID) = TRIM('{escaped}') "
        "ORDER BY TO_NUMBER(M.SUBSCRIBE_MESSAGE_ID)"
    )


def row_value(row: StatusRow, column: str, position: int) -> str:
    """Read a column by name from mapping rows or by position from sequence rows."""
    value: object = None
    if isinstance(row, Mapping):
        value = row.get(column)
        if value is None:
            value = row.get(column.lower())
    elif position < len(row):
        value = row[position]
    if value is None:
        return ""
    return str(value).strip()


class CompletionPoller:
    """Waits until every line of a transaction reaches the complete status."""

    def __init__(self, status_store: IStatusStore, sleep: Sleep = asyncio.sleep) -> None:
        """Initialize poller.

        Args:
            status_store: Query-execution collaborator
            sleep: Awaitable used between attempts (injectable for tests)
        """
        self._status_store = status_store
        self._sleep = sleep
        self._logger = get_logger("orchestration.poller")

    async def wait_for_completion(
        self,
        db: DbConfig,
        correlation_id: str,
        label: str,
        max_attempts: int = 50,
        interval_seconds: float = 5.0,
    ) -> PollOutcome:
        """Poll the status store until completion, hard failure or exhaustion.

        Args:
            db: Status-store connection parameters
            correlation_id: Server-assigned order id scoping the query
            label: Human label for logging, e.g. "after Fulfillment"
            max_attempts: Retry budget
            interval_seconds: Fixed wait between attempts

        Returns:
            PollOutcome; line_ids is set only on success
        """
        query = build_status_query(correlation_id.strip())
        self._logger.info(f"poll_starting | label={label} correlation_id={correlation_id} max_attempts={max_attempts}")

        for attempt in range(1, max_attempts + 1):
            try:
                rows = await self._status_store.execute(query, db)
            except StatusQueryError as exc:
                self._logger.warning(f"poll_query_failed | label={label} attempt={attempt} error={exc}")
                await self._wait(attempt, max_attempts, interval_seconds)
                continue

            if not rows:
                self._logger.info(f"poll_no_rows | label={label} attempt={attempt}/{max_attempts}")
                await self._wait(attempt, max_attempts, interval_seconds)
                continue

            all_complete = True
            line_ids: list[str] = []
            for row in rows:
                status = row_value(row, "MESSAGE_STATUS", 0)
                line_id = row_value(row, "ORDER_LINE_ID", 1)
                error_code = row_value(row, "ERROR_CODE", 2)

                if line_id.isdigit() and line_id not in line_ids:
                    line_ids.append(line_id)

                if status == STATUS_FAILED:
                    return PollOutcome(
                        success=False,
                        message=f"SetOrderStatus failed for OrderLineID {line_id}",
                        attempts=attempt,
                    )
                if error_code and error_code != NO_ERROR_CODE:
                    return PollOutcome(
                        success=False,
                        message=f"Error for OrderLineID {line_id}: {error_code}",
                        attempts=attempt,
                    )
                if status != STATUS_COMPLETE:
                    all_complete = False

            if all_complete and line_ids:
                self._logger.info(f"poll_complete | label={label} attempt={attempt} lines={len(line_ids)}")
                return PollOutcome(
                    success=True,
                    message=f"All {len(line_ids)} order lines completed successfully",
                    attempts=attempt,
                    line_ids=tuple(line_ids),
                )

            completed = sum(1 for row in rows if row_value(row, "MESSAGE_STATUS", 0) == STATUS_COMPLETE)
            self._logger.info(f"poll_pending | label={label} attempt={attempt} completed={completed}/{len(rows)}")
            await self._wait(attempt, max_attempts, interval_seconds)

        return PollOutcome(
            success=False,
            message=f"Timeout: Not all order lines reached status C after {max_attempts} attempts",
            attempts=max_attempts,
        )

    async def _wait(self, attempt: int, max_attempts: int, interval_seconds: float) -> None:
        if attempt < max_attempts and interval_seconds > 0:
            await self._sleep(interval_seconds)
