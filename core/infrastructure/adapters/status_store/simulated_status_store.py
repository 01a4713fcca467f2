"""
Simulated Status Store Implementation.

Answers status queries without a database connection, for development and
demos. Status queries report every line complete; single-column lookups
return a placeholder value.
"""
import asyncio
import logging
import re
from typing import List, Sequence

from core.application.dtos.connection_dto import DbConfig
from core.application.interfaces import IStatusStore, StatusRow


logger = logging.getLogger(__name__)

_SINGLE_COLUMN = re.compile(r"^\s*SELECT\s+([A-Za-z_][A-Za-z0-9_]*)\s+FROM\b", re.IGNORECASE)


class SimulatedStatusStore(IStatusStore):
    """
    Simulated implementation of the status store.

    No real connection is made.
    """

    def __init__(
        self,
        line_ids: Sequence[str] = ("1001", "1002"),
        delay_seconds: float = 0.0,
    ):
        """
        Initialize simulated store.

        Args:
            line_ids: Line identifiers reported by status queries
            delay_seconds: Artificial latency per query
        """
        self.line_ids = tuple(line_ids)
        self.delay_seconds = delay_seconds
        logger.info("SimulatedStatusStore initialized (no real database connection)")

    async def execute(self, query: str, db: DbConfig) -> List[StatusRow]:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if "MESSAGE_STATUS" in query.upper():
            return [
                {"MESSAGE_STATUS": "C", "ORDER_LINE_ID": line_id, "ERROR_CODE": "OGWERR-0000"}
                for line_id in self.line_ids
            ]

        match = _SINGLE_COLUMN.match(query)
        if match:
            column = match.group(1).upper()
            return [{column: f"SIMULATED_{column}"}]

        logger.warning(f"Simulated store cannot answer query: {query.strip()[:100]}")
        return []
