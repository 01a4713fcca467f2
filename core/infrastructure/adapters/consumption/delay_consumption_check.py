"""
Delay-based consumption check.

Default for "wait for external consumption" steps: waits a fixed delay and
reports that no consumer-side signal was inspected.
"""
import asyncio
import logging
from typing import Sequence, Tuple

from core.application.interfaces import IConsumptionCheck


logger = logging.getLogger(__name__)


class DelayConsumptionCheck(IConsumptionCheck):
    """Waits ``delay_seconds`` and assumes consumption."""

    def __init__(self, delay_seconds: float = 2.0):
        self.delay_seconds = delay_seconds

    async def wait_for_consumption(self, correlation_id: str, line_ids: Sequence[str]) -> Tuple[bool, str]:
        logger.info(
            f"Waiting {self.delay_seconds}s for evidence consumption "
            f"(OGWOrderID {correlation_id}, {len(line_ids)} line(s))"
        )
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return True, (
            f"Waited {self.delay_seconds:g}s; consumption assumed "
            f"(no consumer-side check configured)"
        )
