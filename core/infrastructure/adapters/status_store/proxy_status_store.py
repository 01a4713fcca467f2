"""
Proxy Status Store Implementation.

Executes status queries through an HTTP database proxy.
"""
import asyncio
import logging
from typing import List

import aiohttp

from core.application.dtos.connection_dto import DbConfig
from core.application.interfaces import IStatusStore, StatusRow
from core.domain.exceptions import StatusQueryError


logger = logging.getLogger(__name__)


class ProxyStatusStore(IStatusStore):
    """
    HTTP proxy implementation of the status store.

    Posts ``{connectionString, username, password, query}`` and reads the
    ``rows`` array from the JSON answer.
    """

    def __init__(self, proxy_url: str, timeout_seconds: float = 30.0):
        """
        Initialize proxy status store.

        Args:
            proxy_url: Database proxy endpoint
            timeout_seconds: Total timeout per query
        """
        self.proxy_url = proxy_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def execute(self, query: str, db: DbConfig) -> List[StatusRow]:
        """Execute ``query`` through the proxy."""
        payload = {
            "connectionString": db.connection_string,
            "username": db.username,
            "password": db.password,
            "query": query,
        }
        logger.debug(f"DB proxy query on {db.hostname}:{db.port}: {query.strip()[:100]}...")

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.proxy_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text(errors="replace")
                        raise StatusQueryError(
                            f"DB proxy error: {response.status} - {error_text[:200]}"
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise StatusQueryError(f"DB proxy unavailable: {str(e) or type(e).__name__}") from e

        if not isinstance(data, dict):
            raise StatusQueryError("DB proxy returned a non-object payload")
        if data.get("success") is False:
            raise StatusQueryError(f"DB proxy query failed: {data.get('error', 'Unknown error')}")

        rows = data.get("rows") or []
        if not isinstance(rows, list):
            raise StatusQueryError("DB proxy returned malformed rows")
        return rows
