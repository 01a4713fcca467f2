"""
SOAP Transaction Client Implementation.

Sends SOAP payloads to the OGW endpoints via aiohttp.
"""
import asyncio
import logging
from typing import Tuple

import aiohttp

from core.application.dtos.connection_dto import AuthConfig
from core.application.interfaces import ITransactionClient
from core.domain.exceptions import TransactionError


logger = logging.getLogger(__name__)

SOAP_CONTENT_TYPE = "text/xml;charset=UTF-8"


class SoapTransactionClient(ITransactionClient):
    """
    aiohttp implementation of the transaction client.

    One POST per call, basic auth, no retries. Non-2xx responses are returned
    as text; only transport failures raise.
    """

    def __init__(self, timeout_seconds: float = 60.0, verify_ssl: bool = True):
        """
        Initialize SOAP transaction client.

        Args:
            timeout_seconds: Total timeout per request
            verify_ssl: Verify TLS certificates (test environments often use self-signed ones)
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.verify_ssl = verify_ssl

    async def send(
        self,
        url: str,
        payload: str,
        soap_action: str,
        credentials: AuthConfig,
    ) -> str:
        """POST a SOAP payload and return the raw response text."""
        headers = {
            "Content-Type": SOAP_CONTENT_TYPE,
            "SOAPAction": soap_action,
            "Authorization": aiohttp.BasicAuth(credentials.username, credentials.password).encode(),
        }

        logger.info(f"→ POST {url} (SOAPAction={soap_action})")
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    url,
                    data=payload.encode("utf-8"),
                    headers=headers,
                    ssl=self.verify_ssl,
                ) as response:
                    text = await response.text(errors="replace")
                    logger.info(f"← POST {url} [{response.status}] ({len(text)} chars)")
                    return text
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"POST {url} failed: {e!r}")
            raise TransactionError(f"POST {url} failed: {str(e) or type(e).__name__}") from e

    async def get_text(self, url: str, accept: str = "application/json") -> Tuple[int, str]:
        """GET ``url`` and return (status, text)."""
        logger.info(f"→ GET {url}")
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(
                    url,
                    headers={"Accept": accept},
                    ssl=self.verify_ssl,
                ) as response:
                    text = await response.text(errors="replace")
                    logger.info(f"← GET {url} [{response.status}]")
                    return response.status, text
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"GET {url} failed: {e!r}")
            raise TransactionError(f"GET {url} failed: {str(e) or type(e).__name__}") from e
