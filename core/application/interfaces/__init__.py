"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Sequence, Tuple, Union

from core.application.dtos.connection_dto import AuthConfig, DbConfig

StatusRow = Union[Mapping[str, Any], Sequence[Any]]


class ITransactionClient(ABC):
    """
    Interface for the outbound OGW transport.

    Implementations never raise on non-2xx statuses; callers inspect the
    body for fault markers. Transport failures raise ``TransactionError``.
    """

    @abstractmethod
    async def send(
        self,
        url: str,
        payload: str,
        soap_action: str,
        credentials: AuthConfig,
    ) -> str:
        """
        POST a SOAP payload with basic authentication.

        Args:
            url: Service URL
            payload: Request body
            soap_action: Value of the SOAPAction header
            credentials: Basic-auth credentials

        Returns:
            Raw response text, whatever the HTTP status

        Raises:
            TransactionError: If the request could not be completed
        """
        pass

    @abstractmethod
    async def get_text(self, url: str, accept: str = "application/json") -> Tuple[int, str]:
        """
        Plain GET used for supplementary evidence downloads.

        Returns:
            (HTTP status, body text)

        Raises:
            TransactionError: If the request could not be completed
        """
        pass


class IStatusStore(ABC):
    """
    Interface for the status-check collaborator.

    Executes a query against the external status store and returns rows,
    each either a mapping keyed by column name or a positional sequence.
    """

    @abstractmethod
    async def execute(self, query: str, db: DbConfig) -> List[StatusRow]:
        """
        Execute a query.

        Args:
            query: SQL text
            db: Connection parameters

        Returns:
            List of rows (possibly empty)

        Raises:
            StatusQueryError: If the query could not be executed
        """
        pass


class IConsumptionCheck(ABC):
    """
    Extension point for "wait for external consumption" steps.

    A real implementation checks the consuming system (e.g. the FRIDA
    response directory); the default only waits.
    """

    @abstractmethod
    async def wait_for_consumption(self, correlation_id: str, line_ids: Sequence[str]) -> Tuple[bool, str]:
        """
        Wait until evidence for ``line_ids`` has been consumed.

        Returns:
            (consumed, human-readable detail)
        """
        pass


__all__ = [
    "IConsumptionCheck",
    "IStatusStore",
    "ITransactionClient",
    "StatusRow",
]
