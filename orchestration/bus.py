"""Event bus - in-process fan-out of run lifecycle events (audit log, tests)."""

from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from ogw_sdk.logging import get_logger

from .events import Event

EventHandler = Callable[[Event], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    async def publish(self, event: Event) -> None:
        """Publish an event.

        Args:
            event: Event to publish
        """
        ...

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name.

        Args:
            event_name: Event name to subscribe to
            handler: Async handler function
        """
        ...

    def subscribe_many(self, event_names: Iterable[str], handler: EventHandler) -> None:
        """Subscribe one handler to several event names."""
        ...


class InMemoryEventBus(EventBusProtocol):
    """In-memory event bus; handler errors are logged, never propagated."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._logger = get_logger("orchestration.event_bus")

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event name.

        Args:
            event_name: Event name to subscribe to
            handler: Async handler function
        """
        self._handlers.setdefault(event_name, []).append(handler)

    def subscribe_many(self, event_names: Iterable[str], handler: EventHandler) -> None:
        for event_name in event_names:
            self.subscribe(event_name, handler)

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribed handlers.

        Args:
            event: Event to publish
        """
        handlers = list(self._handlers.get(event.name, ()))
        if not handlers:
            return

        self._logger.debug(
            f"publishing_event | event={event.name} execution_id={event.metadata.execution_id} "
            f"handlers={len(handlers)}"
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as exc:
                self._logger.error(
                    f"handler_error | event={event.name} handler={handler!r} error={exc}",
                    exc_info=True,
                )
