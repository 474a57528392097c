"""In-memory async event bus for domain events.

Events are delivered to subscribed handlers and then dropped; nothing is
stored.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

logger = logging.getLogger(__name__)


class DomainEvent:
    """Base class for all domain events.

    Not a dataclass itself so that dataclass subclasses can declare
    required fields.
    """

    def __init__(self, event_id: str = "", occurred_at: datetime | None = None):
        self.event_id = event_id or str(uuid4())
        self.occurred_at = occurred_at or datetime.now(UTC)

    def __post_init__(self) -> None:
        # Dataclass subclasses skip __init__ above
        DomainEvent.__init__(self)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(event_id={self.event_id})"

    @property
    def event_name(self) -> str:
        """Return the name of this event type."""
        return self.__class__.__name__


class EventBus:
    """Async publish/subscribe bus with per-handler error isolation."""

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[Callable[..., Any]]] = {}

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to every handler subscribed to its type.

        Handlers run concurrently. A failing handler is logged and does not
        affect the others or the publisher.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(f"No handlers registered for {event_type.__name__}")
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handlers")
        await asyncio.gather(
            *[self._handle_event(handler, event) for handler in handlers],
            return_exceptions=True,
        )

    async def _handle_event(
        self, handler: Callable[..., Any], event: DomainEvent
    ) -> None:
        try:
            if inspect.iscoroutinefunction(handler):
                await handler(event)
            else:
                handler(event)
        except Exception as e:
            handler_name = getattr(handler, "__name__", str(handler))
            logger.error(
                f"Event handler {handler_name} failed for "
                f"{type(event).__name__}: {e}"
            )

    def subscribe(
        self, event_type: type[DomainEvent], handler: Callable[..., Any]
    ) -> None:
        """Subscribe a sync or async handler to an event type."""
        self._handlers.setdefault(event_type, []).append(handler)
        handler_name = getattr(handler, "__name__", str(handler))
        logger.debug(f"Subscribed {handler_name} to {event_type.__name__}")

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: Callable[..., Any]
    ) -> None:
        """Remove a handler; unknown handlers are logged and ignored."""
        handler_name = getattr(handler, "__name__", str(handler))
        try:
            self._handlers.get(event_type, []).remove(handler)
        except ValueError:
            logger.warning(f"Handler {handler_name} not found for {event_type.__name__}")
            return
        logger.debug(f"Unsubscribed {handler_name} from {event_type.__name__}")
