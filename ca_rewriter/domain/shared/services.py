"""Domain service base classes.

Each generation operation of the rewriter (content analysis, MCQ batch
generation, single MCQ regeneration) is a domain service: one typed request,
one async ``call``, domain events published on the shared event bus.
"""

from __future__ import annotations

import functools
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ca_rewriter.infrastructure.messaging.event_bus import DomainEvent, EventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Request type
U = TypeVar("U")  # Response type


class DomainService(ABC, Generic[T, U]):
    """Base class for all domain services.

    Services use Verb + Noun naming (``AnalyzeContent``, ``RegenerateMCQ``)
    and expose a single ``call`` coroutine as their only operation.
    """

    def __init__(self, event_bus: EventBus) -> None:
        """Initialize domain service with event bus.

        Args:
            event_bus: Event bus for publishing domain events
        """
        self.event_bus = event_bus
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def call(self, request: T) -> U:
        """Single entry point for domain service execution.

        Args:
            request: Typed request object containing all necessary data

        Returns:
            Typed response object with operation results

        Raises:
            DomainServiceError: When the operation cannot be completed
        """

    async def _publish_event(self, event: DomainEvent) -> None:
        """Publish a domain event, logging instead of raising on failure."""
        try:
            await self.event_bus.publish(event)
        except Exception as e:
            self.logger.error(f"Failed to publish event {event.event_name}: {e}")


class DomainServiceError(Exception):
    """Base exception for domain service errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize domain service error.

        Args:
            message: Human-readable error message
            error_code: Optional machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ValidationError(DomainServiceError):
    """Raised when request data does not meet the service constraints."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


def log_domain_operation(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log domain service calls with their duration."""

    @functools.wraps(func)
    async def wrapper(self: Any, request: Any) -> Any:
        operation_name = f"{self.__class__.__name__}.call"
        self.logger.info(f"Starting {operation_name}")

        start_time = time.time()
        try:
            result = await func(self, request)
        except Exception as e:
            duration = time.time() - start_time
            self.logger.error(f"Failed {operation_name} after {duration:.3f}s: {e}")
            raise

        duration = time.time() - start_time
        self.logger.info(f"Completed {operation_name} in {duration:.3f}s")
        return result

    return wrapper


def validate_request(
    validator_func: Callable[[Any], None],
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to validate domain service requests before ``call`` runs.

    Args:
        validator_func: Function that raises if the request is invalid
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        async def wrapper(self: Any, request: Any) -> Any:
            try:
                validator_func(request)
            except ValidationError:
                raise
            except Exception as e:
                raise ValidationError(f"Request validation failed: {e}") from e

            return await func(self, request)

        return wrapper

    return decorator
