"""Tests for domain service base classes and utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from unittest.mock import AsyncMock, Mock

import pytest

from ca_rewriter.domain.shared.services import (
    DomainService,
    DomainServiceError,
    ValidationError,
    log_domain_operation,
    validate_request,
)
from ca_rewriter.infrastructure.messaging.event_bus import DomainEvent, EventBus


@dataclass
class EchoRequest:
    value: int


@dataclass
class EchoEvent(DomainEvent):
    value: int


def _check_value(request: EchoRequest) -> None:
    if request.value < 0:
        raise ValueError("value must be non-negative")


class EchoService(DomainService[EchoRequest, int]):
    """Service doubling its input."""

    @log_domain_operation
    @validate_request(_check_value)
    async def call(self, request: EchoRequest) -> int:
        if request.value > 100:
            raise DomainServiceError("too large", "TOO_LARGE")
        await self._publish_event(EchoEvent(value=request.value))
        return request.value * 2


class TestDomainService:
    """Test the domain service base class."""

    @pytest.fixture
    def event_bus(self):
        return EventBus()

    @pytest.fixture
    def service(self, event_bus):
        return EchoService(event_bus)

    def test_logger_named_after_class(self, service):
        assert service.logger.name == "EchoService"

    @pytest.mark.asyncio
    async def test_call_publishes_event(self, service, event_bus):
        handler = Mock()
        event_bus.subscribe(EchoEvent, handler)

        assert await service.call(EchoRequest(value=4)) == 8
        assert handler.call_args[0][0].value == 4

    @pytest.mark.asyncio
    async def test_validation_failure_is_wrapped(self, service):
        """Test validator exceptions become ValidationError."""
        with pytest.raises(ValidationError, match="Request validation failed"):
            await service.call(EchoRequest(value=-1))

    @pytest.mark.asyncio
    async def test_error_code_preserved(self, service):
        with pytest.raises(DomainServiceError) as exc_info:
            await service.call(EchoRequest(value=101))

        assert exc_info.value.error_code == "TOO_LARGE"
        assert exc_info.value.message == "too large"

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_break_call(self):
        """Test a broken bus is logged, not raised."""
        event_bus = Mock()
        event_bus.publish = AsyncMock(side_effect=RuntimeError("bus down"))
        service = EchoService(event_bus)

        assert await service.call(EchoRequest(value=1)) == 2

    @pytest.mark.asyncio
    async def test_operations_are_logged(self, service, caplog):
        with caplog.at_level(logging.INFO, logger="EchoService"):
            await service.call(EchoRequest(value=1))

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting EchoService.call" in messages
        assert any(m.startswith("Completed EchoService.call") for m in messages)


class TestValidationError:
    def test_carries_field(self):
        error = ValidationError("bad count", "count")

        assert error.field == "count"
        assert error.error_code == "VALIDATION_ERROR"
