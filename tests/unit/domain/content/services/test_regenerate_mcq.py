"""Tests for the RegenerateMCQ domain service."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from ca_rewriter.domain.content.errors import (
    EmptyResponseError,
    RegenerationError,
    ServiceError,
)
from ca_rewriter.domain.content.events.content_events import MCQRegeneratedEvent
from ca_rewriter.domain.content.models.request_models import MCQRegenerationRequest
from ca_rewriter.domain.content.models.response_schemas import SINGLE_MCQ_SCHEMA
from ca_rewriter.domain.content.services.instructions import SINGLE_MCQ_INSTRUCTION
from ca_rewriter.domain.content.services.regenerate_mcq import RegenerateMCQ
from ca_rewriter.infrastructure.messaging.event_bus import EventBus


class TestRegenerateMCQ:
    """Test single question regeneration."""

    @pytest.fixture
    def mock_client(self, mcq_record):
        client = Mock()
        client.generate_json_response_async = AsyncMock(return_value=mcq_record(7))
        return client

    @pytest.fixture
    def event_bus(self):
        return EventBus()

    @pytest.fixture
    def service(self, event_bus, mock_client, settings):
        return RegenerateMCQ(event_bus, client=mock_client, settings=settings)

    @pytest.mark.asyncio
    async def test_returns_question_with_fresh_id(self, service):
        """Test a single MCQ comes back with a synthesized id."""
        mcq = await service.call(MCQRegenerationRequest(source_text="Source"))

        assert mcq.id
        assert mcq.question == "Which agency launched mission 7?"

    @pytest.mark.asyncio
    async def test_uses_higher_temperature(self, service, mock_client):
        """Test the single-question contract."""
        await service.call(MCQRegenerationRequest(source_text="Source"))

        mock_client.generate_json_response_async.assert_awaited_once_with(
            "Source", SINGLE_MCQ_INSTRUCTION, SINGLE_MCQ_SCHEMA, 0.7
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ServiceError("quota exceeded"),
            EmptyResponseError(),
            RuntimeError("socket closed"),
        ],
    )
    async def test_failures_use_generic_message(self, service, mock_client, error):
        """Test the underlying message is not surfaced."""
        mock_client.generate_json_response_async.side_effect = error

        with pytest.raises(RegenerationError) as exc_info:
            await service.call(MCQRegenerationRequest(source_text="Source"))

        assert str(exc_info.value) == "Failed to regenerate question."
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_invalid_payload_uses_generic_message(self, service, mock_client):
        """Test shape errors are also reported generically."""
        mock_client.generate_json_response_async.return_value = {"question": "Q?"}

        with pytest.raises(RegenerationError, match="Failed to regenerate question"):
            await service.call(MCQRegenerationRequest(source_text="Source"))

    @pytest.mark.asyncio
    async def test_publishes_success_event(self, service, event_bus):
        """Test MCQRegeneratedEvent carries the new id."""
        handler = Mock()
        event_bus.subscribe(MCQRegeneratedEvent, handler)

        mcq = await service.call(MCQRegenerationRequest(source_text="Source"))

        assert handler.call_args[0][0].new_id == mcq.id
