"""Tests for the in-memory event bus."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from ca_rewriter.domain.content.events.content_events import (
    ContentGenerationFailedEvent,
    MCQRegeneratedEvent,
)
from ca_rewriter.infrastructure.messaging.event_bus import DomainEvent, EventBus


@dataclass
class SampleEvent(DomainEvent):
    """Dataclass event used by these tests."""

    data: str


class TestDomainEvent:
    """Test the DomainEvent base class."""

    def test_dataclass_event_gets_id_and_timestamp(self):
        """Test dataclass subclasses still receive identity fields."""
        before = datetime.now(UTC)
        event = SampleEvent(data="x")
        after = datetime.now(UTC)

        assert len(event.event_id) == 36  # UUID format
        assert before <= event.occurred_at <= after

    def test_event_ids_differ(self):
        assert SampleEvent(data="a").event_id != SampleEvent(data="b").event_id

    def test_plain_event_uses_provided_values(self):
        timestamp = datetime(2025, 1, 1, tzinfo=UTC)
        event = DomainEvent(event_id="custom-id", occurred_at=timestamp)

        assert event.event_id == "custom-id"
        assert event.occurred_at == timestamp
        assert str(event) == "DomainEvent(event_id=custom-id)"

    def test_event_name(self):
        event = MCQRegeneratedEvent(new_id="abc", generation_time_ms=12)

        assert event.event_name == "MCQRegeneratedEvent"


class TestEventBus:
    """Test the EventBus implementation."""

    @pytest.fixture
    def event_bus(self):
        return EventBus()

    @pytest.mark.asyncio
    async def test_publish_no_handlers(self, event_bus):
        """Test publishing with no handlers is a no-op."""
        await event_bus.publish(SampleEvent(data="x"))

    @pytest.mark.asyncio
    async def test_sync_and_async_handlers(self, event_bus):
        """Test both handler kinds receive the event."""
        sync_handler = Mock()
        received = []

        async def async_handler(event):
            received.append(event)

        event_bus.subscribe(SampleEvent, sync_handler)
        event_bus.subscribe(SampleEvent, async_handler)
        event = SampleEvent(data="x")

        await event_bus.publish(event)

        sync_handler.assert_called_once_with(event)
        assert received == [event]

    @pytest.mark.asyncio
    async def test_only_matching_type_is_delivered(self, event_bus):
        handler = Mock()
        event_bus.subscribe(ContentGenerationFailedEvent, handler)

        await event_bus.publish(SampleEvent(data="x"))

        handler.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_handler_is_isolated(self, event_bus):
        """Test one failing handler does not stop the others."""
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        event_bus.subscribe(SampleEvent, failing)
        event_bus.subscribe(SampleEvent, healthy)

        await event_bus.publish(SampleEvent(data="x"))

        healthy.assert_called_once()

    @pytest.mark.asyncio
    async def test_unsubscribe(self, event_bus):
        handler = Mock()
        event_bus.subscribe(SampleEvent, handler)

        event_bus.unsubscribe(SampleEvent, handler)
        await event_bus.publish(SampleEvent(data="x"))

        handler.assert_not_called()

    def test_unsubscribe_unknown_handler_is_ignored(self, event_bus, caplog):
        def ghost(event):
            pass

        event_bus.unsubscribe(SampleEvent, ghost)

        assert "Handler ghost not found for SampleEvent" in caplog.text
