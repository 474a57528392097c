"""Shared plumbing for services that call Gemini."""

from __future__ import annotations

import time
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ca_rewriter.domain.content.errors import ParseError
from ca_rewriter.domain.content.events.content_events import (
    ContentGenerationFailedEvent,
)
from ca_rewriter.domain.shared.services import DomainService, T, U
from ca_rewriter.infrastructure.config.settings import Settings, get_settings
from ca_rewriter.infrastructure.external.gemini_client import GeminiClient
from ca_rewriter.infrastructure.messaging.event_bus import EventBus

ModelT = TypeVar("ModelT", bound=BaseModel)


class GenerationService(DomainService[T, U]):
    """Domain service backed by a lazily created ``GeminiClient``.

    The client is created on first use so a missing credential surfaces as a
    ``ConfigurationError`` from ``call`` rather than at wiring time.
    """

    operation_type = "generation"

    def __init__(
        self,
        event_bus: EventBus,
        client: GeminiClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(event_bus)
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient(self.settings)
        return self._client

    async def _generate(
        self,
        text: str,
        system_instruction: str,
        schema: dict[str, Any],
        temperature: float,
    ) -> tuple[dict[str, Any], int]:
        """Call Gemini and return the parsed payload with elapsed milliseconds."""
        start_time = time.time()
        payload = await self.client.generate_json_response_async(
            text, system_instruction, schema, temperature
        )
        return payload, int((time.time() - start_time) * 1000)

    async def _publish_failure(self, error: Exception) -> None:
        await self._publish_event(
            ContentGenerationFailedEvent(
                operation_type=self.operation_type,
                error_message=str(error),
            )
        )


def require_key(payload: dict[str, Any], key: str) -> Any:
    """Return ``payload[key]`` or raise ``ParseError``."""
    if key not in payload:
        raise ParseError(f"Gemini response is missing '{key}'")
    return payload[key]


def validate_records(model: type[ModelT], records: Any) -> list[ModelT]:
    """Validate a JSON array of records against ``model``."""
    if not isinstance(records, list):
        raise ParseError("Expected a JSON array in Gemini response")
    try:
        return [model.model_validate(record) for record in records]
    except PydanticValidationError as e:
        raise ParseError(f"Invalid record in Gemini response: {e}") from e
