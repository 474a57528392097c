"""Domain service for replacing a single practice question."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from ca_rewriter.domain.content.errors import ParseError, RegenerationError
from ca_rewriter.domain.content.events.content_events import MCQRegeneratedEvent
from ca_rewriter.domain.content.models import MCQ, generate_id
from ca_rewriter.domain.content.models.request_models import MCQRegenerationRequest
from ca_rewriter.domain.content.models.response_schemas import SINGLE_MCQ_SCHEMA
from ca_rewriter.domain.content.services.generation_service import GenerationService
from ca_rewriter.domain.content.services.instructions import SINGLE_MCQ_INSTRUCTION
from ca_rewriter.domain.shared.services import log_domain_operation


class RegenerateMCQ(GenerationService[MCQRegenerationRequest, MCQ]):
    """Generate one fresh question at a higher temperature.

    Every failure is reported as ``RegenerationError`` with a fixed message.
    """

    operation_type = "mcq_regeneration"

    @log_domain_operation
    async def call(self, request: MCQRegenerationRequest) -> MCQ:
        try:
            payload, elapsed_ms = await self._generate(
                request.source_text,
                SINGLE_MCQ_INSTRUCTION,
                SINGLE_MCQ_SCHEMA,
                self.settings.regenerate_temperature,
            )
            try:
                mcq = MCQ.model_validate({**payload, "id": generate_id()})
            except PydanticValidationError as e:
                raise ParseError(f"Invalid question in Gemini response: {e}") from e
        except Exception as e:
            self.logger.error(f"Regeneration error: {e}")
            await self._publish_failure(e)
            raise RegenerationError() from e

        await self._publish_event(
            MCQRegeneratedEvent(new_id=mcq.id, generation_time_ms=elapsed_ms)
        )
        return mcq
