"""Domain service for the five-language exam rewrite."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from ca_rewriter.domain.content.errors import (
    ConfigurationError,
    GenerationError,
    ParseError,
    ServiceError,
)
from ca_rewriter.domain.content.events.content_events import ContentAnalyzedEvent
from ca_rewriter.domain.content.models import AnalysisResponse, LanguageContent
from ca_rewriter.domain.content.models.request_models import AnalysisRequest
from ca_rewriter.domain.content.models.response_schemas import CONTENT_SCHEMA
from ca_rewriter.domain.content.services.generation_service import (
    GenerationService,
    require_key,
    validate_records,
)
from ca_rewriter.domain.content.services.instructions import (
    CONTENT_SYSTEM_INSTRUCTION,
)
from ca_rewriter.domain.shared.services import log_domain_operation


class AnalyzeContent(GenerationService[AnalysisRequest, AnalysisResponse]):
    """Rewrite a news passage into Telugu, Hindi, Kannada, Tamil and English.

    Blank input is the caller's responsibility; the text is sent as given.
    The returned response has an empty question list.
    """

    operation_type = "analysis"

    @log_domain_operation
    async def call(self, request: AnalysisRequest) -> AnalysisResponse:
        try:
            payload, elapsed_ms = await self._generate(
                request.text,
                CONTENT_SYSTEM_INSTRUCTION,
                CONTENT_SCHEMA,
                self.settings.content_temperature,
            )
            results = validate_records(
                LanguageContent, require_key(payload, "results")
            )
            try:
                response = AnalysisResponse(results=results, mcqs=[])
            except PydanticValidationError as e:
                raise ParseError(f"Invalid analysis response: {e}") from e
        except (ConfigurationError, GenerationError) as e:
            await self._publish_failure(e)
            raise
        except Exception as e:
            await self._publish_failure(e)
            raise ServiceError(str(e) or "Failed to analyze content.") from e

        await self._publish_event(
            ContentAnalyzedEvent(
                language_count=len(response.results),
                input_chars=len(request.text),
                generation_time_ms=elapsed_ms,
            )
        )
        return response
