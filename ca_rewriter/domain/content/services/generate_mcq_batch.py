"""Domain service for generating a practice quiz."""

from __future__ import annotations

from ca_rewriter.domain.content.errors import (
    ConfigurationError,
    GenerationError,
    ServiceError,
)
from ca_rewriter.domain.content.events.content_events import MCQBatchGeneratedEvent
from ca_rewriter.domain.content.models import MCQ, generate_id
from ca_rewriter.domain.content.models.request_models import MCQBatchRequest
from ca_rewriter.domain.content.models.response_schemas import MCQ_BATCH_SCHEMA
from ca_rewriter.domain.content.services.generation_service import (
    GenerationService,
    require_key,
    validate_records,
)
from ca_rewriter.domain.content.services.instructions import (
    build_mcq_batch_instruction,
)
from ca_rewriter.domain.shared.services import (
    ValidationError,
    log_domain_operation,
    validate_request,
)


def _check_count(request: MCQBatchRequest) -> None:
    if isinstance(request.count, bool) or not isinstance(request.count, int):
        raise ValidationError("Question count must be an integer", "count")
    if request.count <= 0:
        raise ValidationError("Question count must be positive", "count")


class GenerateMCQBatch(GenerationService[MCQBatchRequest, list[MCQ]]):
    """Generate ``count`` questions, each with a fresh client-side id.

    The service is asked for exactly ``count`` items; whatever valid items it
    returns are kept in order.
    """

    operation_type = "mcq_batch"

    @log_domain_operation
    @validate_request(_check_count)
    async def call(self, request: MCQBatchRequest) -> list[MCQ]:
        try:
            payload, elapsed_ms = await self._generate(
                request.source_text,
                build_mcq_batch_instruction(request.count),
                MCQ_BATCH_SCHEMA,
                self.settings.batch_temperature,
            )
            mcqs = [
                mcq.model_copy(update={"id": generate_id()})
                for mcq in validate_records(MCQ, require_key(payload, "mcqs"))
            ]
        except (ConfigurationError, GenerationError) as e:
            await self._publish_failure(e)
            raise
        except Exception as e:
            await self._publish_failure(e)
            raise ServiceError(str(e) or "Failed to generate MCQs.") from e

        if len(mcqs) != request.count:
            self.logger.warning(
                f"Requested {request.count} questions, received {len(mcqs)}"
            )

        await self._publish_event(
            MCQBatchGeneratedEvent(
                requested_count=request.count,
                generated_count=len(mcqs),
                generation_time_ms=elapsed_ms,
            )
        )
        return mcqs
