"""Rewrite session orchestration.

This module holds the state of one rewriting session (input passage, request
lifecycle, results, active tab, quiz settings) and drives the three
generation services. Only the primary analysis moves the session between
IDLE, LOADING, SUCCESS and ERROR; quiz generation, regeneration and deletion
happen inside SUCCESS and are tracked by their own in-flight markers.

Every ``submit`` and ``clear`` starts a new epoch. Quiz results that resolve
in a later epoch than the one they were requested in are discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ca_rewriter.domain.content.models import AnalysisResponse
from ca_rewriter.domain.content.models.request_models import (
    AnalysisRequest,
    MCQBatchRequest,
    MCQRegenerationRequest,
)
from ca_rewriter.domain.content.services import (
    AnalyzeContent,
    GenerateMCQBatch,
    RegenerateMCQ,
)
from ca_rewriter.domain.content.services.source_text import build_mcq_source_text

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class AppState(str, Enum):
    """Lifecycle of the primary analysis request."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ActiveTab(str, Enum):
    """Result views."""

    CONTENT = "content"
    MCQ = "mcq"


@dataclass
class SessionState:
    """Everything the presentation layer renders from."""

    input_text: str = ""
    app_state: AppState = AppState.IDLE
    data: AnalysisResponse | None = None
    error: str | None = None
    active_tab: ActiveTab = ActiveTab.CONTENT
    mcq_count: str = "5"
    is_generating_mcqs: bool = False
    regenerating_id: str | None = None


class SessionManager:
    """Owns a ``SessionState`` and applies user actions to it."""

    def __init__(
        self,
        analyze_content: AnalyzeContent,
        generate_mcq_batch: GenerateMCQBatch,
        regenerate_mcq: RegenerateMCQ,
        default_mcq_count: int = 5,
    ) -> None:
        """Initialize session manager.

        Args:
            analyze_content: Domain service for the five-language rewrite
            generate_mcq_batch: Domain service for quiz generation
            regenerate_mcq: Domain service for single question regeneration
            default_mcq_count: Question count restored by ``clear``
        """
        self.analyze_content = analyze_content
        self.generate_mcq_batch = generate_mcq_batch
        self.regenerate_mcq_service = regenerate_mcq
        self.default_mcq_count = str(default_mcq_count)
        self.state = SessionState(mcq_count=self.default_mcq_count)
        self.epoch = 0

    # Setters

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    def set_tab(self, tab: ActiveTab) -> None:
        self.state.active_tab = tab

    def set_mcq_count(self, count: str) -> None:
        self.state.mcq_count = count

    # Guards

    @property
    def can_submit(self) -> bool:
        return (
            self.state.app_state != AppState.LOADING
            and bool(self.state.input_text.strip())
        )

    @property
    def can_clear(self) -> bool:
        return self.state.app_state != AppState.LOADING and (
            bool(self.state.input_text) or self.state.data is not None
        )

    @property
    def can_generate_quiz(self) -> bool:
        return (
            not self.state.is_generating_mcqs
            and self.parsed_mcq_count() is not None
            and self.state.data is not None
        )

    def parsed_mcq_count(self) -> int | None:
        """Return the requested question count, or None if not a positive integer."""
        try:
            count = int(self.state.mcq_count.strip())
        except ValueError:
            return None
        return count if count > 0 else None

    # Primary analysis

    async def submit(self) -> bool:
        """Analyze the current input.

        Blank input, or a submit while a previous analysis is loading, is a
        no-op. Returns True when the session ends in SUCCESS.
        """
        if not self.can_submit:
            return False

        self.epoch += 1
        state = self.state
        state.app_state = AppState.LOADING
        state.error = None
        state.data = None
        state.active_tab = ActiveTab.CONTENT
        state.is_generating_mcqs = False
        state.regenerating_id = None

        try:
            result = await self.analyze_content.call(
                AnalysisRequest(text=state.input_text)
            )
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            state.error = str(e) or GENERIC_ERROR_MESSAGE
            state.app_state = AppState.ERROR
            return False

        state.data = result
        state.app_state = AppState.SUCCESS
        return True

    def clear(self) -> None:
        """Reset the session to IDLE with default settings."""
        self.epoch += 1
        state = self.state
        state.input_text = ""
        state.data = None
        state.error = None
        state.app_state = AppState.IDLE
        state.active_tab = ActiveTab.CONTENT
        state.mcq_count = self.default_mcq_count
        state.is_generating_mcqs = False
        state.regenerating_id = None

    # Quiz operations

    def mcq_source_text(self) -> str:
        return build_mcq_source_text(self.state.data, self.state.input_text)

    async def generate_quiz(self) -> bool:
        """Replace the question list with a freshly generated quiz.

        Failures are logged and leave results and the previous questions in
        place. Returns True when new questions were stored.
        """
        count = self.parsed_mcq_count()
        if count is None or self.state.data is None:
            return False

        source_text = self.mcq_source_text()
        epoch = self.epoch
        self.state.is_generating_mcqs = True
        try:
            mcqs = await self.generate_mcq_batch.call(
                MCQBatchRequest(source_text=source_text, count=count)
            )
        except Exception as e:
            logger.error(f"Failed to generate quiz batch: {e}")
            return False
        finally:
            if self.epoch == epoch:
                self.state.is_generating_mcqs = False

        if self.epoch != epoch or self.state.data is None:
            logger.info("Discarding quiz batch for a previous analysis")
            return False
        self.state.data = self.state.data.with_mcqs(mcqs)
        return True

    async def regenerate_mcq(self, mcq_id: str) -> bool:
        """Replace the question ``mcq_id`` in place with a new one.

        ``regenerating_id`` is a single slot: starting a second regeneration
        overwrites it and whichever finishes first clears it.
        """
        data = self.state.data
        if data is None or not data.mcqs or not self.state.input_text:
            return False

        source_text = self.mcq_source_text()
        epoch = self.epoch
        self.state.regenerating_id = mcq_id
        try:
            new_mcq = await self.regenerate_mcq_service.call(
                MCQRegenerationRequest(source_text=source_text)
            )
        except Exception as e:
            logger.error(f"Failed to regenerate MCQ {mcq_id}: {e}")
            return False
        finally:
            if self.epoch == epoch:
                self.state.regenerating_id = None

        current = self.state.data
        if self.epoch != epoch or current is None or current.find_mcq(mcq_id) is None:
            return False
        self.state.data = current.with_mcqs(
            [new_mcq if mcq.id == mcq_id else mcq for mcq in current.mcqs]
        )
        return True

    def delete_mcq(self, mcq_id: str) -> bool:
        """Remove the question ``mcq_id``; unknown ids are ignored."""
        data = self.state.data
        if data is None or data.find_mcq(mcq_id) is None:
            return False
        self.state.data = data.with_mcqs(
            [mcq for mcq in data.mcqs if mcq.id != mcq_id]
        )
        return True
