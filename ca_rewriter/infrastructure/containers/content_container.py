"""Dependency injection container for the rewriter."""

from __future__ import annotations

from ca_rewriter.core.session_manager import SessionManager
from ca_rewriter.domain.content.services import (
    AnalyzeContent,
    GenerateMCQBatch,
    RegenerateMCQ,
)
from ca_rewriter.infrastructure.config.settings import Settings, get_settings
from ca_rewriter.infrastructure.external.gemini_client import GeminiClient
from ca_rewriter.infrastructure.messaging.event_bus import EventBus


class ContentContainer:
    """Container wiring the event bus, domain services and session."""

    def __init__(
        self,
        event_bus: EventBus | None = None,
        settings: Settings | None = None,
        client: GeminiClient | None = None,
    ):
        self._event_bus = event_bus or EventBus()
        self._settings = settings or get_settings()

        # Services share the client when one is given, otherwise each
        # creates its own on first call
        self._analyze_content = AnalyzeContent(
            self._event_bus, client=client, settings=self._settings
        )
        self._generate_mcq_batch = GenerateMCQBatch(
            self._event_bus, client=client, settings=self._settings
        )
        self._regenerate_mcq = RegenerateMCQ(
            self._event_bus, client=client, settings=self._settings
        )

    def get_event_bus(self) -> EventBus:
        return self._event_bus

    def create_session(self) -> SessionManager:
        """Create a fresh session bound to this container's services."""
        return SessionManager(
            analyze_content=self._analyze_content,
            generate_mcq_batch=self._generate_mcq_batch,
            regenerate_mcq=self._regenerate_mcq,
            default_mcq_count=self._settings.default_mcq_count,
        )
