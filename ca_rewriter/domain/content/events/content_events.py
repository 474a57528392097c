"""Domain events for content context."""

from __future__ import annotations

from dataclasses import dataclass

from ca_rewriter.infrastructure.messaging.event_bus import DomainEvent


@dataclass
class ContentAnalyzedEvent(DomainEvent):
    """Event raised when the five-language rewrite is produced."""

    language_count: int
    input_chars: int
    generation_time_ms: int


@dataclass
class MCQBatchGeneratedEvent(DomainEvent):
    """Event raised when a practice quiz is generated."""

    requested_count: int
    generated_count: int
    generation_time_ms: int


@dataclass
class MCQRegeneratedEvent(DomainEvent):
    """Event raised when a single question is regenerated."""

    new_id: str
    generation_time_ms: int


@dataclass
class ContentGenerationFailedEvent(DomainEvent):
    """Event raised when any generation call fails."""

    operation_type: str  # "analysis", "mcq_batch", "mcq_regeneration"
    error_message: str
