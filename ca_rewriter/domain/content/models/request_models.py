"""Request objects for the content generation services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AnalysisRequest:
    """Rewrite a raw news passage into the five languages."""

    text: str


@dataclass
class MCQBatchRequest:
    """Generate ``count`` practice questions from ``source_text``."""

    source_text: str
    count: int


@dataclass
class MCQRegenerationRequest:
    """Generate one replacement question from ``source_text``."""

    source_text: str
