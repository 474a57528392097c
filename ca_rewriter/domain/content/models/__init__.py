"""Content context models."""

from ca_rewriter.domain.content.models.content_models import (
    MCQ,
    AnalysisResponse,
    Language,
    LanguageContent,
    OptionLabel,
    generate_id,
)

__all__ = [
    "MCQ",
    "AnalysisResponse",
    "Language",
    "LanguageContent",
    "OptionLabel",
    "generate_id",
]
