"""Source text for question generation.

Questions are grounded in the model's own English rewrite when one exists,
so the quiz matches what the reader sees on the content tab. Without an
English entry the raw input passage is used.
"""

from __future__ import annotations

from ca_rewriter.domain.content.models import AnalysisResponse, LanguageContent


def _bullets(points: list[str]) -> str:
    return "\n".join(f"- {point}" for point in points)


def reconstruct_english_context(content: LanguageContent) -> str:
    """Flatten a structured rewrite into a single prompt body."""
    return (
        f"Context:\n{content.context}\n\n"
        f"Why this news matters:\n{_bullets(content.significance)}\n\n"
        f"Where and When:\n{_bullets(content.location_and_date)}\n\n"
        f"Key Points for Exam:\n{_bullets(content.exam_points)}\n"
    )


def build_mcq_source_text(analysis: AnalysisResponse | None, raw_text: str) -> str:
    """Pick the text MCQ generation and regeneration are grounded in."""
    english = analysis.english_content if analysis is not None else None
    if english is None:
        return raw_text
    return reconstruct_english_context(english)
