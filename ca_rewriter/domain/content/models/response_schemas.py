"""Response schemas sent to Gemini for structured JSON output."""

from __future__ import annotations

from typing import Any

from ca_rewriter.domain.content.models.content_models import Language, OptionLabel

LANGUAGE_VALUES = [language.value for language in Language]
OPTION_VALUES = [label.value for label in OptionLabel]

MCQ_FIELDS = ["question", "options", "correctOption", "explanation"]
CONTENT_FIELDS = ["language", "context", "significance", "locationAndDate", "examPoints"]

_EXPLANATION_DESCRIPTION = (
    "List of exactly 3 explanation points: 1. Detailed Justification, "
    "2. Context, 3. Wrong options analysis."
)


def _string_list(description: str, **extra: Any) -> dict[str, Any]:
    return {
        "type": "ARRAY",
        "items": {"type": "STRING"},
        "description": description,
        **extra,
    }


CONTENT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "results": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "language": {
                        "type": "STRING",
                        "description": "The language of the content "
                        "(Telugu, Hindi, Kannada, Tamil, English)",
                        "enum": LANGUAGE_VALUES,
                    },
                    "context": {
                        "type": "STRING",
                        "description": "Around 100 words. Simple, neutral, "
                        "exam-oriented. Explain background and significance.",
                    },
                    "significance": _string_list(
                        "7-8 clear bullet points on governance, economy, society, "
                        "policy, or competitive exams."
                    ),
                    "locationAndDate": _string_list(
                        "Bullet points only. Mention location and date. No assumptions."
                    ),
                    "examPoints": _string_list(
                        "5-7 crisp factual bullet points useful for UPSC, SSC, "
                        "Banking, etc."
                    ),
                },
                "required": CONTENT_FIELDS,
            },
        }
    },
    "required": ["results"],
}

SINGLE_MCQ_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "question": {"type": "STRING"},
        "options": _string_list("Exactly 4 options.", min_items=4, max_items=4),
        "correctOption": {
            "type": "STRING",
            "enum": OPTION_VALUES,
            "description": "The letter of the correct option.",
        },
        "explanation": _string_list(
            _EXPLANATION_DESCRIPTION, min_items=3, max_items=3
        ),
    },
    "required": MCQ_FIELDS,
}

MCQ_BATCH_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "mcqs": {
            "type": "ARRAY",
            "description": "Multiple choice questions based strictly on the content.",
            "items": SINGLE_MCQ_SCHEMA,
        }
    },
    "required": ["mcqs"],
}
