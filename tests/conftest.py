"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ca_rewriter.domain.content.models import (  # noqa: E402
    MCQ,
    AnalysisResponse,
    LanguageContent,
)
from ca_rewriter.infrastructure.config.settings import Settings  # noqa: E402

LANGUAGES = ["Telugu", "Hindi", "Kannada", "Tamil", "English"]


def _content_record(language: str) -> dict[str, Any]:
    return {
        "language": language,
        "context": f"{language} context about the new space mission.",
        "significance": [
            f"{language} significance one",
            f"{language} significance two",
        ],
        "locationAndDate": ["Sriharikota, Andhra Pradesh", "15 August 2025"],
        "examPoints": [f"{language} exam point one", f"{language} exam point two"],
    }


def _mcq_record(number: int = 1) -> dict[str, Any]:
    return {
        "question": f"Which agency launched mission {number}?",
        "options": ["ISRO", "NASA", "ESA", "JAXA"],
        "correctOption": "A",
        "explanation": [
            "According to the news article, ISRO launched the mission.",
            "The launch took place from Sriharikota.",
            "NASA, ESA and JAXA were not involved.",
        ],
    }


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(_env_file=None, GEMINI_API_KEY="test-api-key")


@pytest.fixture
def content_payload() -> dict[str, Any]:
    """Service payload for a full five-language analysis."""
    return {"results": [_content_record(language) for language in LANGUAGES]}


@pytest.fixture
def mcq_record() -> Callable[[int], dict[str, Any]]:
    """Factory for a single MCQ record as the service returns it (no id)."""
    return _mcq_record


@pytest.fixture
def make_mcq() -> Callable[..., MCQ]:
    """Factory for MCQ models with an explicit id."""

    def factory(mcq_id: str, number: int = 1) -> MCQ:
        return MCQ.model_validate({**_mcq_record(number), "id": mcq_id})

    return factory


@pytest.fixture
def analysis_response(content_payload) -> AnalysisResponse:
    """Analysis with all five languages and no questions."""
    return AnalysisResponse.model_validate(content_payload)


@pytest.fixture
def english_content(analysis_response) -> LanguageContent:
    return analysis_response.english_content
