"""Domain models for rewritten content and practice questions."""

from __future__ import annotations

import random
import string
import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

_BASE36 = string.digits + string.ascii_lowercase


class Language(str, Enum):
    """Output languages, in the order the rewrite produces them."""

    TELUGU = "Telugu"
    HINDI = "Hindi"
    KANNADA = "Kannada"
    TAMIL = "Tamil"
    ENGLISH = "English"


class OptionLabel(str, Enum):
    """Positional option labels: option 0 is A, option 3 is D."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def for_index(cls, index: int) -> OptionLabel:
        return list(cls)[index]

    @property
    def index(self) -> int:
        return list(OptionLabel).index(self)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a fresh opaque question id (random part + timestamp part)."""
    random_part = "".join(random.choices(_BASE36, k=7))
    return random_part + _to_base36(time.time_ns() // 1_000_000)


class LanguageContent(BaseModel):
    """Exam-oriented rewrite of the input passage in one language."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language: Language
    context: str = Field(..., description="Around 100 words of background")
    significance: list[str] = Field(
        default_factory=list, description="Why this news matters"
    )
    location_and_date: list[str] = Field(
        default_factory=list,
        alias="locationAndDate",
        description="Where and when",
    )
    exam_points: list[str] = Field(
        default_factory=list,
        alias="examPoints",
        description="Key points for exam",
    )


class MCQ(BaseModel):
    """Multiple-choice question with four options and one correct label."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=generate_id, description="Opaque unique id")
    question: str
    options: list[str] = Field(..., min_length=4, max_length=4)
    correct_option: OptionLabel = Field(..., alias="correctOption")
    explanation: list[str] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Justification, news context, wrong options analysis",
    )

    def option_for(self, label: OptionLabel | str) -> str:
        return self.options[OptionLabel(label).index]

    @property
    def correct_answer_text(self) -> str:
        return self.option_for(self.correct_option)

    def labelled_options(self) -> list[tuple[OptionLabel, str]]:
        return [
            (OptionLabel.for_index(index), option)
            for index, option in enumerate(self.options)
        ]


class AnalysisResponse(BaseModel):
    """Result of one analysis: per-language content plus the current quiz."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    results: list[LanguageContent]
    mcqs: list[MCQ] = Field(default_factory=list)

    @field_validator("results")
    @classmethod
    def one_entry_per_language(cls, v: list[LanguageContent]) -> list[LanguageContent]:
        """Ensure no language appears twice."""
        languages = [item.language for item in v]
        duplicates = {lang.value for lang in languages if languages.count(lang) > 1}
        if duplicates:
            raise ValueError(
                f"Duplicate language entries: {', '.join(sorted(duplicates))}"
            )
        return v

    @field_validator("mcqs")
    @classmethod
    def unique_mcq_ids(cls, v: list[MCQ]) -> list[MCQ]:
        """Ensure question ids are unique."""
        ids = [mcq.id for mcq in v]
        if len(ids) != len(set(ids)):
            raise ValueError("MCQ ids must be unique")
        return v

    def content_for(self, language: Language) -> LanguageContent | None:
        return next((item for item in self.results if item.language == language), None)

    @property
    def english_content(self) -> LanguageContent | None:
        return self.content_for(Language.ENGLISH)

    def find_mcq(self, mcq_id: str) -> MCQ | None:
        return next((mcq for mcq in self.mcqs if mcq.id == mcq_id), None)

    def with_mcqs(self, mcqs: list[MCQ]) -> AnalysisResponse:
        """Return a copy holding ``mcqs`` in place of the current list."""
        return AnalysisResponse(results=self.results, mcqs=mcqs)

    def to_wire(self) -> dict:
        """Serialize using the camelCase field names of the service schema."""
        return self.model_dump(mode="json", by_alias=True)
