"""Per-question view state for the practice quiz.

View state lives here, keyed by question id, and never inside the MCQ list.
Entries for deleted or regenerated questions are simply left behind and
ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ca_rewriter.domain.content.models import MCQ, OptionLabel


class OptionOutcome(str, Enum):
    """How a single option is drawn."""

    NEUTRAL = "neutral"
    SELECTED = "selected"
    CORRECT = "correct"
    WRONG_SELECTION = "wrong_selection"
    DIMMED = "dimmed"


@dataclass
class QuestionViewState:
    selected_option: OptionLabel | None = None
    revealed: bool = False


@dataclass
class QuizViewState:
    """Mapping of question id to its view state."""

    questions: dict[str, QuestionViewState] = field(default_factory=dict)

    def state_for(self, mcq_id: str) -> QuestionViewState:
        return self.questions.get(mcq_id, QuestionViewState())

    def select_option(self, mcq_id: str, label: OptionLabel | str) -> bool:
        """Answer a question and reveal its explanation.

        Answers are final: once revealed, later selections are ignored.
        """
        current = self.questions.get(mcq_id)
        if current is not None and current.revealed:
            return False
        self.questions[mcq_id] = QuestionViewState(
            selected_option=OptionLabel(label), revealed=True
        )
        return True

    def is_revealed(self, mcq_id: str) -> bool:
        return self.state_for(mcq_id).revealed

    def reveal_all(self, mcq_ids: list[str]) -> None:
        """Show every explanation without recording an answer."""
        for mcq_id in mcq_ids:
            current = self.state_for(mcq_id)
            self.questions[mcq_id] = QuestionViewState(
                selected_option=current.selected_option, revealed=True
            )

    def prune(self, live_ids: set[str]) -> None:
        """Drop view state for questions no longer in the list."""
        for mcq_id in set(self.questions) - live_ids:
            del self.questions[mcq_id]

    def reset(self) -> None:
        self.questions.clear()


def option_outcome(
    mcq: MCQ, label: OptionLabel, view_state: QuestionViewState
) -> OptionOutcome:
    """Classify one option of ``mcq`` given the reader's answer."""
    is_selected = view_state.selected_option == label
    if view_state.revealed:
        if label == mcq.correct_option:
            return OptionOutcome.CORRECT
        if is_selected:
            return OptionOutcome.WRONG_SELECTION
        return OptionOutcome.DIMMED
    if is_selected:
        return OptionOutcome.SELECTED
    return OptionOutcome.NEUTRAL
