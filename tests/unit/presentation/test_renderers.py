"""Tests for rich session rendering."""

import io

import pytest
from rich.console import Console

from ca_rewriter.core.session_manager import ActiveTab, AppState, SessionState
from ca_rewriter.presentation.quiz_view import QuestionViewState, QuizViewState
from ca_rewriter.presentation.renderers import (
    render_language_card,
    render_mcq,
    render_quiz,
    render_session,
)


def render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=200, record=True)
    console.print(renderable)
    return console.export_text()


class TestRenderLanguageCard:
    def test_card_sections(self, english_content):
        output = render_text(render_language_card(english_content))

        assert "English" in output
        assert "Exam Focus" in output
        assert "Context" in output
        assert "English context about the new space mission." in output
        assert "Why this news matters" in output
        assert "• English significance one" in output
        assert "Where and When" in output
        assert "• Sriharikota, Andhra Pradesh" in output
        assert "Key Points for Exam" in output
        assert "• English exam point two" in output


class TestRenderMCQ:
    @pytest.fixture
    def mcq(self, make_mcq):
        return make_mcq("q1", 3)

    def test_unanswered_hides_explanation(self, mcq):
        output = render_text(render_mcq(mcq, 1, QuestionViewState()))

        assert "1. Which agency launched mission 3?" in output
        assert "A) ISRO" in output
        assert "D) JAXA" in output
        assert "Detailed Explanation" not in output
        assert "✓" not in output

    def test_wrong_answer_marks_both(self, mcq):
        state = QuestionViewState(selected_option="B", revealed=True)

        output = render_text(render_mcq(mcq, 2, state))

        assert "A) ISRO ✓" in output
        assert "B) NASA ✗" in output
        assert "Detailed Explanation" in output
        assert "Correct Answer: A) ISRO" in output
        assert "• The launch took place from Sriharikota." in output

    def test_regenerating_subtitle(self, mcq):
        output = render_text(render_mcq(mcq, 1, QuestionViewState(), regenerating=True))

        assert "Regenerating..." in output


class TestRenderQuiz:
    def test_empty_quiz(self):
        output = render_text(render_quiz([], QuizViewState()))

        assert "No questions available." in output

    def test_generating_placeholder(self):
        output = render_text(render_quiz([], QuizViewState(), is_generating=True))

        assert "Crafting questions..." in output

    def test_numbering_follows_position(self, make_mcq):
        mcqs = [make_mcq("q1", 1), make_mcq("q2", 2)]

        output = render_text(render_quiz(mcqs, QuizViewState(), regenerating_id="q2"))

        assert "Practice Quiz - 2 Questions • UPSC/SSC Level" in output
        assert "1. Which agency launched mission 1?" in output
        assert "2. Which agency launched mission 2?" in output
        assert output.count("Regenerating...") == 1


class TestRenderSession:
    def test_idle(self):
        output = render_text(render_session(SessionState(), QuizViewState()))

        assert "Ready to rewrite." in output

    def test_loading(self):
        state = SessionState(app_state=AppState.LOADING)

        assert "Processing..." in render_text(render_session(state, QuizViewState()))

    def test_error(self):
        state = SessionState(app_state=AppState.ERROR, error="API Key is missing.")

        output = render_text(render_session(state, QuizViewState()))

        assert "Processing Error" in output
        assert "API Key is missing." in output

    def test_content_tab_in_language_order(self, analysis_response):
        state = SessionState(app_state=AppState.SUCCESS, data=analysis_response)

        output = render_text(render_session(state, QuizViewState()))

        positions = [
            output.index(f"{language} context about")
            for language in ["Telugu", "Hindi", "Kannada", "Tamil", "English"]
        ]
        assert positions == sorted(positions)
        assert "Rewritten Content" in output
        assert "End of Content" in output

    def test_mcq_tab(self, analysis_response, make_mcq):
        state = SessionState(
            app_state=AppState.SUCCESS,
            data=analysis_response.with_mcqs([make_mcq("q1")]),
            active_tab=ActiveTab.MCQ,
        )

        output = render_text(render_session(state, QuizViewState()))

        assert "Practice Quiz - 1 Questions" in output
        assert "Rewritten Content" not in output
