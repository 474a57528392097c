"""Rich renderables for session output."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from ca_rewriter.core.session_manager import ActiveTab, AppState, SessionState
from ca_rewriter.domain.content.models import MCQ, Language, LanguageContent
from ca_rewriter.presentation.quiz_view import (
    OptionOutcome,
    QuestionViewState,
    QuizViewState,
    option_outcome,
)

LANGUAGE_COLORS = {
    Language.TELUGU: "blue",
    Language.HINDI: "dark_orange",
    Language.KANNADA: "yellow",
    Language.TAMIL: "red",
    Language.ENGLISH: "white",
}

OUTCOME_STYLES = {
    OptionOutcome.NEUTRAL: "",
    OptionOutcome.SELECTED: "bold magenta",
    OptionOutcome.CORRECT: "bold green",
    OptionOutcome.WRONG_SELECTION: "red strike",
    OptionOutcome.DIMMED: "dim",
}


def _section(title: str, points: list[str], bullet_style: str) -> Text:
    text = Text(f"{title}\n", style="bold")
    for point in points:
        text.append("• ", style=bullet_style)
        text.append(f"{point}\n")
    return text


def render_language_card(content: LanguageContent) -> Panel:
    """One card per language: context plus the three bullet sections."""
    color = LANGUAGE_COLORS.get(content.language, "white")
    body = Group(
        Text("Context", style="bold"),
        Text(content.context, justify="full"),
        Text(),
        _section("Why this news matters", content.significance, "green"),
        _section("Where and When", content.location_and_date, "magenta"),
        _section("Key Points for Exam", content.exam_points, "yellow"),
    )
    return Panel(
        body,
        title=f"[bold]{content.language.value}[/bold] [dim]Exam Focus[/dim]",
        title_align="left",
        border_style=color,
    )


def render_mcq(
    mcq: MCQ,
    number: int,
    view_state: QuestionViewState,
    regenerating: bool = False,
) -> Panel:
    """A numbered question with A-D options and, once answered, the explanation."""
    lines: list[RenderableType] = [Text(f"{number}. {mcq.question}", style="bold")]

    for label, option in mcq.labelled_options():
        outcome = option_outcome(mcq, label, view_state)
        marker = ""
        if outcome == OptionOutcome.CORRECT:
            marker = " ✓"
        elif outcome == OptionOutcome.WRONG_SELECTION:
            marker = " ✗"
        lines.append(
            Text(f"   {label.value}) {option}{marker}", style=OUTCOME_STYLES[outcome])
        )

    if view_state.revealed:
        explanation = Text("\nDetailed Explanation\n", style="bold cyan")
        explanation.append(
            f"Correct Answer: {mcq.correct_option.value}) {mcq.correct_answer_text}\n",
            style="bold",
        )
        for point in mcq.explanation:
            explanation.append("• ", style="cyan")
            explanation.append(f"{point}\n")
        lines.append(explanation)

    subtitle = "[yellow]Regenerating...[/yellow]" if regenerating else None
    return Panel(
        Group(*lines),
        subtitle=subtitle,
        border_style="dim" if regenerating else "cyan",
    )


def render_quiz(
    mcqs: list[MCQ],
    quiz_view: QuizViewState,
    regenerating_id: str | None = None,
    is_generating: bool = False,
) -> RenderableType:
    if is_generating and not mcqs:
        return Text("Crafting questions...", style="italic cyan")
    if not mcqs:
        return Panel(
            Text(
                "No questions available.\nGenerate a practice quiz from the MCQ tab.",
                style="dim",
                justify="center",
            ),
            border_style="dim",
        )

    header = Text(
        f"Practice Quiz - {len(mcqs)} Questions • UPSC/SSC Level", style="bold"
    )
    panels = [
        render_mcq(
            mcq,
            number,
            quiz_view.state_for(mcq.id),
            regenerating=mcq.id == regenerating_id,
        )
        for number, mcq in enumerate(mcqs, start=1)
    ]
    return Group(header, *panels)


def render_session(state: SessionState, quiz_view: QuizViewState) -> RenderableType:
    """Render whatever the session currently shows."""
    if state.app_state == AppState.IDLE:
        return Text(
            "Ready to rewrite. Paste text to begin.", style="dim", justify="center"
        )

    if state.app_state == AppState.LOADING:
        return Text("Processing...", style="italic cyan")

    if state.app_state == AppState.ERROR:
        return Panel(
            Text(state.error or "", style="red"),
            title="Processing Error",
            border_style="red",
        )

    data = state.data
    if data is None:
        return Text()

    if state.active_tab == ActiveTab.CONTENT:
        cards = [render_language_card(item) for item in data.results]
        return Group(
            Text("Rewritten Content", style="bold underline"),
            *cards,
            Text("End of Content", style="dim", justify="center"),
        )

    return render_quiz(
        data.mcqs,
        quiz_view,
        regenerating_id=state.regenerating_id,
        is_generating=state.is_generating_mcqs,
    )
