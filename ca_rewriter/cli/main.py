"""CLI entry point for the CA rewriter."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ca_rewriter import __version__
from ca_rewriter.cli.shell import InteractiveShell
from ca_rewriter.core.session_manager import SessionManager
from ca_rewriter.domain.content.events.content_events import (
    ContentGenerationFailedEvent,
)
from ca_rewriter.infrastructure.config.settings import (
    Settings,
    get_settings,
    has_gemini_config,
)
from ca_rewriter.infrastructure.containers.content_container import ContentContainer
from ca_rewriter.presentation.quiz_view import QuizViewState
from ca_rewriter.presentation.renderers import render_quiz, render_session

console = Console()


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red]\n{escape(str(e))}")
        sys.exit(1)


def _configure_logging(settings: Settings, verbose: bool) -> None:
    handlers: list[logging.Handler] = [RichHandler(rich_tracebacks=True)]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="ca-rewriter")
def main() -> None:
    """CA Rewriter - exam-focused current affairs engine.

    Rewrites a news passage in Telugu, Hindi, Kannada, Tamil and English and
    builds practice MCQs for UPSC, SSC and Banking exams using Gemini AI.
    """


@main.command()
@click.option(
    "--input-file",
    "-i",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load the news passage from a file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def interactive(input_file: Path | None, verbose: bool) -> None:
    """Start an interactive rewriting session.

    Example:
        ca-rewriter interactive
        ca-rewriter interactive --input-file news.txt
    """
    settings = _load_settings()
    _configure_logging(settings, verbose)

    container = ContentContainer(settings=settings)
    session = container.create_session()
    if input_file is not None:
        session.set_input(input_file.read_text(encoding="utf-8"))

    shell = InteractiveShell(session, console, max_mcq_count=settings.max_mcq_count)
    event_bus = container.get_event_bus()
    event_bus.subscribe(ContentGenerationFailedEvent, shell.on_generation_failed)

    console.print("\n[bold cyan]CA Rewriter[/bold cyan]")
    console.print("=" * 50)
    console.print(
        "[dim]Exam-focused current affairs engine. "
        "Outputs in Telugu, Hindi, Kannada, Tamil, & English.[/dim]\n"
    )

    try:
        asyncio.run(shell.run())
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Session ended. Goodbye![/yellow]")
    finally:
        event_bus.unsubscribe(ContentGenerationFailedEvent, shell.on_generation_failed)
    sys.exit(0)


@main.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--mcqs",
    "-n",
    default=0,
    type=click.IntRange(min=0),
    help="Number of practice questions to generate (default: none)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the result as JSON instead of printing it",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def rewrite(input_file: TextIO, mcqs: int, output: Path | None, verbose: bool) -> None:
    """Rewrite INPUT_FILE ('-' for stdin) and optionally build a quiz.

    Example:
        ca-rewriter rewrite news.txt
        ca-rewriter rewrite news.txt --mcqs 10 --output result.json
    """
    settings = _load_settings()
    _configure_logging(settings, verbose)

    if mcqs > settings.max_mcq_count:
        console.print(
            f"[red]Number of questions must be at most {settings.max_mcq_count}.[/red]"
        )
        sys.exit(1)

    if not has_gemini_config(settings):
        console.print(
            "[red]Gemini is not configured. Set GEMINI_API_KEY, or USE_VERTEX_AI "
            "with GCP_PROJECT_ID.[/red]"
        )
        sys.exit(1)

    container = ContentContainer(settings=settings)
    session = container.create_session()
    session.set_input(input_file.read())

    try:
        success = asyncio.run(_run_rewrite(session, mcqs))
    except KeyboardInterrupt:
        console.print("\n[red]Interrupted by user.[/red]")
        sys.exit(1)

    if not success:
        if not session.state.input_text.strip():
            console.print("[red]Error: input text is empty.[/red]")
        else:
            console.print(f"[bold red]Error: {session.state.error}[/bold red]")
            console.print(
                "[red]Check that your Gemini API credentials are configured.[/red]"
            )
        sys.exit(1)

    data = session.state.data
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(data.to_wire(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        console.print(f"[green]✓ Result saved to {output}[/green]")
    else:
        quiz_view = QuizViewState()
        console.print(render_session(session.state, quiz_view))
        if data.mcqs:
            quiz_view.reveal_all([mcq.id for mcq in data.mcqs])
            console.print(render_quiz(data.mcqs, quiz_view))

    if mcqs and not data.mcqs:
        console.print(
            "[yellow]⚠ Quiz generation failed; rewritten content is still available.[/yellow]"
        )
    sys.exit(0)


async def _run_rewrite(session: SessionManager, mcq_count: int) -> bool:
    if not await session.submit():
        return False
    if mcq_count:
        session.set_mcq_count(str(mcq_count))
        await session.generate_quiz()
    return True


if __name__ == "__main__":
    main()
