"""Interactive terminal session.

Generation commands run as background tasks, so the prompt stays usable
while a request is in flight. The same guards as the session apply: no new
analysis while one is loading, no second quiz generation while one is
running, and no regeneration of the row already regenerating.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable, Coroutine
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from ca_rewriter.core.session_manager import ActiveTab, AppState, SessionManager
from ca_rewriter.domain.content.events.content_events import (
    ContentGenerationFailedEvent,
)
from ca_rewriter.domain.content.models import MCQ, OptionLabel
from ca_rewriter.presentation.quiz_view import QuizViewState
from ca_rewriter.presentation.renderers import render_mcq, render_session

logger = logging.getLogger(__name__)

PASTE_TERMINATOR = "."

HELP_TEXT = """[bold]Commands[/bold]
  paste            Enter the news passage (finish with a line containing only '.')
  load PATH        Read the news passage from a file
  analyze          Rewrite the passage in Telugu, Hindi, Kannada, Tamil and English
  content | quiz   Switch between the rewritten content and the practice MCQs
  count N          Set the number of questions to generate
  generate         Generate a practice quiz
  answer Q LETTER  Answer question Q with option A, B, C or D
  regen Q          Regenerate question Q
  delete Q         Delete question Q
  show             Show the current view
  status           Show session status
  clear            Reset the session
  help             Show this help
  quit             Exit"""


class InteractiveShell:
    """Command loop driving a ``SessionManager``."""

    def __init__(
        self,
        session: SessionManager,
        console: Console,
        max_mcq_count: int = 20,
        read_line: Callable[[str], Awaitable[str]] | None = None,
    ) -> None:
        self.session = session
        self.console = console
        self.max_mcq_count = max_mcq_count
        self.quiz_view = QuizViewState()
        self._read_line = read_line or self._read_console_line
        self._tasks: set[asyncio.Task[Any]] = set()

    async def _read_console_line(self, prompt: str) -> str:
        # Daemon thread: interpreter exit never waits on a blocked input()
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def deliver(result: str | None, error: Exception | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def read() -> None:
            try:
                line = self.console.input(prompt)
            except Exception as e:
                result, error = None, e
            else:
                result, error = line, None
            try:
                loop.call_soon_threadsafe(deliver, result, error)
            except RuntimeError:
                logger.debug("Event loop closed before console input arrived")

        threading.Thread(target=read, name="console-input", daemon=True).start()
        return await future

    def on_generation_failed(self, event: ContentGenerationFailedEvent) -> None:
        """Quiz failures are non-fatal: results stay on screen."""
        if event.operation_type == "mcq_batch":
            self.console.print(
                f"[yellow]Quiz generation failed: {event.error_message}[/yellow]"
            )
        elif event.operation_type == "mcq_regeneration":
            self.console.print("[yellow]Failed to regenerate question.[/yellow]")

    # Task management

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_pending(self) -> None:
        """Wait for every in-flight generation command."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # Loop

    async def run(self) -> None:
        self.console.print(HELP_TEXT)
        try:
            while True:
                line = await self._read_line("[bold cyan]ca>[/bold cyan] ")
                if not await self.handle(line):
                    break
        finally:
            for task in list(self._tasks):
                task.cancel()
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should exit."""
        parts = line.strip().split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit"):
            return False

        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            self.console.print(f"[red]Unknown command: {command}[/red] (try 'help')")
            return True

        await handler(args)
        return True

    # Commands

    async def _cmd_help(self, args: list[str]) -> None:
        self.console.print(HELP_TEXT)

    async def _cmd_paste(self, args: list[str]) -> None:
        if self.session.state.app_state == AppState.LOADING:
            self.console.print("[yellow]Input is locked while processing.[/yellow]")
            return
        self.console.print(
            f"[dim]Paste current affairs text, then a line with '{PASTE_TERMINATOR}'[/dim]"
        )
        lines = []
        while True:
            line = await self._read_line("")
            if line.strip() == PASTE_TERMINATOR:
                break
            lines.append(line)
        self.session.set_input("\n".join(lines))
        captured = len(self.session.state.input_text)
        self.console.print(f"[green]Captured {captured} characters.[/green]")

    async def _cmd_load(self, args: list[str]) -> None:
        if not args:
            self.console.print("[red]Usage: load PATH[/red]")
            return
        if self.session.state.app_state == AppState.LOADING:
            self.console.print("[yellow]Input is locked while processing.[/yellow]")
            return
        path = Path(" ".join(args)).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            self.console.print(f"[red]Cannot read {path}: {e}[/red]")
            return
        self.session.set_input(text)
        self.console.print(f"[green]Loaded {len(text)} characters from {path}.[/green]")

    async def _cmd_analyze(self, args: list[str]) -> None:
        if self.session.state.app_state == AppState.LOADING:
            self.console.print("[yellow]Already processing.[/yellow]")
            return
        if not self.session.can_submit:
            self.console.print("[yellow]Paste some text first.[/yellow]")
            return
        self.quiz_view.reset()
        self.console.print("[cyan]Processing...[/cyan]")
        self._spawn(self._run_analysis())

    async def _run_analysis(self) -> None:
        if await self.session.submit():
            languages = len(self.session.state.data.results)
            self.console.print(
                f"[green]✓ Rewritten content ready in {languages} languages.[/green] "
                "Type 'show' to view."
            )
        else:
            self.console.print(render_session(self.session.state, self.quiz_view))

    async def _cmd_content(self, args: list[str]) -> None:
        await self._switch_tab(ActiveTab.CONTENT)

    async def _cmd_quiz(self, args: list[str]) -> None:
        await self._switch_tab(ActiveTab.MCQ)

    async def _switch_tab(self, tab: ActiveTab) -> None:
        if self.session.state.app_state != AppState.SUCCESS:
            self.console.print("[yellow]No results yet. Run 'analyze' first.[/yellow]")
            return
        self.session.set_tab(tab)
        await self._cmd_show([])

    async def _cmd_count(self, args: list[str]) -> None:
        if len(args) != 1:
            self.console.print("[red]Usage: count N[/red]")
            return
        try:
            count = int(args[0])
        except ValueError:
            count = 0
        if not 1 <= count <= self.max_mcq_count:
            self.console.print(
                f"[red]Number of questions must be between 1 and {self.max_mcq_count}.[/red]"
            )
            return
        self.session.set_mcq_count(args[0])
        self.console.print(f"[blue]Number of questions: {count}[/blue]")

    async def _cmd_generate(self, args: list[str]) -> None:
        if self.session.state.is_generating_mcqs:
            self.console.print("[yellow]Quiz generation already in progress.[/yellow]")
            return
        if not self.session.can_generate_quiz:
            self.console.print(
                "[yellow]Run 'analyze' and set a positive question count first.[/yellow]"
            )
            return
        self.session.set_tab(ActiveTab.MCQ)
        self.console.print("[cyan]Crafting questions...[/cyan]")
        self._spawn(self._run_generate())

    async def _run_generate(self) -> None:
        if await self.session.generate_quiz():
            data = self.session.state.data
            self.quiz_view.prune({mcq.id for mcq in data.mcqs})
            self.console.print(
                f"[green]✓ Generated {len(data.mcqs)} questions.[/green] "
                "Type 'show' to view."
            )

    def _mcq_at(self, position: str) -> MCQ | None:
        data = self.session.state.data
        mcqs = data.mcqs if data is not None else []
        try:
            index = int(position) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(mcqs):
            self.console.print(f"[red]No question number {position}.[/red]")
            return None
        return mcqs[index]

    async def _cmd_answer(self, args: list[str]) -> None:
        if len(args) != 2:
            self.console.print("[red]Usage: answer Q LETTER[/red]")
            return
        mcq = self._mcq_at(args[0])
        if mcq is None:
            return
        letter = args[1].upper()
        if letter not in OptionLabel.__members__:
            self.console.print("[red]Answer with A, B, C or D.[/red]")
            return
        if mcq.id == self.session.state.regenerating_id:
            self.console.print("[yellow]This question is being regenerated.[/yellow]")
            return
        if self.quiz_view.is_revealed(mcq.id):
            self.console.print("[yellow]Already answered.[/yellow]")
        else:
            self.quiz_view.select_option(mcq.id, letter)
        self.console.print(
            render_mcq(mcq, int(args[0]), self.quiz_view.state_for(mcq.id))
        )

    async def _cmd_regen(self, args: list[str]) -> None:
        if len(args) != 1:
            self.console.print("[red]Usage: regen Q[/red]")
            return
        mcq = self._mcq_at(args[0])
        if mcq is None:
            return
        if mcq.id == self.session.state.regenerating_id:
            self.console.print("[yellow]Already regenerating this question.[/yellow]")
            return
        self.console.print(f"[cyan]Regenerating question {args[0]}...[/cyan]")
        self._spawn(self._run_regenerate(mcq.id, args[0]))

    async def _run_regenerate(self, mcq_id: str, position: str) -> None:
        if await self.session.regenerate_mcq(mcq_id):
            self.console.print(f"[green]✓ Question {position} regenerated.[/green]")

    async def _cmd_delete(self, args: list[str]) -> None:
        if len(args) != 1:
            self.console.print("[red]Usage: delete Q[/red]")
            return
        mcq = self._mcq_at(args[0])
        if mcq is None:
            return
        self.session.delete_mcq(mcq.id)
        self.console.print(f"[green]Deleted question {args[0]}.[/green]")

    async def _cmd_show(self, args: list[str]) -> None:
        self.console.print(render_session(self.session.state, self.quiz_view))

    async def _cmd_status(self, args: list[str]) -> None:
        state = self.session.state
        table = Table(title="Session", show_header=False)
        table.add_row("State", state.app_state.value)
        table.add_row("Tab", state.active_tab.value)
        table.add_row("Input characters", str(len(state.input_text)))
        table.add_row("Languages", str(len(state.data.results) if state.data else 0))
        table.add_row("Questions", str(len(state.data.mcqs) if state.data else 0))
        table.add_row("Question count", state.mcq_count)
        table.add_row("Generating quiz", "yes" if state.is_generating_mcqs else "no")
        table.add_row("Regenerating", state.regenerating_id or "-")
        if state.error:
            table.add_row("Error", f"[red]{state.error}[/red]")
        self.console.print(table)

    async def _cmd_clear(self, args: list[str]) -> None:
        if not self.session.can_clear:
            self.console.print("[yellow]Nothing to clear.[/yellow]")
            return
        self.session.clear()
        self.quiz_view.reset()
        self.console.print("[green]Session cleared.[/green]")
