"""Interactive prompting backed by ``rich.prompt``."""

from __future__ import annotations

from typing import Any, Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from src.utils import console as default_console

from .models import QuestionKind, QuestionSpec


class Prompter(Protocol):
    """Asks one question and returns the raw user input."""

    def ask(self, question: QuestionSpec, default: Any) -> Any:
        ...

    def reject(self, question: QuestionSpec, raw: Any) -> None:
        """Tell the user *raw* was not accepted for *question*."""
        ...


class RichPrompter:
    """Prompts on a Rich console.

    Choice questions are restricted to their options by ``rich.prompt``
    itself. Multi-select questions show the options and take a
    comma-separated list of names.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def ask(self, question: QuestionSpec, default: Any) -> Any:
        if question.kind is QuestionKind.BOOLEAN:
            return Confirm.ask(question.prompt, default=bool(default), console=self.console)

        if question.kind is QuestionKind.CHOICE:
            return Prompt.ask(
                question.prompt,
                choices=list(question.choice_values),
                default=default,
                console=self.console,
            )

        if question.kind is QuestionKind.MULTI_SELECT:
            self._show_options(question, default)
            return Prompt.ask(
                f"{question.prompt} (comma separated, '-' for none)",
                default=", ".join(sorted(default)) or "-",
                console=self.console,
            )

        return Prompt.ask(question.prompt, default=str(default), console=self.console)

    def reject(self, question: QuestionSpec, raw: Any) -> None:
        self.console.print(
            f"[bold yellow]  '{escape(str(raw))}' is not a valid answer, try again.[/bold yellow]"
        )

    def _show_options(self, question: QuestionSpec, default: Any) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        for value in question.choice_values:
            mark = "[green]*[/green]" if value in default else " "
            table.add_row(mark, value)
        self.console.print(table)
