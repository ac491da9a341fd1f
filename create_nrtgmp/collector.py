"""Interactive collection of the user's integration choices.

The workflow only depends on the small :class:`Prompter` capability, so tests
(and non-interactive front ends) can substitute a scripted implementation for
the Rich-based terminal one.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .models import ConfigurationAnswers, Dialect
from .utils import console as default_console

T = TypeVar("T")


class PromptCancelled(Exception):
    """Raised when the user aborts a prompt (Ctrl-C or end of input)."""


class Prompter(Protocol):
    """Ask typed questions; raise :class:`PromptCancelled` on cancellation."""

    def confirm(self, message: str, default: bool = True) -> bool: ...

    def select(
        self,
        message: str,
        choices: Sequence[tuple[str, T]],
        default_index: int = 0,
    ) -> T: ...


class RichPrompter:
    """Terminal :class:`Prompter` built on ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def confirm(self, message: str, default: bool = True) -> bool:
        try:
            return Confirm.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled(message) from exc

    def select(
        self,
        message: str,
        choices: Sequence[tuple[str, T]],
        default_index: int = 0,
    ) -> T:
        if not choices:
            raise ValueError("select() needs at least one choice")

        self.console.print(message)
        for number, (title, _) in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{number}[/cyan]) {title}")

        numbers = [str(n) for n in range(1, len(choices) + 1)]
        try:
            answer = Prompt.ask(
                "Choice",
                choices=numbers,
                default=numbers[default_index],
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled(message) from exc
        return choices[int(answer) - 1][1]


DIALECT_CHOICES: list[tuple[str, Dialect]] = [(d.display_name, d) for d in Dialect]


def collect_answers(prompter: Prompter) -> ConfigurationAnswers:
    """Ask the database configuration questions in order.

    The dialect question is only asked when Sequelize was requested, so the
    returned answers always satisfy the dialect/ORM invariant.

    Raises:
        PromptCancelled: If the user cancels any question.
    """
    wants_mongodb = prompter.confirm("Do you want MongoDB?", default=True)
    wants_sequelize = prompter.confirm("Do you want Sequelize?", default=True)

    dialect: Dialect | None = None
    if wants_sequelize:
        dialect = prompter.select(
            "Select Dialect of Sequelize:", DIALECT_CHOICES, default_index=0
        )

    return ConfigurationAnswers(
        wants_document_store=wants_mongodb,
        wants_relational_orm=wants_sequelize,
        relational_dialect=dialect,
    )
