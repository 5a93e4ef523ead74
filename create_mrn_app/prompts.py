"""Interactive prompts backed by ``rich.prompt``.

``PromptChooser`` implements the resolver's ``Chooser`` protocol.  Select
prompts print a numbered option list (label and hint per option) and accept
the option number.  Ctrl-C or end-of-input at any prompt raises
``OperationCancelled``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from enum import Enum
from typing import Optional, TypeVar

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from .errors import OperationCancelled
from .resolver.compat import label_for
from .utils import console as default_console

E = TypeVar("E")


class PromptChooser:
    """Asks the user on the terminal for every value the resolver needs."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def ask_text(
        self,
        key: str,
        message: str,
        default: str,
        validate: Optional[Callable[[str], Optional[str]]] = None,
    ) -> str:
        while True:
            with _cancellable():
                value = Prompt.ask(message, default=default, console=self.console).strip()
            error = validate(value) if validate is not None else None
            if error is None:
                return value
            self.console.print(f"[red]{error}[/red]")

    def ask_select(self, key: str, message: str, options: Sequence[E], default: E) -> E:
        self.console.print(f"[bold]{message}[/bold]")
        for index, option in enumerate(options, start=1):
            label, hint = _describe(option)
            line = f"  [cyan]{index}[/cyan]. {label}"
            if hint:
                line += f" [dim]({hint})[/dim]"
            self.console.print(line)

        choices = [str(i) for i in range(1, len(options) + 1)]
        with _cancellable():
            answer = IntPrompt.ask(
                "Select",
                choices=choices,
                default=list(options).index(default) + 1,
                show_choices=False,
                console=self.console,
            )
        return options[answer - 1]

    def ask_confirm(self, key: str, message: str, default: bool) -> bool:
        with _cancellable():
            return Confirm.ask(message, default=default, console=self.console)


def _describe(option: object) -> tuple[str, str]:
    if isinstance(option, Enum):
        return label_for(option)
    return str(option), ""


@contextmanager
def _cancellable() -> Iterator[None]:
    """Turn prompt aborts into ``OperationCancelled``."""
    try:
        yield
    except (KeyboardInterrupt, EOFError) as exc:
        raise OperationCancelled() from exc
