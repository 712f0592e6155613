"""Blocking user interaction adapters for command flows."""

from __future__ import annotations

from typing import Collection, Optional, Protocol, Sequence, TypeVar

from prompt_toolkit.shortcuts import checkboxlist_dialog, radiolist_dialog
from rich.console import Console
from rich.markdown import Markdown

from ..errors import CommandFailed

T = TypeVar("T")


class UserInteractionPort(Protocol):
    """Minimal interaction contract used by command handlers.

    Options are (value, label) pairs; the chosen values are returned.
    """

    def select(self, message: str, options: Sequence[tuple[T, str]]) -> T:
        """Let the user pick exactly one option."""

    def multi_select(
        self,
        message: str,
        options: Sequence[tuple[T, str]],
        defaults: Collection[T] = (),
    ) -> list[T]:
        """Let the user pick any number of options, starting from defaults."""

    def notify(self, message: str) -> None:
        """Display one-way informational output."""

    def render_markdown(self, text: str) -> None:
        """Display markdown content."""


class ConsoleInteraction:
    """Terminal adapter: prompt_toolkit dialogs for choices, rich for output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def select(self, message: str, options: Sequence[tuple[T, str]]) -> T:
        result = radiolist_dialog(
            title=message,
            values=list(options),
            default=options[0][0] if options else None,
        ).run()
        if result is None:
            raise CommandFailed("Selection cancelled")
        return result

    def multi_select(
        self,
        message: str,
        options: Sequence[tuple[T, str]],
        defaults: Collection[T] = (),
    ) -> list[T]:
        result = checkboxlist_dialog(
            title=message,
            values=list(options),
            default_values=list(defaults),
        ).run()
        if result is None:
            raise CommandFailed("Selection cancelled")
        return list(result)

    def notify(self, message: str) -> None:
        print(message)

    def render_markdown(self, text: str) -> None:
        print()
        self.console.print(Markdown(text))
