"""Typed command tags, loop signals, and results exchanged with the game loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Literal, TypeAlias


class CommandTag(StrEnum):
    """Runtime commands, valued by the word the player types."""

    BACK = "back"
    LANG = "lang"
    INFO = "info"
    LOG = "log"
    SOUND = "sound"
    SAVE = "save"
    QUIT = "quit"
    PROMPT = "prompt"
    NOTES = "notes"
    VARIABLES = "variables"


@dataclass(slots=True, frozen=True)
class ContinueSignal:
    """Proceed with the game loop from the (possibly changed) history head."""

    kind: Literal["continue"] = "continue"


@dataclass(slots=True, frozen=True)
class RetrySignal:
    """Ask for input again; redraw re-presents the current prompt first."""

    redraw: bool = True
    kind: Literal["retry"] = "retry"


@dataclass(slots=True, frozen=True)
class ShutdownSignal:
    """Stop the game loop; silent skips the exit save and farewell."""

    silent: bool = False
    kind: Literal["shutdown"] = "shutdown"


LoopSignal: TypeAlias = ContinueSignal | RetrySignal | ShutdownSignal


@dataclass(slots=True, frozen=True)
class Submit:
    """Hand an explicit loop signal back to the game loop."""

    signal: LoopSignal
    kind: Literal["submit"] = "submit"


@dataclass(slots=True, frozen=True)
class Output:
    """Text to display; the game loop must retry afterwards."""

    text: str
    kind: Literal["output"] = "output"


CommandResult: TypeAlias = Submit | Output


def retry() -> Submit:
    """Result for commands that changed what the current prompt looks like."""
    return Submit(RetrySignal(redraw=True))


def to_loop_signal(result: CommandResult, display: Callable[[str], None]) -> LoopSignal:
    """Convert a command result into the game loop's next action.

    Output carries no loop control of its own: its text is displayed and the
    loop retries without redrawing, so the text stays on screen.
    """
    if isinstance(result, Output):
        display(result.text)
        return RetrySignal(redraw=False)
    return result.signal
