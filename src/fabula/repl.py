"""Runtime command console: the game loop's side of command dispatch."""

import os
import traceback
from dataclasses import dataclass
from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from fabula.commands import dispatcher
from fabula.commands.types import ContinueSignal, LoopSignal, ShutdownSignal, to_loop_signal
from fabula.constants import DEBUG_ENV_VAR
from fabula.errors import AppError
from fabula.manifest import Manifest
from fabula.prompts import get_prompt
from fabula.resources import Resources
from fabula.saves import SaveManager
from fabula.session import Session
from fabula.text import TextContext
from fabula.ui.interaction import UserInteractionPort


@dataclass
class Runtime:
    """Everything one play session needs, owned by the console."""

    manifest: Manifest
    session: Session
    saves: SaveManager
    resources: Resources
    interaction: UserInteractionPort

    def text_context(self) -> TextContext:
        return TextContext(
            lang=self.session.lang,
            translations=self.resources.translations,
            variables=self.session.variables,
        )


def _report_unexpected_error(error: Exception) -> None:
    """Print an unexpected exception with optional debug traceback."""
    print(f"ERROR: {error}")
    if os.getenv(DEBUG_ENV_VAR):
        print("Debug traceback:")
        traceback.print_exc()


def present_current_prompt(runtime: Runtime) -> None:
    """Show the story prompt at the head of the history."""
    current = runtime.session.current
    if current is None:
        print("(no story position)")
        return

    text = runtime.text_context()
    definition = get_prompt(runtime.resources.prompts, current.prompt, current.file)
    print()
    print(text.get(definition.content))
    for i, choice in enumerate(definition.choices, 1):
        if choice.is_available(runtime.session.notes):
            print(f"  {i}. {text.get(choice.response)}")


def handle_line(line: str, runtime: Runtime) -> LoopSignal | None:
    """Run a typed runtime command and return the loop's next action.

    Returns None when the line is not a runtime command.
    """
    tag = dispatcher.parse_command(line)
    if tag is None:
        return None

    result = dispatcher.run(
        tag,
        runtime.manifest,
        runtime.session,
        runtime.saves,
        runtime.resources,
        runtime.text_context(),
        runtime.interaction,
    )
    return to_loop_signal(result, runtime.interaction.notify)


def shutdown(runtime: Runtime, silent: bool) -> None:
    """Save and say goodbye unless the shutdown is silent."""
    if silent:
        return
    runtime.saves.write(runtime.session, None, False)
    print("Saved. Goodbye!")


def repl(runtime: Runtime, read_line: Optional[Callable[[str], str]] = None) -> bool:
    """Run the console loop until shutdown.

    Returns:
        Whether the shutdown should be silent
    """
    read = read_line or PromptSession(history=InMemoryHistory()).prompt

    print()
    print("Type 'help' for commands, 'quit' or Ctrl-D to exit")

    redraw = True
    while True:
        try:
            # A prompt that fails to render is reported once, not redrawn.
            if redraw:
                redraw = False
                present_current_prompt(runtime)

            print()
            line = read("> ").strip()
            if not line:
                continue

            if line == "help":
                print(dispatcher.render_help_text(runtime.manifest.debug))
                continue

            signal = handle_line(line, runtime)
            if signal is None:
                print(f"Unknown command: {line} (type 'help')")
                continue

            if isinstance(signal, ShutdownSignal):
                return signal.silent
            redraw = isinstance(signal, ContinueSignal) or signal.redraw

        except EOFError:
            print()
            return False

        except KeyboardInterrupt:
            print()
            continue

        except AppError as e:
            # Command failures and permission errors; re-prompt.
            print(f"ERROR: {e}")

        except Exception as e:
            _report_unexpected_error(e)
