"""Command dispatching for the fabula runtime."""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from fabula.commands import handlers
from fabula.commands.context import CommandContext
from fabula.commands.permissions import check_permission, is_normal
from fabula.commands.types import CommandResult, CommandTag
from fabula.errors import AppError, CommandError, CommandFailed
from fabula.logging import log_event
from fabula.manifest import Manifest
from fabula.resources import Resources
from fabula.saves import SaveManager
from fabula.session import Session
from fabula.text import TextContext
from fabula.ui.interaction import UserInteractionPort


@dataclass(frozen=True)
class CommandHandler:
    """Defines how to execute a command."""

    executor: Callable[[CommandContext], CommandResult]
    summary: str = ""


def _exec_back(ctx: CommandContext) -> CommandResult:
    return handlers.back(ctx.session)


def _exec_lang(ctx: CommandContext) -> CommandResult:
    return handlers.change_language(ctx.session, ctx.resources.translations, ctx.interaction)


def _exec_info(ctx: CommandContext) -> CommandResult:
    return handlers.info(ctx.session.info_pages, ctx.resources.info_pages, ctx.interaction)


def _exec_log(ctx: CommandContext) -> CommandResult:
    return handlers.log(ctx.session.log, ctx.interaction)


def _exec_sound(ctx: CommandContext) -> CommandResult:
    return handlers.sound(ctx.session, ctx.resources.audio, ctx.interaction)


def _exec_save(ctx: CommandContext) -> CommandResult:
    return handlers.save(ctx.session, ctx.saves)


def _exec_quit(ctx: CommandContext) -> CommandResult:
    return handlers.quit_game()


def _exec_prompt(ctx: CommandContext) -> CommandResult:
    return handlers.prompt(
        ctx.session.notes,
        ctx.resources.prompts,
        ctx.text_context,
        ctx.interaction,
    )


def _exec_notes(ctx: CommandContext) -> CommandResult:
    return handlers.notes(ctx.session)


def _exec_variables(ctx: CommandContext) -> CommandResult:
    return handlers.variables(ctx.session)


# Command registry
COMMAND_REGISTRY: dict[CommandTag, CommandHandler] = {
    CommandTag.BACK: CommandHandler(_exec_back, summary="Try going back a choice"),
    CommandTag.LANG: CommandHandler(_exec_lang, summary="Manage the display language"),
    CommandTag.INFO: CommandHandler(_exec_info, summary="Display an info page"),
    CommandTag.LOG: CommandHandler(_exec_log, summary="Display an action log page"),
    CommandTag.SOUND: CommandHandler(_exec_sound, summary="Manage sound effects and music channels"),
    CommandTag.SAVE: CommandHandler(_exec_save, summary="Save the player data"),
    CommandTag.QUIT: CommandHandler(_exec_quit, summary="Save and quit the game"),
    CommandTag.PROMPT: CommandHandler(_exec_prompt, summary="Display debug info about a prompt"),
    CommandTag.NOTES: CommandHandler(_exec_notes, summary="List the currently applied notes"),
    CommandTag.VARIABLES: CommandHandler(
        _exec_variables,
        summary="List the currently applied variable names and their values",
    ),
}


def parse_command(text: str) -> CommandTag | None:
    """Map one typed word to a command tag, or None if it is not a command.

    Matching is case-sensitive and commands take no arguments.
    """
    try:
        return CommandTag(text.strip())
    except ValueError:
        return None


def render_help_text(debug: bool = False) -> str:
    """Render help text from registry metadata; debug commands only in debug mode."""
    visible = [tag for tag in COMMAND_REGISTRY if debug or is_normal(tag)]
    width = max(len(tag.value) for tag in visible)

    lines = ["Available commands:"]
    for tag in visible:
        marker = "" if is_normal(tag) else " (debug)"
        lines.append(f"  {tag.value.ljust(width)} - {COMMAND_REGISTRY[tag].summary}{marker}")
    lines.append(f"  {'help'.ljust(width)} - Show available commands")
    return "\n".join(lines)


def run(
    tag: CommandTag,
    manifest: Manifest,
    session: Session,
    saves: SaveManager,
    resources: Resources,
    text_context: TextContext,
    interaction: UserInteractionPort,
) -> CommandResult:
    """Execute a runtime command if the player has permission to do so.

    Raises:
        PermissionDenied: Debug-only command outside debug mode (no handler runs)
        CommandFailed: Handler precondition or collaborator failure
    """
    started = time.perf_counter()
    try:
        check_permission(tag, manifest.debug)

        ctx = CommandContext(
            manifest=manifest,
            session=session,
            saves=saves,
            resources=resources,
            text_context=text_context,
            interaction=interaction,
        )
        try:
            result = COMMAND_REGISTRY[tag].executor(ctx)
        except CommandError:
            raise
        except AppError as e:
            raise CommandFailed(str(e)) from e

    except CommandError as e:
        log_event(
            "command_error",
            level=logging.WARNING,
            command=tag.value,
            error_type=type(e).__name__,
            error=str(e),
        )
        raise

    log_event(
        "command_exec",
        command=tag.value,
        result=result.kind,
        elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return result
