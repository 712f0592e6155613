"""Runtime command handlers.

Each handler takes only the collaborators it reads or mutates and returns a
CommandResult, raising CommandFailed when its precondition does not hold.
"""

from typing import Mapping

from fabula import prompts as prompt_util
from fabula.audio import Audio
from fabula.commands.types import (
    CommandResult,
    ContinueSignal,
    Output,
    ShutdownSignal,
    Submit,
    retry,
)
from fabula.constants import (
    LOG_ENTRY_SEPARATOR,
    LOG_LABEL_LENGTH,
    LOG_LABEL_SUFFIX,
    LOG_PAGE_SIZE,
)
from fabula.errors import CommandFailed, ResourceError
from fabula.prompts import PromptFiles
from fabula.saves import SaveManager
from fabula.session import Session
from fabula.text import TextContext, Translations
from fabula.ui.interaction import UserInteractionPort


def back(session: Session) -> CommandResult:
    """Step back one choice in the story."""
    if len(session.history) <= 1:
        raise CommandFailed("Can't go back right now!")
    session.back()
    return Submit(ContinueSignal())


def change_language(
    session: Session,
    translations: Translations,
    interaction: UserInteractionPort,
) -> CommandResult:
    """Switch the display language."""
    if not translations:
        raise CommandFailed("No display languages loaded")

    session.lang = interaction.select(
        "Select a language",
        [(name, name) for name in translations],
    )
    return retry()


def info(
    unlocked_pages: set[str],
    pages: Mapping[str, str],
    interaction: UserInteractionPort,
) -> CommandResult:
    """Display one of the unlocked info pages."""
    if not unlocked_pages:
        raise CommandFailed("No info pages unlocked")

    page_id = interaction.select(
        "Select an info page",
        [(page, page) for page in sorted(unlocked_pages)],
    )
    content = pages.get(page_id)
    if content is None:
        raise ResourceError(f"Info page '{page_id}' not found")

    interaction.render_markdown(content)
    return retry()


def log_pages(entries: list[str]) -> list[list[str]]:
    """Split log entries into fixed-size pages."""
    return [entries[i : i + LOG_PAGE_SIZE] for i in range(0, len(entries), LOG_PAGE_SIZE)]


def log_page_label(page: list[str]) -> str:
    """Label a page by the start of its first entry.

    Entries shorter than the label length are used whole.
    """
    return page[0][:LOG_LABEL_LENGTH] + LOG_LABEL_SUFFIX


def log(entries: list[str], interaction: UserInteractionPort) -> CommandResult:
    """Display one page of the action log."""
    if not entries:
        raise CommandFailed("No log entries to display")

    pages = log_pages(entries)
    index = interaction.select(
        "Log page",
        [(i, log_page_label(page)) for i, page in enumerate(pages)],
    )
    return Output(LOG_ENTRY_SEPARATOR.join(pages[index]))


def sound(
    session: Session,
    audio: Audio | None,
    interaction: UserInteractionPort,
) -> CommandResult:
    """Enable or disable sound channels.

    Channels are updated one at a time; if a later channel fails, earlier
    updates stay applied.
    """
    if audio is None:
        raise CommandFailed("No sound channels loaded")

    channel_names = list(audio.players)
    enabled = set(session.channels)
    selected = set(
        interaction.multi_select(
            "Select sound channels",
            [(name, name) for name in channel_names],
            defaults=[name for name in channel_names if name in enabled],
        )
    )

    for channel in channel_names:
        if channel in selected:
            session.channels.add(channel)
            continue
        # Channels that were never enabled are left alone.
        if channel not in enabled:
            continue
        session.channels.discard(channel)
        player = audio.get_player(channel)
        if player.is_playing:
            player.stop()

    return retry()


def save(session: Session, saves: SaveManager) -> CommandResult:
    """Write the session to the default save slot."""
    saves.write(session, None, False)
    return Output("Saving... ")


def quit_game() -> CommandResult:
    return Submit(ShutdownSignal(silent=False))


def prompt(
    notes: set[str],
    prompts: PromptFiles,
    text_context: TextContext,
    interaction: UserInteractionPort,
) -> CommandResult:
    """Describe any prompt for debugging."""
    if not prompts:
        raise CommandFailed("No prompt files loaded")

    file = interaction.select("Prompt file", [(name, name) for name in prompts])
    prompt_names = prompt_util.get_file(prompts, file)
    if not prompt_names:
        raise CommandFailed(f"No prompts in '{file}'")

    name = interaction.select(
        f"Prompt in '{file}'",
        [(prompt_name, prompt_name) for prompt_name in prompt_names],
    )
    definition = prompt_util.get_prompt(prompts, name, file)
    return Output(definition.debug_info(name, file, prompts, notes, text_context))


def notes(session: Session) -> CommandResult:
    """List the applied notes."""
    if not session.notes:
        raise CommandFailed("No notes applied")
    return Output(", ".join(sorted(session.notes)))


def variables(session: Session) -> CommandResult:
    """List applied variables and their values."""
    if not session.variables:
        raise CommandFailed("No variables applied")
    lines = [f"{name}: {value}" for name, value in sorted(session.variables.items())]
    return Output("\n" + "\n".join(lines))
