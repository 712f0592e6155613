"""Static permission table for runtime commands."""

from enum import Enum

from fabula.commands.types import CommandTag
from fabula.errors import PermissionDenied


class Permission(str, Enum):
    NORMAL = "normal"
    DEBUG_ONLY = "debug_only"


# Every tag must appear here; debug-only commands are hidden from help too.
COMMAND_PERMISSIONS: dict[CommandTag, Permission] = {
    CommandTag.BACK: Permission.NORMAL,
    CommandTag.LANG: Permission.NORMAL,
    CommandTag.INFO: Permission.NORMAL,
    CommandTag.LOG: Permission.NORMAL,
    CommandTag.SOUND: Permission.NORMAL,
    CommandTag.SAVE: Permission.NORMAL,
    CommandTag.QUIT: Permission.NORMAL,
    CommandTag.PROMPT: Permission.DEBUG_ONLY,
    CommandTag.NOTES: Permission.DEBUG_ONLY,
    CommandTag.VARIABLES: Permission.DEBUG_ONLY,
}


def is_normal(tag: CommandTag) -> bool:
    """Return True if the command is allowed outside debug mode."""
    return COMMAND_PERMISSIONS[tag] is Permission.NORMAL


def check_permission(tag: CommandTag, debug: bool) -> None:
    """Raise PermissionDenied for debug-only commands when debug is off."""
    if not debug and not is_normal(tag):
        raise PermissionDenied("Unable to access debug commands")
