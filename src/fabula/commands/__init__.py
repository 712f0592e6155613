"""Runtime command system façade for fabula."""

from .dispatcher import COMMAND_REGISTRY, parse_command, render_help_text, run
from .permissions import COMMAND_PERMISSIONS, Permission, is_normal
from .types import (
    CommandResult,
    CommandTag,
    ContinueSignal,
    LoopSignal,
    Output,
    RetrySignal,
    ShutdownSignal,
    Submit,
    to_loop_signal,
)

__all__ = [
    "COMMAND_PERMISSIONS",
    "COMMAND_REGISTRY",
    "CommandResult",
    "CommandTag",
    "ContinueSignal",
    "LoopSignal",
    "Output",
    "Permission",
    "RetrySignal",
    "ShutdownSignal",
    "Submit",
    "is_normal",
    "parse_command",
    "render_help_text",
    "run",
    "to_loop_signal",
]
