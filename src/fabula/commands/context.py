"""Command execution context for explicit dependency wiring."""

from __future__ import annotations

from dataclasses import dataclass

from ..manifest import Manifest
from ..resources import Resources
from ..saves import SaveManager
from ..session import Session
from ..text import TextContext
from ..ui.interaction import UserInteractionPort


@dataclass(slots=True)
class CommandContext:
    """Collaborators available to one dispatch call.

    Executors hand each handler only the pieces it needs.
    """

    manifest: Manifest
    session: Session
    saves: SaveManager
    resources: Resources
    text_context: TextContext
    interaction: UserInteractionPort
