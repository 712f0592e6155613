"""User interaction adapters for fabula."""

from .interaction import ConsoleInteraction, UserInteractionPort

__all__ = [
    "ConsoleInteraction",
    "UserInteractionPort",
]
