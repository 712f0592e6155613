"""Structured logging primitives for fabula."""

from .events import log_event, setup_logging
from .formatter import StructuredTextFormatter
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER

__all__ = [
    "DEFAULT_EVENT_KEY_ORDER",
    "EVENT_KEY_ORDER",
    "StructuredTextFormatter",
    "log_event",
    "setup_logging",
]
