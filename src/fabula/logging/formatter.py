"""Render fabula's JSON log events as readable text blocks."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from ..constants import APP_NAME
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER


def _decode_event(record: logging.LogRecord) -> dict[str, Any]:
    """Return the event payload carried by a record.

    Records from log_event hold a JSON object with an "event" key; anything
    else becomes an event named after its logger.
    """
    message = record.getMessage()
    try:
        payload = json.loads(message)
    except json.JSONDecodeError:
        payload = None
    if isinstance(payload, dict) and "event" in payload:
        return payload
    return {"event": record.name, "message": message}


def _one_line(value: Any) -> str:
    return str(value).replace("\n", "\\n")


def _field_order(event_name: str, fields: dict[str, Any]) -> list[str]:
    preferred = EVENT_KEY_ORDER.get(event_name, DEFAULT_EVENT_KEY_ORDER)
    present = [key for key in fields if fields[key] is not None]
    return [key for key in preferred if key in present] + sorted(
        key for key in present if key not in preferred
    )


class StructuredTextFormatter(logging.Formatter):
    """Format each event as a `=== event ===` header and `key: value` lines.

    Entries after the first are preceded by a blank line.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._entries = 0

    def format(self, record: logging.LogRecord) -> str:
        fields = _decode_event(record)
        event_name = str(fields.pop("event"))
        fields.setdefault(
            "ts", datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        )
        fields["level"] = record.levelname
        if record.name != APP_NAME:
            fields["logger"] = record.name

        lines = [f"=== {event_name} ==="]
        for key in _field_order(event_name, fields):
            lines.append(f"{key}: {_one_line(fields[key])}")

        if record.exc_info:
            lines.append("traceback:")
            lines.append(self.formatException(record.exc_info))

        self._entries += 1
        body = "\n".join(lines)
        return body if self._entries == 1 else "\n" + body
