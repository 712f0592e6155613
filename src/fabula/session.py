"""Player session state container for the fabula runtime."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from fabula.errors import CommandFailed


@dataclass(frozen=True)
class HistoryEntry:
    """One visited story prompt."""

    file: str
    prompt: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "HistoryEntry":
        """Create history entry from a dict-like payload."""
        missing = {"file", "prompt"} - set(payload.keys())
        if missing:
            raise ValueError(f"History entry missing required fields: {', '.join(sorted(missing))}")
        return cls(file=str(payload["file"]), prompt=str(payload["prompt"]))

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "prompt": self.prompt}

    def __str__(self) -> str:
        return f"{self.file}:{self.prompt}"


@dataclass
class Session:
    """In-memory runtime state for one player."""

    history: list[HistoryEntry] = field(default_factory=list)
    lang: str = "en"
    info_pages: set[str] = field(default_factory=set)
    log: list[str] = field(default_factory=list)
    channels: set[str] = field(default_factory=set)
    notes: set[str] = field(default_factory=set)
    variables: dict[str, str] = field(default_factory=dict)

    @property
    def current(self) -> HistoryEntry | None:
        """Return the prompt the player is currently on."""
        return self.history[-1] if self.history else None

    def back(self) -> HistoryEntry:
        """Step back one choice and return the removed entry."""
        if not self.history:
            raise CommandFailed("No history to go back to")
        return self.history.pop()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Session":
        """Create session from a persisted dict payload."""
        raw_history = payload.get("history", [])
        if not isinstance(raw_history, list):
            raise ValueError("Invalid session structure: 'history' must be an array")

        variables = payload.get("variables", {})
        if not isinstance(variables, Mapping):
            raise ValueError("Invalid session structure: 'variables' must be an object")

        return cls(
            history=[HistoryEntry.from_dict(entry) for entry in raw_history],
            lang=str(payload.get("lang", "en")),
            info_pages={str(page) for page in payload.get("info_pages", [])},
            log=[str(entry) for entry in payload.get("log", [])],
            channels={str(channel) for channel in payload.get("channels", [])},
            notes={str(note) for note in payload.get("notes", [])},
            variables={str(k): str(v) for k, v in variables.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize session to a persistence dict payload."""
        return {
            "history": [entry.to_dict() for entry in self.history],
            "lang": self.lang,
            "info_pages": sorted(self.info_pages),
            "log": list(self.log),
            "channels": sorted(self.channels),
            "notes": sorted(self.notes),
            "variables": dict(self.variables),
        }
