"""Manifest loading and validation."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from fabula.constants import MANIFEST_FILENAME, SAVES_DIR
from fabula.errors import ConfigError
from fabula.session import HistoryEntry


class ManifestSettings(BaseModel):
    debug: bool = False
    default_lang: str = "en"
    save_slot: str = "autosave"
    saves_dir: str = SAVES_DIR


class Manifest(BaseModel):
    """Content manifest. Read-only for the runtime."""

    id: str
    title: str
    version: str = "0.1.0"
    entry: str
    settings: ManifestSettings = Field(default_factory=ManifestSettings)

    @field_validator("entry")
    @classmethod
    def _validate_entry(cls, value: str) -> str:
        file, sep, prompt = value.partition(":")
        if not sep or not file or not prompt:
            raise ValueError("entry must look like 'file:prompt'")
        return value

    @property
    def debug(self) -> bool:
        return self.settings.debug

    def entry_point(self) -> HistoryEntry:
        """Return the story prompt a new session starts on."""
        file, _, prompt = self.entry.partition(":")
        return HistoryEntry(file=file, prompt=prompt)


def resolve_saves_dir(manifest: Manifest, content_dir: str) -> Path:
    """Resolve the saves directory; relative paths live under the content directory."""
    saves_dir = Path(manifest.settings.saves_dir).expanduser()
    if saves_dir.is_absolute():
        return saves_dir
    return Path(content_dir) / saves_dir


def load_manifest(content_dir: str, debug: bool | None = None) -> Manifest:
    """Load and validate the manifest of a content directory.

    Args:
        content_dir: Directory holding manifest.json
        debug: Optional override for settings.debug

    Returns:
        Validated Manifest

    Raises:
        ConfigError: If the manifest is missing, malformed, or invalid
    """
    manifest_path = Path(content_dir) / MANIFEST_FILENAME

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Manifest not found: {manifest_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in manifest: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read manifest: {manifest_path}: {e}") from e

    try:
        manifest = Manifest.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "manifest"
        raise ConfigError(f"Invalid manifest ({location}): {first['msg']}") from e

    if debug is not None:
        manifest = manifest.model_copy(
            update={"settings": manifest.settings.model_copy(update={"debug": debug})}
        )
    return manifest
