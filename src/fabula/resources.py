"""Read-only content bundle: translations, info pages, audio, and prompts."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fabula.audio import Audio
from fabula.constants import AUDIO_FILENAME, INFO_PAGES_DIR, PROMPTS_DIR, TRANSLATIONS_DIR
from fabula.errors import ResourceError
from fabula.prompts import PromptDef, PromptFiles
from fabula.text import Translations


@dataclass
class Resources:
    """Loaded content. Never mutated by command handlers."""

    translations: Translations = field(default_factory=dict)
    info_pages: dict[str, str] = field(default_factory=dict)
    audio: Audio | None = None
    prompts: PromptFiles = field(default_factory=dict)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ResourceError(f"Invalid JSON in {path.name}: {e}") from e
    except OSError as e:
        raise ResourceError(f"Failed to read {path}: {e}") from e


def _load_translations(directory: Path) -> Translations:
    translations: Translations = {}
    for path in sorted(directory.glob("*.json")):
        data = _read_json(path)
        if not isinstance(data, dict):
            raise ResourceError(f"Translation file {path.name} must be a JSON object")
        translations[path.stem] = {str(k): str(v) for k, v in data.items()}
    return translations


def _load_info_pages(directory: Path) -> dict[str, str]:
    pages: dict[str, str] = {}
    for path in sorted(directory.glob("*.md")):
        try:
            pages[path.stem] = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceError(f"Failed to read info page {path}: {e}") from e
    return pages


def _load_prompts(directory: Path) -> PromptFiles:
    prompts: PromptFiles = {}
    for path in sorted(directory.glob("*.json")):
        data = _read_json(path)
        if not isinstance(data, dict):
            raise ResourceError(f"Prompt file {path.name} must be a JSON object")
        try:
            prompts[path.stem] = {
                str(name): PromptDef.from_dict(raw) for name, raw in data.items()
            }
        except (ValueError, TypeError, AttributeError) as e:
            raise ResourceError(f"Invalid prompt in {path.name}: {e}") from e
    return prompts


def _load_audio(path: Path) -> Audio | None:
    if not path.exists():
        return None
    data = _read_json(path)
    channels = data.get("channels") if isinstance(data, dict) else None
    if not isinstance(channels, list) or not all(isinstance(c, str) for c in channels):
        raise ResourceError(f"{path.name} must contain a 'channels' array of names")
    return Audio.from_channels(channels)


def load_resources(content_dir: str) -> Resources:
    """Load every resource found under a content directory.

    Missing subdirectories simply yield empty collections; audio is None
    when no audio.json is present.
    """
    root = Path(content_dir)
    if not root.is_dir():
        raise ResourceError(f"Content directory not found: {root}")

    return Resources(
        translations=_load_translations(root / TRANSLATIONS_DIR),
        info_pages=_load_info_pages(root / INFO_PAGES_DIR),
        audio=_load_audio(root / AUDIO_FILENAME),
        prompts=_load_prompts(root / PROMPTS_DIR),
    )
