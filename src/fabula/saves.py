"""Session persistence to per-slot JSON save files."""

import json
from datetime import datetime, timezone
from pathlib import Path

from fabula.constants import SAVE_FILE_EXTENSION
from fabula.errors import StorageError
from fabula.logging import log_event
from fabula.session import Session


class SaveManager:
    """Reads and writes session save files inside one directory."""

    def __init__(self, saves_dir: str | Path, default_slot: str) -> None:
        self.saves_dir = Path(saves_dir)
        self.default_slot = default_slot

    def path_for(self, slot: str | None = None) -> Path:
        """Return the save file path for a slot (default slot when None)."""
        name = slot or self.default_slot
        if not name or any(sep in name for sep in ("/", "\\")) or name in (".", ".."):
            raise StorageError(f"Invalid save slot: {name!r}")
        return self.saves_dir / f"{name}{SAVE_FILE_EXTENSION}"

    def exists(self, slot: str | None = None) -> bool:
        return self.path_for(slot).exists()

    def write(self, session: Session, slot: str | None = None, silent: bool = False) -> Path:
        """Write the session to a save slot.

        Args:
            session: Session to persist
            slot: Slot name override; the default slot when None
            silent: Skip the save_write log event

        Returns:
            Path of the written save file

        Raises:
            StorageError: If the file cannot be written
        """
        save_path = self.path_for(slot)
        payload = {
            "saved_utc": datetime.now(timezone.utc).isoformat(),
            "session": session.to_dict(),
        }

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(save_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Failed to write save file: {save_path}: {e}") from e

        if not silent:
            log_event(
                "save_write",
                slot=slot or self.default_slot,
                save_file=save_path,
                history_len=len(session.history),
            )
        return save_path

    def read(self, slot: str | None = None) -> Session | None:
        """Load a session from a save slot, or None when the slot is empty."""
        if not self.exists(slot):
            return None
        save_path = self.path_for(slot)

        try:
            with open(save_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in save file: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read save file: {save_path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("session"), dict):
            raise StorageError(f"Invalid save file structure: {save_path}")

        try:
            return Session.from_dict(data["session"])
        except (ValueError, TypeError) as e:
            raise StorageError(f"Invalid save file: {save_path}: {e}") from e
