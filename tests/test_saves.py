"""Tests for save manager."""

import json
import logging

import pytest
from freezegun import freeze_time

from fabula.errors import StorageError
from fabula.saves import SaveManager
from fabula.session import Session


class TestWrite:
    """Test writing save files."""

    @freeze_time("2026-02-09 10:00:00")
    def test_write_default_slot(self, saves, session):
        """Test that write stores the session with a UTC timestamp."""
        path = saves.write(session)

        assert path == saves.saves_dir / "autosave.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["saved_utc"] == "2026-02-09T10:00:00+00:00"
        assert data["session"] == session.to_dict()

    def test_write_slot_override(self, saves, session):
        """Test that an explicit slot writes a separate file."""
        path = saves.write(session, "chapter2")

        assert path.name == "chapter2.json"
        assert not saves.exists()

    def test_write_logs_unless_silent(self, saves, session, caplog):
        """Test that only non-silent writes emit save_write."""
        with caplog.at_level(logging.INFO, logger="fabula"):
            saves.write(session, silent=True)
            assert not caplog.records
            saves.write(session)

        assert any('"event":"save_write"' in r.getMessage() for r in caplog.records)

    def test_write_failure_raises_storage_error(self, tmp_path, session):
        """Test that OS errors surface as StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        saves = SaveManager(blocker / "saves", "autosave")

        with pytest.raises(StorageError, match="Failed to write save file"):
            saves.write(session)

    @pytest.mark.parametrize("slot", ["../escape", "a/b", "..", "."])
    def test_invalid_slot_names(self, saves, session, slot):
        """Test that slot names cannot leave the saves directory."""
        with pytest.raises(StorageError, match="Invalid save slot"):
            saves.write(session, slot)


class TestRead:
    """Test reading save files."""

    def test_read_missing_slot(self, saves):
        """Test that an empty slot reads as None."""
        assert saves.read() is None

    def test_read_back_written_session(self, saves, session):
        """Test that a written session reads back equal."""
        saves.write(session)

        assert saves.read() == session

    def test_read_invalid_json(self, saves):
        """Test that corrupt save files raise StorageError."""
        saves.saves_dir.mkdir(parents=True)
        saves.path_for().write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError, match="Invalid JSON"):
            saves.read()

    def test_read_invalid_structure(self, saves):
        """Test that save files without a session object are rejected."""
        saves.saves_dir.mkdir(parents=True)
        saves.path_for().write_text(json.dumps({"session": []}), encoding="utf-8")

        with pytest.raises(StorageError, match="Invalid save file structure"):
            saves.read()

    def test_read_invalid_session(self, saves):
        """Test that malformed session payloads are rejected."""
        saves.saves_dir.mkdir(parents=True)
        saves.path_for().write_text(
            json.dumps({"session": {"history": "oops"}}), encoding="utf-8"
        )

        with pytest.raises(StorageError, match="Invalid save file"):
            saves.read()

    def test_read_empty_session(self, saves):
        """Test that a minimal save yields a default session."""
        saves.saves_dir.mkdir(parents=True)
        saves.path_for().write_text(json.dumps({"session": {}}), encoding="utf-8")

        assert saves.read() == Session()
