"""Pytest configuration and fixtures for fabula tests."""

import json
import logging

import pytest

from fabula.audio import Audio
from fabula.manifest import Manifest
from fabula.prompts import Choice, PromptDef
from fabula.repl import Runtime
from fabula.resources import Resources
from fabula.saves import SaveManager
from fabula.session import HistoryEntry, Session
from fabula.text import TextContext


class ScriptedInteraction:
    """Interaction stub answering selections from a script."""

    def __init__(self, selections=(), multi_selections=()):
        self.selections = list(selections)
        self.multi_selections = list(multi_selections)
        self.select_calls = []
        self.multi_select_calls = []
        self.notified = []
        self.rendered = []

    def select(self, message, options):
        self.select_calls.append((message, list(options)))
        answer = self.selections.pop(0)
        assert answer in [value for value, _ in options], f"{answer!r} not offered"
        return answer

    def multi_select(self, message, options, defaults=()):
        self.multi_select_calls.append((message, list(options), list(defaults)))
        return list(self.multi_selections.pop(0))

    def notify(self, message):
        self.notified.append(message)

    def render_markdown(self, text):
        self.rendered.append(text)


@pytest.fixture(autouse=True)
def reset_logging_disable():
    """Undo setup_logging(None) so tests stay independent."""
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def manifest():
    return Manifest(id="lighthouse", title="The Lighthouse", entry="main:start")


@pytest.fixture
def debug_manifest():
    return Manifest.model_validate(
        {
            "id": "lighthouse",
            "title": "The Lighthouse",
            "entry": "main:start",
            "settings": {"debug": True},
        }
    )


@pytest.fixture
def session():
    return Session(
        history=[HistoryEntry("main", "start"), HistoryEntry("main", "stairs")],
        lang="en",
        info_pages={"keeper"},
        log=["You climbed the stairs."],
        channels={"music"},
        notes={"omen"},
        variables={"name": "Ada"},
    )


@pytest.fixture
def resources():
    audio = Audio.from_channels(["music", "sfx", "ambience"])
    return Resources(
        translations={
            "en": {"start.content": "The lamp is dark, {{name}}."},
            "de": {"start.content": "Die Lampe ist dunkel, {{name}}."},
        },
        info_pages={"keeper": "# The Keeper\n\nGone for three days.", "lamp": "# Lamp"},
        audio=audio,
        prompts={
            "main": {
                "start": PromptDef(
                    content="start.content",
                    choices=[
                        Choice(response="Climb the stairs", jump="stairs"),
                        Choice(response="Leave", jump="outside:shore", requires=["key"]),
                    ],
                ),
                "stairs": PromptDef(
                    content="The stairs creak.",
                    choices=[Choice(response="Go down", jump="start", applies=["omen"])],
                ),
            },
        },
    )


@pytest.fixture
def saves(tmp_path):
    return SaveManager(tmp_path / "saves", "autosave")


@pytest.fixture
def text_context(session, resources):
    return TextContext(
        lang=session.lang,
        translations=resources.translations,
        variables=session.variables,
    )


@pytest.fixture
def interaction():
    return ScriptedInteraction()


@pytest.fixture
def runtime(manifest, session, saves, resources, interaction):
    return Runtime(
        manifest=manifest,
        session=session,
        saves=saves,
        resources=resources,
        interaction=interaction,
    )


@pytest.fixture
def content_dir(tmp_path):
    """Create a minimal content directory on disk."""
    root = tmp_path / "story"
    (root / "translations").mkdir(parents=True)
    (root / "info").mkdir()
    (root / "prompts").mkdir()

    manifest = {
        "id": "lighthouse",
        "title": "The Lighthouse",
        "entry": "main:start",
        "settings": {"default_lang": "en"},
    }
    (root / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
    (root / "translations" / "en.json").write_text(
        json.dumps({"greeting": "Hello"}), encoding="utf-8"
    )
    (root / "info" / "keeper.md").write_text("# The Keeper", encoding="utf-8")
    (root / "prompts" / "main.json").write_text(
        json.dumps(
            {
                "start": {
                    "content": "The lamp is dark.",
                    "choices": [{"response": "Climb", "jump": "stairs"}],
                },
                "stairs": {"content": "The stairs creak."},
            }
        ),
        encoding="utf-8",
    )
    (root / "audio.json").write_text(json.dumps({"channels": ["music", "sfx"]}), encoding="utf-8")
    return root
