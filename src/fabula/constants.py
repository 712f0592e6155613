"""Shared constants for fabula."""

APP_NAME = "fabula"

MANIFEST_FILENAME = "manifest.json"
AUDIO_FILENAME = "audio.json"
TRANSLATIONS_DIR = "translations"
INFO_PAGES_DIR = "info"
PROMPTS_DIR = "prompts"
SAVES_DIR = "saves"

SAVE_FILE_EXTENSION = ".json"
# Action log paging
LOG_PAGE_SIZE = 5
LOG_LABEL_LENGTH = 25
LOG_LABEL_SUFFIX = "..."
LOG_ENTRY_SEPARATOR = "\n\n"

DEBUG_ENV_VAR = "FABULA_DEBUG"
