"""Display text lookup and variable substitution."""

import re
from dataclasses import dataclass, field
from typing import Mapping, TypeAlias

# language name -> translation key -> text
Translations: TypeAlias = dict[str, dict[str, str]]

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


@dataclass(frozen=True)
class TextContext:
    """Everything needed to turn story text into display text."""

    lang: str
    translations: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    variables: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str:
        """Return the translation of key in the active language, or key itself."""
        table = self.translations.get(self.lang, {})
        return self.fill(table.get(key, key))

    def fill(self, text: str) -> str:
        """Substitute {{name}} placeholders with session variable values.

        Unknown names are left in place so missing variables stay visible.
        """
        def _replace(match: re.Match[str]) -> str:
            return self.variables.get(match.group(1), match.group(0))

        return _PLACEHOLDER_RE.sub(_replace, text)
