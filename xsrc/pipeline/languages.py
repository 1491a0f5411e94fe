"""
Closed set of target languages.

Each backend stage (rewriter naming rules, serializers) keys its registry on
:class:`LanguageId`, so adding a language means adding one member here and one
entry per registry.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnsupportedTargetLanguageError


class LanguageId(str, Enum):
    """Target languages the generator can emit."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"

    @staticmethod
    def parse(value: str | LanguageId) -> LanguageId:
        """Resolve a language name or alias (``js``, ``ts``, ``py``).

        Raises:
            UnsupportedTargetLanguageError: If the name is not a known target
        """
        if isinstance(value, LanguageId):
            return value
        key = str(value).strip().lower()
        key = ALIASES.get(key, key)
        try:
            return LanguageId(key)
        except ValueError:
            supported = ", ".join(lang.value for lang in LanguageId)
            raise UnsupportedTargetLanguageError(f"Unsupported target language '{value}' (supported: {supported})") from None


ALIASES = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
}
