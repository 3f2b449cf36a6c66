"""Language utilities for astro-explorer.

Centralizes the label languages supported by the front-end. Living in the
domain layer lets services and the CLI share it without circular imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing labels."""

    ENGLISH = "en"
    PORTUGUESE = "pt"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Portuguese" if self is Language.PORTUGUESE else "English"
