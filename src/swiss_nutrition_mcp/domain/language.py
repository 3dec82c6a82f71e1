"""Supported result languages."""

from typing import Literal, get_args

Language = Literal["en", "de", "fr", "it"]

SUPPORTED_LANGUAGES: tuple[str, ...] = get_args(Language)
DEFAULT_LANGUAGE: Language = "en"


def is_language_supported(language: str) -> bool:
    """Return True when the language code is one the database serves."""
    return language in SUPPORTED_LANGUAGES
