"""Language preferences and keyword-based language detection."""

from dataclasses import dataclass, field
from typing import Protocol

from swiss_nutrition_mcp.domain.errors import InvalidInputError
from swiss_nutrition_mcp.domain.language import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Language,
    is_language_supported,
)

DEFAULT_USER_ID = "default"

_KEYWORDS: dict[Language, tuple[str, ...]] = {
    "de": (
        "apfel",
        "brot",
        "milch",
        "käse",
        "wasser",
        "zucker",
        "salz",
        "gemüse",
        "obst",
    ),
    "fr": (
        "pomme",
        "pain",
        "lait",
        "fromage",
        "eau",
        "sucre",
        "sel",
        "légume",
        "fruit",
    ),
    "it": (
        "mela",
        "pane",
        "latte",
        "formaggio",
        "acqua",
        "zucchero",
        "sale",
        "verdura",
        "frutta",
    ),
}


class LanguagePreferenceStore(Protocol):
    """Storage interface for per-user language choices."""

    def get(self, user_id: str) -> Language | None:
        """Return the stored language for a user, if any."""

    def set(self, user_id: str, language: Language) -> None:
        """Store a user's language."""


@dataclass
class InMemoryLanguagePreferenceStore(LanguagePreferenceStore):
    """Process-local preference store."""

    preferences: dict[str, Language] = field(default_factory=dict)

    def get(self, user_id: str) -> Language | None:
        return self.preferences.get(user_id)

    def set(self, user_id: str, language: Language) -> None:
        self.preferences[user_id] = language


@dataclass
class LanguageService:
    """Service for language preferences."""

    store: LanguagePreferenceStore
    default_language: Language = DEFAULT_LANGUAGE

    def get_preference(self, user_id: str = DEFAULT_USER_ID) -> Language:
        """Return the user's language or the configured default."""
        return self.store.get(user_id) or self.default_language

    def set_preference(self, user_id: str, language: str) -> None:
        """Validate and store a user's language."""
        if not is_language_supported(language):
            raise InvalidInputError(
                f"Unsupported language: {language}. "
                f"Supported languages are: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        self.store.set(user_id, language)  # type: ignore[arg-type]

    def resolve(self, language: str | None, user_id: str = DEFAULT_USER_ID) -> Language:
        """Return an explicit language, or the user's preference when omitted."""
        if language is None:
            return self.get_preference(user_id)
        if not is_language_supported(language):
            raise InvalidInputError(f"Unsupported language: {language}")
        return language  # type: ignore[return-value]


def detect_language(text: str) -> Language:
    """Guess the language of a food-related text from common food words.

    Only a strict winner counts; ties and texts without keywords fall back to
    English.
    """
    normalized = text.lower()
    counts = {
        language: sum(1 for word in words if word in normalized)
        for language, words in _KEYWORDS.items()
    }
    best = max(counts, key=lambda language: counts[language])
    best_count = counts[best]
    if best_count == 0:
        return DEFAULT_LANGUAGE
    if sum(1 for count in counts.values() if count == best_count) > 1:
        return DEFAULT_LANGUAGE
    return best
