"""Localized lookups for prompts, greetings and error messages.

Every lookup falls back to the default language ("uz") when the requested
language code is not supported.
"""

from __future__ import annotations

from constants import LANGUAGE_CONSTANTS
from errors import ErrorKind
import strings as S


def normalize_language(language: str | None) -> str:
    """Return ``language`` if supported, otherwise the default language."""
    if language in LANGUAGE_CONSTANTS.SUPPORTED:
        return language
    return LANGUAGE_CONSTANTS.DEFAULT


def get_system_message(language: str | None) -> str:
    """System prompt sent ahead of every completion request."""
    return S.SYSTEM_MESSAGES[normalize_language(language)]


def get_error_message(kind: ErrorKind | str, language: str | None) -> str:
    """
    Localized error text for an error kind.

    Args:
        kind: An ErrorKind member or its string value (e.g. "api")
        language: Interface language code

    Raises:
        ValueError: If ``kind`` is not a known error kind
    """
    return S.ERROR_MESSAGES[ErrorKind(kind)][normalize_language(language)]


def get_welcome_message(language: str | None) -> str:
    return S.WELCOME_MESSAGES[normalize_language(language)]


def get_start_greeting(language: str | None) -> str:
    return S.START_GREETINGS[normalize_language(language)]


def build_image_prompt(extracted_text: str, language: str | None) -> str:
    """Wrap OCR output as "<label>: <text>\\n\\n<instruction>"."""
    language = normalize_language(language)
    return (
        f"{S.IMAGE_TEXT_LABELS[language]}: {extracted_text}\n\n"
        f"{S.IMAGE_TEXT_INSTRUCTIONS[language]}"
    )


def validate_localization() -> tuple[bool, list[str]]:
    """
    Check that every table has a non-empty string for every supported language.

    Returns:
        Tuple of (is_valid, list of missing entries as "table.key.language")
    """
    tables: dict[str, dict[str, str]] = {
        "system": S.SYSTEM_MESSAGES,
        "image_label": S.IMAGE_TEXT_LABELS,
        "image_instruction": S.IMAGE_TEXT_INSTRUCTIONS,
        "start": S.START_GREETINGS,
        "welcome": S.WELCOME_MESSAGES,
        "language_button": S.BTN_LANGUAGES,
    }
    for kind in ErrorKind:
        tables[f"error.{kind.value}"] = S.ERROR_MESSAGES.get(kind, {})

    missing = []
    for name, table in tables.items():
        for language in LANGUAGE_CONSTANTS.SUPPORTED:
            if not table.get(language):
                missing.append(f"{name}.{language}")

    return len(missing) == 0, missing
