"""
Per-chat language preference storage.

The store is the bot's only shared mutable state. Handlers receive it through
``application.bot_data`` so the in-memory implementation can be replaced by a
persistent one without touching the handlers.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from config import logger
from constants import LANGUAGE_CONSTANTS

BOT_DATA_KEY = "language_store"


class LanguagePreferenceStore(ABC):
    """Mapping chat id -> language code with a default for unknown chats."""

    @abstractmethod
    def get(self, chat_id: int) -> str:
        """Return the chat's language, or the default language if unset."""

    @abstractmethod
    def set(self, chat_id: int, language: str) -> None:
        """Store a supported language code for the chat."""


class InMemoryLanguageStore(LanguagePreferenceStore):
    """Process-lifetime store; entries are never deleted."""

    def __init__(self, default_language: str = LANGUAGE_CONSTANTS.DEFAULT) -> None:
        self.default_language = default_language
        self._languages: dict[int, str] = {}
        self._lock = threading.Lock()

    def get(self, chat_id: int) -> str:
        with self._lock:
            return self._languages.get(chat_id, self.default_language)

    def set(self, chat_id: int, language: str) -> None:
        if language not in LANGUAGE_CONSTANTS.SUPPORTED:
            raise ValueError(f"Unsupported language code: {language!r}")
        with self._lock:
            self._languages[chat_id] = language
        logger.info(f"Language for chat {chat_id} set to {language}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._languages)


def get_language_store(context) -> LanguagePreferenceStore:
    """Fetch the store injected into ``context.bot_data`` by build_application()."""
    store = context.bot_data.get(BOT_DATA_KEY)
    if store is None:
        store = context.bot_data.setdefault(BOT_DATA_KEY, InMemoryLanguageStore())
    return store
