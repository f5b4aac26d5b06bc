"""Constants module for the ChatMaster bot.

This module centralizes all magic numbers, limits, and configuration constants
used throughout the application for better maintainability.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class LanguageConstants:
    """Interface language settings."""

    DEFAULT: Final[str] = "uz"
    SUPPORTED: Final[tuple[str, ...]] = ("uz", "ru", "en")
    CALLBACK_PREFIX: Final[str] = "lang_"


@dataclass(frozen=True)
class APITimeouts:
    """Upper bounds in seconds for external calls."""

    COMPLETION: Final[int] = 60
    IMAGE_DOWNLOAD: Final[int] = 60


@dataclass(frozen=True)
class DownloadConstants:
    """Streaming download settings."""

    CHUNK_SIZE_BYTES: Final[int] = 64 * 1024
    SCRATCH_PREFIX: Final[str] = "temp_"
    SCRATCH_SUFFIX: Final[str] = ".jpg"


@dataclass(frozen=True)
class ErrorLogConstants:
    """Error logging constants."""

    MAX_TEXT_PREVIEW: Final[int] = 200
    MAX_RESPONSE_BODY_LENGTH: Final[int] = 1000


@dataclass(frozen=True)
class TelegramConstants:
    """Telegram API constants."""

    MAX_MESSAGE_LENGTH: Final[int] = 4096


# Export all constant classes as singletons
LANGUAGE_CONSTANTS = LanguageConstants()
API_TIMEOUTS = APITimeouts()
DOWNLOAD_CONSTANTS = DownloadConstants()
ERROR_LOG_CONSTANTS = ErrorLogConstants()
TELEGRAM_CONSTANTS = TelegramConstants()
