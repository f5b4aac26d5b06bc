"""Error taxonomy for the ChatMaster bot.

Pipeline steps raise these exceptions with a kind and a technical detail.
They are never pre-localized; the message orchestrator maps ``kind`` to a
user-facing string through localization.get_error_message().
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """User-visible error categories, one localized string each."""

    API = "api"
    CONNECTION = "connection"
    OCR = "ocr"
    NO_TEXT = "no_text"
    VOICE = "voice"


class BotError(Exception):
    """Base class for all typed pipeline failures."""

    kind: ErrorKind = ErrorKind.CONNECTION


class AcquisitionError(BotError):
    """Image download failed (bad status or transport failure)."""

    kind = ErrorKind.CONNECTION

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ExtractionError(BotError):
    """The OCR engine raised an error."""

    kind = ErrorKind.OCR


class EmptyTextError(BotError):
    """OCR succeeded but produced no usable text."""

    kind = ErrorKind.NO_TEXT


class CompletionError(BotError):
    """The completion provider failed or returned no usable reply.

    Carries either the HTTP ``status`` and raw response ``body`` or a
    parse-failure ``reason``.
    """

    kind = ErrorKind.API

    def __init__(
        self,
        message: str = "",
        *,
        status: int | None = None,
        body: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message or reason or f"HTTP {status}")
        self.status = status
        self.body = body
        self.reason = reason


class CompletionConnectionError(CompletionError):
    """The completion call hit a transport failure or its timeout."""

    kind = ErrorKind.CONNECTION


class UnsupportedInputError(BotError):
    """Voice messages are not supported."""

    kind = ErrorKind.VOICE


class UnclassifiedError(BotError):
    """Any other exception raised while orchestrating a message."""

    kind = ErrorKind.CONNECTION

    def __init__(self, original: BaseException) -> None:
        super().__init__(f"{type(original).__name__}: {original}")
        self.original = original


def classify_exception(error: BaseException) -> BotError:
    """Return ``error`` itself when typed, otherwise wrap it as unclassified."""
    if isinstance(error, BotError):
        return error
    return UnclassifiedError(error)
