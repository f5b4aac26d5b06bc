"""Builds the python-telegram-bot Application with all ChatMaster handlers."""

from __future__ import annotations

from telegram.error import NetworkError, TimedOut
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from config import logger
from constants import LANGUAGE_CONSTANTS
from handlers import handle_language_callback, relay_message, start
from http_client import close_http_client
from preferences import BOT_DATA_KEY, InMemoryLanguageStore, LanguagePreferenceStore


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Global error handler to gracefully handle transient errors.
    Logs the error and suppresses common transient issues like network timeouts.
    """
    error = context.error

    # Suppress transient network errors - they're expected occasionally
    if isinstance(error, (TimedOut, NetworkError)):
        logger.warning(
            f"Transient network error (suppressed): {type(error).__name__}: {error}"
        )
        return

    # Log other errors for investigation
    logger.error(f"Unhandled error: {type(error).__name__}: {error}", exc_info=error)


async def _close_clients(application: Application) -> None:
    await close_http_client()
    logger.info("HTTP client closed")


def register_handlers(application: Application) -> None:
    application.add_error_handler(error_handler)

    # /start must be registered before the catch-all relay handler
    application.add_handler(CommandHandler("start", start))

    application.add_handler(
        CallbackQueryHandler(
            handle_language_callback,
            pattern=rf"^{LANGUAGE_CONSTANTS.CALLBACK_PREFIX}",
        )
    )

    # Every other new message goes through the relay; it classifies and
    # ignores what it cannot answer. Edited messages are not re-answered.
    application.add_handler(MessageHandler(filters.UpdateType.MESSAGE, relay_message))


def build_application(
    token: str, language_store: LanguagePreferenceStore | None = None
) -> Application:
    """Create the bot application and inject the language preference store."""
    application = (
        Application.builder()
        .token(token)
        # One task per update, so slow OCR or completion calls in one chat
        # do not hold up other chats.
        .concurrent_updates(True)
        .post_shutdown(_close_clients)
        .build()
    )
    application.bot_data[BOT_DATA_KEY] = language_store or InMemoryLanguageStore()
    register_handlers(application)
    return application
