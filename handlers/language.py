"""Start command and language selection handlers for the ChatMaster bot."""

from __future__ import annotations

from telegram import Update
from telegram.ext import ContextTypes

from config import logger
from constants import LANGUAGE_CONSTANTS
from localization import get_start_greeting, get_welcome_message
from preferences import get_language_store

from .common import get_language_keyboard


def parse_language_callback(data: str | None) -> str | None:
    """
    Extract the language code from ``lang_<code>`` callback data.

    Returns:
        A supported language code, or None for anything else
    """
    if not data or not data.startswith(LANGUAGE_CONSTANTS.CALLBACK_PREFIX):
        return None
    language = data[len(LANGUAGE_CONSTANTS.CALLBACK_PREFIX):]
    if language not in LANGUAGE_CONSTANTS.SUPPORTED:
        return None
    return language


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle the /start command: greet and offer the language buttons."""
    chat_id = update.effective_chat.id
    language = get_language_store(context).get(chat_id)

    await context.bot.send_message(
        chat_id=chat_id,
        text=get_start_greeting(language),
        reply_markup=get_language_keyboard(),
    )


async def handle_language_callback(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """Handle a language button: store the choice and send a welcome message."""
    query = update.callback_query
    chat_id = update.effective_chat.id
    language = parse_language_callback(query.data)

    if language is None:
        logger.warning(f"Ignoring invalid language callback {query.data!r} from chat {chat_id}")
        await query.answer()
        return

    get_language_store(context).set(chat_id, language)

    try:
        await context.bot.send_message(chat_id=chat_id, text=get_welcome_message(language))
    finally:
        # Stops the loading indicator on the pressed button
        await query.answer()
