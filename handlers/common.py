"""Common utilities and helpers for Telegram bot handlers."""

from __future__ import annotations

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.constants import ChatAction
from telegram.error import TelegramError

from config import logger, TELEGRAM_TOKEN
from constants import LANGUAGE_CONSTANTS, TELEGRAM_CONSTANTS, ERROR_LOG_CONSTANTS
import strings as S


def get_language_keyboard() -> InlineKeyboardMarkup:
    """One button per supported language, with ``lang_<code>`` callback data."""
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton(
                    S.BTN_LANGUAGES[language],
                    callback_data=f"{LANGUAGE_CONSTANTS.CALLBACK_PREFIX}{language}",
                )
            ]
            for language in LANGUAGE_CONSTANTS.SUPPORTED
        ]
    )


def split_message(text: str, max_length: int = None) -> list[str]:
    """
    Split text into multiple parts to fit within Telegram's message length limit.

    Attempts to split at sensible boundaries (paragraphs, sentences, words).

    Args:
        text: The text to split
        max_length: Maximum length per part (defaults to Telegram's 4096 limit)

    Returns:
        List of text parts, each fitting within the limit
    """
    if max_length is None:
        max_length = TELEGRAM_CONSTANTS.MAX_MESSAGE_LENGTH

    if len(text) <= max_length:
        return [text]

    parts = []
    remaining = text

    while remaining:
        if len(remaining) <= max_length:
            parts.append(remaining)
            break

        # Find a good break point within the limit
        chunk = remaining[:max_length]
        break_point = max_length

        # Try to break at paragraph
        last_para = chunk.rfind("\n\n")
        if last_para > max_length * 0.5:
            break_point = last_para + 2  # Include the newlines
        else:
            # Try to break at sentence
            for end_char in [". ", "! ", "? ", ".\n", "!\n", "?\n"]:
                last_sentence = chunk.rfind(end_char)
                if last_sentence > max_length * 0.5:
                    break_point = last_sentence + len(end_char)
                    break
            else:
                # Try to break at newline
                last_newline = chunk.rfind("\n")
                if last_newline > max_length * 0.5:
                    break_point = last_newline + 1
                else:
                    # Try to break at word
                    last_space = chunk.rfind(" ")
                    if last_space > max_length * 0.5:
                        break_point = last_space + 1

        parts.append(remaining[:break_point].rstrip())
        remaining = remaining[break_point:].lstrip()

    return parts


async def send_reply(bot: Bot, chat_id: int, text: str) -> None:
    """
    Send a reply as plain text, split into several messages if it is too long.

    Send failures are not caught here; they reach the application's error handler.
    """
    parts = split_message(text)
    if len(parts) > 1:
        logger.info(f"Reply split into {len(parts)} parts (original: {len(text)} chars)")

    for part in parts:
        await bot.send_message(chat_id=chat_id, text=part)


async def send_typing(bot: Bot, chat_id: int) -> None:
    """Show the "typing" indicator. Purely cosmetic, so failures are ignored."""
    try:
        await bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
    except TelegramError as e:
        logger.debug(f"Could not send typing action to chat {chat_id}: {e}")


async def resolve_file_url(bot: Bot, file_id: str) -> str:
    """Return a direct download URL for a Telegram file id."""
    file = await bot.get_file(file_id)
    file_path = file.file_path
    # python-telegram-bot already expands file_path to a full URL; keep
    # the relative form working for custom Bot API servers.
    if file_path.startswith(("http://", "https://")):
        return file_path
    return f"https://api.telegram.org/file/bot{TELEGRAM_TOKEN}/{file_path}"


def log_error_with_context(
    error: Exception,
    context_info: dict = None,
    chat_id: int = None,
    text_preview: str = None,
):
    """Enhanced error logging with contextual information and traceback."""
    error_details = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if chat_id:
        error_details["chat_id"] = chat_id

    if text_preview and len(text_preview) > 0:
        preview = text_preview[: ERROR_LOG_CONSTANTS.MAX_TEXT_PREVIEW]
        if len(text_preview) > ERROR_LOG_CONSTANTS.MAX_TEXT_PREVIEW:
            preview += "..."
        error_details["text_preview"] = preview

    if context_info:
        error_details.update(context_info)

    log_parts = [
        f"Enhanced Error Log - {error_details['error_type']}: {error_details['error_message']}"
    ]
    for key, value in error_details.items():
        if key not in ["error_type", "error_message"]:
            log_parts.append(f"  {key}: {value}")
    logger.error("\n".join(log_parts), exc_info=error)
