"""Message relay handlers for the ChatMaster bot.

``handle_message`` is the pure orchestration logic: classify, pre-process
photos, call the completion service and map the outcome to one localized
reply. ``relay_message`` adapts it to python-telegram-bot.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from enum import Enum
from functools import partial
from pathlib import Path

from telegram import Message, Update
from telegram.ext import ContextTypes

from config import logger
from completion import ChatMessage, get_completion_client, user_message
from errors import (
    BotError,
    EmptyTextError,
    UnsupportedInputError,
    classify_exception,
)
from images import scratch_image
from localization import build_image_prompt, get_error_message
from ocr import extract_text
from preferences import get_language_store

from .common import (
    log_error_with_context,
    resolve_file_url,
    send_reply,
    send_typing,
)

START_COMMAND = "/start"


class MessageCategory(str, Enum):
    COMMAND = "command"
    CALLBACK = "callback"  # button presses go to CallbackQueryHandler, never the relay
    PHOTO = "photo"
    VOICE = "voice"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class InboundMessage:
    chat_id: int
    category: MessageCategory
    text: str | None = None
    photo_file_id: str | None = None


@dataclass(frozen=True, slots=True)
class RelayDeps:
    get_language: Callable[[int], str]
    send_typing: Callable[[int], Awaitable[None]]
    resolve_file_url: Callable[[str], Awaitable[str]]
    acquire_image: Callable[[str, str], AbstractAsyncContextManager[Path]]
    extract_text: Callable[[Path], Awaitable[str]]
    complete: Callable[[str, Sequence[ChatMessage]], Awaitable[str]]


def classify_message(message: Message) -> InboundMessage:
    """
    Turn a Telegram message into an InboundMessage.

    Voice wins over everything else; for photos the last (largest) size is kept.
    """
    chat_id = message.chat_id

    if message.voice:
        return InboundMessage(chat_id=chat_id, category=MessageCategory.VOICE)

    if message.photo:
        return InboundMessage(
            chat_id=chat_id,
            category=MessageCategory.PHOTO,
            photo_file_id=message.photo[-1].file_id,
        )

    if message.text:
        if message.text.startswith(START_COMMAND):
            return InboundMessage(
                chat_id=chat_id, category=MessageCategory.COMMAND, text=message.text
            )
        return InboundMessage(
            chat_id=chat_id, category=MessageCategory.TEXT, text=message.text
        )

    return InboundMessage(chat_id=chat_id, category=MessageCategory.UNSUPPORTED)


async def handle_message(message: InboundMessage, deps: RelayDeps) -> str | None:
    """
    Produce the reply for one inbound message.

    Returns:
        The reply text (model answer or localized error), or None when the
        message must not be answered (commands, callbacks, unsupported types)
    """
    if message.category not in (
        MessageCategory.VOICE,
        MessageCategory.PHOTO,
        MessageCategory.TEXT,
    ):
        logger.debug(f"Ignoring {message.category.value} message in chat {message.chat_id}")
        return None

    language = deps.get_language(message.chat_id)

    if message.category is MessageCategory.VOICE:
        return get_error_message(UnsupportedInputError.kind, language)

    await deps.send_typing(message.chat_id)

    try:
        if message.category is MessageCategory.PHOTO:
            return await _run_photo_pipeline(message, language, deps)
        return await _run_text_pipeline(message, language, deps)
    except BotError as e:
        logger.warning(
            f"{message.category.value} message in chat {message.chat_id} failed "
            f"({e.kind.value}): {type(e).__name__}: {e}"
        )
        return get_error_message(e.kind, language)
    except Exception as e:
        error = classify_exception(e)
        log_error_with_context(
            e,
            context_info={
                "operation": f"relay_{message.category.value}",
                "language": language,
            },
            chat_id=message.chat_id,
            text_preview=message.text,
        )
        return get_error_message(error.kind, language)


async def _run_photo_pipeline(
    message: InboundMessage, language: str, deps: RelayDeps
) -> str:
    file_id = message.photo_file_id
    url = await deps.resolve_file_url(file_id)

    async with deps.acquire_image(url, file_id) as path:
        text = await deps.extract_text(path)

    text = text.strip()
    if not text:
        raise EmptyTextError("OCR returned no text")

    prompt = build_image_prompt(text, language)
    return await deps.complete(language, [user_message(prompt)])


async def _run_text_pipeline(
    message: InboundMessage, language: str, deps: RelayDeps
) -> str:
    return await deps.complete(language, [user_message(message.text)])


def _telegram_relay_deps(context: ContextTypes.DEFAULT_TYPE) -> RelayDeps:
    bot = context.bot
    return RelayDeps(
        get_language=get_language_store(context).get,
        send_typing=partial(send_typing, bot),
        resolve_file_url=partial(resolve_file_url, bot),
        acquire_image=scratch_image,
        extract_text=extract_text,
        complete=get_completion_client().complete,
    )


async def relay_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle any non-command message: answer it through the completion service."""
    message = update.effective_message
    if message is None:
        logger.warning("Received update without message, skipping relay")
        return

    inbound = classify_message(message)
    reply = await handle_message(inbound, _telegram_relay_deps(context))
    if reply is None:
        return

    await send_reply(context.bot, inbound.chat_id, reply)

