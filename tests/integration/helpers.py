"""Helper functions for building mock Telegram Update and Context objects.

These builders create MagicMock objects that match the python-telegram-bot
interface closely enough that handler functions can be called directly in
integration tests without a running Telegram server.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

from preferences import BOT_DATA_KEY, InMemoryLanguageStore, LanguagePreferenceStore

FILE_URL = "https://api.telegram.org/file/bot123:abc/photos/file_1.jpg"


# ---------------------------------------------------------------------------
# Builder: Bot
# ---------------------------------------------------------------------------

def make_bot(file_url: str = FILE_URL) -> MagicMock:
    """Create a mock bot with AsyncMock methods matching ``context.bot``.

    Captured methods:
    - ``send_message``
    - ``send_chat_action``
    - ``get_file`` -- returns a file mock whose ``file_path`` is ``file_url``
    """
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.send_chat_action = AsyncMock()

    file_mock = MagicMock()
    file_mock.file_path = file_url
    bot.get_file = AsyncMock(return_value=file_mock)

    return bot


# ---------------------------------------------------------------------------
# Builder: Context
# ---------------------------------------------------------------------------

def make_context(
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> MagicMock:
    """Create a mock ``ContextTypes.DEFAULT_TYPE`` with a language store in bot_data."""
    ctx = MagicMock()
    ctx.bot = bot or make_bot()
    ctx.bot_data = {BOT_DATA_KEY: store if store is not None else InMemoryLanguageStore()}
    ctx.user_data = {}
    ctx.chat_data = {}
    return ctx


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _make_message(
    *,
    chat_id: int,
    text: str | None = None,
    photo: list | None = None,
    voice: MagicMock | None = None,
) -> MagicMock:
    """Build a mock ``telegram.Message``. Unused content fields are None."""
    msg = MagicMock()
    msg.chat_id = chat_id
    msg.text = text
    msg.photo = photo
    msg.voice = voice
    return msg


def _make_update(
    *,
    chat_id: int,
    message: MagicMock | None = None,
    callback_query: MagicMock | None = None,
) -> MagicMock:
    """Build a mock ``telegram.Update`` wiring chat/message together."""
    update = MagicMock()

    chat = MagicMock()
    chat.id = chat_id
    update.effective_chat = chat

    update.message = message
    update.effective_message = message
    update.callback_query = callback_query
    return update


# ---------------------------------------------------------------------------
# Public builders: each returns (update, context)
# ---------------------------------------------------------------------------

def make_text_update(
    text: str = "Hello world",
    chat_id: int = 12345,
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> tuple[MagicMock, MagicMock]:
    """Build an (update, context) pair for a plain text message."""
    msg = _make_message(chat_id=chat_id, text=text)
    update = _make_update(chat_id=chat_id, message=msg)
    return update, make_context(bot=bot, store=store)


def make_photo_update(
    file_id: str = "fake-file-id",
    chat_id: int = 12345,
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> tuple[MagicMock, MagicMock]:
    """Build an (update, context) pair for a photo message.

    Telegram delivers photos as a list of PhotoSize objects; the last one is
    the largest and carries ``file_id``.
    """
    thumbnail = MagicMock()
    thumbnail.file_id = f"{file_id}-thumb"
    largest = MagicMock()
    largest.file_id = file_id

    msg = _make_message(chat_id=chat_id, photo=[thumbnail, largest])
    update = _make_update(chat_id=chat_id, message=msg)
    return update, make_context(bot=bot, store=store)


def make_voice_update(
    chat_id: int = 12345,
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> tuple[MagicMock, MagicMock]:
    """Build an (update, context) pair for a voice message."""
    voice = MagicMock()
    voice.file_id = "voice-file-id"
    msg = _make_message(chat_id=chat_id, voice=voice)
    update = _make_update(chat_id=chat_id, message=msg)
    return update, make_context(bot=bot, store=store)


def make_command_update(
    command: str = "/start",
    chat_id: int = 12345,
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> tuple[MagicMock, MagicMock]:
    """Build an (update, context) pair for a ``/command`` message.

    Telegram delivers commands as regular text messages whose ``.text``
    starts with ``/``.
    """
    return make_text_update(text=command, chat_id=chat_id, bot=bot, store=store)


def make_callback_query_update(
    data: str = "lang_uz",
    chat_id: int = 12345,
    bot: MagicMock | None = None,
    store: LanguagePreferenceStore | None = None,
) -> tuple[MagicMock, MagicMock]:
    """Build an (update, context) pair for an inline-keyboard callback query.

    The mock callback query provides ``.data`` and an AsyncMock ``.answer()``.
    """
    query = MagicMock()
    query.data = data
    query.answer = AsyncMock()

    update = _make_update(chat_id=chat_id, message=None, callback_query=query)
    return update, make_context(bot=bot, store=store)
