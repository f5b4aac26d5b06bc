"""
Telegram bot handlers for the ChatMaster bot.

This package contains modular handlers split by functionality:
- common: Shared utilities (reply sending, typing action, error logging)
- messages: Message relay (text and photo through the completion service)
- language: /start command and language selection callback
"""

from __future__ import annotations

# Re-export common utilities
from .common import (
    get_language_keyboard,
    log_error_with_context,
    send_reply,
    split_message,
)

# Re-export relay handlers
from .messages import (
    InboundMessage,
    MessageCategory,
    RelayDeps,
    classify_message,
    handle_message,
    relay_message,
)

# Re-export language handlers
from .language import (
    start,
    handle_language_callback,
    parse_language_callback,
)

__all__ = [
    # Common utilities
    "get_language_keyboard",
    "log_error_with_context",
    "send_reply",
    "split_message",
    # Relay
    "InboundMessage",
    "MessageCategory",
    "RelayDeps",
    "classify_message",
    "handle_message",
    "relay_message",
    # Language
    "start",
    "handle_language_callback",
    "parse_language_callback",
]
