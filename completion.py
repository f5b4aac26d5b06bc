"""Completion client for the OpenRouter chat-completions API."""

from __future__ import annotations

import json
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from config import (
    logger,
    OPENROUTER_KEY,
    OPENROUTER_MODEL,
    OPENROUTER_REFERER,
    OPENROUTER_TITLE,
    OPENROUTER_URL,
)
from constants import API_TIMEOUTS, ERROR_LOG_CONSTANTS
from errors import CompletionConnectionError, CompletionError
from http_client import HttpClient, TransportError, get_http_client
from localization import get_system_message, normalize_language
from utils import truncate_text


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


def user_message(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content)


@dataclass(frozen=True, slots=True)
class CompletionRequest:
    """One provider request: the localized system message, then user messages."""

    language: str
    model: str
    messages: tuple[ChatMessage, ...]

    @classmethod
    def build(
        cls, language: str, user_messages: Sequence[ChatMessage], model: str
    ) -> CompletionRequest:
        language = normalize_language(language)
        system = ChatMessage(role="system", content=get_system_message(language))
        return cls(language=language, model=model, messages=(system, *user_messages))

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }


def extract_reply(data: Any) -> str:
    """
    Pull the reply text out of a chat-completions response body.

    Accepts ``choices[0].message.content`` and falls back to
    ``choices[0].text`` for older provider response shapes.

    Raises:
        CompletionError: If neither field holds a non-empty string
    """
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        raise CompletionError(reason="response has no choices")

    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message")
    reply = message.get("content") if isinstance(message, dict) else None
    if not isinstance(reply, str) or not reply.strip():
        reply = first.get("text")

    if not isinstance(reply, str) or not reply.strip():
        raise CompletionError(reason="response has no reply text")
    return reply


class CompletionClient:
    def __init__(
        self,
        http_client: HttpClient | None,
        api_key: str,
        *,
        model: str = OPENROUTER_MODEL,
        url: str = OPENROUTER_URL,
        referer: str = OPENROUTER_REFERER,
        title: str = OPENROUTER_TITLE,
        timeout: float = API_TIMEOUTS.COMPLETION,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self.model = model
        self.url = url
        self.referer = referer
        self.title = title
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    async def complete(self, language: str, user_messages: Sequence[ChatMessage]) -> str:
        """
        Send the user messages with the localized system prompt and return the reply.

        Raises:
            CompletionConnectionError: On transport failure or timeout
            CompletionError: On a non-success status or an unusable body
        """
        request = CompletionRequest.build(language, user_messages, model=self.model)
        body = json.dumps(request.to_payload(), ensure_ascii=False).encode("utf-8")

        try:
            # Resolved per call so a client recreated after shutdown is picked up
            http = self._http or get_http_client()
            response = await http.request(
                "POST", self.url, headers=self._headers(), body=body, timeout=self.timeout
            )
        except TransportError as e:
            raise CompletionConnectionError(f"Completion request failed: {e}") from e

        if not response.ok:
            logger.error(
                f"OpenRouter API error: status={response.status}, model={self.model}, "
                f"messages={len(request.messages)}, body="
                f"{truncate_text(response.body_text, ERROR_LOG_CONSTANTS.MAX_RESPONSE_BODY_LENGTH)}"
            )
            raise CompletionError(
                f"API Error: {response.status}",
                status=response.status,
                body=response.body_text,
            )

        try:
            data = json.loads(response.body_text)
        except json.JSONDecodeError as e:
            logger.error(
                f"OpenRouter returned invalid JSON: {e}; body="
                f"{truncate_text(response.body_text, ERROR_LOG_CONSTANTS.MAX_RESPONSE_BODY_LENGTH)}"
            )
            raise CompletionError(reason=f"invalid JSON: {e}") from e

        try:
            reply = extract_reply(data)
        except CompletionError:
            logger.error(
                "Reply not found in OpenRouter response: "
                f"{truncate_text(response.body_text, ERROR_LOG_CONSTANTS.MAX_RESPONSE_BODY_LENGTH)}"
            )
            raise

        logger.info(
            f"Completion received: {len(reply)} chars (model={self.model}, language={request.language})"
        )
        return reply


# Completion client - lazy initialization to avoid crash if API key not set at import time
_completion_client: CompletionClient | None = None
_completion_client_lock = threading.Lock()


def get_completion_client() -> CompletionClient:
    """Get or create the completion client (lazy initialization)."""
    global _completion_client
    if _completion_client is None:
        with _completion_client_lock:
            if _completion_client is None:
                _completion_client = CompletionClient(None, OPENROUTER_KEY)
    return _completion_client
