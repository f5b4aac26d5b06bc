"""Integration test fixtures for the ChatMaster bot.

Provides:
- ``FakeServices`` -- an in-process stand-in for the Telegram file server,
  the OpenRouter API and the Tesseract engine. Requests are routed by host
  through ``httpx.MockTransport`` so the real HttpClient, image acquisition
  and completion client code all run.
- ``services`` -- fixture that wires a ``FakeServices`` instance into the
  relay handler, image acquisition and OCR modules.
"""

from __future__ import annotations

import io
import json

import httpx
import pytest
from PIL import Image

from completion import CompletionClient
from http_client import HttpClient

COMPLETION_URL = "https://openrouter.test/api/v1/chat/completions"


def make_png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), "white").save(buf, format="PNG")
    return buf.getvalue()


def make_completion_body(content: str) -> str:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


class FakeServices:
    """Configurable fake remote services. Every HTTP request is recorded."""

    def __init__(self) -> None:
        self.image_status = 200
        self.image_bytes = make_png_bytes()
        self.completion_status = 200
        self.completion_body = make_completion_body("Model reply")
        self.ocr_text = "Hello from image"
        self.ocr_calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "openrouter.test":
            return httpx.Response(self.completion_status, text=self.completion_body)
        if request.url.host == "api.telegram.org":
            if self.image_status != 200:
                return httpx.Response(self.image_status, text="Not Found")
            return httpx.Response(200, content=self.image_bytes)
        return httpx.Response(599, text=f"unexpected host {request.url.host}")

    def recognize(self, image, lang: str) -> str:
        self.ocr_calls.append(lang)
        return self.ocr_text

    @property
    def completion_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "openrouter.test"]

    @property
    def image_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "api.telegram.org"]

    def completion_payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.completion_requests]


@pytest.fixture()
def services(monkeypatch):
    """Route image downloads, completions and OCR to a ``FakeServices``.

    Yields the ``FakeServices`` instance so tests can set responses and
    inspect recorded calls.
    """
    import images
    import ocr
    import handlers.messages as messages

    fake = FakeServices()
    http = HttpClient(transport=httpx.MockTransport(fake.handle))
    completion_client = CompletionClient(http, "test-key", url=COMPLETION_URL)

    monkeypatch.setattr(images, "get_http_client", lambda: http)
    monkeypatch.setattr(messages, "get_completion_client", lambda: completion_client)
    monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake.recognize)

    yield fake
