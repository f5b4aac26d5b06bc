"""Tests for OCR text extraction (the Tesseract engine itself is faked)."""

from __future__ import annotations

import pytest
from PIL import Image

import ocr
from errors import ErrorKind, ExtractionError


@pytest.fixture()
def image_path(tmp_path):
    path = tmp_path / "sample.png"
    Image.new("RGBA", (40, 20), (255, 255, 255, 255)).save(path)
    return path


async def test_extract_text_strips_and_uses_configured_languages(image_path, monkeypatch):
    calls = []

    def fake_image_to_string(image, lang):
        calls.append((image.mode, lang))
        return "  Привет, world \n\f"

    monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_image_to_string)

    text = await ocr.extract_text(image_path)

    assert text == "Привет, world"
    # RGBA input is converted before recognition; languages default to eng+rus
    assert calls == [("RGB", "eng+rus")]


async def test_extract_text_language_override(image_path, monkeypatch):
    seen = []
    monkeypatch.setattr(
        ocr.pytesseract, "image_to_string", lambda image, lang: seen.append(lang) or ""
    )
    assert await ocr.extract_text(image_path, languages="eng") == ""
    assert seen == ["eng"]


async def test_engine_failure_raises_extraction_error(image_path, monkeypatch):
    def broken(image, lang):
        raise ocr.pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(ocr.pytesseract, "image_to_string", broken)

    with pytest.raises(ExtractionError) as exc_info:
        await ocr.extract_text(image_path)
    assert exc_info.value.kind is ErrorKind.OCR


async def test_unreadable_file_raises_extraction_error(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not an image")

    with pytest.raises(ExtractionError):
        await ocr.extract_text(path)
