"""Text extraction from images with Tesseract (via pytesseract)."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytesseract
from PIL import Image

from config import logger, OCR_LANGUAGES
from errors import ExtractionError


def _recognize(path: Path, languages: str) -> str:
    with Image.open(path) as image:
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        return pytesseract.image_to_string(image, lang=languages)


async def extract_text(path: Path, languages: str = OCR_LANGUAGES) -> str:
    """
    Recognize text in the image at ``path``.

    The language set is fixed by configuration (English + Russian by
    default) and does not follow the user's interface language.

    Args:
        path: Local image file
        languages: Tesseract language specifier, e.g. "eng+rus"

    Returns:
        Recognized text with surrounding whitespace removed

    Raises:
        ExtractionError: If the image cannot be opened or the engine fails
    """
    try:
        # Tesseract is CPU-bound and blocking; keep the event loop free
        text = await asyncio.to_thread(_recognize, path, languages)
    except Exception as e:
        logger.error(f"OCR failed for {path.name}: {type(e).__name__}: {e}")
        raise ExtractionError(f"OCR failed: {e}") from e

    text = text.strip()
    logger.info(f"OCR recognized {len(text)} chars ({languages})")
    return text
