"""Smoke test configuration.

Smoke tests hit real external services (OpenRouter, the local Tesseract
binary) and are skipped when the required credentials or tools are missing.

Run them explicitly with::

    OPENROUTER_KEY=... pytest -m smoke tests/smoke/ -v
"""

from __future__ import annotations

import os
import shutil

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-skip smoke-marked tests when the required key or binary is absent."""
    openrouter_key = os.environ.get("OPENROUTER_KEY")
    tesseract = shutil.which("tesseract")

    for item in items:
        markers = {m.name for m in item.iter_markers()}
        if "smoke" not in markers:
            continue

        # Check per-test which dependency is needed (module name heuristic)
        module_name = item.module.__name__ if item.module else ""

        if "openrouter" in module_name and not openrouter_key:
            item.add_marker(pytest.mark.skip(reason="OPENROUTER_KEY not set"))
        if "tesseract" in module_name and not tesseract:
            item.add_marker(pytest.mark.skip(reason="tesseract binary not installed"))
