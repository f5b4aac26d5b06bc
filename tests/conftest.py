"""Shared test configuration for the ChatMaster bot."""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path
# ---------------------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


# ---------------------------------------------------------------------------
# Autouse fixtures: isolate scratch files and shared clients
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def scratch_dir(tmp_path, monkeypatch):
    """Point image downloads at a per-test scratch directory."""
    import images

    directory = tmp_path / "scratch"
    monkeypatch.setattr(images, "SCRATCH_DIR", str(directory))
    return directory


@pytest.fixture(autouse=True)
def reset_shared_clients(monkeypatch):
    """Make sure no test reuses a shared client created by another test."""
    import completion
    import http_client

    monkeypatch.setattr(http_client, "_http_client", None)
    monkeypatch.setattr(completion, "_completion_client", None)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------

def make_acquire_image(path: Path | None = None, error: Exception | None = None):
    """Build an ``acquire_image`` stand-in: a MagicMock returning an async context manager.

    The context manager yields ``path`` (or a dummy path), or raises ``error``
    before yielding to simulate a failed download.
    """

    @asynccontextmanager
    async def _acquire(url: str, file_id: str):
        if error is not None:
            raise error
        yield path or Path(f"/nonexistent/{file_id}.jpg")

    return MagicMock(side_effect=_acquire)


def make_relay_deps(**overrides):
    """Build a RelayDeps with all-passing defaults. Override any field by name."""
    from handlers.messages import RelayDeps

    defaults = dict(
        get_language=MagicMock(return_value="uz"),
        send_typing=AsyncMock(),
        resolve_file_url=AsyncMock(return_value="https://files.example/photo.jpg"),
        acquire_image=make_acquire_image(),
        extract_text=AsyncMock(return_value="Hello from image"),
        complete=AsyncMock(return_value="Model reply"),
    )
    defaults.update(overrides)
    return RelayDeps(**defaults)
