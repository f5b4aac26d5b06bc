"""Image acquisition: download a remote image into a private scratch file."""

from __future__ import annotations

import re
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from config import logger, SCRATCH_DIR
from constants import API_TIMEOUTS, DOWNLOAD_CONSTANTS
from errors import AcquisitionError
from http_client import HttpClient, TransportError, get_http_client

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def scratch_path(file_id: str) -> Path:
    """
    Build a scratch path derived from the platform file id.

    A random suffix keeps two concurrent downloads of the same file apart.
    """
    directory = Path(SCRATCH_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    safe_id = _UNSAFE_FILENAME_CHARS.sub("_", file_id)
    return directory / (
        f"{DOWNLOAD_CONSTANTS.SCRATCH_PREFIX}{safe_id}_{uuid.uuid4().hex[:8]}"
        f"{DOWNLOAD_CONSTANTS.SCRATCH_SUFFIX}"
    )


def discard_scratch_file(path: Path) -> None:
    """Delete a scratch file if it exists."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Could not delete scratch file {path}: {e}")


async def acquire_image(
    url: str,
    destination: Path,
    *,
    http_client: HttpClient | None = None,
    timeout: float = API_TIMEOUTS.IMAGE_DOWNLOAD,
) -> Path:
    """
    Stream the image at ``url`` into ``destination``.

    Args:
        url: Direct download URL
        destination: Local path to write to
        http_client: Client to use (defaults to the shared client)
        timeout: Upper bound for the whole download in seconds

    Returns:
        ``destination``, fully written

    Raises:
        AcquisitionError: On a non-success status, transport failure or
            local write failure. The partial file is removed first.
    """
    client = http_client or get_http_client()
    try:
        response = await client.request(
            "GET", url, timeout=timeout, stream_to=destination
        )
    except TransportError as e:
        discard_scratch_file(destination)
        raise AcquisitionError(f"Image download failed: {e}") from e
    except OSError as e:
        discard_scratch_file(destination)
        raise AcquisitionError(f"Could not write image to disk: {e}") from e
    except BaseException:
        discard_scratch_file(destination)
        raise

    if not response.ok:
        discard_scratch_file(destination)
        raise AcquisitionError(
            f"Image download returned HTTP {response.status}", status=response.status
        )

    logger.debug(f"Image saved to {destination} ({destination.stat().st_size} bytes)")
    return destination


@asynccontextmanager
async def scratch_image(
    url: str, file_id: str, *, http_client: HttpClient | None = None
) -> AsyncIterator[Path]:
    """
    Download an image for the duration of a ``async with`` block.

    The scratch file is deleted when the block exits, whether it succeeded,
    raised, or the download itself failed.
    """
    path = scratch_path(file_id)
    try:
        await acquire_image(url, path, http_client=http_client)
        yield path
    finally:
        discard_scratch_file(path)
