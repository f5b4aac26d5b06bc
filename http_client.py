"""HTTP client adapter shared by the completion client and image downloads.

Wraps a single ``httpx.AsyncClient`` behind one ``request`` call that
returns status, headers and body text. Passing ``stream_to`` streams a
successful body straight to disk instead of buffering it.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from config import logger, USER_AGENT
from constants import DOWNLOAD_CONSTANTS


class TransportError(Exception):
    """The request never produced an HTTP response (network failure or timeout)."""

    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body_text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpClient:
    """Async HTTP client with a hard per-call timeout."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(
            transport=transport,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        timeout: float,
        stream_to: Path | None = None,
    ) -> HttpResponse:
        """
        Send a request and return its response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            body: Raw request body
            timeout: Upper bound in seconds for the whole exchange,
                including streaming the body to disk
            stream_to: If set, a 2xx body is written to this path chunk by
                chunk and ``body_text`` is left empty

        Raises:
            TransportError: If no response could be obtained in time
        """
        host = httpx.URL(url).host
        try:
            async with asyncio.timeout(timeout):
                if stream_to is None:
                    response = await self._client.request(
                        method, url, headers=headers, content=body, timeout=timeout
                    )
                    return _to_response(response, response.text)
                return await self._stream(method, url, headers, body, timeout, stream_to)
        except TimeoutError as e:
            logger.warning(f"{method} request to {host} timed out after {timeout}s")
            raise TransportError(f"{method} {host} timed out", timed_out=True) from e
        except httpx.TimeoutException as e:
            logger.warning(f"{method} request to {host} timed out: {e}")
            raise TransportError(f"{method} {host} timed out", timed_out=True) from e
        except httpx.TransportError as e:
            logger.warning(f"{method} request to {host} failed: {type(e).__name__}: {e}")
            raise TransportError(f"{method} {host} failed: {e}") from e

    async def _stream(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None,
        body: bytes | str | None,
        timeout: float,
        destination: Path,
    ) -> HttpResponse:
        async with self._client.stream(
            method, url, headers=headers, content=body, timeout=timeout
        ) as response:
            if not response.is_success:
                await response.aread()
                return _to_response(response, response.text)

            with open(destination, "wb") as fh:
                async for chunk in response.aiter_bytes(DOWNLOAD_CONSTANTS.CHUNK_SIZE_BYTES):
                    fh.write(chunk)
            return _to_response(response, "")

    async def aclose(self) -> None:
        await self._client.aclose()


def _to_response(response: httpx.Response, body_text: str) -> HttpResponse:
    return HttpResponse(
        status=response.status_code,
        headers=dict(response.headers),
        body_text=body_text,
    )


# Shared client - lazy initialization so importing this module opens no connections
_http_client: HttpClient | None = None
_http_client_lock = threading.Lock()


def get_http_client() -> HttpClient:
    """Get or create the shared HTTP client (lazy initialization)."""
    global _http_client
    if _http_client is None:
        with _http_client_lock:
            if _http_client is None:
                _http_client = HttpClient()
    return _http_client


async def close_http_client() -> None:
    """Close the shared client, if it was ever created."""
    global _http_client
    client, _http_client = _http_client, None
    if client is not None:
        await client.aclose()
