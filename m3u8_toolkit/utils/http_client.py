"""Shared HTTP helpers for retrieving playlist text."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

import aiohttp
import requests

from ..errors import PlaylistError

USER_AGENT = "m3u8-toolkit/0.1"

PLAYLIST_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "application/vnd.apple.mpegurl, application/x-mpegurl, */*",
}

TextFetcher = Callable[[str], Awaitable[str]]


class FetchError(PlaylistError):
    """Raised when a playlist cannot be retrieved."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class HttpClient:
    """Fetches playlist text over HTTP, synchronously or from an event loop."""

    def __init__(self, timeout: float = 10) -> None:
        self.timeout = timeout
        self._headers = PLAYLIST_HEADERS.copy()
        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a playlist as text."""

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logging.error("Playlist download failed from %s: %s", url, exc)
            raise FetchError(str(exc), url) from exc

        if not 200 <= response.status_code < 300:
            logging.error("Playlist download from %s returned status %s", url, response.status_code)
            raise FetchError(f"HTTP {response.status_code}", url, response.status_code)
        return response.text

    async def fetch_text_async(self, url: str) -> str:
        """Asynchronously fetch a playlist as text."""

        session = await self._get_async_session()
        try:
            async with session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    logging.error("Playlist download from %s returned status %s", url, resp.status)
                    raise FetchError(f"HTTP {resp.status}", url, resp.status)
                return await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logging.error("Playlist download failed from %s: %s", url, exc)
            raise FetchError(str(exc) or type(exc).__name__, url) from exc

    async def _get_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._async_session:
            if (
                self._async_session.closed
                or not self._loop
                or self._loop.is_closed()
                or self._loop is not current_loop
            ):
                await self._shutdown_async_session()

        if self._async_lock is None or self._loop is not current_loop:
            self._async_lock = asyncio.Lock()

        async with self._async_lock:
            if self._async_session and not self._async_session.closed:
                return self._async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._async_session = aiohttp.ClientSession(
                timeout=timeout,
                headers=self._headers.copy(),
            )
            self._loop = current_loop
        return self._async_session

    async def _shutdown_async_session(self) -> None:
        if self._async_session and not self._async_session.closed:
            try:
                await self._async_session.close()
            except (aiohttp.ClientError, RuntimeError) as exc:
                logging.debug("Ignoring error while closing playlist session: %s", exc)
        self._async_session = None
        self._loop = None

    async def aclose(self) -> None:
        await self._shutdown_async_session()

    def close(self) -> None:
        self._session.close()

        if self._async_session and not self._async_session.closed:
            try:
                asyncio.run(self._async_session.close())
            except RuntimeError:
                loop = asyncio.get_running_loop()
                loop.create_task(self._async_session.close())
        self._async_session = None
        self._loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
