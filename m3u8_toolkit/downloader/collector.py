"""Resolves a playlist URL into the master and media playlists it references."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from ..errors import MalformedPlaylistError
from ..models import MasterPlaylist, MediaPlaylist, Playlist, PlaylistCollection
from ..parser.m3u8_parser import HEADER, parse_playlist
from ..utils.http_client import HttpClient, TextFetcher


class PlaylistCollector:
    """Fetches a playlist and, for master playlists, every variant concurrently.

    The first failing fetch fails the whole collection. Fetches that are still
    running at that point are left to finish and their results are dropped.
    """

    def __init__(self, http_client: Optional[HttpClient] = None, fetch_text: Optional[TextFetcher] = None) -> None:
        if fetch_text is None:
            if http_client is None:
                raise ValueError("Either http_client or fetch_text is required")
            fetch_text = http_client.fetch_text_async
        self._http_client = http_client
        self._fetch_text = fetch_text

    async def collect(self, url: str) -> PlaylistCollection:
        root = await self._load(url)
        if isinstance(root, MediaPlaylist):
            return PlaylistCollection(media_playlists=[root])

        if not root.variants:
            raise MalformedPlaylistError("Master playlist does not list any variants", url)

        logging.info("Fetching %s variant playlists of %s", len(root.variants), url)
        tasks = [asyncio.ensure_future(self._load(variant.url)) for variant in root.variants]
        for task in tasks:
            task.add_done_callback(_discard_outcome)

        remaining = set(tasks)
        while remaining:
            done, remaining = await asyncio.wait(remaining, return_when=asyncio.FIRST_EXCEPTION)
            failed = next((task for task in done if task.exception() is not None), None)
            if failed is not None:
                if remaining:
                    logging.debug("Abandoning %s outstanding variant fetches of %s", len(remaining), url)
                raise failed.exception()

        media: List[MediaPlaylist] = []
        masters: List[MasterPlaylist] = [root]
        for task in tasks:
            playlist = task.result()
            if isinstance(playlist, MediaPlaylist):
                media.append(playlist)
            else:
                masters.append(playlist)
        logging.info("Collected %s media playlists from %s", len(media), url)
        return PlaylistCollection(media_playlists=media, master_playlists=masters)

    def collect_sync(self, url: str) -> PlaylistCollection:
        """Runs ``collect`` on a fresh event loop and closes the client session afterwards.

        Unlike awaiting ``collect`` on a long-lived loop, fetches still running
        after a failure do not get to finish here: the HTTP session is closed
        under them and ``asyncio.run`` cancels them when the loop shuts down.
        """

        return asyncio.run(self._collect_and_close(url))

    async def _collect_and_close(self, url: str) -> PlaylistCollection:
        try:
            return await self.collect(url)
        finally:
            if self._http_client is not None:
                await self._http_client.aclose()

    async def _load(self, url: str) -> Playlist:
        text = await self._fetch_text(url)
        playlist = parse_playlist(text, url)
        if playlist is None:
            raise MalformedPlaylistError(f"Missing {HEADER} header", url)
        logging.debug("Parsed %s playlist %s", playlist.type, url)
        return playlist


def _discard_outcome(task: "asyncio.Future[Playlist]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logging.debug("Variant fetch finished with %s", exc)
