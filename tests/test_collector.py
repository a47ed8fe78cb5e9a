"""Tests for concurrent playlist collection."""

from __future__ import annotations

import asyncio
from typing import List

import pytest

from m3u8_toolkit.downloader.collector import PlaylistCollector
from m3u8_toolkit.errors import MalformedPlaylistError
from m3u8_toolkit.models import PlaylistKind
from m3u8_toolkit.utils.http_client import FetchError

HI_URL = "https://cdn.example.com/live/hi/index.m3u8"
LO_URL = "https://cdn.example.com/live/lo/index.m3u8"


class TestCollect:
    """Tests for PlaylistCollector.collect."""

    @pytest.mark.asyncio
    async def test_media_root(self, fake_fetcher, media_text) -> None:
        """A media playlist URL is its own sole result."""
        url = "https://cdn.example.com/vod.m3u8"
        collector = PlaylistCollector(fetch_text=fake_fetcher({url: media_text(["4"], endlist=True)}))
        collection = await collector.collect(url)
        assert len(collection.media_playlists) == 1
        assert collection.master_playlists == []
        assert collection.media_playlists[0].kind is PlaylistKind.VOD

    @pytest.mark.asyncio
    async def test_master_fans_out(self, fake_fetcher, master_text, master_url, media_text) -> None:
        """Every variant of a master playlist is fetched and parsed."""
        pages = {
            master_url: master_text,
            HI_URL: media_text(["6", "6"], target="6"),
            LO_URL: media_text(["2"], target="2"),
        }
        collection = await PlaylistCollector(fetch_text=fake_fetcher(pages)).collect(master_url)
        assert [p.url for p in collection.master_playlists] == [master_url]
        assert [p.url for p in collection.media_playlists] == [HI_URL, LO_URL]
        assert collection.media_playlists[1].kind is PlaylistKind.NRTLIVE

    @pytest.mark.asyncio
    async def test_fetches_run_concurrently(self, master_text, master_url, media_text) -> None:
        """Variant fetches are all started before any completes."""
        started: List[str] = []
        release = asyncio.Event()

        async def fetch(url: str) -> str:
            if url == master_url:
                return master_text
            started.append(url)
            if len(started) == 2:
                release.set()
            await release.wait()
            return media_text(["4"])

        collection = await asyncio.wait_for(PlaylistCollector(fetch_text=fetch).collect(master_url), timeout=5)
        assert sorted(started) == sorted([HI_URL, LO_URL])
        assert len(collection.media_playlists) == 2

    @pytest.mark.asyncio
    async def test_first_error_fails_without_waiting(self, master_text, master_url) -> None:
        """A failing variant fails the collection while slower fetches are still pending."""
        never = asyncio.Event()
        slow_started = asyncio.Event()

        async def fetch(url: str) -> str:
            if url == master_url:
                return master_text
            if url == HI_URL:
                slow_started.set()
                await never.wait()
            await slow_started.wait()
            raise FetchError("HTTP 500", url, 500)

        with pytest.raises(FetchError) as excinfo:
            await asyncio.wait_for(PlaylistCollector(fetch_text=fetch).collect(master_url), timeout=5)
        assert excinfo.value.url == LO_URL
        assert excinfo.value.status_code == 500

    @pytest.mark.asyncio
    async def test_root_fetch_error(self, fake_fetcher) -> None:
        """Transport errors on the root URL propagate with URL and status."""
        with pytest.raises(FetchError) as excinfo:
            await PlaylistCollector(fetch_text=fake_fetcher({})).collect("https://x.example/a.m3u8")
        assert excinfo.value.status_code == 404

    @pytest.mark.asyncio
    async def test_master_without_variants(self, fake_fetcher) -> None:
        """A master playlist that lists no variant URIs is malformed."""
        url = "https://cdn.example.com/empty.m3u8"
        pages = {url: "#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1\n"}
        with pytest.raises(MalformedPlaylistError) as excinfo:
            await PlaylistCollector(fetch_text=fake_fetcher(pages)).collect(url)
        assert excinfo.value.url == url

    @pytest.mark.asyncio
    async def test_variant_without_header(self, fake_fetcher, master_text, master_url, media_text) -> None:
        """A variant that is not a playlist fails the collection."""
        pages = {master_url: master_text, HI_URL: media_text(["4"]), LO_URL: "not a playlist"}
        with pytest.raises(MalformedPlaylistError) as excinfo:
            await PlaylistCollector(fetch_text=fake_fetcher(pages)).collect(master_url)
        assert excinfo.value.url == LO_URL

    @pytest.mark.asyncio
    async def test_nested_master_reported_as_master(self, fake_fetcher, master_text, master_url, media_text) -> None:
        """Variants that are themselves master playlists are listed but not followed."""
        nested = "#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1\ndeeper.m3u8\n"
        pages = {master_url: master_text, HI_URL: nested, LO_URL: media_text(["4"])}
        collection = await PlaylistCollector(fetch_text=fake_fetcher(pages)).collect(master_url)
        assert [p.url for p in collection.master_playlists] == [master_url, HI_URL]
        assert [p.url for p in collection.media_playlists] == [LO_URL]


class TestCollectorSetup:
    """Tests for collector construction and the sync entry point."""

    def test_requires_fetcher(self) -> None:
        """A collector needs a client or a fetch callable."""
        with pytest.raises(ValueError):
            PlaylistCollector()

    def test_collect_sync(self, fake_fetcher, media_text) -> None:
        """collect_sync runs the collection on a fresh event loop."""
        url = "https://cdn.example.com/vod.m3u8"
        collection = PlaylistCollector(fetch_text=fake_fetcher({url: media_text(["4"])})).collect_sync(url)
        assert len(collection.media_playlists) == 1

    def test_collect_sync_cancels_outstanding_on_failure(self, master_text, master_url) -> None:
        """On the sync path, fetches still running after a failure are cancelled at loop shutdown."""
        cancelled: List[str] = []

        async def fetch(url: str) -> str:
            if url == master_url:
                return master_text
            if url == HI_URL:
                try:
                    await asyncio.Event().wait()
                except asyncio.CancelledError:
                    cancelled.append(url)
                    raise
            await asyncio.sleep(0)
            raise FetchError("HTTP 500", url, 500)

        with pytest.raises(FetchError) as excinfo:
            PlaylistCollector(fetch_text=fetch).collect_sync(master_url)
        assert excinfo.value.url == LO_URL
        assert cancelled == [HI_URL]
