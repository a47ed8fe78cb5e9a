"""Shared playlist fixtures for m3u8-toolkit tests."""

from __future__ import annotations

from typing import Callable, Dict

import pytest

from m3u8_toolkit.utils.http_client import FetchError, TextFetcher

MASTER_URL = "https://cdn.example.com/live/master.m3u8"

MASTER_TEXT = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-STREAM-INF:BANDWIDTH=1280000,CODECS="avc1.4d401f,mp4a.40.2",RESOLUTION=1280x720
hi/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=400000,CODECS="avc1.42e01e,mp4a.40.5",RESOLUTION=432x768
lo/index.m3u8
"""

MEDIA_TEXT = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:10
#EXT-X-MEDIA-SEQUENCE:7
#EXT-X-ALLOW-CACHE:YES
#EXTINF:9.009,first
seg7.ts
#EXTINF:9.009,
seg8.ts
# a comment line
#EXTINF:3.003,last, with comma
seg9.ts
#EXT-X-ENDLIST
"""


def _media_text(durations, target: str = "10", endlist: bool = False, sequence: int = 0) -> str:
    lines = ["#EXTM3U", f"#EXT-X-TARGETDURATION:{target}"]
    if sequence:
        lines.append(f"#EXT-X-MEDIA-SEQUENCE:{sequence}")
    for index, seconds in enumerate(durations):
        lines.append(f"#EXTINF:{seconds},")
        lines.append(f"seg{index}.ts")
    if endlist:
        lines.append("#EXT-X-ENDLIST")
    return "\n".join(lines) + "\n"


@pytest.fixture
def master_url() -> str:
    return MASTER_URL


@pytest.fixture
def master_text() -> str:
    return MASTER_TEXT


@pytest.fixture
def media_sample() -> str:
    return MEDIA_TEXT


@pytest.fixture
def media_text() -> Callable[..., str]:
    """Builds media playlist text from a list of segment durations in seconds."""
    return _media_text


@pytest.fixture
def fake_fetcher() -> Callable[[Dict[str, str]], TextFetcher]:
    """Builds an async fetcher serving texts from a URL mapping; missing URLs fail with 404."""

    def factory(pages: Dict[str, str]) -> TextFetcher:
        async def fetch(url: str) -> str:
            if url not in pages:
                raise FetchError("HTTP 404", url, 404)
            return pages[url]

        return fetch

    return factory
