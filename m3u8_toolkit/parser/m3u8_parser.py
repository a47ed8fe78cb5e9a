"""Tools for parsing m3u8 text into master or media playlist models."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, List, Optional

from ..errors import MalformedPlaylistError
from ..models import (
    MasterPlaylist,
    MediaPlaylist,
    Playlist,
    PlaylistKind,
    Segment,
    TimeRange,
    Variant,
)
from ..utils.http_client import HttpClient
from ..utils.url_utils import resolve_url
from .attributes import RAW_ATTRIBUTES_KEY, parse_attribute_list
from .codecs import decode_codecs

HEADER = "#EXTM3U"
TAG_PREFIX = "#EXT"
NRTLIVE_MAX_TARGET_DURATION = 2000
# Numbers beyond 10**18 are treated as malformed.
MAX_DECIMAL_EXPONENT = 18
INT_PATTERN = re.compile(r"^[+-]?\d+$")


class Directive(Enum):
    VERSION = "#EXT-X-VERSION"
    STREAM_INF = "#EXT-X-STREAM-INF"
    TARGET_DURATION = "#EXT-X-TARGETDURATION"
    MEDIA_SEQUENCE = "#EXT-X-MEDIA-SEQUENCE"
    ALLOW_CACHE = "#EXT-X-ALLOW-CACHE"
    COMBINED = "#EXT-X-COMBINED"
    ENDLIST = "#EXT-X-ENDLIST"
    DISCONTINUITY = "#EXT-X-DISCONTINUITY"
    INF = "#EXTINF"
    UNKNOWN = ""

    @classmethod
    def of(cls, key: str) -> "Directive":
        return _DIRECTIVES.get(key, cls.UNKNOWN)


_DIRECTIVES: Dict[str, Directive] = {d.value: d for d in Directive if d is not Directive.UNKNOWN}


@dataclass
class ParseState:
    """Running state of the single forward scan over playlist lines."""

    url: Optional[str]
    version: int = 0
    ended: bool = False
    combined: bool = False
    allow_cache: bool = False
    target_duration: int = 0
    media_sequence: int = 0
    pending_variant_attrs: Optional[Dict[str, str]] = None
    pending_duration: Optional[int] = None
    pending_title: str = ""
    elapsed: int = 0
    variants: List[Variant] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)

    def apply_directive(self, directive: Directive, value: str) -> None:
        if directive is Directive.VERSION:
            self.version = parse_int(value)
        elif directive is Directive.STREAM_INF:
            self.pending_variant_attrs = parse_attribute_list(value)
        elif directive is Directive.TARGET_DURATION:
            self.target_duration = seconds_to_ms(value)
        elif directive is Directive.MEDIA_SEQUENCE:
            self.media_sequence = parse_int(value)
        elif directive is Directive.ALLOW_CACHE:
            self.allow_cache = value.strip().upper() == "YES"
        elif directive is Directive.COMBINED:
            self.combined = value.strip().upper() == "YES"
        elif directive is Directive.ENDLIST:
            self.ended = True
        elif directive is Directive.INF:
            seconds, _, title = value.partition(",")
            self.pending_duration = seconds_to_ms(seconds)
            self.pending_title = title
        elif directive is Directive.DISCONTINUITY:
            pass
        elif directive is Directive.UNKNOWN:
            pass

    def add_variant(self, uri: str) -> None:
        attrs = self.pending_variant_attrs or {}
        codecs_raw = attrs.get("CODECS", "")
        codecs = decode_codecs(codecs_raw)
        self.variants.append(
            Variant(
                url=resolve_url(uri, self.url),
                raw_info=attrs.get(RAW_ATTRIBUTES_KEY, ""),
                codecs_raw=codecs_raw,
                bandwidth=parse_int(attrs.get("BANDWIDTH", "")),
                resolution=attrs.get("RESOLUTION", ""),
                video=codecs.video,
                audio=codecs.audio,
            )
        )
        self.pending_variant_attrs = None

    def add_segment(self, uri: str) -> None:
        duration = self.pending_duration or 0
        start = self.elapsed
        self.segments.append(
            Segment(
                id=self.media_sequence + len(self.segments),
                url=resolve_url(uri, self.url),
                duration=duration,
                title=self.pending_title,
                range=TimeRange(start=start, end=start + duration),
            )
        )
        self.elapsed = start + duration
        self.pending_duration = None
        self.pending_title = ""


def _bounded_decimal(value: str) -> Optional[Decimal]:
    try:
        number = Decimal((value or "").strip())
    except InvalidOperation:
        return None
    if not number.is_finite() or number.adjusted() > MAX_DECIMAL_EXPONENT:
        return None
    return number


def parse_int(value: str) -> int:
    """Leniently parses a non-negative integer; malformed or absurdly large input yields 0."""

    text = (value or "").strip()
    if INT_PATTERN.match(text):
        if len(text.lstrip("+-").lstrip("0")) > MAX_DECIMAL_EXPONENT + 1:
            return 0
        return max(int(text), 0)
    number = _bounded_decimal(text)
    return max(int(number), 0) if number is not None else 0


def seconds_to_ms(value: str) -> int:
    """Converts decimal seconds to whole milliseconds, truncating."""

    number = _bounded_decimal(value)
    return max(int(number * 1000), 0) if number is not None else 0


def split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def parse_playlist(text: str, url: Optional[str] = None) -> Optional[Playlist]:
    """Parses playlist text, returning ``None`` when the ``#EXTM3U`` header is missing."""

    if not text:
        return None
    lines = [line.strip() for line in split_lines(text)]
    first = next((line for line in lines if line), "")
    if first != HEADER:
        logging.warning("Playlist %s does not start with %s", url or "<text>", HEADER)
        return None

    is_master = any(line.startswith(Directive.STREAM_INF.value) for line in lines)
    state = ParseState(url=url)
    for line in lines:
        if not line:
            continue
        if line.startswith(TAG_PREFIX):
            key, _, value = line.partition(":")
            state.apply_directive(Directive.of(key), value)
        elif line.startswith("#"):
            continue
        elif is_master and state.pending_variant_attrs is not None:
            state.add_variant(line)
        elif not is_master and state.pending_duration is not None:
            state.add_segment(line)

    if is_master:
        if not state.variants:
            logging.warning("Master playlist %s did not list any variants", url)
        return MasterPlaylist(url=url or "", version=state.version, variants=state.variants)

    kind = PlaylistKind.VOD if state.ended else PlaylistKind.LIVE
    if kind is PlaylistKind.LIVE and state.target_duration <= NRTLIVE_MAX_TARGET_DURATION:
        kind = PlaylistKind.NRTLIVE
    if not state.segments:
        logging.warning("Media playlist %s did not contain segments", url)
    return MediaPlaylist(
        url=url or "",
        kind=kind,
        version=state.version,
        combined=state.combined,
        allow_cache=state.allow_cache,
        media_sequence=state.media_sequence,
        segments=state.segments,
        target_duration=state.target_duration,
        total_duration=state.elapsed if kind is PlaylistKind.VOD else 0,
    )


class M3U8Parser:
    """Fetches m3u8 manifests and parses them into playlist models."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def parse(self, text: str, url: Optional[str] = None) -> Optional[Playlist]:
        return parse_playlist(text, url)

    def load(self, url: str) -> Playlist:
        """Fetches ``url`` and parses it, raising when the text is not a playlist."""

        text = self._http_client.fetch_text(url)
        playlist = parse_playlist(text, url)
        if playlist is None:
            raise MalformedPlaylistError(f"Missing {HEADER} header", url)
        return playlist
