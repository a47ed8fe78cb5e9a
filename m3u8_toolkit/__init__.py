"""Parse, build, and query HLS master and media playlists."""

from .downloader import PlaylistCollector
from .errors import MalformedPlaylistError, PlaylistError, PlaylistValidationError
from .models import (
    AudioCodec,
    MasterPlaylist,
    MediaPlaylist,
    Playlist,
    PlaylistCollection,
    PlaylistKind,
    QualityLevel,
    Segment,
    TimeRange,
    Variant,
    VideoCodec,
)
from .parser import M3U8Parser, build_playlist, decode_codecs, parse_attribute_list, parse_playlist
from .playlist import NO_MATCH, quality_levels, select_variant, trim_live_window
from .utils import FetchError, HttpClient, resolve_url

__all__ = [
    "PlaylistCollector",
    "PlaylistError",
    "MalformedPlaylistError",
    "PlaylistValidationError",
    "FetchError",
    "AudioCodec",
    "MasterPlaylist",
    "MediaPlaylist",
    "Playlist",
    "PlaylistCollection",
    "PlaylistKind",
    "QualityLevel",
    "Segment",
    "TimeRange",
    "Variant",
    "VideoCodec",
    "M3U8Parser",
    "build_playlist",
    "decode_codecs",
    "parse_attribute_list",
    "parse_playlist",
    "NO_MATCH",
    "quality_levels",
    "select_variant",
    "trim_live_window",
    "HttpClient",
    "resolve_url",
]
