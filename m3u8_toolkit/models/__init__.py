"""Data models for playlists, their entries, and aggregated results."""

from .collection_models import PlaylistCollection, QualityLevel
from .playlist_models import (
    AudioCodec,
    MasterPlaylist,
    MediaPlaylist,
    Playlist,
    PlaylistKind,
    Segment,
    TimeRange,
    Variant,
    VideoCodec,
)

__all__ = [
    "AudioCodec",
    "MasterPlaylist",
    "MediaPlaylist",
    "Playlist",
    "PlaylistKind",
    "Segment",
    "TimeRange",
    "Variant",
    "VideoCodec",
    "PlaylistCollection",
    "QualityLevel",
]
