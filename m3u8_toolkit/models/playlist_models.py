"""Pydantic models that describe master playlists, media playlists, and their entries."""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlaylistKind(str, Enum):
    """Playback kind of a media playlist."""

    VOD = "VOD"
    LIVE = "LIVE"
    NRTLIVE = "NRTLIVE"


class VideoCodec(BaseModel):
    """Decoded H.264 profile and level of a variant."""

    model_config = ConfigDict(frozen=True)

    codec: str = ""
    profile: str = ""
    profile_id: int = 0
    level: str = ""


class AudioCodec(BaseModel):
    """Decoded MPEG-4 audio object type of a variant."""

    model_config = ConfigDict(frozen=True)

    codec: str = ""
    profile: str = ""
    object_type: int = 0


class Variant(BaseModel):
    """One alternative encoding listed by a master playlist."""

    model_config = ConfigDict(frozen=True)

    url: str
    raw_info: str = ""
    codecs_raw: str = ""
    bandwidth: int = Field(default=0, ge=0)
    resolution: str = ""
    video: VideoCodec = Field(default_factory=VideoCodec)
    audio: AudioCodec = Field(default_factory=AudioCodec)

    @property
    def width(self) -> int:
        return _resolution_part(self.resolution, 0)

    @property
    def height(self) -> int:
        return _resolution_part(self.resolution, 1)


class TimeRange(BaseModel):
    """Presentation interval in milliseconds, inclusive on both ends when searched."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    def contains(self, time_ms: int) -> bool:
        return self.start <= time_ms <= self.end


class Segment(BaseModel):
    """A playable time slice of a media playlist."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    url: str
    duration: int = Field(ge=0)
    title: str = ""
    range: TimeRange

    @model_validator(mode="after")
    def _check_range(self) -> "Segment":
        if self.range.end != self.range.start + self.duration:
            raise ValueError("segment range must span exactly its duration")
        return self


class MasterPlaylist(BaseModel):
    """Playlist enumerating the variants of one presentation."""

    model_config = ConfigDict(frozen=True)

    type: Literal["MASTER"] = "MASTER"
    url: str = ""
    version: int = Field(default=0, ge=0)
    variants: List[Variant] = Field(default_factory=list)


class MediaPlaylist(BaseModel):
    """Playlist enumerating the ordered segments of one stream."""

    model_config = ConfigDict(frozen=True)

    type: Literal["MEDIA"] = "MEDIA"
    url: str = ""
    kind: PlaylistKind = PlaylistKind.LIVE
    version: int = Field(default=0, ge=0)
    combined: bool = False
    allow_cache: bool = False
    media_sequence: int = Field(default=0, ge=0)
    segments: List[Segment] = Field(default_factory=list)
    target_duration: int = Field(default=0, ge=0)
    total_duration: int = Field(default=0, ge=0)


Playlist = Union[MasterPlaylist, MediaPlaylist]


def _resolution_part(resolution: str, index: int) -> int:
    parts = resolution.lower().split("x")
    if len(parts) != 2:
        return 0
    try:
        return max(int(parts[index].strip()), 0)
    except ValueError:
        return 0
