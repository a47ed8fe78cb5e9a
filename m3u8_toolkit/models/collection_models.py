"""Models describing aggregated fetch results and derived views."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .playlist_models import MasterPlaylist, MediaPlaylist


class PlaylistCollection(BaseModel):
    """Every playlist reachable from one entry URL."""

    model_config = ConfigDict(frozen=True)

    media_playlists: List[MediaPlaylist] = Field(default_factory=list)
    master_playlists: List[MasterPlaylist] = Field(default_factory=list)


class QualityLevel(BaseModel):
    """Display-oriented summary of a master playlist variant."""

    index: int
    width: int = 0
    height: int = 0
    bitrate: int = 0
    name: str = ""
