"""Exceptions raised when playlists cannot be used."""

from __future__ import annotations

from typing import Optional


class PlaylistError(Exception):
    """Base class for playlist related failures."""


class MalformedPlaylistError(PlaylistError):
    """Raised when fetched playlist text is structurally unusable."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class PlaylistValidationError(PlaylistError):
    """Raised when a playlist lacks the fields required to serialize it."""
