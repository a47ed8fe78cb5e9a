"""Concurrent retrieval of playlists and their variants."""

from .collector import PlaylistCollector

__all__ = ["PlaylistCollector"]
