"""Utility helpers for HTTP, URL, and filesystem operations."""

from .file_utils import build_playlist_filename, ensure_directory, sanitize_filename, write_text
from .http_client import FetchError, HttpClient
from .url_utils import resolve_url

__all__ = [
    "HttpClient",
    "FetchError",
    "resolve_url",
    "ensure_directory",
    "sanitize_filename",
    "build_playlist_filename",
    "write_text",
]
