"""Filesystem helpers for preparing output folders and safe filenames."""

from __future__ import annotations

import os
import re
from pathlib import Path
from urllib.parse import urlparse

INVALID_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|]")


def sanitize_filename(value: str, default: str = "file") -> str:
    """Removes characters that are invalid on most filesystems."""

    sanitized = INVALID_FILENAME_CHARS.sub("", value or "").strip()
    return sanitized or default


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def build_playlist_filename(output_dir: str, url: str, index: int) -> str:
    """Returns a numbered ``.m3u8`` path in ``output_dir`` named after ``url``."""

    stem = Path(urlparse(url).path).stem
    safe_name = sanitize_filename(stem, default="playlist")
    return os.path.join(output_dir, f"{index:02d}_{safe_name}.m3u8")


def write_text(path: str, text: str) -> None:
    ensure_directory(os.path.dirname(os.path.abspath(path)) or ".")
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
