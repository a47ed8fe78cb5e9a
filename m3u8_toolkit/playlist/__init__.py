"""Queries over parsed playlists."""

from .live_window import trim_live_window
from .variant_filter import (
    NO_MATCH,
    is_aac_audio,
    is_baseline_video,
    profile_matches,
    quality_levels,
    select_variant,
)

__all__ = [
    "trim_live_window",
    "NO_MATCH",
    "is_aac_audio",
    "is_baseline_video",
    "profile_matches",
    "quality_levels",
    "select_variant",
]
