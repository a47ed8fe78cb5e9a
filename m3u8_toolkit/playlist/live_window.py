"""Bounded views over the segment list of a media playlist."""

from __future__ import annotations

from ..models import MediaPlaylist


def trim_live_window(playlist: MediaPlaylist, start_time: int, max_segments: int = 0) -> MediaPlaylist:
    """Returns a copy of ``playlist`` starting at the segment playing at ``start_time``.

    At most ``max_segments`` segments are kept (0 keeps everything to the end).
    The returned playlist's media sequence is the id of its first segment.
    """

    position = len(playlist.segments)
    for index, segment in enumerate(playlist.segments):
        if segment.range.contains(start_time):
            position = index
            break

    end = len(playlist.segments) if max_segments <= 0 else position + max_segments
    window = playlist.segments[position:end]

    update = {"segments": window}
    if window:
        update["media_sequence"] = window[0].id
    return playlist.model_copy(update=update)
