"""Serializes playlist models back into m3u8 text."""

from __future__ import annotations

from typing import List

from ..errors import PlaylistValidationError
from ..models import MasterPlaylist, MediaPlaylist, Playlist, PlaylistKind
from .m3u8_parser import HEADER, Directive


def build_playlist(playlist: Playlist) -> str:
    """Renders ``playlist`` as m3u8 text.

    Target duration is written as whole seconds and segment durations with
    millisecond precision, so re-parsing may not reproduce the input exactly.
    """

    lines: List[str] = [HEADER]
    if playlist.version:
        lines.append(f"{Directive.VERSION.value}:{playlist.version}")

    if isinstance(playlist, MasterPlaylist):
        _build_master(playlist, lines)
    else:
        _build_media(playlist, lines)
    return "\n".join(lines) + "\n"


def _build_master(playlist: MasterPlaylist, lines: List[str]) -> None:
    if not playlist.variants:
        raise PlaylistValidationError("Master playlist has no variants")
    first = playlist.variants[0]
    if not first.url:
        raise PlaylistValidationError("First variant is missing its URL")
    if not first.bandwidth:
        raise PlaylistValidationError("First variant is missing BANDWIDTH")

    for variant in playlist.variants:
        attributes = [f"BANDWIDTH={variant.bandwidth}"]
        if variant.codecs_raw:
            attributes.append(f'CODECS="{variant.codecs_raw}"')
        if variant.resolution:
            attributes.append(f"RESOLUTION={variant.resolution}")
        lines.append(f"{Directive.STREAM_INF.value}:{','.join(attributes)}")
        lines.append(variant.url)


def _build_media(playlist: MediaPlaylist, lines: List[str]) -> None:
    if playlist.segments and not playlist.segments[0].url:
        raise PlaylistValidationError("First segment is missing its URL")

    lines.append(f"{Directive.ALLOW_CACHE.value}:{'YES' if playlist.allow_cache else 'NO'}")
    lines.append(f"{Directive.TARGET_DURATION.value}:{(playlist.target_duration + 500) // 1000}")
    if playlist.media_sequence:
        lines.append(f"{Directive.MEDIA_SEQUENCE.value}:{playlist.media_sequence}")

    for segment in playlist.segments:
        lines.append(f"{Directive.INF.value}:{segment.duration / 1000:.3f},{segment.title}")
        lines.append(segment.url)

    if playlist.kind is PlaylistKind.VOD:
        lines.append(Directive.ENDLIST.value)
