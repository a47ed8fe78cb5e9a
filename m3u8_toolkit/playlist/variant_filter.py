"""Selection of a playable variant from a master playlist."""

from __future__ import annotations

import re
from typing import Callable, List, Sequence, Union

from ..models import MasterPlaylist, QualityLevel, Variant

NO_MATCH = 255

ProfilePredicate = Callable[[str], bool]


def profile_matches(pattern: Union[str, "re.Pattern[str]"]) -> ProfilePredicate:
    """Builds a predicate that searches a codec profile for ``pattern``."""

    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return lambda profile: bool(compiled.search(profile))


def is_baseline_video(profile: str) -> bool:
    return profile == "Base"


def is_aac_audio(profile: str) -> bool:
    return "AAC" in profile


def select_variant(
    variants: Sequence[Variant],
    video_predicate: ProfilePredicate = is_baseline_video,
    audio_predicate: ProfilePredicate = is_aac_audio,
) -> int:
    """Returns the index of the first variant accepted by both predicates, or ``NO_MATCH``."""

    for index, variant in enumerate(variants):
        if video_predicate(variant.video.profile) and audio_predicate(variant.audio.profile):
            return index
    return NO_MATCH


def quality_levels(playlist: MasterPlaylist) -> List[QualityLevel]:
    """Lists the variants of ``playlist`` as resolution/bitrate quality levels."""

    levels: List[QualityLevel] = []
    for index, variant in enumerate(playlist.variants):
        height = variant.height
        levels.append(
            QualityLevel(
                index=index,
                width=variant.width,
                height=height,
                bitrate=variant.bandwidth,
                name=f"{height}p" if height else "",
            )
        )
    return levels
