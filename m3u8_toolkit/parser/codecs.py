"""Decodes RFC 6381 ``CODECS`` strings into readable profile metadata."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, NamedTuple, Tuple

from ..models import AudioCodec, VideoCodec

AVC_PROFILES = {
    66: "Base",
    77: "Main",
    100: "High",
}

# level_idc values defined by H.264 Annex A.
AVC_LEVELS = {
    9: "1b",
    10: "1.0",
    11: "1.1",
    12: "1.2",
    13: "1.3",
    20: "2.0",
    21: "2.1",
    22: "2.2",
    30: "3.0",
    31: "3.1",
    32: "3.2",
    40: "4.0",
    41: "4.1",
    42: "4.2",
    50: "5.0",
    51: "5.1",
    52: "5.2",
    60: "6.0",
    61: "6.1",
    62: "6.2",
}

AUDIO_OBJECT_TYPES = {
    2: "AAC-LC",
    5: "HE-AAC",
    29: "HE-AAC v2",
    34: "MP3",
}

MPEG4_AUDIO_OTI = 0x40
# MPEG-1/2 audio object type indications, both carry MP3 payloads.
MP3_OTIS = {0x69, 0x6B}
MP3_OBJECT_TYPE = 34


class CodecPrefix(Enum):
    AVC = "avc1"
    MP4A = "mp4a"
    UNKNOWN = ""

    @classmethod
    def of(cls, token: str) -> "CodecPrefix":
        head = token.split(".", 1)[0].lower()
        for prefix in (cls.AVC, cls.MP4A):
            if head == prefix.value:
                return prefix
        return cls.UNKNOWN


class CodecInfo(NamedTuple):
    video: VideoCodec
    audio: AudioCodec


def decode_codecs(raw: str) -> CodecInfo:
    """Decodes every token of ``raw``; later tokens of the same media type win."""

    video = VideoCodec()
    audio = AudioCodec()
    for token in (part.strip() for part in (raw or "").split(",")):
        if not token:
            continue
        prefix = CodecPrefix.of(token)
        if prefix is CodecPrefix.AVC:
            video = decode_avc(token)
        elif prefix is CodecPrefix.MP4A:
            audio = decode_mp4a(token)
        else:
            logging.debug("Ignoring unrecognized codec token %s", token)
    return CodecInfo(video=video, audio=audio)


def decode_avc(token: str) -> VideoCodec:
    """Decodes ``avc1.PPCCLL`` (hex) or the legacy ``avc1.PP.LL`` (decimal) form."""

    profile_id, level_id = _avc_profile_and_level(token.split(".", 1)[1] if "." in token else "")
    profile = AVC_PROFILES.get(profile_id, "")
    return VideoCodec(
        codec="AVC",
        profile=profile,
        profile_id=profile_id if profile else 0,
        level=AVC_LEVELS.get(level_id, ""),
    )


def decode_mp4a(token: str) -> AudioCodec:
    """Decodes ``mp4a.40.<object type>`` and the ``mp4a.69``/``mp4a.6B`` MP3 forms."""

    object_type = _mp4a_object_type(token.split(".")[1:])
    profile = AUDIO_OBJECT_TYPES.get(object_type, "")
    codec = "MP3" if profile == "MP3" else "AAC"
    return AudioCodec(codec=codec, profile=profile, object_type=object_type if profile else 0)


def _avc_profile_and_level(suffix: str) -> Tuple[int, int]:
    if "." in suffix:
        profile_part, _, level_part = suffix.partition(".")
        return _int_or_zero(profile_part, 10), _int_or_zero(level_part.split(".")[0], 10)
    if len(suffix) == 6:
        profile_id = _int_or_zero(suffix[0:2], 16)
        level_id = _int_or_zero(suffix[4:6], 16)
        if profile_id and level_id:
            return profile_id, level_id
    return 0, 0


def _mp4a_object_type(parts: List[str]) -> int:
    if not parts:
        return 0
    oti = _int_or_zero(parts[0], 16)
    if oti in MP3_OTIS:
        return MP3_OBJECT_TYPE
    if oti == MPEG4_AUDIO_OTI and len(parts) > 1:
        return _int_or_zero(parts[1], 10)
    return 0


def _int_or_zero(value: str, base: int) -> int:
    try:
        return max(int(value, base), 0)
    except ValueError:
        return 0
