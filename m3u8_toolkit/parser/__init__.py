"""Parsing and serialization of m3u8 playlist text."""

from .attributes import RAW_ATTRIBUTES_KEY, parse_attribute_list
from .codecs import CodecInfo, decode_codecs
from .m3u8_builder import build_playlist
from .m3u8_parser import M3U8Parser, parse_playlist

__all__ = [
    "RAW_ATTRIBUTES_KEY",
    "parse_attribute_list",
    "CodecInfo",
    "decode_codecs",
    "build_playlist",
    "M3U8Parser",
    "parse_playlist",
]
