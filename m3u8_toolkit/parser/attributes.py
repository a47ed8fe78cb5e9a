"""Tokenizer for the ``KEY=VALUE,KEY="QUOTED,VALUE"`` attribute lists of HLS tags."""

from __future__ import annotations

from typing import Dict, List

RAW_ATTRIBUTES_KEY = "__raw__"


def parse_attribute_list(text: str) -> Dict[str, str]:
    """Splits an attribute list into a key to raw value mapping.

    Commas inside double quotes belong to the value and the quotes themselves
    are dropped. An unterminated quote swallows the rest of the input. The
    untouched source string is kept under ``RAW_ATTRIBUTES_KEY``.
    """

    attributes: Dict[str, str] = {}
    key_chars: List[str] = []
    value_chars: List[str] = []
    in_quotes = False
    reading_key = True

    def flush() -> None:
        key = "".join(key_chars).strip()
        if key:
            attributes[key] = "".join(value_chars)
        key_chars.clear()
        value_chars.clear()

    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            flush()
            reading_key = True
        elif char == "=" and reading_key and not in_quotes:
            reading_key = False
        elif reading_key:
            key_chars.append(char)
        else:
            value_chars.append(char)
    flush()

    attributes[RAW_ATTRIBUTES_KEY] = text
    return attributes
