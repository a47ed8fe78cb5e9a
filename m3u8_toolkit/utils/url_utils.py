"""Resolution of playlist references against the playlist that lists them."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, uses_relative

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

# Stand-in scheme for bases whose scheme urljoin does not resolve against.
_RELATIVE_SCHEME = "http"


def has_network_scheme(reference: str) -> bool:
    return bool(SCHEME_PATTERN.match(reference))


def resolve_url(reference: str, base: Optional[str]) -> str:
    """Returns ``reference`` made absolute against the directory of ``base``.

    Absolute references are returned untouched. Any base carrying a scheme is
    resolved against, including ``file:`` and custom schemes. When ``base`` is
    missing or malformed the reference is returned unresolved.
    """

    if has_network_scheme(reference) or not base:
        return reference
    try:
        parts = urlsplit(base)
        if parts.scheme and (parts.netloc or parts.path.startswith("/")):
            if parts.scheme in uses_relative:
                return urljoin(base, reference)
            joined = urlsplit(urljoin(parts._replace(scheme=_RELATIVE_SCHEME).geturl(), reference))
            return joined._replace(scheme=parts.scheme).geturl()
    except ValueError:
        pass
    logging.debug("Cannot resolve %s against malformed base %s", reference, base)
    return reference
