"""Permalinks: log text <-> `#log=<data>` URL fragment.

`<data>` is gzip-compressed UTF-8, base64url-encoded without padding. gzip is
what the browser's `CompressionStream('gzip')` produces, so links made in the
page and links made here are interchangeable.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import logging
import re
import zlib

logger = logging.getLogger(__name__)

FRAGMENT_PREFIX = "#log="
_FRAGMENT_RE = re.compile(r"(?:^|[#?&])log=([A-Za-z0-9_-]+)")


def to_base64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def from_base64url(s: str) -> bytes:
    padded = s + "=" * (-len(s) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def encode_permalink(text: str) -> str:
    if not (text or "").strip():
        raise ValueError("No content")
    data = gzip.compress(text.encode("utf-8"))
    return FRAGMENT_PREFIX + to_base64url(data)


def decode_permalink(fragment: str) -> str:
    """Decode `#log=<data>` (or a full URL carrying it) back to the log text.

    Returns "" when there is no `log=` payload, or when the payload cannot be
    decoded (logged as a warning; callers keep an empty input area).
    """
    m = _FRAGMENT_RE.search(fragment or "")
    if not m:
        return ""
    try:
        return gzip.decompress(from_base64url(m.group(1))).decode("utf-8")
    except (binascii.Error, ValueError, OSError, EOFError, zlib.error) as e:
        logger.warning("Failed to decode permalink: %s", e)
        return ""
