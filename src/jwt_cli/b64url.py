"""
Base64url helpers for JWT segments (RFC 7515, no padding).

PyJWT's ``jwt.utils`` does the actual encoding; decoding is wrapped with a
strict alphabet check because ``base64.urlsafe_b64decode`` silently drops
characters outside the alphabet.
"""

from __future__ import annotations

import re

from jwt.utils import base64url_decode, base64url_encode, force_bytes

__all__ = ["b64url_encode", "b64url_decode", "force_bytes"]

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    """Encode *data* as unpadded base64url text."""
    return base64url_encode(data).decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Decode an unpadded base64url *segment*.

    Raises:
        ValueError: If the segment contains characters outside the base64url
            alphabet, carries padding, or has an impossible length.
    """
    if not _B64URL_RE.fullmatch(segment) or len(segment) % 4 == 1:
        raise ValueError(f"not valid base64url: {segment[:16]!r}")
    return base64url_decode(segment)
