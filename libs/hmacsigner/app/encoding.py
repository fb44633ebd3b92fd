"""Strict unpadded base64url helpers."""

import base64
import binascii

from .errors import InvalidEncodingError


def b64url_encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def encoded_len(n: int) -> int:
    """Length of the unpadded encoding of ``n`` raw bytes."""
    return (n * 8 + 5) // 6


def b64url_decode(data: bytes) -> bytes:
    """Decode unpadded base64url.

    Raises InvalidEncodingError on foreign characters, impossible lengths,
    or non-canonical input (stray bits in the last character).
    """
    if len(data) % 4 == 1:
        raise InvalidEncodingError("invalid base64 length")
    pad = b"=" * (-len(data) % 4)
    try:
        raw = base64.b64decode(data + pad, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise InvalidEncodingError("invalid base64 data") from exc
    # altchars still lets "+" and "/" through, and trailing bits are ignored
    if b64url_encode(raw) != data:
        raise InvalidEncodingError("non-canonical base64 data")
    return raw
