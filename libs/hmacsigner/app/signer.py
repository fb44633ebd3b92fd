"""HMAC-SHA256 signed and timestamped blobs.

Token layout, base64url without padding::

    b64(version | issued_at_ns | salt | signature) + b64(payload)

The header is 49 raw bytes (66 encoded characters): a version byte, the
issuance time in unix nanoseconds as a signed little-endian int64, 8 bytes of
salt, and the HMAC-SHA256 of every preceding header byte followed by the raw
payload. The payload is signed, not encrypted.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import struct
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, NamedTuple, Optional, Union

from .encoding import b64url_decode, b64url_encode, encoded_len
from .errors import (
    InvalidEncodingError,
    InvalidVersionError,
    SignatureMismatchError,
    TimestampExpiredError,
    TokenError,
    TooShortError,
)
from .security import require_strong_secret, to_secret_bytes

logger = logging.getLogger(__name__)

TOKEN_VERSION = 0x01
SALT_LEN = 8
SIG_LEN = hashlib.sha256().digest_size

_PREFIX = struct.Struct("<Bq8s")
PREFIX_LEN = _PREFIX.size
HEADER_LEN = PREFIX_LEN + SIG_LEN
ENCODED_HEADER_LEN = encoded_len(HEADER_LEN)

Secret = Union[str, bytes]
TTL = Union[timedelta, int, float]


class Header(NamedTuple):
    version: int
    issued_at_ns: int
    salt: bytes
    signature: bytes


def pack_header(issued_at_ns: int, salt: bytes, signature: bytes, version: int = TOKEN_VERSION) -> bytes:
    if len(signature) != SIG_LEN:
        raise ValueError(f"signature must be {SIG_LEN} bytes")
    return _PREFIX.pack(version, issued_at_ns, salt) + signature


def unpack_header(raw: bytes) -> Header:
    if len(raw) != HEADER_LEN:
        raise InvalidEncodingError("header has wrong length")
    version, issued_at_ns, salt = _PREFIX.unpack_from(raw)
    return Header(version, issued_at_ns, salt, raw[PREFIX_LEN:])


def ttl_to_ns(ttl: TTL) -> int:
    if isinstance(ttl, timedelta):
        return ttl // timedelta(microseconds=1) * 1000
    return round(ttl * 10**9)


@dataclass(frozen=True)
class Signer:
    """Generates and parses signed tokens for one secret and TTL.

    ``clock`` returns unix nanoseconds and ``salt_source(n)`` returns ``n``
    random bytes; both are only replaced in tests.
    """

    secret: Secret = field(repr=False)
    ttl: TTL
    clock: Callable[[], int] = field(default=time.time_ns, repr=False, compare=False)
    salt_source: Callable[[int], bytes] = field(default=secrets.token_bytes, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "secret", to_secret_bytes(self.secret))
        if ttl_to_ns(self.ttl) <= 0:
            raise ValueError("ttl must be positive")

    @property
    def ttl_ns(self) -> int:
        return ttl_to_ns(self.ttl)

    def sign(self, issued_at_ns: int, salt: bytes, payload: bytes, version: int = TOKEN_VERSION) -> bytes:
        """HMAC-SHA256 over version, timestamp, salt, then the raw payload."""
        mac = hmac.new(self.secret, digestmod=hashlib.sha256)
        mac.update(_PREFIX.pack(version, issued_at_ns, salt))
        mac.update(payload)
        return mac.digest()

    def _salt(self) -> bytes:
        salt = self.salt_source(SALT_LEN)
        if len(salt) != SALT_LEN:
            raise RuntimeError(f"salt source returned {len(salt)} bytes, expected {SALT_LEN}")
        return salt

    def generate(self, payload: Optional[bytes] = None) -> bytes:
        """Return a token for ``payload``.

        Raises WeakSecretError if the secret is shorter than 32 bytes.
        """
        require_strong_secret(self.secret)
        payload = bytes(payload or b"")
        issued_at_ns = self.clock()
        salt = self._salt()
        signature = self.sign(issued_at_ns, salt, payload)
        header = pack_header(issued_at_ns, salt, signature)
        return b64url_encode(header) + b64url_encode(payload)

    def parse(self, token: Union[bytes, str, None]) -> bytes:
        """Verify ``token`` and return its payload.

        Raises a TokenError subclass describing the first failed check.
        """
        try:
            return self._parse(token)
        except TokenError as exc:
            logger.debug("Rejected token: %s", exc.code)
            raise

    def _parse(self, token: Union[bytes, str, None]) -> bytes:
        if token is None:
            token = b""
        elif isinstance(token, str):
            try:
                token = token.encode("ascii")
            except UnicodeEncodeError as exc:
                raise InvalidEncodingError("token is not ascii") from exc
        else:
            token = bytes(token)

        if len(token) < ENCODED_HEADER_LEN:
            raise TooShortError()

        # first quantum holds the version byte
        version = b64url_decode(token[:4])[0]
        if version != TOKEN_VERSION:
            raise InvalidVersionError(f"unsupported token version {version}")

        header = unpack_header(b64url_decode(token[:ENCODED_HEADER_LEN]))
        if header.issued_at_ns + self.ttl_ns <= self.clock():
            raise TimestampExpiredError()

        payload = b64url_decode(token[ENCODED_HEADER_LEN:])
        expected = self.sign(header.issued_at_ns, header.salt, payload, header.version)
        if not hmac.compare_digest(expected, header.signature):
            raise SignatureMismatchError()
        return payload


def generate_token(secret: Secret, ttl: TTL, payload: Optional[bytes] = None) -> bytes:
    return Signer(secret, ttl).generate(payload)


def parse_token(secret: Secret, ttl: TTL, token: Union[bytes, str]) -> bytes:
    return Signer(secret, ttl).parse(token)
