import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from libs.hmacsigner.app.encoding import b64url_decode, b64url_encode, encoded_len
from libs.hmacsigner.app.errors import InvalidEncodingError


def test_encode_is_unpadded_urlsafe():
    assert b64url_encode(b"\xfb\xff") == b"-_8"
    assert b64url_encode(b"a@b.c") == b"YUBiLmM"
    assert b64url_encode(b"") == b""


@pytest.mark.parametrize("n,expected", [(0, 0), (1, 2), (2, 3), (3, 4), (5, 7), (8, 11), (32, 43), (49, 66)])
def test_encoded_len(n, expected):
    assert encoded_len(n) == expected
    assert len(b64url_encode(b"\x00" * n)) == expected


def test_decode_valid():
    assert b64url_decode(b"YUBiLmM") == b"a@b.c"
    assert b64url_decode(b"-_8") == b"\xfb\xff"
    assert b64url_decode(b"") == b""


@pytest.mark.parametrize(
    "data",
    [
        b"A",          # impossible length
        b"AAAAA",
        b"+_8",        # standard alphabet
        b"-/8",
        b"YUBiLmM=",   # padding
        b"YU Bi",      # whitespace
        b"$$",
        b"AB",         # stray trailing bits
        b"YUBiLmN",
    ],
)
def test_decode_rejects(data):
    with pytest.raises(InvalidEncodingError):
        b64url_decode(data)
