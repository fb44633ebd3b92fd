import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from libs.hmacsigner.app.errors import WeakSecretError
from libs.hmacsigner.app.security import (
    MIN_SECRET_LENGTH,
    is_strong_secret,
    is_strong_shared_secret,
    require_strong_secret,
    require_strong_shared_secret,
)


def test_secret_length_policy():
    assert MIN_SECRET_LENGTH == 32
    assert is_strong_secret(b"k" * 32)
    assert not is_strong_secret(b"k" * 31)
    assert is_strong_secret("k" * 32)


def test_require_strong_secret_returns_bytes():
    assert require_strong_secret("k" * 40) == b"k" * 40


def test_require_strong_secret_rejects_short():
    with pytest.raises(WeakSecretError):
        require_strong_secret(b"")


def test_shared_secret_rejects_placeholders():
    assert is_strong_shared_secret("q" * 40)
    assert not is_strong_shared_secret("changeme" + "q" * 40)
    assert not is_strong_shared_secret("")


def test_require_strong_shared_secret(monkeypatch):
    monkeypatch.setenv("SIGNER_TEST_SECRET", "z" * 48)
    assert require_strong_shared_secret("SIGNER_TEST_SECRET") == "z" * 48

    monkeypatch.setenv("SIGNER_TEST_SECRET", "short")
    with pytest.raises(RuntimeError):
        require_strong_shared_secret("SIGNER_TEST_SECRET")

    monkeypatch.delenv("SIGNER_TEST_SECRET")
    with pytest.raises(RuntimeError):
        require_strong_shared_secret("SIGNER_TEST_SECRET")
