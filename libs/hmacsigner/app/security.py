"""Secret strength policy for the token signer."""

import os
from typing import Union

from .errors import WeakSecretError

MIN_SECRET_LENGTH = 32

WEAK_MARKERS = (
    "changeme",
    "change-me",
    "default",
    "example",
    "dev-",
    "test-",
    "dummy",
)


def to_secret_bytes(secret: Union[str, bytes]) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def is_strong_secret(secret: Union[str, bytes]) -> bool:
    """Length-only policy applied to every signing key."""
    return len(to_secret_bytes(secret)) >= MIN_SECRET_LENGTH


def require_strong_secret(secret: Union[str, bytes]) -> bytes:
    """Return the secret as bytes, raising WeakSecretError if it is too short."""
    key = to_secret_bytes(secret)
    if len(key) < MIN_SECRET_LENGTH:
        raise WeakSecretError(
            f"signing secret is {len(key)} bytes, at least {MIN_SECRET_LENGTH} are required"
        )
    return key


def is_strong_shared_secret(value: str) -> bool:
    """Stricter policy for secrets read from the environment."""
    if not value or not is_strong_secret(value):
        return False
    lowered = value.lower()
    if any(marker in lowered for marker in WEAK_MARKERS):
        return False
    return True


def require_strong_shared_secret(env_key: str) -> str:
    """
    Ensure a strong secret exists in env.
    Raises RuntimeError if missing/weak to fail fast at startup.
    """
    value = os.getenv(env_key, "")
    if not is_strong_shared_secret(value):
        raise RuntimeError(
            f"{env_key} is missing or too weak. "
            f"Use at least {MIN_SECRET_LENGTH} chars and avoid placeholders/default/test values."
        )
    return value
