"""Signer configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from datetime import timedelta

from .security import require_strong_shared_secret
from .signer import Signer


def _int(key: str, default: int = 0) -> int:
    return int(os.getenv(key, str(default)))


SECRET_ENV = "HMACSIGNER_SECRET"
TTL_ENV = "HMACSIGNER_TTL_SECONDS"
DEFAULT_TTL_SECONDS = 3600


@dataclass
class SignerConfig:
    secret: str = field(default="", repr=False)
    ttl_seconds: int = DEFAULT_TTL_SECONDS

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)

    def build(self) -> Signer:
        return Signer(secret=self.secret, ttl=self.ttl)


def load_signer_config() -> SignerConfig:
    """Read the signer settings, failing fast on a weak secret or bad TTL."""
    ttl_seconds = _int(TTL_ENV, DEFAULT_TTL_SECONDS)
    if ttl_seconds <= 0:
        raise RuntimeError(f"{TTL_ENV} must be a positive number of seconds")
    return SignerConfig(
        secret=require_strong_shared_secret(SECRET_ENV),
        ttl_seconds=ttl_seconds,
    )
