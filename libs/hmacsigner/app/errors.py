"""Exceptions raised by the token signer.

Parse failures derive from ``TokenError`` (a ``ValueError``) and carry a
stable ``code``. Misconfiguration is a separate ``RuntimeError`` tier.
"""


class TokenError(ValueError):
    """Base class for every rejected token."""

    code = "invalid_token"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


class TooShortError(TokenError):
    code = "token_too_short"


class InvalidEncodingError(TokenError):
    code = "invalid_token_encoding"


class InvalidVersionError(TokenError):
    code = "invalid_token_version"


class TimestampExpiredError(TokenError):
    code = "token_expired"


class SignatureMismatchError(TokenError):
    code = "invalid_token_signature"


class WeakSecretError(RuntimeError):
    """The signing secret does not meet the minimum length."""
