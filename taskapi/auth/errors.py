"""
Auth failure taxonomy.

Client-facing failures subclass core.errors.APIError and always carry the
same message for every cause. The cause of a token rejection is kept in
`reason` for operator logs only; it is never part of the response.
"""
from core.errors import APIError, AuthenticationError, ConflictError, InternalError

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
UNAUTHORIZED_MESSAGE = "unauthorized"
INVALID_REFRESH_MESSAGE = "Invalid or expired refresh token"


class ConfigurationFailure(Exception):
    """Missing or invalid auth configuration. Fatal at startup."""


class HashingFailure(InternalError):
    """The password hashing primitive failed."""


class VerificationFailure(Exception):
    """A stored credential is malformed or uses an unknown method."""


class InvalidCredentialsFailure(AuthenticationError):
    """Unknown email or wrong password."""

    def __init__(self):
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class _RejectedToken(AuthenticationError):
    message = ""

    def __init__(self, reason: str):
        super().__init__(self.message)
        self.reason = reason


class InvalidTokenFailure(_RejectedToken):
    """Access token missing, malformed, expired, forged or from another issuer."""
    message = UNAUTHORIZED_MESSAGE


class InvalidRefreshFailure(_RejectedToken):
    """Refresh token rejected, or its subject no longer resolves to a user."""
    message = INVALID_REFRESH_MESSAGE


class DuplicateEmailError(ConflictError):
    """Registration for an email that already has an account."""

    def __init__(self):
        super().__init__("User with this email already exists")


__all__ = [
    "APIError",
    "ConfigurationFailure",
    "HashingFailure",
    "VerificationFailure",
    "InvalidCredentialsFailure",
    "InvalidTokenFailure",
    "InvalidRefreshFailure",
    "DuplicateEmailError",
    "INVALID_CREDENTIALS_MESSAGE",
    "UNAUTHORIZED_MESSAGE",
    "INVALID_REFRESH_MESSAGE",
]
