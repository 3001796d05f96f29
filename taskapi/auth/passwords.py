"""
Password hashing and verification.

Handles:
- Password hashing (scrypt or pbkdf2 via werkzeug, random per-hash salt)
- Password verification (constant-time digest comparison inside werkzeug)
- Password strength validation
"""
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from .errors import ConfigurationFailure, HashingFailure, VerificationFailure

logger = logging.getLogger(__name__)

__all__ = ["PasswordHasher", "validate_password_strength"]

_SUPPORTED_METHODS = ("scrypt", "pbkdf2")
_SALT_LENGTH = 16


class PasswordHasher:
    """One-way salted password hashing.

    Args:
        method: werkzeug method string. The part before the first ':' picks
            the primitive; the rest is its work factor, e.g.
            "scrypt:32768:8:1" or "pbkdf2:sha256:600000".
    """

    def __init__(self, method: str = "scrypt"):
        if method.split(":", 1)[0] not in _SUPPORTED_METHODS:
            raise ConfigurationFailure(f"Unsupported password hash method: {method!r}")
        self.method = method

    def hash(self, password: str) -> str:
        """Hash a password.

        Raises:
            HashingFailure: the primitive rejected the work factor or ran
                out of memory.
        """
        try:
            return generate_password_hash(password, method=self.method, salt_length=_SALT_LENGTH)
        except (ValueError, MemoryError) as e:
            raise HashingFailure("could not hash password") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its stored hash.

        Returns:
            True if password matches, False otherwise

        Raises:
            VerificationFailure: the stored hash is malformed or uses an
                unknown method.
        """
        if not isinstance(password_hash, str) or password_hash.count("$") < 2:
            raise VerificationFailure("stored credential is malformed")

        method, salt, hashval = password_hash.split("$", 2)
        if not salt or not hashval or method.split(":", 1)[0] not in _SUPPORTED_METHODS:
            raise VerificationFailure("stored credential is malformed")

        try:
            return check_password_hash(password_hash, password)
        except (ValueError, TypeError) as e:
            raise VerificationFailure("stored credential could not be checked") from e


def validate_password_strength(password: str, min_length: int) -> tuple[bool, str]:
    """Validate password meets the length requirement.

    Returns:
        (is_valid, error_message) tuple
    """
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters"
    return True, ""
