"""
Registration, login and token refresh.

AuthService is the boundary of the auth core: every failure inside it is
translated into one of the uniform client-facing errors from .errors, and
the precise cause is only logged.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import (
    DuplicateEmailError,
    InvalidCredentialsFailure,
    InvalidRefreshFailure,
    VerificationFailure,
)
from .passwords import PasswordHasher
from .tokens import TokenIssuer, TokenValidator
from .types import TokenPair

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so that both login failure
# paths cost one hash computation.
_DUMMY_PASSWORD = "timing-equalizer"


@dataclass(frozen=True)
class AuthResult:
    """A user record plus the token pair just issued for it."""
    user: object
    tokens: TokenPair

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_public(),
            "token": self.tokens.access_token,
            "refresh_token": self.tokens.refresh_token,
        }


class AuthService:
    """Orchestrates hasher, issuer, validator and the user store.

    Args:
        users: credential store exposing find_by_email, find_by_id and create
        hasher: PasswordHasher
        issuer: TokenIssuer
        validator: TokenValidator
    """

    def __init__(self, users, hasher: PasswordHasher, issuer: TokenIssuer, validator: TokenValidator):
        self._users = users
        self._hasher = hasher
        self._issuer = issuer
        self._validator = validator
        self._dummy_hash = hasher.hash(_DUMMY_PASSWORD)

    def register(self, email: str, password: str, name: str, now: Optional[datetime] = None) -> AuthResult:
        """Create an account and issue its first token pair.

        Raises:
            DuplicateEmailError: the email already has an account
            HashingFailure: the password could not be hashed
        """
        if self._users.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmailError()

        password_hash = self._hasher.hash(password)
        # Signing cannot fail once AuthConfig has validated, so the row is
        # written before the pair is built. If it ever did, the account stays
        # and the caller can log in to get tokens.
        user = self._users.create(email, password_hash, name)
        tokens = self._issuer.issue_token_pair(user.id, user.email, now)

        logger.info("User registered", extra={"user": user.id})
        return AuthResult(user=user, tokens=tokens)

    def login(self, email: str, password: str, now: Optional[datetime] = None) -> AuthResult:
        """Check credentials and issue a token pair.

        Raises:
            InvalidCredentialsFailure: unknown email, wrong password or an
                unreadable stored hash; the caller cannot tell which.
        """
        user = self._users.find_by_email(email)
        if user is None:
            self._hasher.verify(password, self._dummy_hash)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsFailure()

        try:
            matches = self._hasher.verify(password, user.password_hash)
        except VerificationFailure as e:
            logger.error(f"Login failed: stored credential unusable ({e})", extra={"user": user.id})
            raise InvalidCredentialsFailure()

        if not matches:
            logger.warning("Login failed: password mismatch", extra={"user": user.id})
            raise InvalidCredentialsFailure()

        tokens = self._issuer.issue_token_pair(user.id, user.email, now)
        logger.info("Login successful", extra={"user": user.id})
        return AuthResult(user=user, tokens=tokens)

    def refresh(self, refresh_token: str, now: Optional[datetime] = None) -> AuthResult:
        """Exchange a refresh token for a fresh pair.

        The presented refresh token stays valid until it expires; it is not
        revoked here.

        Raises:
            InvalidRefreshFailure: the token failed validation or its subject
                no longer exists.
        """
        try:
            user_id = self._validator.validate_refresh_token(refresh_token, now)
        except InvalidRefreshFailure as e:
            logger.warning(f"Refresh token rejected: {e.reason}")
            raise

        user = self._users.find_by_id(user_id)
        if user is None:
            logger.warning("Refresh token rejected: subject not found", extra={"user": user_id})
            raise InvalidRefreshFailure("unknown_subject")

        tokens = self._issuer.issue_token_pair(user.id, user.email, now)
        logger.info("Token refreshed", extra={"user": user.id})
        return AuthResult(user=user, tokens=tokens)
