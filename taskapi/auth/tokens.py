"""
JWT token creation and validation.

Handles:
- Access token issuance ({user_id, email, iss, iat, nbf, exp})
- Refresh token issuance ({sub, iss, iat, nbf, exp}, no email)
- Validation: algorithm, then signature, then claims

Tokens are stateless. Nothing is recorded server-side at issue time and a
refresh does not revoke the refresh token it consumed.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

import jwt

from .config import HMAC_ALGORITHMS, AuthConfig
from .errors import InvalidRefreshFailure, InvalidTokenFailure
from .types import Claims, TokenPair

logger = logging.getLogger(__name__)

# Time checks are done here against the caller's clock, not by PyJWT.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_iss": False,
    "verify_aud": False,
}


def _timestamp(now: Optional[datetime]) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
    return int(now.timestamp())


def _is_numeric(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_datetime(value, failure: type) -> datetime:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise failure("malformed")


# =============================================================================
# Token Creation
# =============================================================================

class TokenIssuer:
    """Creates signed access and refresh tokens."""

    def __init__(self, config: AuthConfig):
        self._config = config

    def _sign(self, payload: dict) -> str:
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def issue_access_token(self, user_id: str, email: str, now: Optional[datetime] = None) -> str:
        """Create an access token for an authenticated user.

        Args:
            user_id: User's stable identifier
            email: User's email address
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT access token
        """
        issued = _timestamp(now)
        payload = {
            "user_id": user_id,
            "email": email,
            "iss": self._config.issuer,
            "iat": issued,
            "nbf": issued,
            "exp": issued + int(self._config.access_ttl.total_seconds()),
        }
        return self._sign(payload)

    def issue_refresh_token(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a refresh token. Carries the user id only, no email."""
        issued = _timestamp(now)
        payload = {
            "sub": user_id,
            "iss": self._config.issuer,
            "iat": issued,
            "nbf": issued,
            "exp": issued + int(self._config.refresh_ttl.total_seconds()),
        }
        return self._sign(payload)

    def issue_token_pair(self, user_id: str, email: str, now: Optional[datetime] = None) -> TokenPair:
        """Create both tokens from the same clock reading.

        If either signing step raises, the exception propagates and no
        pair is returned.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        access_token = self.issue_access_token(user_id, email, now)
        refresh_token = self.issue_refresh_token(user_id, now)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)


# =============================================================================
# Token Decoding/Validation
# =============================================================================

class TokenValidator:
    """Verifies tokens produced by a TokenIssuer sharing the same AuthConfig."""

    def __init__(self, config: AuthConfig):
        self._config = config

    def _decode(self, token: str, failure: type) -> dict:
        """Check algorithm and signature; return the verified payload."""
        if not isinstance(token, str) or not token:
            raise failure("empty")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.DecodeError:
            raise failure("malformed")

        if header.get("alg") not in HMAC_ALGORITHMS:
            raise failure("unexpected_algorithm")

        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=list(HMAC_ALGORITHMS),
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError:
            raise failure("bad_signature")
        except jwt.InvalidAlgorithmError:
            raise failure("unexpected_algorithm")
        except jwt.DecodeError:
            raise failure("malformed")
        except jwt.PyJWTError:
            raise failure("invalid")

        if not isinstance(payload, dict):
            raise failure("malformed")
        return payload

    def _check_claims(self, payload: dict, now: Optional[datetime], failure: type) -> None:
        """Issuer and time window checks, run only on verified payloads."""
        if payload.get("iss") != self._config.issuer:
            raise failure("wrong_issuer")

        exp = payload.get("exp")
        if not _is_numeric(exp):
            raise failure("missing_expiry")

        current = _timestamp(now)
        if current > exp:
            raise failure("expired")

        for claim in ("iat", "nbf"):
            if claim in payload and not _is_numeric(payload[claim]):
                raise failure("malformed")

        not_before = payload.get("nbf", payload.get("iat"))
        if not_before is not None and current < not_before:
            raise failure("not_yet_valid")

    def validate_access_token(self, token: str, now: Optional[datetime] = None) -> Claims:
        """Validate an access token and return its claims.

        Raises:
            InvalidTokenFailure: for every kind of rejection; `reason` says
                which check failed.
        """
        payload = self._decode(token, InvalidTokenFailure)
        self._check_claims(payload, now, InvalidTokenFailure)

        user_id = payload.get("user_id")
        email = payload.get("email")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenFailure("missing_identity")
        if not isinstance(email, str):
            raise InvalidTokenFailure("missing_identity")

        issued_at = payload.get("iat", payload["exp"])
        return Claims(
            user_id=user_id,
            email=email,
            issuer=payload["iss"],
            issued_at=_as_datetime(issued_at, InvalidTokenFailure),
            not_before=_as_datetime(payload.get("nbf", issued_at), InvalidTokenFailure),
            expires_at=_as_datetime(payload["exp"], InvalidTokenFailure),
        )

    def validate_refresh_token(self, token: str, now: Optional[datetime] = None) -> str:
        """Validate a refresh token and return its subject (the user id).

        The subject is not looked up here; a user deleted after issue still
        validates until the caller resolves the id.

        Raises:
            InvalidRefreshFailure: for every kind of rejection.
        """
        payload = self._decode(token, InvalidRefreshFailure)
        self._check_claims(payload, now, InvalidRefreshFailure)

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidRefreshFailure("missing_subject")
        return subject
