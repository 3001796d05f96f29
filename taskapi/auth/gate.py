"""
Request authorization gate.

Every protected request runs through AuthorizationGate.authenticate(), which
moves its RequestContext from UNAUTHENTICATED to AUTHENTICATED (claims
attached) or REJECTED. Both outcomes are terminal. The context is immutable;
the gate returns a new one rather than changing the caller's, so nothing
outside the request is ever touched.
"""
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .errors import InvalidTokenFailure
from .tokens import TokenValidator
from .types import Claims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class RequestContext:
    """Per-request auth state, passed explicitly to protected views."""
    request_id: str
    authorization: Optional[str] = None
    state: AuthState = AuthState.UNAUTHENTICATED
    claims: Optional[Claims] = None
    rejection_reason: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @property
    def user_id(self) -> Optional[str]:
        return self.claims.user_id if self.claims else None

    @property
    def email(self) -> Optional[str]:
        return self.claims.email if self.claims else None


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    """Return the token from `Bearer <token>`, or None if the header is not exactly that."""
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    if not token or any(ch.isspace() for ch in token):
        return None
    return token


class AuthorizationGate:
    """Authenticates request contexts with a TokenValidator."""

    def __init__(self, validator: TokenValidator):
        self._validator = validator

    def authenticate(self, ctx: RequestContext, now: Optional[datetime] = None) -> RequestContext:
        """Resolve ctx to AUTHENTICATED or REJECTED.

        Terminal contexts are returned unchanged, so calling this twice on
        the same request validates the token only once.
        """
        if ctx.state is not AuthState.UNAUTHENTICATED:
            return ctx

        token = extract_bearer_token(ctx.authorization)
        if token is None:
            reason = "missing_header" if not ctx.authorization else "malformed_header"
            return self._reject(ctx, reason)

        try:
            claims = self._validator.validate_access_token(token, now)
        except InvalidTokenFailure as e:
            return self._reject(ctx, e.reason)

        return replace(ctx, state=AuthState.AUTHENTICATED, claims=claims)

    def require(self, ctx: RequestContext, now: Optional[datetime] = None) -> RequestContext:
        """Like authenticate(), but raise InvalidTokenFailure on rejection."""
        ctx = self.authenticate(ctx, now)
        if not ctx.is_authenticated:
            raise InvalidTokenFailure(ctx.rejection_reason or "rejected")
        return ctx

    def _reject(self, ctx: RequestContext, reason: str) -> RequestContext:
        logger.warning(
            "Request rejected by auth gate: %s",
            reason,
            extra={"request_id": ctx.request_id},
        )
        return replace(ctx, state=AuthState.REJECTED, rejection_reason=reason)
