"""
Auth domain types - no dependencies on other auth modules.

NOTE: Keep this minimal. Only add types here if they are shared by
several auth submodules and would otherwise cause circular imports.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Claims:
    """Decoded, verified access token payload (immutable)."""
    user_id: str
    email: str
    issuer: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenPair:
    """Access + refresh token issued together."""
    access_token: str
    refresh_token: str
