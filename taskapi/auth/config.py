"""
Auth configuration - no dependencies on other auth modules except errors.

AuthConfig is built once at startup and handed to every auth component.
It is frozen, so components can share it across request threads without
locking.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta

from .errors import ConfigurationFailure

logger = logging.getLogger(__name__)

# Only symmetric HMAC algorithms are ever accepted, for signing or verifying.
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

DEFAULT_ISSUER = "secure-task-api"

# RFC 7518 recommends a key at least as long as the hash output.
_RECOMMENDED_SECRET_BYTES = 32


@dataclass(frozen=True)
class AuthConfig:
    """Signing and lifetime parameters shared by issuer and validator."""
    secret: bytes
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
    issuer: str = DEFAULT_ISSUER
    algorithm: str = "HS256"
    password_hash_method: str = "scrypt"

    def __post_init__(self):
        if isinstance(self.secret, str):
            object.__setattr__(self, "secret", self.secret.encode("utf-8"))
        if not self.secret:
            raise ConfigurationFailure("JWT_SECRET is required")
        if self.algorithm not in HMAC_ALGORITHMS:
            raise ConfigurationFailure(
                f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}, got {self.algorithm!r}"
            )
        if not self.issuer:
            raise ConfigurationFailure("JWT_ISSUER must not be empty")
        if len(self.secret) < _RECOMMENDED_SECRET_BYTES:
            logger.warning(
                "JWT_SECRET is shorter than %d bytes; use a longer random value",
                _RECOMMENDED_SECRET_BYTES,
            )

    def __repr__(self):
        return (
            f"AuthConfig(secret=***, access_ttl={self.access_ttl!r}, "
            f"refresh_ttl={self.refresh_ttl!r}, issuer={self.issuer!r}, "
            f"algorithm={self.algorithm!r})"
        )

    @classmethod
    def from_settings(cls, settings) -> "AuthConfig":
        """Build from config.settings.AppSettings (or its `auth` group)."""
        auth = getattr(settings, "auth", settings)
        return cls(
            secret=auth.jwt_secret.get_secret_value(),
            access_ttl=timedelta(minutes=auth.jwt_access_expiration_minutes),
            refresh_ttl=timedelta(days=auth.jwt_refresh_expiration_days),
            issuer=auth.jwt_issuer,
            algorithm=auth.jwt_algorithm,
            password_hash_method=auth.password_hash_method,
        )
