"""
Wiring for the auth core.

build_auth_components() is called once by the app factory. The resulting
bundle is stored in app.extensions["taskapi.auth"] and is read-only from
then on.
"""
from dataclasses import dataclass

from .config import AuthConfig
from .gate import AuthorizationGate
from .passwords import PasswordHasher
from .service import AuthService
from .tokens import TokenIssuer, TokenValidator


@dataclass(frozen=True)
class AuthComponents:
    config: AuthConfig
    hasher: PasswordHasher
    issuer: TokenIssuer
    validator: TokenValidator
    gate: AuthorizationGate
    service: AuthService


def build_auth_components(config: AuthConfig, users) -> AuthComponents:
    """Construct every auth component from one AuthConfig and a user store."""
    hasher = PasswordHasher(config.password_hash_method)
    issuer = TokenIssuer(config)
    validator = TokenValidator(config)
    return AuthComponents(
        config=config,
        hasher=hasher,
        issuer=issuer,
        validator=validator,
        gate=AuthorizationGate(validator),
        service=AuthService(users, hasher, issuer, validator),
    )
