"""
Task API authentication module.

Public API:
- Decorators: jwt_required
- Components: AuthConfig, PasswordHasher, TokenIssuer, TokenValidator,
  AuthorizationGate, AuthService, build_auth_components
- Request context: RequestContext, AuthState
- Failures: ConfigurationFailure, HashingFailure, VerificationFailure,
  InvalidCredentialsFailure, InvalidTokenFailure, InvalidRefreshFailure,
  DuplicateEmailError

Import Rules:
- External callers: Use `from taskapi.auth import X` (this facade)
- Internal auth modules: Use `from .submodule import X` (direct imports)
"""

# =============================================================================
# Decorators
# =============================================================================
from .decorators import jwt_required, get_auth_components

# =============================================================================
# Components
# =============================================================================
from .config import AuthConfig, HMAC_ALGORITHMS
from .passwords import PasswordHasher, validate_password_strength
from .tokens import TokenIssuer, TokenValidator
from .gate import AuthorizationGate, AuthState, RequestContext, extract_bearer_token
from .service import AuthService, AuthResult
from .components import AuthComponents, build_auth_components
from .types import Claims, TokenPair

# =============================================================================
# Failures
# =============================================================================
from .errors import (
    ConfigurationFailure,
    HashingFailure,
    VerificationFailure,
    InvalidCredentialsFailure,
    InvalidTokenFailure,
    InvalidRefreshFailure,
    DuplicateEmailError,
)

__all__ = [
    # Decorators
    "jwt_required",
    "get_auth_components",

    # Components
    "AuthConfig",
    "HMAC_ALGORITHMS",
    "PasswordHasher",
    "validate_password_strength",
    "TokenIssuer",
    "TokenValidator",
    "AuthorizationGate",
    "AuthState",
    "RequestContext",
    "extract_bearer_token",
    "AuthService",
    "AuthResult",
    "AuthComponents",
    "build_auth_components",
    "Claims",
    "TokenPair",

    # Failures
    "ConfigurationFailure",
    "HashingFailure",
    "VerificationFailure",
    "InvalidCredentialsFailure",
    "InvalidTokenFailure",
    "InvalidRefreshFailure",
    "DuplicateEmailError",
]
