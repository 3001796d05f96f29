"""
Authentication request schemas.
"""

import re
from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_RE.match(v):
        raise ValueError('Must be a valid email address')
    return v


class RegisterRequest(BaseModel):
    """New account request."""
    model_config = {"strict": True}

    email: str = Field(..., min_length=1, max_length=254, description="Email address")
    password: str = Field(..., min_length=1, max_length=200, description="Password")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Lower-case and check email format."""
        return _normalize_email(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Name is required')
        return v.strip()


class LoginRequest(BaseModel):
    """User login request."""
    model_config = {"strict": True}

    email: str = Field(..., min_length=1, max_length=254, description="Email address")
    password: str = Field(..., min_length=1, max_length=200, description="Password")

    @field_validator('email')
    @classmethod
    def strip_email(cls, v: str) -> str:
        # No format check: a malformed email is just an unknown account.
        return v.strip().lower()


class RefreshTokenRequest(BaseModel):
    """Token refresh request."""
    model_config = {"strict": True}

    refresh_token: str = Field(..., min_length=1, description="Refresh token")
