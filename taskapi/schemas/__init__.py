"""
Pydantic schemas for request validation.

These schemas provide centralized validation with clear error messages,
replacing scattered manual validation throughout route handlers.
"""

from taskapi.schemas.common import (
    PaginationParams,
    parse_body,
)
from taskapi.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
)
from taskapi.schemas.tasks import (
    CreateTaskRequest,
    UpdateTaskRequest,
)

__all__ = [
    # Common
    "PaginationParams",
    "parse_body",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    # Tasks
    "CreateTaskRequest",
    "UpdateTaskRequest",
]
