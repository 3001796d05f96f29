"""
Task request schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from taskapi.models import TaskStatus


class CreateTaskRequest(BaseModel):
    """Create task request."""
    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: str = Field(default="", max_length=10000, description="Task description")
    due_date: Optional[datetime] = Field(None, description="Due date (ISO 8601)")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Title is required')
        return v.strip()


class UpdateTaskRequest(BaseModel):
    """Partial task update. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=255, description="Task title")
    description: Optional[str] = Field(None, max_length=10000, description="Task description")
    status: Optional[TaskStatus] = Field(None, description="pending, in_progress or completed")
    due_date: Optional[datetime] = Field(None, description="Due date (ISO 8601)")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not v.strip():
            raise ValueError('Title must not be blank')
        return v.strip()
