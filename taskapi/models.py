"""
Domain records for users and tasks.

Timestamps are stored as ISO 8601 UTC strings and exposed as-is in JSON.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class User:
    id: str
    email: str
    name: str
    password_hash: str
    created_at: str
    updated_at: str

    def to_public(self) -> dict:
        """Fields safe to return to clients. The password hash is never included."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class Task:
    id: str
    title: str
    description: str
    status: TaskStatus
    due_date: Optional[str]
    user_id: str
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "due_date": self.due_date,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.deleted_at:
            data["deleted_at"] = self.deleted_at
        return data


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }
