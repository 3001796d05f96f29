"""
Task repository. Every query is scoped to the owning user, and soft-deleted
rows are invisible to all reads and writes.
"""
import logging
import uuid
from typing import Optional

from core.db import DatabaseManager
from core.timestamps import isonow
from taskapi.models import Pagination, Task, TaskStatus

logger = logging.getLogger(__name__)

_TASK_COLUMNS = "id, title, description, status, due_date, user_id, created_at, updated_at, deleted_at"


def _row_to_task(row) -> Task:
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        due_date=row["due_date"],
        user_id=row["user_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row["deleted_at"],
    )


class TaskRepository:
    """Persists tasks for a user."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def create(self, user_id: str, title: str, description: str = "",
               due_date: Optional[str] = None) -> Task:
        now = isonow()
        task = Task(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            due_date=due_date,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO tasks ({_TASK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (task.id, task.title, task.description, task.status.value, task.due_date,
                 task.user_id, task.created_at, task.updated_at, None),
            )
        return task

    def get_by_id(self, task_id: str, user_id: str) -> Optional[Task]:
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks "
                "WHERE id = ? AND user_id = ? AND deleted_at IS NULL",
                (task_id, user_id),
            )
            row = cursor.fetchone()
        return _row_to_task(row) if row else None

    def get_all(self, user_id: str, page: int, limit: int) -> tuple[list[Task], Pagination]:
        """Return one page of the user's tasks, newest first."""
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT COUNT(*) AS total FROM tasks WHERE user_id = ? AND deleted_at IS NULL",
                (user_id,),
            )
            total = cursor.fetchone()["total"]

            pagination = Pagination(page=page, limit=limit, total=total)
            cursor.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks "
                "WHERE user_id = ? AND deleted_at IS NULL "
                "ORDER BY created_at DESC, id "
                "LIMIT ? OFFSET ?",
                (user_id, limit, pagination.offset),
            )
            tasks = [_row_to_task(row) for row in cursor.fetchall()]
        return tasks, pagination

    def update(self, task: Task) -> Task:
        """Write back title, description, status and due date."""
        task.updated_at = isonow()
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE tasks SET title = ?, description = ?, status = ?, due_date = ?, updated_at = ? "
                "WHERE id = ? AND user_id = ? AND deleted_at IS NULL",
                (task.title, task.description, task.status.value, task.due_date, task.updated_at,
                 task.id, task.user_id),
            )
        return task

    def delete(self, task_id: str, user_id: str) -> bool:
        """Soft-delete a task. Returns False if there was nothing to delete."""
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE tasks SET deleted_at = ? "
                "WHERE id = ? AND user_id = ? AND deleted_at IS NULL",
                (isonow(), task_id, user_id),
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Task deleted", extra={"user": user_id})
        return deleted
