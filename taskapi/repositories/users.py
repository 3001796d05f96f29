"""
User repository: the credential store consumed by the auth service.
"""
import logging
import sqlite3
import uuid
from typing import Optional

from core.db import DatabaseManager
from core.timestamps import isonow
from taskapi.auth.errors import DuplicateEmailError
from taskapi.models import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, password_hash, name, created_at, updated_at"


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRepository:
    """Persists and looks up user records."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def find_by_email(self, email: str) -> Optional[User]:
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?", (email,))
            row = cursor.fetchone()
        return _row_to_user(row) if row else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._db.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
            row = cursor.fetchone()
        return _row_to_user(row) if row else None

    def create(self, email: str, password_hash: str, name: str) -> User:
        """Insert a new user.

        Raises:
            DuplicateEmailError: the email is already registered. Covers the
                race where two registrations pass the existence check.
        """
        now = isonow()
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        try:
            with self._db.connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (user.id, user.email, user.password_hash, user.name, user.created_at, user.updated_at),
                )
        except sqlite3.IntegrityError:
            raise DuplicateEmailError()

        logger.info("User created", extra={"user": user.id})
        return user
