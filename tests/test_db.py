"""Tests for the database access layer and repositories."""

import sqlite3

import pytest

from core.db import DatabaseManager, is_postgres
from taskapi.auth import DuplicateEmailError
from taskapi.models import TaskStatus


class TestDialect:
    @pytest.mark.parametrize("url,expected", [
        (None, False),
        ("sqlite:///tasks.db", False),
        ("postgresql://u:p@localhost/tasks", True),
        ("postgres://u:p@localhost/tasks", True),
    ])
    def test_is_postgres(self, url, expected):
        assert is_postgres(url) is expected


class TestDatabaseManager:
    def test_connect_commits(self, tmp_path):
        db = DatabaseManager(db_path=tmp_path / "sub" / "x.db")
        with db.connect() as conn:
            conn.execute("CREATE TABLE t (v TEXT)")
            conn.execute("INSERT INTO t VALUES ('a')")
        with db.connect() as conn:
            assert conn.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1
        db.close()

    def test_connect_rolls_back_on_error(self, tmp_path):
        db = DatabaseManager(db_path=tmp_path / "x.db")
        with db.connect() as conn:
            conn.execute("CREATE TABLE t (v TEXT)")
        with pytest.raises(RuntimeError):
            with db.connect() as conn:
                conn.execute("INSERT INTO t VALUES ('a')")
                raise RuntimeError("abort")
        with db.connect() as conn:
            assert conn.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 0
        db.close()

    def test_ping(self, db):
        db.ping()


class TestUserRepository:
    def test_create_and_find(self, users):
        created = users.create("a@b.com", "pbkdf2:sha256:1000$salt$hash", "A")
        assert users.find_by_email("a@b.com").id == created.id
        assert users.find_by_id(created.id).email == "a@b.com"

    def test_missing_user(self, users):
        assert users.find_by_email("nobody@b.com") is None
        assert users.find_by_id("nope") is None

    def test_unique_email(self, users):
        users.create("a@b.com", "h", "A")
        with pytest.raises(DuplicateEmailError):
            users.create("a@b.com", "h", "Again")


class TestTaskRepository:
    def test_soft_delete_hides_task(self, users, tasks_repo, db):
        owner = users.create("a@b.com", "h", "A")
        task = tasks_repo.create(owner.id, "t1")
        assert tasks_repo.delete(task.id, owner.id) is True
        assert tasks_repo.get_by_id(task.id, owner.id) is None

        with db.connect() as conn:
            row = conn.execute("SELECT deleted_at FROM tasks WHERE id = ?", (task.id,)).fetchone()
        assert row["deleted_at"] is not None

    def test_update_persists(self, users, tasks_repo):
        owner = users.create("a@b.com", "h", "A")
        task = tasks_repo.create(owner.id, "t1")
        task.status = TaskStatus.COMPLETED
        tasks_repo.update(task)
        assert tasks_repo.get_by_id(task.id, owner.id).status is TaskStatus.COMPLETED

    def test_task_requires_existing_owner(self, tasks_repo):
        with pytest.raises(sqlite3.IntegrityError):
            tasks_repo.create("no-such-user", "orphan")
