"""
Database access layer (DB-API 2.0 connection manager).

Provides a thin abstraction over sqlite3 and psycopg2 for database portability.
NOT an ORM, just connection pooling and placeholder adaptation.

Usage:
    from core.db import DatabaseManager

    db = DatabaseManager(db_path=Path("data/tasks.db"))
    with db.connect() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()

Queries are written with '?' placeholders; the PostgreSQL wrapper converts
them to '%s'. Integrity violations from either driver surface as
sqlite3.IntegrityError so repositories handle a single exception type.
"""

import logging
import queue
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def is_postgres(db_url: Optional[str] = None) -> bool:
    """Check if the given URL points to PostgreSQL."""
    if db_url is None:
        return False
    return db_url.startswith("postgresql://") or db_url.startswith("postgres://")


class _CompatConnection:
    """
    Wraps a psycopg2 connection to provide SQLite-compatible interface.

    - Accepts '?' placeholders and converts to '%s'
    - Returns dict-like rows via RealDictCursor
    - Proxies commit/rollback/close
    """

    def __init__(self, conn):
        self._conn = conn

    def cursor(self):
        import psycopg2.extras
        return _CompatCursor(self._conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor))

    def commit(self):
        self._conn.commit()

    def rollback(self):
        self._conn.rollback()

    def close(self):
        self._conn.close()


class _CompatCursor:
    """Wraps a psycopg2 cursor to accept '?' placeholders."""

    def __init__(self, cursor):
        self._cursor = cursor

    def execute(self, sql, params=None):
        import psycopg2

        try:
            return self._cursor.execute(sql.replace("?", "%s"), params)
        except psycopg2.IntegrityError as e:
            raise sqlite3.IntegrityError(str(e)) from e

    def fetchone(self):
        return self._cursor.fetchone()

    def fetchall(self):
        return self._cursor.fetchall()

    @property
    def rowcount(self):
        return self._cursor.rowcount

    def close(self):
        self._cursor.close()


class DatabaseManager:
    """
    Connection pool for the application database.

    Uses PostgreSQL when db_url is a postgres:// URL; otherwise a SQLite
    file at db_path. One instance is created by the app factory and handed
    to the repositories.
    """

    def __init__(
        self,
        db_url: Optional[str] = None,
        db_path: Optional[Path] = None,
        pool_size: int = 10,
    ):
        self._db_url = db_url
        self._db_path = Path(db_path) if db_path else Path("data") / "tasks.db"
        self._pool_size = pool_size
        self._use_postgres = is_postgres(db_url)

        # Connection pool (SQLite only; PostgreSQL uses the psycopg2 pool)
        self._pool: queue.Queue = queue.Queue(maxsize=pool_size)
        self._pg_pool = None

        if self._use_postgres:
            self._init_pg_pool()
        else:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)

    def _init_pg_pool(self):
        """Initialize PostgreSQL connection pool."""
        try:
            import psycopg2.pool
        except ImportError:
            raise ImportError(
                "psycopg2 is required for PostgreSQL. "
                "Install with: pip install psycopg2-binary"
            )
        self._pg_pool = psycopg2.pool.ThreadedConnectionPool(
            minconn=1,
            maxconn=self._pool_size,
            dsn=self._db_url,
        )

    # ----- connection acquisition / release -----------------------------------

    def get_connection(self):
        """Acquire a connection from the pool."""
        if self._use_postgres:
            raw = self._pg_pool.getconn()
            raw.autocommit = False
            return _CompatConnection(raw)

        try:
            conn = self._pool.get_nowait()
            conn.execute("SELECT 1")
            return conn
        except queue.Empty:
            pass
        except sqlite3.Error:
            logger.debug("Discarding stale SQLite connection")

        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def release_connection(self, conn):
        """Return a connection to the pool."""
        if self._use_postgres:
            self._pg_pool.putconn(conn._conn)
            return

        try:
            self._pool.put_nowait(conn)
        except queue.Full:
            conn.close()

    @contextmanager
    def connect(self):
        """Context manager: acquire → yield → commit/rollback → release."""
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.fetchone()

    def close(self):
        """Close every pooled connection."""
        if self._pg_pool is not None:
            self._pg_pool.closeall()
            return
        while not self._pool.empty():
            try:
                self._pool.get_nowait().close()
            except queue.Empty:
                break

    @property
    def db_path(self) -> Path:
        """Return the SQLite database path."""
        return self._db_path

    @property
    def db_url(self) -> Optional[str]:
        """Return the database URL (None for SQLite)."""
        return self._db_url
