"""Shared pytest fixtures for task API tests."""
import os
import sys
from datetime import timedelta

import pytest

# Add project root to path
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)

# ---------------------------------------------------------------------------
# Deterministic test environment, set BEFORE any taskapi module imports.
# pbkdf2 with a tiny iteration count keeps hashing fast; production uses
# scrypt.
# ---------------------------------------------------------------------------
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret-for-pytest-32chars!')
os.environ.setdefault('PASSWORD_HASH_METHOD', 'pbkdf2:sha256:1000')
os.environ.setdefault('LOG_FORMAT', 'text')
os.environ.setdefault('LOG_LEVEL', 'DEBUG')

TEST_SECRET = b'unit-test-secret-s1-at-least-32-bytes'
OTHER_SECRET = b'unit-test-secret-s2-at-least-32-bytes'
TEST_HASH_METHOD = 'pbkdf2:sha256:1000'


# =============================================================================
# Auth Core Fixtures
# =============================================================================

@pytest.fixture
def auth_config():
    """AuthConfig with a fixed secret and a cheap hash work factor."""
    from taskapi.auth import AuthConfig
    return AuthConfig(secret=TEST_SECRET, password_hash_method=TEST_HASH_METHOD)


@pytest.fixture
def make_config():
    """Factory for AuthConfig variants (other secret, other issuer, odd TTLs)."""
    from taskapi.auth import AuthConfig

    def _make(secret=TEST_SECRET, issuer='secure-task-api',
              access_ttl=timedelta(minutes=15), refresh_ttl=timedelta(days=7)):
        return AuthConfig(
            secret=secret,
            issuer=issuer,
            access_ttl=access_ttl,
            refresh_ttl=refresh_ttl,
            password_hash_method=TEST_HASH_METHOD,
        )
    return _make


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def db(tmp_path):
    """Per-test SQLite database with the schema applied."""
    from core.db import DatabaseManager
    from taskapi.repositories import init_schema

    manager = DatabaseManager(db_path=tmp_path / "test_tasks.db")
    init_schema(manager)
    yield manager
    manager.close()


@pytest.fixture
def users(db):
    from taskapi.repositories import UserRepository
    return UserRepository(db)


@pytest.fixture
def tasks_repo(db):
    from taskapi.repositories import TaskRepository
    return TaskRepository(db)


# =============================================================================
# Flask App Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path, monkeypatch):
    """AppSettings pointing at a per-test SQLite file."""
    monkeypatch.setenv('DATABASE_PATH', str(tmp_path / "app_tasks.db"))
    monkeypatch.delenv('DATABASE_URL', raising=False)
    from config.settings import AppSettings
    return AppSettings()


@pytest.fixture
def app(settings):
    from taskapi.app import create_app
    app = create_app({'TESTING': True, 'RATELIMIT_ENABLED': False}, settings=settings)
    yield app
    app.extensions['taskapi.repositories'].db.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register_user(client):
    """Register a user through the API and return the response data."""
    def _register(email='alice@example.com', password='password123', name='Alice'):
        resp = client.post('/v1/auth/register', json={
            'email': email,
            'password': password,
            'name': name,
        })
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['data']
    return _register


@pytest.fixture
def auth_headers(register_user):
    """Authorization header for a freshly registered user."""
    data = register_user()
    return {'Authorization': f"Bearer {data['token']}"}
