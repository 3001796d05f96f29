"""
Flask Application Factory.

Creates and configures the app with its extensions, auth core, repositories
and blueprints. Nothing is built at import time; every call returns an
independent app, which is how the tests get a fresh database per test.
"""

import logging
import re
import time
import uuid

from dotenv import load_dotenv
from flask import Flask, g, request

logger = logging.getLogger(__name__)

# Paths logged at DEBUG so probes do not flood the log
_QUIET_PATHS = ('/health', '/healthz')

# Client-supplied request ids are echoed into headers and logs
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9-]{1,64}")


def create_app(config=None, settings=None):
    """Create and configure the Flask application.

    Args:
        config: Optional dict of Flask config overrides (e.g. {'TESTING': True}).
        settings: Optional AppSettings; defaults to get_settings().

    Returns:
        Configured Flask app instance.

    Raises:
        ConfigurationFailure: the JWT configuration is unusable.
    """
    load_dotenv()

    if settings is None:
        from config.settings import get_settings
        settings = get_settings()

    app = Flask(__name__)
    app.config.update(
        APP_NAME=settings.app_name,
        APP_VERSION=settings.app_version,
        APP_ENVIRONMENT=settings.app_environment,
        PASSWORD_MIN_LENGTH=settings.auth.password_min_length,
    )
    if config:
        app.config.update(config)

    # Trailing slashes are accepted on every route
    app.url_map.strict_slashes = False

    # Configure logging
    from taskapi.logging_config import configure_logging
    configure_logging(settings, app)

    # Auth config first: a bad secret must stop startup before anything else
    from taskapi.auth import AuthConfig, build_auth_components
    auth_config = AuthConfig.from_settings(settings)

    # Database and repositories
    from core.db import DatabaseManager
    from taskapi.extensions import REPOSITORIES_KEY, Repositories
    from taskapi.repositories import TaskRepository, UserRepository, init_schema

    db = DatabaseManager(
        db_url=settings.database.database_url,
        db_path=settings.database.database_path,
    )
    init_schema(db)

    users = UserRepository(db)
    app.extensions[REPOSITORIES_KEY] = Repositories(db=db, users=users, tasks=TaskRepository(db))
    app.extensions["taskapi.auth"] = build_auth_components(auth_config, users)

    # Initialize extensions (CORS, limiter)
    from taskapi.extensions import init_extensions
    limiter = init_extensions(app, settings)

    # Register custom error handlers for APIError hierarchy
    from core.errors import register_error_handlers
    register_error_handlers(app)

    _register_blueprints(app, limiter, settings)
    _register_middleware(app)

    logger.info(f"{settings.app_name} {settings.app_version} initialized ({settings.app_environment})")
    return app


def _register_blueprints(app, limiter, settings):
    """Register all route blueprints."""
    from taskapi.routes import auth_bp, health_bp, tasks_bp

    # Health checks
    limiter.exempt(health_bp)
    app.register_blueprint(health_bp)

    # Auth, with its own tighter limit
    limiter.limit(settings.rate_limit.auth)(auth_bp)
    app.register_blueprint(auth_bp)

    app.register_blueprint(tasks_bp)


def _register_middleware(app):
    """Register request tracking and security middleware."""
    from taskapi.lifecycle import decrement_active_requests, increment_active_requests

    @app.before_request
    def before_request_tracking():
        """Track request start and assign request ID."""
        increment_active_requests()
        g.request_id = _request_id(request.headers.get('X-Request-ID'))
        g.start_time = time.time()

    @app.after_request
    def after_request_tracking(response):
        """Log request completion with timing and add security headers."""
        decrement_active_requests()

        duration_ms = 0
        if hasattr(g, 'start_time'):
            duration_ms = (time.time() - g.start_time) * 1000

        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        if request.path in _QUIET_PATHS and response.status_code < 400:
            log_level = logging.DEBUG

        logger.log(
            log_level,
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms:.1f}ms)",
            extra={
                'request_id': getattr(g, 'request_id', 'unknown'),
                'method': request.method,
                'endpoint': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration_ms, 2),
                'remote_addr': request.remote_addr,
                'user': getattr(g, 'current_user', None),
            }
        )

        # Security headers
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"
        response.headers['Cache-Control'] = 'no-store'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response


def _request_id(supplied):
    """Use the caller's X-Request-ID if it is short and plain, else mint one."""
    if supplied and _REQUEST_ID_RE.fullmatch(supplied):
        return supplied
    return str(uuid.uuid4())[:8]
