"""
Flask extension instances and per-app service lookups.

Extensions are initialized via init_extensions(app). Repositories built by
the app factory are stored in app.extensions and read back with
get_repositories().
"""

import logging
from dataclasses import dataclass

from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from core.db import DatabaseManager

logger = logging.getLogger(__name__)

REPOSITORIES_KEY = "taskapi.repositories"


@dataclass(frozen=True)
class Repositories:
    db: DatabaseManager
    users: object
    tasks: object


def get_repositories() -> Repositories:
    """Return the repositories registered by create_app()."""
    return current_app.extensions[REPOSITORIES_KEY]


def init_extensions(app, settings) -> Limiter:
    """Initialize CORS and the rate limiter for the app.

    Args:
        app: Flask application instance
        settings: AppSettings

    Returns:
        The Limiter bound to this app, so the factory can attach
        per-blueprint limits.
    """
    CORS(app, origins=settings.cors_origin_list)

    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[settings.rate_limit.default],
        storage_uri=settings.rate_limit.storage,
        strategy="moving-window",
    )
    logger.debug(f"Rate limiter storage: {settings.rate_limit.storage.split('://')[0]}")
    return limiter
