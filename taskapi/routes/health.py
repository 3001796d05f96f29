"""
Health check endpoints for the task API.

Provides a liveness probe and a readiness probe that pings the database.
"""

import logging

from flask import Blueprint, current_app, jsonify

from core.timestamps import isonow
from taskapi.extensions import get_repositories

logger = logging.getLogger(__name__)

# Create blueprint
health_bp = Blueprint('health', __name__)


@health_bp.route('/healthz', methods=['GET'])
def healthz():
    """Liveness probe. Never touches dependencies."""
    return jsonify({"status": "alive", "timestamp": isonow()})


@health_bp.route('/health', methods=['GET'])
def health():
    """Readiness probe with a database round trip."""
    body = {
        "status": "healthy",
        "timestamp": isonow(),
        "database": "connected",
        "version": current_app.config.get("APP_VERSION"),
    }
    try:
        get_repositories().db.ping()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        body.update(status="unhealthy", database="disconnected")
        return jsonify(body), 503

    return jsonify(body)
