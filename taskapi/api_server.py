"""
Task API Server.

Entry point that creates the Flask app via the application factory.
Run with `python -m taskapi.api_server` or point a WSGI server at
`taskapi.api_server:app`.
"""

import logging

from config.settings import get_settings
from taskapi.app import create_app
from taskapi.extensions import get_repositories

# Create the application
app = create_app()


if __name__ == '__main__':
    from taskapi.lifecycle import register_shutdown_handlers

    logger = logging.getLogger('taskapi')
    settings = get_settings()

    with app.app_context():
        db = get_repositories().db

    # Register graceful shutdown handlers
    register_shutdown_handlers(db=db, timeout=settings.shutdown_timeout)

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}...")
    app.run(host=settings.host, port=settings.port, threaded=True)
