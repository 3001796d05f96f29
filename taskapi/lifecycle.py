"""
Graceful shutdown and lifecycle management.
"""

import logging
import signal
import threading
import time

logger = logging.getLogger(__name__)

_shutdown_in_progress = False
_active_requests = 0
_lock = threading.Lock()

_shutdown_timeout = 30
_db = None


def increment_active_requests():
    """Increment active request counter."""
    global _active_requests
    with _lock:
        _active_requests += 1


def decrement_active_requests():
    """Decrement active request counter."""
    global _active_requests
    with _lock:
        _active_requests = max(0, _active_requests - 1)


def graceful_shutdown(signum, frame):
    """Handle graceful shutdown on SIGTERM/SIGINT."""
    global _shutdown_in_progress

    if _shutdown_in_progress:
        logger.warning("Forced shutdown requested")
        raise SystemExit(1)

    _shutdown_in_progress = True
    signal_name = signal.Signals(signum).name
    logger.info(f"Received {signal_name}, starting graceful shutdown...")

    # Wait for active requests to complete
    start_time = time.time()
    while _active_requests > 0 and (time.time() - start_time) < _shutdown_timeout:
        logger.info(f"Waiting for {_active_requests} active requests to complete...")
        time.sleep(1)

    if _active_requests > 0:
        logger.warning(f"Shutdown timeout reached with {_active_requests} requests still active")
    else:
        logger.info("All requests completed")

    if _db is not None:
        logger.info("Closing database connections...")
        try:
            _db.close()
        except Exception as e:
            logger.warning(f"Database cleanup failed: {e}")

    logger.info("Graceful shutdown complete")
    raise SystemExit(0)


def register_shutdown_handlers(db=None, timeout: int = 30):
    """Register signal handlers for graceful shutdown.

    Args:
        db: DatabaseManager to close once in-flight requests have drained
        timeout: seconds to wait for in-flight requests
    """
    global _db, _shutdown_timeout
    _db = db
    _shutdown_timeout = timeout
    signal.signal(signal.SIGTERM, graceful_shutdown)
    signal.signal(signal.SIGINT, graceful_shutdown)
    logger.info("Registered shutdown handlers for SIGTERM and SIGINT")
