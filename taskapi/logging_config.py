"""
Structured JSON logging configuration.

Every record passes through RedactingFilter before it is formatted, so
passwords, secrets and bearer tokens never reach a handler even when a
caller interpolates them into a message by mistake.
"""

import json
import logging
import re
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

# Loggers owned by this project; everything below them inherits the handlers.
PROJECT_LOGGERS = ('taskapi', 'core', 'config')

MAX_REDACTION_LENGTH = 10240  # Skip redaction on strings > 10KB (performance)

# Pre-compiled patterns for performance (order matters - more specific first)
REDACTION_PATTERNS = [
    # Explicit key=value patterns
    (re.compile(r'\b(password|passwd|pwd)\s*[=:]\s*\S+', re.IGNORECASE), r'\1=***REDACTED***'),
    (re.compile(r'\b(secret|jwt[_-]?secret|api[_-]?key|auth[_-]?token)\s*[=:]\s*\S+', re.IGNORECASE),
     r'\1=***REDACTED***'),
    (re.compile(r'\b(refresh[_-]?token|access[_-]?token)\s*[=:]\s*\S+', re.IGNORECASE), r'\1=***REDACTED***'),

    # Bearer tokens
    (re.compile(r'(Bearer\s+)[A-Za-z0-9\-_\.]{20,}', re.IGNORECASE), r'\1***REDACTED***'),

    # JSON-style "key": "value"
    (re.compile(r'(["\'](?:password|secret|token|refresh_token)["\'])\s*:\s*["\'][^"\']+["\']', re.IGNORECASE),
     r'\1: "***REDACTED***"'),

    # Bare JWTs (header.payload.signature)
    (re.compile(r'\beyJ[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+'), '***REDACTED***'),
]


def redact(text: str) -> str:
    """Remove sensitive data from log text."""
    if not text or len(text) > MAX_REDACTION_LENGTH:
        return text

    result = text
    for pattern, replacement in REDACTION_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


class RedactingFilter(logging.Filter):
    """Scrub credentials from the rendered message of every record."""

    def filter(self, record):
        message = record.getMessage()
        scrubbed = redact(message)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = redact(self.formatException(record.exc_info))

        for attr in ('request_id', 'user', 'endpoint', 'method', 'status_code',
                     'duration_ms', 'remote_addr', 'error_id'):
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry)


def configure_logging(settings, app=None):
    """Configure structured JSON logging.

    Args:
        settings: AppSettings providing log_level, log_format and log_file.
        app: Optional Flask app whose logger will be updated.

    Returns:
        List of the handlers installed on the project loggers.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)

    if settings.log_format == 'json':
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

    handlers = [console_handler]

    # File handler (if configured)
    if settings.log_file:
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        handlers.append(file_handler)

    redacting_filter = RedactingFilter()
    for handler in handlers:
        handler.addFilter(redacting_filter)

    for name in PROJECT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = list(handlers)

    # Sync Flask's logger
    if app is not None:
        app.logger.handlers = list(handlers)
        app.logger.setLevel(level)

    return handlers
