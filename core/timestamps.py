"""Timezone-aware UTC timestamp utilities.

Every timestamp the API stores or returns goes through these helpers, so
all of them are ISO 8601 strings with an explicit +00:00 offset.
"""

from datetime import datetime, timezone


def now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def isonow() -> str:
    """Return the current UTC time as an ISO 8601 string with +00:00 offset."""
    return now().isoformat()


def to_utc_iso(dt: datetime) -> str:
    """Serialize a datetime as UTC ISO 8601, assuming UTC if it is naive."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()
