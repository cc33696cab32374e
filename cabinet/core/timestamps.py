"""Timestamp helpers shared by the stores and the conditional-request layer.

Everything is UTC and truncated to whole seconds, the granularity of an
HTTP-date.
"""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Optional


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC with sub-second precision dropped.

    Naive values (as returned by SQLite) are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0)


def utc_now() -> datetime:
    return as_utc(datetime.now(timezone.utc))


def from_timestamp(seconds: float) -> datetime:
    """Convert a POSIX timestamp (e.g. ``st_mtime``) to a stored timestamp."""
    return as_utc(datetime.fromtimestamp(seconds, tz=timezone.utc))


def format_http_date(value: datetime) -> str:
    """Render as an IMF-fixdate: ``Wed, 21 Oct 2015 07:28:00 GMT``."""
    return format_datetime(as_utc(value), usegmt=True)


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an HTTP-date, returning None when it is missing or malformed."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    return as_utc(parsed)
