"""
Date Utilities
==============

Millisecond clocks for request signatures and the ``GET /time`` payload.
Arithmetic goes through timedelta so millisecond values round-trip exactly.
"""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
ONE_MS = timedelta(milliseconds=1)


def to_unix_ms(dt: datetime) -> int:
    """
    Milliseconds since the Unix epoch.

    Naive datetimes are read as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return (dt - EPOCH) // ONE_MS


def from_unix_ms(timestamp_ms: int) -> datetime:
    """Aware UTC datetime for a millisecond timestamp."""
    return EPOCH + timestamp_ms * ONE_MS


def utc_now() -> datetime:
    return datetime.now(UTC)
