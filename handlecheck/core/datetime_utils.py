"""Centralized datetime utilities for consistent timezone handling.

Usage:
    from handlecheck.core.datetime_utils import utc_now, is_expired

    cached_at = utc_now()
    if is_expired(cached_at, ttl):
        refetch()
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Get current UTC time as naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def is_expired(timestamp: datetime, ttl: timedelta) -> bool:
    """Check whether a naive UTC timestamp is older than the given TTL."""
    return utc_now() - timestamp >= ttl
