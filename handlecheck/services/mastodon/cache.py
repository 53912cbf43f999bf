"""In-memory TTL cache for subscribe API templates."""

from datetime import datetime, timedelta

from handlecheck.core.datetime_utils import is_expired, utc_now

from .models import ParsedHandle


class TemplateCache:
    """
    Caches the subscribe API template per handle.

    Templates rarely change, but servers do move, so entries expire.
    """

    def __init__(self, ttl_hours: int = 24) -> None:
        """
        Initialize template cache.

        Args:
            ttl_hours: How long to keep a template
        """
        self._cache: dict[str, tuple[str, datetime]] = {}
        self._ttl = timedelta(hours=ttl_hours)

    @staticmethod
    def _key(handle: ParsedHandle) -> str:
        return f"{handle.local_part.lower()}@{handle.server_host}"

    def get(self, handle: ParsedHandle) -> str | None:
        """Get cached template if not expired."""
        key = self._key(handle)
        cached = self._cache.get(key)
        if cached:
            template, cached_at = cached
            if not is_expired(cached_at, self._ttl):
                return template
            # Expired - remove from cache
            del self._cache[key]
        return None

    def put(self, handle: ParsedHandle, template: str) -> None:
        """Store a template for the handle."""
        self._cache[self._key(handle)] = (template, utc_now())

    def clear(self) -> None:
        """Clear all cached templates."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
