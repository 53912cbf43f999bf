"""Tests for the subscribe template cache."""

from datetime import timedelta
from unittest.mock import patch

from handlecheck.core.datetime_utils import utc_now
from handlecheck.services.mastodon import ParsedHandle, TemplateCache


class TestTemplateCache:
    """Tests for TemplateCache."""

    def test_put_and_get(self):
        """Stored templates are returned."""
        cache = TemplateCache(ttl_hours=1)
        handle = ParsedHandle(local_part="alice", server_host="example.social")

        cache.put(handle, "https://example.social/{uri}")

        assert cache.get(handle) == "https://example.social/{uri}"
        assert len(cache) == 1

    def test_key_ignores_username_case(self):
        """Alice and alice share an entry."""
        cache = TemplateCache()
        cache.put(ParsedHandle(local_part="Alice", server_host="example.social"), "t")

        assert cache.get(ParsedHandle(local_part="alice", server_host="EXAMPLE.social")) == "t"

    def test_miss(self):
        """Unknown handles are not cached."""
        cache = TemplateCache()

        assert cache.get(ParsedHandle(local_part="bob", server_host="example.social")) is None

    def test_expired_entries_are_dropped(self):
        """Entries past the TTL are removed."""
        cache = TemplateCache(ttl_hours=1)
        handle = ParsedHandle(local_part="alice", server_host="example.social")
        cache.put(handle, "t")

        later = utc_now() + timedelta(hours=2)
        with patch("handlecheck.core.datetime_utils.utc_now", return_value=later):
            assert cache.get(handle) is None

        assert len(cache) == 0

    def test_clear(self):
        """clear() empties the cache."""
        cache = TemplateCache()
        cache.put(ParsedHandle(local_part="alice", server_host="example.social"), "t")

        cache.clear()

        assert len(cache) == 0
