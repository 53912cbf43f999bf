"""
Pytest configuration and fixtures for handlecheck tests.

Provides:
- A mock message surface recording banner calls
- A mock Mastodon client with async lookup methods
- A handle field wired to both
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from handlecheck.config import get_config, get_settings
from handlecheck.services.handle_validation import HandleField, MessageSurface
from handlecheck.services.mastodon import (
    AccountLookupResult,
    MastodonClient,
    ParsedHandle,
    reset_mastodon_client,
)


@pytest.fixture(autouse=True)
def reset_cached_config():
    """Clear cached settings and singletons between tests."""
    get_settings.cache_clear()
    get_config.cache_clear()
    reset_mastodon_client()
    yield
    get_settings.cache_clear()
    get_config.cache_clear()
    reset_mastodon_client()


@pytest.fixture
def surface():
    """Message surface mock."""
    return MagicMock(spec=MessageSurface)


@pytest.fixture
def alice():
    """A valid parsed handle."""
    return ParsedHandle(local_part="alice", server_host="example.social")


@pytest.fixture
def mock_client(alice):
    """Mastodon client mock whose lookup succeeds for alice by default."""
    client = MagicMock(spec=MastodonClient)
    client.get_account_link = AsyncMock(
        return_value=AccountLookupResult(
            handle=alice,
            account_link="https://example.social/@alice",
        )
    )
    client.is_mastodon_server = AsyncMock(return_value=True)
    client.get_subscribe_api_template = AsyncMock(
        return_value="https://example.social/authorize_interaction?uri={uri}"
    )
    return client


@pytest.fixture
def field(mock_client, surface):
    """Handle field wired to the mocks."""
    return HandleField(client=mock_client, surface=surface)
