"""Mastodon handle parsing and server access."""

from handlecheck.config import get_config

from .cache import TemplateCache
from .client import MastodonClient
from .errors import (
    InvalidHandleError,
    MastodonError,
    NetworkError,
    ServerResponseError,
    UnknownAccountError,
)
from .handle import concat_user_handle, format_handle, split_user_handle
from .models import AccountLookupResult, ParsedHandle

__all__ = [
    "AccountLookupResult",
    "InvalidHandleError",
    "MastodonClient",
    "MastodonError",
    "NetworkError",
    "ParsedHandle",
    "ServerResponseError",
    "TemplateCache",
    "UnknownAccountError",
    "concat_user_handle",
    "format_handle",
    "get_mastodon_client",
    "split_user_handle",
]

_client_instance: MastodonClient | None = None


def get_mastodon_client() -> MastodonClient:
    """
    Get the configured Mastodon client instance.

    Uses singleton pattern so the template cache is shared.
    """
    global _client_instance
    if _client_instance is not None:
        return _client_instance

    config = get_config().mastodon
    _client_instance = MastodonClient(
        timeout_seconds=config.timeout_seconds,
        user_agent=config.user_agent,
        template_cache=TemplateCache(ttl_hours=config.template_cache_ttl_hours),
    )
    return _client_instance


def reset_mastodon_client() -> None:
    """Reset the client instance. Useful for testing."""
    global _client_instance
    _client_instance = None
