"""Maps lookup failures to validation states."""

import aiohttp

from handlecheck.core.logging import get_logger
from handlecheck.services.mastodon import MastodonClient, NetworkError, UnknownAccountError

from .models import ProbeResult, ValidationState

logger = get_logger(__name__)


def classify_lookup_failure(error: BaseException) -> ValidationState:
    """
    Classify why an account lookup failed on a (presumably) Mastodon server.

    Only called once the disambiguation probe did not rule the server out.
    """
    if isinstance(error, UnknownAccountError):
        return ValidationState.NONEXISTENT
    if isinstance(error, (NetworkError, aiohttp.ClientConnectionError, TimeoutError)):
        # Likely unknown/wrong server
        return ValidationState.NETWORK_ERROR
    return ValidationState.CHECK_FAILED


async def probe_server(client: MastodonClient, host: str) -> ProbeResult:
    """
    Ask whether a host is a Mastodon server at all.

    Fails open: if the probe itself errors the result is UNKNOWN, which callers
    treat like COMPATIBLE so the original lookup error is not masked.
    """
    try:
        is_mastodon = await client.is_mastodon_server(host)
    except Exception as e:
        logger.bind(host=host, error=str(e)).warning("mastodon_probe_failed")
        return ProbeResult.UNKNOWN

    return ProbeResult.COMPATIBLE if is_mastodon else ProbeResult.INCOMPATIBLE
