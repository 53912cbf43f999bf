"""Mastodon HTTP client: WebFinger account lookup and server detection."""

from typing import Any

import aiohttp

from handlecheck.core.logging import get_logger

from .cache import TemplateCache
from .errors import NetworkError, ServerResponseError, UnknownAccountError
from .models import AccountLookupResult, ParsedHandle

logger = get_logger(__name__)

PROFILE_PAGE_REL = "http://webfinger.net/rel/profile-page"
SELF_REL = "self"
SUBSCRIBE_REL = "http://ostatus.org/schema/1.0/subscribe"


class MastodonClient:
    """
    Talks to Mastodon (compatible) servers.

    A fresh session is opened per request; lookups happen on user action only,
    so there is nothing worth pooling.
    """

    def __init__(
        self,
        timeout_seconds: int = 10,
        user_agent: str = "handlecheck/1.0",
        template_cache: TemplateCache | None = None,
    ) -> None:
        """
        Initialize Mastodon client.

        Args:
            timeout_seconds: Total timeout per HTTP request
            user_agent: User-Agent header sent to servers
            template_cache: Cache for subscribe API templates
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self.templates = template_cache if template_cache is not None else TemplateCache()

    async def get_account_link(self, handle: ParsedHandle) -> AccountLookupResult:
        """
        Look up the account behind a handle via WebFinger.

        Raises:
            UnknownAccountError: The server does not know the account
            NetworkError: The server could not be contacted
            ServerResponseError: The server answered with garbage
        """
        url, data = await self._webfinger(handle)

        link = (
            _find_link(data, PROFILE_PAGE_REL)
            or _find_link(data, SELF_REL)
            or next(iter(data.get("aliases") or []), None)
        )
        if not link:
            raise ServerResponseError(url, 200, "no profile link in WebFinger response")

        # Same document carries the subscribe template, keep it for later
        template = _find_link(data, SUBSCRIBE_REL, key="template")
        if template:
            self.templates.put(handle, template)

        logger.bind(handle=str(handle), account_link=link).debug("mastodon_account_found")
        return AccountLookupResult(handle=handle, account_link=link)

    async def is_mastodon_server(self, host: str) -> bool:
        """
        Check whether a host runs a Mastodon compatible API.

        Returns:
            True if /api/v1/instance describes an instance, False otherwise

        Raises:
            NetworkError: The host could not be contacted
            ServerResponseError: The host answered with a server error
        """
        url = f"https://{host}/api/v1/instance"
        status, data = await self._fetch_json(url, host)

        if status >= 500:
            raise ServerResponseError(url, status)
        if status != 200 or not isinstance(data, dict):
            logger.bind(host=host, status=status).debug("mastodon_instance_api_missing")
            return False

        return bool(data.get("uri") or data.get("domain"))

    async def get_subscribe_api_template(self, handle: ParsedHandle, refresh: bool = False) -> str:
        """
        Get the remote-follow (subscribe) URL template of the handle's server.

        Args:
            handle: Account whose server should be asked
            refresh: Ignore any cached template and query the server again

        Returns:
            URL template containing ``{uri}``
        """
        if not refresh:
            cached = self.templates.get(handle)
            if cached:
                return cached

        url, data = await self._webfinger(handle)
        template = _find_link(data, SUBSCRIBE_REL, key="template")
        if not template:
            raise ServerResponseError(url, 200, "no subscribe template in WebFinger response")

        self.templates.put(handle, template)
        logger.bind(handle=str(handle)).debug("mastodon_subscribe_template_cached")
        return template

    async def _webfinger(self, handle: ParsedHandle) -> tuple[str, dict[str, Any]]:
        """Fetch the WebFinger document for a handle."""
        host = handle.server_host
        url = f"https://{host}/.well-known/webfinger"
        status, data = await self._fetch_json(url, host, params={"resource": f"acct:{handle}"})

        if status in (404, 410):
            raise UnknownAccountError(str(handle))
        if status != 200:
            raise ServerResponseError(url, status)
        if not isinstance(data, dict):
            raise ServerResponseError(url, status, "WebFinger response is not a JSON object")

        return url, data

    async def _fetch_json(
        self,
        url: str,
        host: str,
        params: dict[str, str] | None = None,
    ) -> tuple[int, Any]:
        """GET a URL and decode JSON. Non-200 or undecodable bodies yield None."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        return response.status, None
                    try:
                        return response.status, await response.json(content_type=None)
                    except ValueError:
                        logger.bind(url=url).debug("mastodon_invalid_json")
                        return response.status, None
        except (aiohttp.ClientConnectionError, TimeoutError) as e:
            logger.bind(host=host, error=str(e)).info("mastodon_connection_failed")
            raise NetworkError(host, str(e) or type(e).__name__) from e


def _find_link(data: dict[str, Any], rel: str, key: str = "href") -> str | None:
    """Find a link value by rel in a WebFinger document."""
    for link in data.get("links") or []:
        if isinstance(link, dict) and link.get("rel") == rel and link.get(key):
            return link[key]
    return None
