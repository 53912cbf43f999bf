"""Parsing and formatting of Mastodon handles (``user@server``)."""

import re

from .errors import InvalidHandleError
from .models import ParsedHandle

# Mastodon usernames: letters, digits, underscores, with dots/dashes allowed inside
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_.-]*[A-Za-z0-9_])?$")

# DNS labels separated by dots, optional port
SERVER_PATTERN = re.compile(
    r"^(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)*"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?::[0-9]{1,5})?$"
)


def split_user_handle(raw: str) -> ParsedHandle:
    """
    Split a Mastodon handle into username and server.

    Accepts an optional leading ``@`` (``@alice@example.social``) and
    surrounding whitespace.

    Args:
        raw: Handle as typed by the user

    Returns:
        ParsedHandle with local part and (lower-cased) server host

    Raises:
        InvalidHandleError: If the string is not a valid handle
    """
    if not isinstance(raw, str):
        raise InvalidHandleError(repr(raw), "handle must be a string")

    handle = raw.strip()
    if handle.startswith("@"):
        handle = handle[1:]

    parts = handle.split("@")
    if len(parts) != 2:
        raise InvalidHandleError(raw, "expected exactly one @ between username and server")

    username, server = parts
    if not username:
        raise InvalidHandleError(raw, "username is empty")
    if not server:
        raise InvalidHandleError(raw, "server is empty")
    if not USERNAME_PATTERN.match(username):
        raise InvalidHandleError(raw, f"username {username!r} contains invalid characters")
    if not SERVER_PATTERN.match(server):
        raise InvalidHandleError(raw, f"server {server!r} is not a valid host name")

    return ParsedHandle(local_part=username, server_host=server)


def concat_user_handle(local_part: str, server_host: str) -> str:
    """Join username and server into the canonical ``user@server`` form."""
    return f"{local_part}@{server_host}"


def format_handle(handle: ParsedHandle) -> str:
    """Format a parsed handle for display."""
    return concat_user_handle(handle.local_part, handle.server_host)
