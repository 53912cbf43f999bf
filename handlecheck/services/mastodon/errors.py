"""Errors raised by the Mastodon handle codec and client."""


class MastodonError(Exception):
    """Base class for Mastodon related failures."""


class InvalidHandleError(MastodonError, ValueError):
    """Raised when a string is not of the form ``user@server``."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"invalid Mastodon handle {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class UnknownAccountError(MastodonError):
    """Raised when the server answers but does not know the account."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"Mastodon account {handle} does not exist")
        self.handle = handle


class NetworkError(MastodonError):
    """Raised when a server could not be contacted at all (DNS, TLS, timeout, refused)."""

    def __init__(self, host: str, detail: str) -> None:
        super().__init__(f"could not contact {host}: {detail}")
        self.host = host
        self.detail = detail


class ServerResponseError(MastodonError):
    """Raised when a server answers with an unexpected status or payload."""

    def __init__(self, url: str, status: int | None, detail: str = "") -> None:
        message = f"unexpected response from {url}"
        if status is not None:
            message += f" (HTTP {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.url = url
        self.status = status
