"""Handle validation models."""

from enum import Enum

from pydantic import BaseModel

from handlecheck.services.mastodon import AccountLookupResult, ParsedHandle


class ValidationState(str, Enum):
    """Which message (if any) is currently shown for the handle field."""

    NONE = "none"  # Nothing shown, the only non-error state
    EMPTY = "empty"  # Warning: no handle entered yet
    INVALID_SYNTAX = "invalid_syntax"  # Not of the form user@server
    NONEXISTENT = "nonexistent"  # Server knows no such account
    NETWORK_ERROR = "network_error"  # Server could not be contacted
    NOT_COMPATIBLE_SERVER = "not_compatible_server"  # Host is no Mastodon server
    CHECK_FAILED = "check_failed"  # Anything else went wrong


class ProbeResult(str, Enum):
    """Outcome of asking a host whether it is a Mastodon server."""

    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"  # Probe itself failed, treated like COMPATIBLE


class ValidationOutcome(BaseModel):
    """Result of a successful full validation, handed on to the save step."""

    parsed_handle: ParsedHandle
    account_lookup: AccountLookupResult
