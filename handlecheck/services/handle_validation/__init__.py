"""Validation state machine for the Mastodon handle field."""

from handlecheck.services.mastodon import MastodonClient, get_mastodon_client

from .classifier import classify_lookup_failure, probe_server
from .display import ERROR_KEYS, WARNING_KEYS, ErrorDisplayTracker
from .errors import EmptyHandleError
from .messages import LoggingMessageSurface, MessageSurface
from .models import ProbeResult, ValidationOutcome, ValidationState
from .quick_check import QuickChecker
from .validator import HandleValidator

__all__ = [
    "ERROR_KEYS",
    "WARNING_KEYS",
    "EmptyHandleError",
    "ErrorDisplayTracker",
    "HandleField",
    "HandleValidator",
    "LoggingMessageSurface",
    "MessageSurface",
    "ProbeResult",
    "QuickChecker",
    "ValidationOutcome",
    "ValidationState",
    "classify_lookup_failure",
    "create_handle_field",
    "probe_server",
]


class HandleField:
    """Tracker plus both validators for one handle field, sharing one state."""

    def __init__(self, client: MastodonClient, surface: MessageSurface) -> None:
        self.client = client
        self.tracker = ErrorDisplayTracker(surface)
        self.validator = HandleValidator(client, self.tracker)
        self.quick_checker = QuickChecker(self.validator)

    @property
    def state(self) -> ValidationState:
        return self.tracker.state


def create_handle_field(
    surface: MessageSurface | None = None,
    client: MastodonClient | None = None,
) -> HandleField:
    """Build a handle field using the configured client and a logging surface by default."""
    return HandleField(
        client=client or get_mastodon_client(),
        surface=surface or LoggingMessageSurface(),
    )
