"""Full (slow) validation of the Mastodon handle field."""

from collections.abc import Mapping
from typing import Any

from handlecheck.core.logging import get_logger
from handlecheck.services.mastodon import (
    InvalidHandleError,
    MastodonClient,
    ParsedHandle,
    split_user_handle,
)

from .classifier import classify_lookup_failure, probe_server
from .display import ErrorDisplayTracker
from .errors import EmptyHandleError
from .models import ProbeResult, ValidationOutcome, ValidationState

logger = get_logger(__name__)


class HandleValidator:
    """
    Checks syntax and existence of a handle, showing why it failed.

    Every rejection is shown on the tracker *before* the exception leaves
    ``validate``, so callers that only see the failure still leave the user
    with the right explanation.
    """

    def __init__(self, client: MastodonClient, tracker: ErrorDisplayTracker) -> None:
        self.client = client
        self.tracker = tracker

    async def validate(self, option_value: Any) -> ValidationOutcome | None:
        """
        Validate the field value.

        Args:
            option_value: None (not configured yet), a stored handle
                (ParsedHandle or mapping, trusted) or the raw input string

        Returns:
            ValidationOutcome for raw input that checked out, None when there
            was nothing to check

        Raises:
            EmptyHandleError: Input is an empty string
            InvalidHandleError: Input is no ``user@server`` handle
            Exception: Whatever the account lookup raised
        """
        parsed = self.check_syntax(option_value)
        if parsed is None:
            return None

        return await self.check_remote(parsed, option_value)

    def check_syntax(self, option_value: Any) -> ParsedHandle | None:
        """
        Run the local part of the validation.

        Returns:
            The parsed handle when a remote check is still needed, else None
        """
        # Default option, not yet set. Must not raise so first load succeeds.
        if option_value is None:
            self.tracker.show(ValidationState.EMPTY, option_value)
            return None

        # Loaded straight from storage, always valid
        if isinstance(option_value, (ParsedHandle, Mapping)):
            self.tracker.hide(animate=False)
            return None

        if option_value == "":
            self.tracker.show(ValidationState.EMPTY, option_value)
            raise EmptyHandleError()

        try:
            return split_user_handle(option_value)
        except InvalidHandleError:
            self.tracker.show(ValidationState.INVALID_SYNTAX, option_value)
            raise

    async def check_remote(self, parsed: ParsedHandle, option_value: str) -> ValidationOutcome:
        """Look the account up, and on failure find out why it failed."""
        try:
            account = await self.client.get_account_link(parsed)
        except Exception as error:
            probe = await probe_server(self.client, parsed.server_host)

            # Only blame the server when we are sure it is no Mastodon server
            if probe is ProbeResult.INCOMPATIBLE:
                state = ValidationState.NOT_COMPATIBLE_SERVER
            else:
                state = classify_lookup_failure(error)

            logger.bind(handle=str(parsed), state=state.value, error=str(error)).info(
                "mastodon_handle_rejected"
            )
            self.tracker.show(state, option_value)
            raise

        self.tracker.hide()
        logger.bind(handle=str(parsed)).info("mastodon_handle_verified")
        return ValidationOutcome(parsed_handle=parsed, account_lookup=account)
