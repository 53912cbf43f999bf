"""Tracks which handle message is visible and keeps the surface in sync."""

from handlecheck.core.logging import get_logger

from .messages import MessageSurface
from .models import ValidationState

logger = get_logger(__name__)

# State -> message key; EMPTY is the only warning, the rest are errors
WARNING_KEYS = {
    ValidationState.EMPTY: "mastodonHandleIsEmpty",
}
ERROR_KEYS = {
    ValidationState.INVALID_SYNTAX: "mastodonHandleIsInvalid",
    ValidationState.NONEXISTENT: "mastodonHandleDoesNotExist",
    ValidationState.NETWORK_ERROR: "mastodonHandleServerCouldNotBeContacted",
    ValidationState.NOT_COMPATIBLE_SERVER: "isNoMastodonServer",
    ValidationState.CHECK_FAILED: "mastodonHandleCheckFailed",
}


class ErrorDisplayTracker:
    """
    Single-slot record of the message shown for one handle field.

    Invariant: after any show/hide call at most one message is visible and it
    is the one for ``state``.
    """

    def __init__(self, surface: MessageSurface) -> None:
        self.surface = surface
        self.state = ValidationState.NONE
        self.last_rejected_value: str | None = None

    @property
    def is_shown(self) -> bool:
        return self.state is not ValidationState.NONE

    def hide(self, *, animate: bool = True) -> None:
        """Hide the currently shown message, if any."""
        if self.state in WARNING_KEYS:
            self.surface.hide_warning(animate=animate)
        elif self.state in ERROR_KEYS:
            self.surface.hide_error(animate=animate)

        self.state = ValidationState.NONE

    def show(self, state: ValidationState, rejected_value: str | None) -> None:
        """
        Replace whatever is shown by the message for ``state``.

        Args:
            state: Error state to show, must not be NONE
            rejected_value: Field value that caused the message

        Raises:
            TypeError: If state has no message bound to it
        """
        if not isinstance(state, ValidationState) or state is ValidationState.NONE:
            raise TypeError(f"invalid error type has been given: {state!r}")

        # Old message goes away without animation, the new one replaces it
        self.hide(animate=False)

        if state in WARNING_KEYS:
            self.surface.show_warning(WARNING_KEYS[state])
        else:
            self.surface.show_error(ERROR_KEYS[state])

        self.state = state
        self.last_rejected_value = rejected_value
        logger.bind(state=state.value).debug("handle_state_shown")
