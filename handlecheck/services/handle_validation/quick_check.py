"""Per-keystroke (fast) re-check of the Mastodon handle field."""

import asyncio
from collections.abc import Coroutine
from typing import Any

from handlecheck.core.logging import get_logger
from handlecheck.services.mastodon import InvalidHandleError, split_user_handle

from .errors import EmptyHandleError
from .models import ValidationOutcome, ValidationState
from .validator import HandleValidator

logger = get_logger(__name__)


class QuickChecker:
    """
    Hides a shown message once the user has fixed the input.

    Never shows a new message, so typing is not interrupted. Messages that
    need the network to confirm (nonexistent, unreachable, ...) are simply
    hidden and re-checked on the next save.
    """

    def __init__(self, validator: HandleValidator) -> None:
        self.validator = validator
        self.tracker = validator.tracker
        self._pending: set[asyncio.Task] = set()

    def quick_check(self, option_value: Any) -> asyncio.Task | None:
        """
        Re-check the field value after an edit.

        Returns:
            The task running a remote re-validation, if one had to be started
        """
        tracker = self.tracker

        # Message was hidden by typing, then the user went back to the exact
        # rejected value. Editors fire no change event for an identical value,
        # so the full check has to be re-run from here.
        if (
            not tracker.is_shown
            and tracker.last_rejected_value is not None
            and tracker.last_rejected_value == option_value
        ):
            task = self._revalidate(option_value)
            tracker.last_rejected_value = None
            return task

        if not tracker.is_shown:
            return None

        if tracker.state is ValidationState.EMPTY:
            if option_value == "":
                return None
        elif tracker.state is ValidationState.INVALID_SYNTAX:
            try:
                split_user_handle(option_value)
            except InvalidHandleError:
                # Remember, so returning to this value after a fix re-arms the message
                tracker.last_rejected_value = option_value
                return None

        # User fixed the previously reported problem
        tracker.hide()
        return None

    def _revalidate(self, option_value: Any) -> asyncio.Task | None:
        """Run the full validation: syntax now, remote part as a task."""
        try:
            parsed = self.validator.check_syntax(option_value)
        except (EmptyHandleError, InvalidHandleError) as e:
            logger.bind(error=str(e)).debug("handle_recheck_rejected")
            return None

        if parsed is None:
            return None

        return self._schedule(self.validator.check_remote(parsed, option_value))

    def _schedule(self, coro: Coroutine[Any, Any, ValidationOutcome]) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Plain synchronous caller, nothing else is running
            asyncio.run(self._run_quietly(coro))
            return None

        task = loop.create_task(self._run_quietly(coro))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @staticmethod
    async def _run_quietly(
        coro: Coroutine[Any, Any, ValidationOutcome],
    ) -> ValidationOutcome | None:
        # The failure is already shown on the tracker, nobody awaits the error
        try:
            return await coro
        except Exception as e:
            logger.bind(error=str(e)).debug("handle_recheck_failed")
            return None
