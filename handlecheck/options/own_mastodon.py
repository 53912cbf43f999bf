"""Triggers wiring the Mastodon handle validation into the option lifecycle."""

import asyncio
from collections.abc import Mapping
from typing import Any

from handlecheck.core.logging import get_logger
from handlecheck.services.handle_validation import HandleField
from handlecheck.services.mastodon import ParsedHandle, concat_user_handle, format_handle

from .triggers import (
    RUN_ALL_SAVE_TRIGGER,
    LoadParam,
    OverrideContinue,
    SaveParam,
    TriggerRegistry,
)

logger = get_logger(__name__)

DEFAULT_OPTION_NAME = "ownMastodon"


class OwnMastodonOption:
    """Load/save adapter for the user's own Mastodon handle."""

    def __init__(self, field: HandleField, prefetch_subscribe_template: bool = True) -> None:
        self.field = field
        self.prefetch_subscribe_template = prefetch_subscribe_template
        self._background: set[asyncio.Task] = set()

    def prepare_for_input(self, param: LoadParam) -> OverrideContinue:
        """Turn the stored split handle into the text shown in the input field."""
        own_mastodon = param.option_value

        # Default option, show an empty input
        if own_mastodon is None:
            return OverrideContinue("")

        if isinstance(own_mastodon, ParsedHandle):
            return OverrideContinue(format_handle(own_mastodon))

        if (
            isinstance(own_mastodon, Mapping)
            and own_mastodon.get("username")
            and own_mastodon.get("server")
        ):
            return OverrideContinue(concat_user_handle(own_mastodon["username"], own_mastodon["server"]))

        return OverrideContinue(own_mastodon)

    async def save(self, param: SaveParam) -> OverrideContinue:
        """Store the split handle produced by the save trigger."""
        # Outcome of HandleValidator.validate, the only save trigger
        outcome = param.save_trigger_values[0]

        # Nothing was checked (unset or loaded from storage), keep the value as is
        if outcome is None:
            return OverrideContinue(param.option_value)

        parsed_handle = outcome.parsed_handle
        if self.prefetch_subscribe_template:
            self._prefetch(parsed_handle)

        return OverrideContinue(parsed_handle)

    def _prefetch(self, handle: ParsedHandle) -> None:
        """Pre-query the subscribe API template while we have time. Fire and forget."""
        task = asyncio.get_running_loop().create_task(self._prefetch_quietly(handle))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _prefetch_quietly(self, handle: ParsedHandle) -> None:
        try:
            await self.field.client.get_subscribe_api_template(handle, refresh=True)
        except Exception as e:
            logger.bind(handle=str(handle), error=str(e)).warning("subscribe_template_prefetch_failed")

    async def validate(self, option_value: Any, option: str | None = None) -> Any:
        return await self.field.validator.validate(option_value)

    def quick_check(self, option_value: Any, option: str | None = None) -> Any:
        return self.field.quick_checker.quick_check(option_value)


def register_triggers(
    registry: TriggerRegistry,
    own_mastodon: OwnMastodonOption,
    option: str = DEFAULT_OPTION_NAME,
) -> None:
    """
    Bind the handle triggers.

    This is basically the "init" method of the option.
    """
    # Override load/save behaviour for the custom field
    registry.add_custom_load_override(option, own_mastodon.prepare_for_input)
    registry.add_custom_save_override(option, own_mastodon.save)

    registry.register_save(option, own_mastodon.validate)
    registry.register_update(option, own_mastodon.quick_check)

    # Establish the initial message state once options are loaded
    registry.register_after_load(RUN_ALL_SAVE_TRIGGER)
