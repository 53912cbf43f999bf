"""Option lifecycle triggers."""

from handlecheck.config import get_config
from handlecheck.services.handle_validation import MessageSurface, create_handle_field

from .own_mastodon import DEFAULT_OPTION_NAME, OwnMastodonOption, register_triggers
from .triggers import (
    RUN_ALL_SAVE_TRIGGER,
    AfterLoad,
    LoadParam,
    OverrideContinue,
    SaveAborted,
    SaveParam,
    TriggerRegistry,
)

__all__ = [
    "DEFAULT_OPTION_NAME",
    "RUN_ALL_SAVE_TRIGGER",
    "AfterLoad",
    "LoadParam",
    "OverrideContinue",
    "OwnMastodonOption",
    "SaveAborted",
    "SaveParam",
    "TriggerRegistry",
    "register_own_mastodon",
    "register_triggers",
]


def register_own_mastodon(
    registry: TriggerRegistry,
    surface: MessageSurface | None = None,
) -> OwnMastodonOption:
    """Create the handle field from config and register its triggers."""
    field_config = get_config().handle_field
    own_mastodon = OwnMastodonOption(
        create_handle_field(surface=surface),
        prefetch_subscribe_template=field_config.prefetch_subscribe_template,
    )
    register_triggers(registry, own_mastodon, option=field_config.option_name)
    return own_mastodon
