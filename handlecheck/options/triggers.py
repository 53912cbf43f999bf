"""
Option trigger registry.

Lets option-specific code hook into loading, saving and editing of settings:

- load overrides turn a stored value into what the input shows
- save triggers validate a value before it is saved; any exception aborts the save
- save overrides turn the validated input into what gets stored
- update triggers run on every edit and must not raise
- after-load hooks run once after all options were loaded
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from handlecheck.core.logging import get_logger

logger = get_logger(__name__)


class AfterLoad(str, Enum):
    """Built-in after-load actions."""

    RUN_ALL_SAVE_TRIGGER = "run_all_save_trigger"


RUN_ALL_SAVE_TRIGGER = AfterLoad.RUN_ALL_SAVE_TRIGGER


@dataclass
class OverrideContinue:
    """Returned by overrides: continue with this value instead of the original."""

    value: Any


@dataclass
class LoadParam:
    option: str
    option_value: Any


@dataclass
class SaveParam:
    option: str
    option_value: Any
    save_trigger_values: list[Any] = field(default_factory=list)


class SaveAborted(Exception):
    """Raised when a save trigger rejected the value."""

    def __init__(self, option: str, cause: BaseException) -> None:
        super().__init__(f"saving {option} was aborted: {cause}")
        self.option = option
        self.cause = cause


SaveTrigger = Callable[[Any, str], Any]
UpdateTrigger = Callable[[Any, str], Any]
Override = Callable[[Any], OverrideContinue | Awaitable[OverrideContinue]]


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class TriggerRegistry:
    """Registry and driver for option triggers."""

    def __init__(self) -> None:
        self._load_overrides: dict[str, Override] = {}
        self._save_overrides: dict[str, Override] = {}
        self._save_triggers: dict[str, list[SaveTrigger]] = {}
        self._update_triggers: dict[str, list[UpdateTrigger]] = {}
        self._after_load: list[AfterLoad | Callable[[], Any]] = []
        self.values: dict[str, Any] = {}

    # --- registration ---

    def add_custom_load_override(self, option: str, override: Override) -> None:
        self._load_overrides[option] = override

    def add_custom_save_override(self, option: str, override: Override) -> None:
        self._save_overrides[option] = override

    def register_save(self, option: str, trigger: SaveTrigger) -> None:
        self._save_triggers.setdefault(option, []).append(trigger)

    def register_update(self, option: str, trigger: UpdateTrigger) -> None:
        self._update_triggers.setdefault(option, []).append(trigger)

    def register_after_load(self, action: AfterLoad | Callable[[], Any]) -> None:
        self._after_load.append(action)

    # --- lifecycle ---

    async def load_option(self, option: str, stored_value: Any) -> Any:
        """Return the value to show in the input for a stored value."""
        self.values[option] = stored_value
        override = self._load_overrides.get(option)
        if override is None:
            return stored_value

        result = await _resolve(override(LoadParam(option=option, option_value=stored_value)))
        return result.value

    async def load_all(self, stored_values: dict[str, Any]) -> dict[str, Any]:
        """Load several options, then run the after-load hooks."""
        shown = {option: await self.load_option(option, value) for option, value in stored_values.items()}
        await self.run_after_load()
        return shown

    async def run_save_triggers(self, option: str, option_value: Any) -> list[Any]:
        """
        Run all save triggers of an option in registration order.

        Returns:
            The values returned by the triggers

        Raises:
            SaveAborted: A trigger raised
        """
        results = []
        for trigger in self._save_triggers.get(option, []):
            try:
                results.append(await _resolve(trigger(option_value, option)))
            except Exception as e:
                logger.bind(option=option, error=str(e)).info("option_save_rejected")
                raise SaveAborted(option, e) from e
        return results

    async def save_option(self, option: str, option_value: Any) -> Any:
        """
        Validate and save an edited value.

        Returns:
            The stored value

        Raises:
            SaveAborted: A save trigger rejected the value
        """
        save_trigger_values = await self.run_save_triggers(option, option_value)

        stored = option_value
        override = self._save_overrides.get(option)
        if override is not None:
            param = SaveParam(
                option=option,
                option_value=option_value,
                save_trigger_values=save_trigger_values,
            )
            stored = (await _resolve(override(param))).value

        self.values[option] = stored
        logger.bind(option=option).debug("option_saved")
        return stored

    def run_update_triggers(self, option: str, option_value: Any) -> list[Any]:
        """Run the per-edit triggers of an option."""
        return [trigger(option_value, option) for trigger in self._update_triggers.get(option, [])]

    async def run_after_load(self) -> None:
        """Run after-load hooks. Rejections are logged, they never abort loading."""
        for action in self._after_load:
            if action is AfterLoad.RUN_ALL_SAVE_TRIGGER:
                for option in self._save_triggers:
                    try:
                        await self.run_save_triggers(option, self.values.get(option))
                    except SaveAborted as e:
                        logger.bind(option=option, error=str(e.cause)).debug("option_invalid_after_load")
            else:
                await _resolve(action())
