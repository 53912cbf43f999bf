"""Message surface the validators report to (banner UI, log, ...)."""

from abc import ABC, abstractmethod

from handlecheck.core.logging import get_logger

logger = get_logger(__name__)


class MessageSurface(ABC):
    """
    Renders at most one warning and one error banner.

    Keys name localized messages; translating them is up to the surface.
    """

    @abstractmethod
    def show_warning(self, key: str) -> None:
        """Show the warning banner for a message key."""

    @abstractmethod
    def show_error(self, key: str) -> None:
        """Show the error banner for a message key."""

    @abstractmethod
    def hide_warning(self, *, animate: bool = True) -> None:
        """Hide the warning banner."""

    @abstractmethod
    def hide_error(self, *, animate: bool = True) -> None:
        """Hide the error banner."""


class LoggingMessageSurface(MessageSurface):
    """Surface that only logs, for headless use (CLI, background jobs)."""

    def __init__(self) -> None:
        self.visible: tuple[str, str] | None = None

    def show_warning(self, key: str) -> None:
        self.visible = ("warning", key)
        logger.bind(key=key).warning("handle_warning_shown")

    def show_error(self, key: str) -> None:
        self.visible = ("error", key)
        logger.bind(key=key).error("handle_error_shown")

    def hide_warning(self, *, animate: bool = True) -> None:
        self.visible = None
        logger.bind(animate=animate).debug("handle_warning_hidden")

    def hide_error(self, *, animate: bool = True) -> None:
        self.visible = None
        logger.bind(animate=animate).debug("handle_error_hidden")
