"""Validation errors not covered by the Mastodon client."""


class EmptyHandleError(ValueError):
    """Raised when saving is attempted with an empty handle."""

    def __init__(self) -> None:
        super().__init__("empty Mastodon handle")
