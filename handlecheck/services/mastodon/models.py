"""Mastodon handle models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParsedHandle(BaseModel):
    """A handle split into its local part and server host.

    Stored settings use the ``username``/``server`` keys, so those are accepted
    as aliases and used when dumping ``by_alias``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    local_part: str = Field(alias="username", min_length=1)
    server_host: str = Field(alias="server", min_length=1)

    @field_validator("server_host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        # Hostnames are case-insensitive
        return value.lower()

    def __str__(self) -> str:
        return f"{self.local_part}@{self.server_host}"


class AccountLookupResult(BaseModel):
    """Result of a successful account lookup."""

    handle: ParsedHandle
    account_link: str
