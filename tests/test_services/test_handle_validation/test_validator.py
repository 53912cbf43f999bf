"""Tests for the full (slow) handle validation."""

from unittest.mock import AsyncMock

import pytest

from handlecheck.services.handle_validation import (
    EmptyHandleError,
    ValidationOutcome,
    ValidationState,
)
from handlecheck.services.mastodon import (
    AccountLookupResult,
    InvalidHandleError,
    NetworkError,
    ParsedHandle,
    ServerResponseError,
    UnknownAccountError,
)


class TestHandleValidator:
    """Tests for HandleValidator.validate."""

    # -------------------------------------------------------------------------
    # Local checks
    # -------------------------------------------------------------------------

    @pytest.mark.asyncio
    async def test_none_shows_empty_without_raising(self, field, surface, mock_client):
        """Unconfigured option: warning shown, but loading must succeed."""
        result = await field.validator.validate(None)

        assert result is None
        assert field.state is ValidationState.EMPTY
        surface.show_warning.assert_called_once_with("mastodonHandleIsEmpty")
        mock_client.get_account_link.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_string_fails(self, field, mock_client):
        """Saving an empty handle is rejected with EMPTY shown."""
        with pytest.raises(EmptyHandleError):
            await field.validator.validate("")

        assert field.state is ValidationState.EMPTY
        mock_client.get_account_link.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "stored",
        [
            ParsedHandle(local_part="alice", server_host="example.social"),
            {"username": "alice", "server": "example.social"},
            {"anything": "goes"},
            {},
        ],
    )
    async def test_trusted_stored_value_clears_error(self, field, surface, mock_client, stored):
        """Values from storage are never re-validated and clear any error."""
        field.tracker.show(ValidationState.NETWORK_ERROR, "alice@example.social")

        result = await field.validator.validate(stored)

        assert result is None
        assert field.state is ValidationState.NONE
        surface.hide_error.assert_called_with(animate=False)
        mock_client.get_account_link.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_syntax(self, field, surface, mock_client):
        """Malformed input shows INVALID_SYNTAX and re-raises the parse error."""
        with pytest.raises(InvalidHandleError):
            await field.validator.validate("not-a-handle")

        assert field.state is ValidationState.INVALID_SYNTAX
        assert field.tracker.last_rejected_value == "not-a-handle"
        surface.show_error.assert_called_once_with("mastodonHandleIsInvalid")
        mock_client.get_account_link.assert_not_called()

    # -------------------------------------------------------------------------
    # Remote checks
    # -------------------------------------------------------------------------

    @pytest.mark.asyncio
    async def test_existing_account(self, field, mock_client, alice):
        """Lookup succeeds: nothing shown, parsed handle returned."""
        field.tracker.show(ValidationState.NONEXISTENT, "alice@example.social")

        result = await field.validator.validate("alice@example.social")

        assert isinstance(result, ValidationOutcome)
        assert result.parsed_handle == alice
        assert result.account_lookup == AccountLookupResult(
            handle=alice, account_link="https://example.social/@alice"
        )
        assert field.state is ValidationState.NONE
        mock_client.get_account_link.assert_awaited_once_with(alice)
        mock_client.is_mastodon_server.assert_not_called()

    @pytest.mark.asyncio
    async def test_nonexistent_account(self, field, surface, mock_client):
        """Not found on a Mastodon server: NONEXISTENT, original error raised."""
        error = UnknownAccountError("ghost@example.social")
        mock_client.get_account_link = AsyncMock(side_effect=error)
        mock_client.is_mastodon_server = AsyncMock(return_value=True)

        with pytest.raises(UnknownAccountError) as exc_info:
            await field.validator.validate("ghost@example.social")

        assert exc_info.value is error
        assert field.state is ValidationState.NONEXISTENT
        assert field.tracker.last_rejected_value == "ghost@example.social"
        surface.show_error.assert_called_once_with("mastodonHandleDoesNotExist")
        mock_client.is_mastodon_server.assert_awaited_once_with("example.social")

    @pytest.mark.asyncio
    async def test_incompatible_server(self, field, surface, mock_client):
        """Lookup fails on a host that is no Mastodon server."""
        error = ServerResponseError("https://notmastodon.example/.well-known/webfinger", 500)
        mock_client.get_account_link = AsyncMock(side_effect=error)
        mock_client.is_mastodon_server = AsyncMock(return_value=False)

        with pytest.raises(ServerResponseError) as exc_info:
            await field.validator.validate("a@notmastodon.example")

        # The lookup error is raised, not anything from the probe
        assert exc_info.value is error
        assert field.state is ValidationState.NOT_COMPATIBLE_SERVER
        surface.show_error.assert_called_once_with("isNoMastodonServer")

    @pytest.mark.asyncio
    async def test_incompatible_wins_over_unknown_account(self, field, mock_client):
        """Even an unknown-account error is blamed on the server when it is no Mastodon."""
        mock_client.get_account_link = AsyncMock(side_effect=UnknownAccountError("a@b.example"))
        mock_client.is_mastodon_server = AsyncMock(return_value=False)

        with pytest.raises(UnknownAccountError):
            await field.validator.validate("a@b.example")

        assert field.state is ValidationState.NOT_COMPATIBLE_SERVER

    @pytest.mark.asyncio
    async def test_network_error(self, field, surface, mock_client):
        """Server could not be contacted."""
        mock_client.get_account_link = AsyncMock(side_effect=NetworkError("down.example", "refused"))

        with pytest.raises(NetworkError):
            await field.validator.validate("alice@down.example")

        assert field.state is ValidationState.NETWORK_ERROR
        surface.show_error.assert_called_once_with("mastodonHandleServerCouldNotBeContacted")

    @pytest.mark.asyncio
    async def test_other_failure(self, field, surface, mock_client):
        """Anything else is CHECK_FAILED."""
        mock_client.get_account_link = AsyncMock(side_effect=RuntimeError("unexpected"))

        with pytest.raises(RuntimeError):
            await field.validator.validate("alice@example.social")

        assert field.state is ValidationState.CHECK_FAILED
        surface.show_error.assert_called_once_with("mastodonHandleCheckFailed")

    @pytest.mark.asyncio
    async def test_probe_failure_assumes_compatible(self, field, mock_client):
        """A failing probe does not turn the error into NOT_COMPATIBLE_SERVER."""
        error = UnknownAccountError("ghost@example.social")
        mock_client.get_account_link = AsyncMock(side_effect=error)
        mock_client.is_mastodon_server = AsyncMock(side_effect=NetworkError("example.social", "reset"))

        with pytest.raises(UnknownAccountError) as exc_info:
            await field.validator.validate("ghost@example.social")

        assert exc_info.value is error
        assert field.state is ValidationState.NONEXISTENT

    @pytest.mark.asyncio
    async def test_error_is_shown_before_raising(self, field, mock_client):
        """By the time the caller sees the exception, the message is up."""
        mock_client.get_account_link = AsyncMock(side_effect=UnknownAccountError("ghost@example.social"))

        try:
            await field.validator.validate("ghost@example.social")
        except UnknownAccountError:
            seen = field.state
        else:
            pytest.fail("validation should have failed")

        assert seen is ValidationState.NONEXISTENT

    @pytest.mark.asyncio
    async def test_probe_runs_only_after_lookup_failed(self, field, mock_client):
        """The probe is awaited strictly after the lookup."""
        calls = []

        async def lookup(handle):
            calls.append("lookup")
            raise UnknownAccountError(str(handle))

        async def is_mastodon(host):
            calls.append("probe")
            return True

        mock_client.get_account_link = AsyncMock(side_effect=lookup)
        mock_client.is_mastodon_server = AsyncMock(side_effect=is_mastodon)

        with pytest.raises(UnknownAccountError):
            await field.validator.validate("ghost@example.social")

        assert calls == ["lookup", "probe"]
