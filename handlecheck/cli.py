"""
handlecheck CLI - verify Mastodon handles from the command line.

Usage:
    handlecheck --help                    Show all commands
    handlecheck check alice@example.social
    handlecheck probe example.social
"""

import asyncio

import typer

from handlecheck.core.logging import setup_logging

app = typer.Typer(
    name="handlecheck",
    help="handlecheck CLI - Mastodon handle verification",
    no_args_is_help=True,
)


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_warning(message: str) -> None:
    """Print a warning message."""
    typer.echo(f"  ⚠️ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


@app.command()
def check(handle: str = typer.Argument(..., help="Handle to verify, e.g. alice@example.social")):
    """Run the full validation a save would run."""
    from handlecheck.services.handle_validation import ERROR_KEYS, WARNING_KEYS, create_handle_field

    setup_logging()
    field = create_handle_field()

    async def run():
        try:
            outcome = await field.validator.validate(handle)
        except Exception as e:
            key = ERROR_KEYS.get(field.state) or WARNING_KEYS.get(field.state)
            _print_error(f"Rejected: {field.state.value} ({key})")
            typer.echo(f"   {e}", err=True)
            raise typer.Exit(1)

        _print_success(f"{outcome.parsed_handle} -> {outcome.account_lookup.account_link}")

    asyncio.run(run())


@app.command()
def probe(host: str = typer.Argument(..., help="Host to probe, e.g. example.social")):
    """Check whether a host is a Mastodon server."""
    from handlecheck.services.handle_validation import ProbeResult, probe_server
    from handlecheck.services.mastodon import get_mastodon_client

    setup_logging()

    result = asyncio.run(probe_server(get_mastodon_client(), host))
    if result is ProbeResult.COMPATIBLE:
        _print_success(f"{host} is a Mastodon server")
    elif result is ProbeResult.INCOMPATIBLE:
        _print_error(f"{host} is no Mastodon server")
        raise typer.Exit(1)
    else:
        _print_warning(f"Could not determine whether {host} is a Mastodon server")


if __name__ == "__main__":
    app()
