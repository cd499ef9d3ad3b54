"""Main CLI application for the Basiq client.

This module provides the entry point for the ``basiq`` command, organizing
operations into command groups for users, connections, jobs and accounts.
"""

import logging
from typing import Annotated

import typer

from ..config import get_settings, set_current_profile
from ..logging import LoggingConfig, setup_logging
from .commands import accounts, connections, jobs, users
from .utils import configured_client, emit_result

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="basiq",
    help="Basiq client: tokens, users, connections and accounts",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    profile: Annotated[
        str,
        typer.Option(
            "--profile",
            "-p",
            help="Configuration profile to use; loads .env.{profile} when present",
            envvar="BASIQ_PROFILE",
        ),
    ] = "default",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose debug logging",
        ),
    ] = False,
) -> None:
    """Global options for the Basiq CLI.

    The API key is read from BASIQ_API_KEY, either in the environment or in
    the profile's env file.

    Examples:
      basiq token
      basiq --profile=prod users list
      basiq accounts list <user-id>
    """
    try:
        set_current_profile(profile)
        settings = get_settings(profile)
    except ValueError as e:
        setup_logging(cli_mode=True, verbose=verbose)
        logger.error(f"❌ {e}")
        raise typer.BadParameter(str(e), param_hint="--profile") from e

    setup_logging(
        LoggingConfig.from_settings(settings.logging),
        cli_mode=True,
        verbose=verbose,
    )
    logger.debug(f"Using profile: {profile}")


@app.command("token")
def token() -> None:
    """Obtain an access token for the configured API key and print it.

    Example:
        basiq token
    """
    with configured_client() as client:
        emit_result(client.get_access_token())


app.add_typer(users.app, name="users", help="User management commands")
app.add_typer(
    connections.app, name="connections", help="Institution connection commands"
)
app.add_typer(jobs.app, name="jobs", help="Job inspection commands")
app.add_typer(accounts.app, name="accounts", help="Account commands")


def main() -> None:
    """Entry point for the Basiq CLI application."""
    app()


if __name__ == "__main__":
    main()
