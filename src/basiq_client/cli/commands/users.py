"""User management commands for the Basiq client CLI."""

import logging
from typing import Annotated

import typer

from ..utils import authenticated_client, emit_result

app = typer.Typer(help="List, create and delete Basiq users", no_args_is_help=True)
logger = logging.getLogger(__name__)


@app.command("list")
def list_users() -> None:
    """List all users of the account.

    Example:
        basiq users list
    """
    with authenticated_client() as client:
        emit_result(client.get_users())


@app.command("create")
def create_user(
    email: Annotated[str, typer.Argument(help="Email address of the user")],
    mobile: Annotated[str, typer.Argument(help="Mobile number, e.g. +614xxxxxxxx")],
    first_name: Annotated[
        str | None, typer.Option("--first-name", help="Optional first name")
    ] = None,
    last_name: Annotated[
        str | None, typer.Option("--last-name", help="Optional last name")
    ] = None,
) -> None:
    """Create a user.

    Creating the same user twice is not safe to assume idempotent; the API
    decides whether it creates a duplicate or rejects the request.

    Example:
        basiq users create test.user@hooli.com +614xxxxxxxx --first-name Test
    """
    with authenticated_client() as client:
        emit_result(client.create_user(email, mobile, first_name, last_name))


@app.command("delete")
def delete_user(
    user_id: Annotated[str, typer.Argument(help="Id of the user to delete")],
) -> None:
    """Delete a user.

    Example:
        basiq users delete 5e0b7b2c-...
    """
    with authenticated_client() as client:
        result = client.delete_user(user_id)
        if not result.ok:
            raise typer.Exit(1)
        logger.info(f"✅ Deleted user {user_id}")
