"""Account commands for the Basiq client CLI."""

from typing import Annotated

import typer

from ..utils import authenticated_client, emit_result

app = typer.Typer(help="Read user accounts", no_args_is_help=True)


@app.command("list")
def list_accounts(
    user_id: Annotated[str, typer.Argument(help="Id of the user")],
) -> None:
    """List the accounts of a user.

    Accounts of a freshly created connection may not be visible yet.

    Example:
        basiq accounts list <user-id>
    """
    with authenticated_client() as client:
        emit_result(client.get_accounts(user_id))
