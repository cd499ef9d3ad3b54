"""Institution connection commands for the Basiq client CLI."""

import logging
from typing import Annotated

import typer

from ..utils import authenticated_client, emit_result

app = typer.Typer(
    help="Link users to financial institutions", no_args_is_help=True
)
logger = logging.getLogger(__name__)


@app.command("create")
def create_connection(
    user_id: Annotated[str, typer.Argument(help="Id of the user to link")],
    institution_id: Annotated[
        str, typer.Argument(help="Basiq institution id, e.g. AU00000")
    ],
    login_id: Annotated[str, typer.Argument(help="Login id at the institution")],
    password: Annotated[
        str,
        typer.Option(
            "--password",
            prompt=True,
            hide_input=True,
            help="Password at the institution (prompted when omitted)",
        ),
    ],
) -> None:
    """Connect a user to a financial institution.

    Prints the job created by Basiq. The link completes in the background;
    use 'basiq jobs get' to see its progress.

    Example:
        basiq connections create <user-id> AU00000 gavinBelson
    """
    with authenticated_client() as client:
        result = client.create_connection(user_id, institution_id, login_id, password)
        emit_result(result)
        logger.info("Connection job accepted; accounts appear once the job completes")
