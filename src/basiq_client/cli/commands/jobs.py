"""Job commands for the Basiq client CLI."""

from typing import Annotated

import typer

from ..utils import authenticated_client, emit_result

app = typer.Typer(help="Inspect asynchronous jobs", no_args_is_help=True)


@app.command("get")
def get_job(
    job_id: Annotated[str, typer.Argument(help="Id of the job")],
) -> None:
    """Show a job and the state of its steps.

    Example:
        basiq jobs get <job-id>
    """
    with authenticated_client() as client:
        emit_result(client.get_job(job_id))
