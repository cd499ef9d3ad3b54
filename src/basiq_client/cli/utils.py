"""Helpers shared by the CLI commands."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer

from basiq_client.client import BasiqClient
from basiq_client.errors import RemoteCallFailure
from basiq_client.results import ApiResult

logger = logging.getLogger(__name__)


@contextmanager
def configured_client() -> Iterator[BasiqClient]:
    """Yield a client for the current profile without a token."""
    try:
        client = BasiqClient()
        client.settings.require_api_key()
    except ValueError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        raise typer.Exit(1) from e

    with client:
        yield client


@contextmanager
def authenticated_client() -> Iterator[BasiqClient]:
    """Yield a client holding a fresh token for the configured API key.

    Configuration and authentication failures are logged and turned into
    exit code 1.
    """
    with configured_client() as client:
        try:
            client.authenticate()
        except (RemoteCallFailure, ValueError) as e:
            logger.error(f"❌ Authentication failed: {e}")
            raise typer.Exit(1) from e
        yield client


def print_json(payload: Any) -> None:
    """Write a payload to stdout as indented JSON, keys in response order."""
    typer.echo(json.dumps(payload, indent=2))


def emit_result(result: ApiResult[Any]) -> None:
    """Print a successful payload, or exit with status 1 on failure.

    The failure itself has already been logged by the client.
    """
    if not result.ok:
        raise typer.Exit(1)
    print_json(result.data)
