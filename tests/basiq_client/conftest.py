"""Shared pytest fixtures for basiq_client tests.

This module provides common fixtures used across the test suite: an
isolated environment, ready-made settings and a mocked HTTP session that
returns real ``requests.Response`` objects.
"""

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from pytest_mock import MockerFixture

from basiq_client.client import BasiqClient
from basiq_client.config import (
    BasiqSettings,
    clear_settings_cache,
    set_current_profile,
)

TEST_API_KEY = "dGVzdC1hcHAtaWQ6dGVzdC1zZWNyZXQ="
TEST_ACCESS_TOKEN = "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1NiJ9.test.token"

ResponseFactory = Callable[..., requests.Response]


@pytest.fixture(autouse=True)
def clean_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Isolate every test from real env files, BASIQ_* variables and caches.

    Tests run inside an empty temporary directory so no .env file is read,
    unless a test writes one there itself.
    """
    for key in list(os.environ):
        if key.startswith("BASIQ_") or key.startswith("LOG_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    clear_settings_cache()
    set_current_profile("default")

    yield

    clear_settings_cache()
    set_current_profile("default")


@pytest.fixture
def settings() -> BasiqSettings:
    """Settings with a test API key and the default Basiq host."""
    return BasiqSettings(api_key=TEST_API_KEY)


@pytest.fixture
def make_response() -> ResponseFactory:
    """Build real requests.Response objects for the mocked session."""

    def _make(
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = "TEST"
        response.url = "https://au-api.basiq.io/test"
        response.encoding = "utf-8"
        if json_body is not None:
            response._content = json.dumps(json_body).encode("utf-8")
            response.headers["Content-Type"] = "application/json"
        elif text is not None:
            response._content = text.encode("utf-8")
        else:
            response._content = b""
        return response

    return _make


@pytest.fixture
def mock_session(mocker: MockerFixture) -> MagicMock:
    """A mocked requests.Session; set ``request.return_value`` per test."""
    return mocker.MagicMock(spec=requests.Session)


@pytest.fixture
def client(settings: BasiqSettings, mock_session: MagicMock) -> BasiqClient:
    """Client that already holds an access token."""
    return BasiqClient(
        settings=settings, session=mock_session, access_token=TEST_ACCESS_TOKEN
    )
