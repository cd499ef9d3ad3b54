"""Basiq API client.

``BasiqClient`` is the context object for talking to the Basiq REST API: it
owns an HTTP session, the settings and the current access token, so callers
obtain a token once and reuse it across calls.

Every operation makes exactly one HTTP request and returns an ``ApiResult``.
Failures are logged and returned, never raised, so callers always branch on
the result. Nothing is retried and nothing is polled: connection jobs finish
on the server after ``create_connection`` returns, and account data may lag
behind them.
"""

import logging
from typing import Any
from urllib.parse import quote

import requests

from .config import BasiqSettings, get_settings
from .errors import (
    NotAuthenticatedError,
    RemoteCallFailure,
    TransportError,
    create_remote_error,
)
from .results import ApiResult
from .schemas import AccessToken

logger = logging.getLogger(__name__)

TOKEN_PATH = "/token"

JsonDict = dict[str, Any]


class BasiqClient:
    """Client for the Basiq API holding the current bearer token."""

    def __init__(
        self,
        settings: BasiqSettings | None = None,
        session: requests.Session | None = None,
        access_token: str | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Client settings. Defaults to the current profile's settings.
            session: HTTP session to use. A private session is created if omitted.
            access_token: Bearer token to start with, if one is already known.
        """
        self.settings = settings or get_settings()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.access_token = access_token

    def __enter__(self) -> "BasiqClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    # Authentication

    def get_access_token(self, api_key: str | None = None) -> ApiResult[JsonDict]:
        """Request a new access token with SERVER_ACCESS scope.

        On success the token becomes this client's current token.

        Args:
            api_key: API key already encoded for Basic auth. Defaults to the
                configured BASIQ_API_KEY.

        Returns:
            ApiResult: Token payload with access_token, token_type and expires_in
        """
        if api_key is None:
            api_key = self.settings.require_api_key()

        result = self._request(
            "POST",
            TOKEN_PATH,
            authorization=f"Basic {api_key}",
            form={"scope": self.settings.token_scope},
        )
        if result.ok and isinstance(result.data, dict):
            token = result.data.get("access_token")
            if token:
                self.access_token = token
                logger.debug("Obtained new Basiq access token")
        return result

    def authenticate(self, api_key: str | None = None) -> AccessToken:
        """Obtain an access token and keep it for subsequent calls.

        Returns:
            AccessToken: Typed view of the token response

        Raises:
            RemoteCallFailure: If the token request failed
            ValueError: If no API key is given or configured
        """
        return self.get_access_token(api_key).as_model(AccessToken)

    # Users

    def get_users(self) -> ApiResult[JsonDict]:
        """List all users; the envelope's ``data`` holds the user records."""
        return self._request("GET", "/users", authorization=self._bearer())

    def create_user(
        self,
        email: str,
        mobile: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> ApiResult[JsonDict]:
        """Create a user.

        Optional names that are not supplied are left out of the request body.

        Args:
            email: Email address of the user
            mobile: Mobile number of the user, e.g. ``+614xxxxxxxx``
            first_name: Optional first name
            last_name: Optional last name

        Returns:
            ApiResult: The created user record, including its assigned id
        """
        body: JsonDict = {"email": email, "mobile": mobile}
        if first_name is not None:
            body["firstName"] = first_name
        if last_name is not None:
            body["lastName"] = last_name

        return self._request(
            "POST", "/users", authorization=self._bearer(), json_body=body
        )

    def delete_user(self, user_id: str) -> ApiResult[JsonDict]:
        """Delete a user and everything linked to it."""
        return self._request(
            "DELETE", f"/users/{_segment(user_id)}", authorization=self._bearer()
        )

    # Connections and accounts

    def create_connection(
        self,
        user_id: str,
        institution_id: str,
        login_id: str,
        password: str,
    ) -> ApiResult[JsonDict]:
        """Link a user to a financial institution.

        The institution credentials are sent once in the request body and are
        not kept by the client. The call returns as soon as Basiq has accepted
        the job; it does not wait for the job to complete.

        Args:
            user_id: Id of the user to link
            institution_id: Basiq institution id, e.g. ``AU00000``
            login_id: Login id at the institution
            password: Password at the institution

        Returns:
            ApiResult: Job descriptor with ``type == "job"`` and the job id
        """
        body: JsonDict = {
            "loginId": login_id,
            "password": password,
            "institution": {"id": institution_id},
        }
        return self._request(
            "POST",
            f"/users/{_segment(user_id)}/connections",
            authorization=self._bearer(),
            json_body=body,
        )

    def get_job(self, job_id: str) -> ApiResult[JsonDict]:
        """Retrieve a job once; its steps report how far the linking has got."""
        return self._request(
            "GET", f"/jobs/{_segment(job_id)}", authorization=self._bearer()
        )

    def get_accounts(self, user_id: str) -> ApiResult[JsonDict]:
        """List the accounts of a user.

        Accounts appear only after the connection job has progressed, so a
        call made right after ``create_connection`` may return an empty or
        partial list.
        """
        return self._request(
            "GET",
            f"/users/{_segment(user_id)}/accounts",
            authorization=self._bearer(),
        )

    # Transport

    def _bearer(self) -> str:
        if not self.access_token:
            raise NotAuthenticatedError(
                "No Basiq access token available. Call authenticate() first."
            )
        return f"Bearer {self.access_token}"

    def _headers(self, path: str, authorization: str) -> dict[str, str]:
        headers = {
            "Authorization": authorization,
            "Accept": "application/json",
        }
        if self.settings.version_header_scope == "all" or path == TOKEN_PATH:
            headers["basiq-version"] = self.settings.api_version
        return headers

    def _request(
        self,
        method: str,
        path: str,
        authorization: str,
        json_body: JsonDict | None = None,
        form: dict[str, str] | None = None,
    ) -> ApiResult[JsonDict]:
        headers = self._headers(path, authorization)
        if form is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        logger.debug(f"Basiq request: {method} {path}")
        try:
            response = self.session.request(
                method,
                f"{self.settings.base_url}{path}",
                headers=headers,
                json=json_body,
                data=form,
                timeout=self.settings.timeout,
            )
        # http.client encodes header values as latin-1
        except (requests.RequestException, UnicodeError) as e:
            return self._fail(
                TransportError(
                    f"{method} {path} failed: {e}", method=method, path=path
                )
            )

        if not response.ok:
            return self._fail(
                create_remote_error(
                    response.status_code,
                    _decode_error_body(response),
                    method=method,
                    path=path,
                )
            )

        try:
            payload = _decode_payload(response)
        except ValueError as e:
            return self._fail(
                RemoteCallFailure(
                    f"{method} {path} returned a body that is not JSON: {e}",
                    status_code=response.status_code,
                    body=response.text,
                    method=method,
                    path=path,
                )
            )

        logger.debug(f"Basiq response: {method} {path} -> {response.status_code}")
        return ApiResult.success(payload, status_code=response.status_code)

    def _fail(self, error: RemoteCallFailure) -> ApiResult[JsonDict]:
        if error.body is not None:
            logger.error(f"❌ Basiq API call failed: {error} | response: {error.body}")
        else:
            logger.error(f"❌ Basiq API call failed: {error}")
        return ApiResult.failure(error)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _decode_payload(response: requests.Response) -> Any:
    # DELETE answers 204 with no body
    if not response.content:
        return {}
    payload = response.json()
    return {} if payload is None else payload


def _decode_error_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
