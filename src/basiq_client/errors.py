"""Error taxonomy for calls made against the Basiq API.

Every failed remote call is represented by a ``RemoteCallFailure`` (or one of
its subclasses) so callers can tell an authentication problem from a
validation error or an unreachable server.
"""

from typing import Any


class RemoteCallFailure(Exception):
    """A Basiq API call that did not produce a successful response.

    Attributes:
        status_code: HTTP status of the response, or None when no response
            was received
        body: Decoded JSON error body when parseable, otherwise the raw text
        method: HTTP method of the failed request
        path: API path of the failed request (e.g. ``/users``)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        method: str | None = None,
        path: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"method={self.method!r}, path={self.path!r})"
        )


class TransportError(RemoteCallFailure):
    """The server could not be reached or the connection failed mid-request."""


class AuthenticationError(RemoteCallFailure):
    """Credentials were rejected (401) or lack permission (403)."""


class ValidationError(RemoteCallFailure):
    """The request was rejected as malformed (400, 422)."""


class NotFoundError(RemoteCallFailure):
    """The referenced resource does not exist (404)."""


class ConflictError(RemoteCallFailure):
    """The request conflicts with the current state of a resource (409)."""


class RateLimitError(RemoteCallFailure):
    """Too many requests (429)."""


class ServerError(RemoteCallFailure):
    """The Basiq API failed to handle the request (5xx)."""


class NotAuthenticatedError(ValueError):
    """A bearer operation was invoked before an access token was available."""


_STATUS_ERRORS: dict[int, type[RemoteCallFailure]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def error_detail(body: Any) -> str | None:
    """Pull a human-readable detail out of a Basiq error body.

    Basiq reports errors as ``{"type": "list", "data": [{"detail": ...}]}``.
    """
    if isinstance(body, dict):
        items = body.get("data")
        if isinstance(items, list):
            details = [
                str(item["detail"])
                for item in items
                if isinstance(item, dict) and item.get("detail")
            ]
            if details:
                return "; ".join(details)
        for key in ("detail", "title", "message"):
            if body.get(key):
                return str(body[key])
    elif isinstance(body, str) and body.strip():
        return body.strip()
    return None


def create_remote_error(
    status_code: int,
    body: Any,
    method: str | None = None,
    path: str | None = None,
) -> RemoteCallFailure:
    """Build the RemoteCallFailure subclass matching an HTTP status.

    Args:
        status_code: HTTP status of the non-successful response
        body: Decoded error body
        method: HTTP method of the request
        path: API path of the request

    Returns:
        RemoteCallFailure: The typed failure for this status
    """
    if status_code >= 500:
        error_class: type[RemoteCallFailure] = ServerError
    else:
        error_class = _STATUS_ERRORS.get(status_code, RemoteCallFailure)

    target = " ".join(part for part in (method, path) if part) or "Request"
    message = f"{target} failed with HTTP {status_code}"
    detail = error_detail(body)
    if detail:
        message = f"{message}: {detail}"

    return error_class(
        message,
        status_code=status_code,
        body=body,
        method=method,
        path=path,
    )
