"""basiq-client: a small client for the Basiq open-banking API.

This package wraps the Basiq REST endpoints used to:
- Obtain SERVER_ACCESS bearer tokens from an API key
- Create, list and delete users
- Link users to financial institutions (connection jobs)
- Read the accounts of a user

Every operation returns an ``ApiResult`` carrying either the decoded JSON
body or a typed ``RemoteCallFailure``.
"""

from .client import BasiqClient
from .errors import (
    AuthenticationError,
    ConflictError,
    NotAuthenticatedError,
    NotFoundError,
    RateLimitError,
    RemoteCallFailure,
    ServerError,
    TransportError,
    ValidationError,
)
from .results import ApiResult

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "AuthenticationError",
    "BasiqClient",
    "ConflictError",
    "NotAuthenticatedError",
    "NotFoundError",
    "RateLimitError",
    "RemoteCallFailure",
    "ServerError",
    "TransportError",
    "ValidationError",
]
