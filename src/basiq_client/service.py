"""Function-style access to the Basiq API with explicit token threading.

Each function opens a short-lived ``BasiqClient``, makes one request and
returns its ``ApiResult``. Use ``BasiqClient`` directly to keep one token
and one HTTP session across several calls.
"""

from .client import BasiqClient, JsonDict
from .config import BasiqSettings
from .results import ApiResult


def get_access_token(
    api_key: str, settings: BasiqSettings | None = None
) -> ApiResult[JsonDict]:
    """Get a Basiq access token for making further requests.

    Args:
        api_key: API key already encoded for Basic auth
        settings: Optional settings override

    Returns:
        ApiResult: Token payload (access_token, token_type, expires_in)
    """
    with BasiqClient(settings=settings) as client:
        return client.get_access_token(api_key)


def get_users(
    access_token: str, settings: BasiqSettings | None = None
) -> ApiResult[JsonDict]:
    """Get all users."""
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.get_users()


def create_user(
    access_token: str,
    email: str,
    mobile: str,
    first_name: str | None = None,
    last_name: str | None = None,
    settings: BasiqSettings | None = None,
) -> ApiResult[JsonDict]:
    """Create a new user; first and last name are optional."""
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.create_user(email, mobile, first_name, last_name)


def delete_user(
    access_token: str, user_id: str, settings: BasiqSettings | None = None
) -> ApiResult[JsonDict]:
    """Delete a user."""
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.delete_user(user_id)


def create_connection(
    access_token: str,
    user_id: str,
    institution_id: str,
    login_id: str,
    password: str,
    settings: BasiqSettings | None = None,
) -> ApiResult[JsonDict]:
    """Create a new connection between a user and a financial institution.

    Returns:
        ApiResult: Job descriptor; the link completes asynchronously
    """
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.create_connection(user_id, institution_id, login_id, password)


def get_job(
    access_token: str, job_id: str, settings: BasiqSettings | None = None
) -> ApiResult[JsonDict]:
    """Retrieve a connection job."""
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.get_job(job_id)


def get_accounts(
    access_token: str, user_id: str, settings: BasiqSettings | None = None
) -> ApiResult[JsonDict]:
    """Retrieve accounts for a given user."""
    with BasiqClient(settings=settings, access_token=access_token) as client:
        return client.get_accounts(user_id)
