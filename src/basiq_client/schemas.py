"""Pydantic schemas giving typed views over Basiq API payloads.

Responses are passed through to callers unmodified; these models are only
applied when a typed view is requested (``ApiResult.as_model``). Unknown
fields are kept so nothing the API returns is lost.
"""

import builtins
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

S = TypeVar("S", bound="BaseSchema")


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        frozen=True,
    )


class AccessToken(BaseSchema):
    """Bearer credential returned by POST /token."""

    access_token: str = Field(..., min_length=1, description="Bearer token")
    token_type: Literal["Bearer"] = Field(..., description="Token type")
    expires_in: int = Field(..., gt=0, description="Lifetime in seconds")


class User(BaseSchema):
    """A Basiq user, the subject whose financial data is aggregated."""

    type: str = "user"
    id: str = Field(..., min_length=1)
    email: str | None = None
    mobile: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class Job(BaseSchema):
    """Asynchronous server-side job, e.g. the linking of a connection."""

    type: str = "job"
    id: str = Field(..., min_length=1)
    steps: list[dict[str, Any]] = Field(default_factory=list)


class Account(BaseSchema):
    """A financial account under a user; institution refs stay opaque."""

    type: str = "account"
    id: str | None = None
    account_no: str | None = Field(default=None, alias="accountNo")
    name: str | None = None
    balance: Any = None
    institution: Any = None


class ResourceList(BaseSchema):
    """List envelope used by collection endpoints."""

    type: str = "list"
    data: list[dict[str, Any]] = Field(default_factory=list)
    links: dict[str, Any] | None = None
    size: int | None = None

    def items_as(self, model: builtins.type[S]) -> list[S]:
        """Validate each entry of ``data`` into ``model``."""
        return [model.model_validate(item) for item in self.data]
