"""Result values returned by every Basiq API operation."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from .errors import RemoteCallFailure

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of a single API call: either a payload or a typed failure.

    Exactly one of ``data`` and ``error`` is set. The result is truthy only
    on success, so ``if not result:`` reads as "the call failed".
    """

    data: T | None = None
    error: RemoteCallFailure | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("ApiResult needs exactly one of data or error")

    @classmethod
    def success(cls, data: T, status_code: int | None = None) -> "ApiResult[T]":
        """Wrap a decoded response body."""
        return cls(data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: RemoteCallFailure) -> "ApiResult[T]":
        """Wrap a failed call."""
        return cls(error=error, status_code=error.status_code)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the payload, raising the carried failure if there is one.

        Raises:
            RemoteCallFailure: If the call failed
        """
        if self.error is not None:
            raise self.error
        return self.data  # type: ignore[return-value]

    def as_model(self, model: type[M]) -> M:
        """Validate the payload into a typed schema view.

        Raises:
            RemoteCallFailure: If the call failed
            pydantic.ValidationError: If the payload does not fit the schema
        """
        payload: Any = self.unwrap()
        return model.model_validate(payload)
