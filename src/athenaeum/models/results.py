"""Uniform result envelope for callers that prefer values over exceptions."""

from collections.abc import Awaitable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from athenaeum.domain.exceptions import LibraryError
from athenaeum.models.errors import ErrorReport

T = TypeVar("T")


class ServiceResult(BaseModel, Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        is_success: Whether the call succeeded
        message: Failure message (None on success)
        data: Returned value (None on failure)
        error: Structured error report (None on success)

    Example:
        result = await ServiceResult.capture(service.borrow_book(1, 2))
        if not result.is_success:
            print(result.message)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    is_success: bool = Field(..., description="Whether the call succeeded")
    message: str | None = Field(default=None, description="Failure message")
    data: T | None = Field(default=None, description="Returned value")
    error: ErrorReport | None = Field(default=None, description="Error report")

    @classmethod
    def success(cls, data: T) -> "ServiceResult[T]":
        return cls(is_success=True, data=data)

    @classmethod
    def failure(
        cls, message: str, error: ErrorReport | None = None
    ) -> "ServiceResult[T]":
        return cls(is_success=False, message=message, error=error)

    @classmethod
    async def capture(cls, call: Awaitable[Any]) -> "ServiceResult[Any]":
        """
        Await a service call and wrap its outcome.

        Only ``LibraryError`` is converted into a failure; anything else is
        a programming error and propagates.

        Args:
            call: Awaitable returned by a service method

        Returns:
            Success with the returned value, or failure with the error report
        """
        try:
            data = await call
        except LibraryError as exc:
            return cls.failure(str(exc), ErrorReport.from_exception(exc))
        return cls.success(data)
