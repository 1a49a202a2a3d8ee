"""Error report models loosely following RFC 7807 Problem Details."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from athenaeum.domain.exceptions import LibraryError


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field.

    Attributes:
        type: Error type (e.g., "string_too_long", "missing").
        loc: Location of the error in the entity (e.g., ["email"]).
        msg: Human-readable error message.
        input: The invalid input value that caused the error.
        ctx: Additional context about the error (optional).
    """

    type: str = Field(..., description="Error type")
    loc: tuple[str, ...] = Field(..., description="Error location in the entity")
    msg: str = Field(..., description="Human-readable error message")
    input: Any = Field(default=None, description="Invalid input value")
    ctx: dict[str, Any] | None = Field(None, description="Additional error context")


class RuleViolationDetail(BaseModel):
    """Serializable view of a broken lending rule."""

    code: str = Field(..., description="Rule identifier")
    msg: str = Field(..., description="Human-readable explanation")
    book_id: int | None = Field(None, description="Book the rule was checked for")


class ErrorReport(BaseModel):
    """Problem report built from a library error.

    Attributes:
        type: Error category (exception class name in snake case).
        title: Short, human-readable summary of the problem type.
        detail: Human-readable explanation specific to this occurrence.
        errors: Field validation errors, when the error is a validation error.
        violations: Broken lending rules, when the error is a rule violation.

    Example:
        ```python
        try:
            await borrowing_service.borrow_book(1, 2)
        except LibraryError as exc:
            report = ErrorReport.from_exception(exc)
        ```
    """

    type: str = Field(..., description="Error category")
    title: str = Field(..., description="Short, human-readable summary")
    detail: str | None = Field(default=None, description="Human-readable explanation")
    errors: list[ValidationErrorDetail] | None = Field(
        default=None, description="Validation errors"
    )
    violations: list[RuleViolationDetail] | None = Field(
        default=None, description="Broken lending rules"
    )

    @classmethod
    def from_exception(cls, exc: "LibraryError") -> "ErrorReport":
        """Build a report from any ``LibraryError``.

        Args:
            exc: The error raised by a service.

        Returns:
            ErrorReport with the error's details attached.
        """
        errors = getattr(exc, "errors", None)
        violations = getattr(exc, "violations", None)
        return cls(
            type=exc.code,
            title=exc.title,
            detail=str(exc),
            errors=list(errors) if errors else None,
            violations=(
                [violation.to_detail() for violation in violations]
                if violations
                else None
            ),
        )
