"""Loan terms rule set (loan length and extension length)."""

from dataclasses import dataclass

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from athenaeum.models.config import LibraryConfiguration
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import at_least


@dataclass(frozen=True)
class LoanTerms:
    """Loan parameters supplied by the caller."""

    borrowing_days: int | None = None
    extension_days: int | None = None


class LoanTermsSchema(EntitySchema):
    borrowing_days: int | None = None
    extension_days: int | None = None

    @field_validator("borrowing_days")
    @classmethod
    def validate_borrowing_days(cls, v: int | None, info: ValidationInfo) -> int | None:
        if v is None:
            return v
        at_least(v, "Borrowing days", 1)
        maximum = info.context["max_borrowing_days"]
        if v > maximum:
            raise PydanticCustomError(
                "too_large",
                "Borrowing days cannot exceed {maximum}",
                {"maximum": maximum},
            )
        return v

    @field_validator("extension_days")
    @classmethod
    def validate_extension_days(cls, v: int | None) -> int | None:
        if v is None:
            return v
        return at_least(v, "Extension days", 1)


class LoanTermsValidator(EntityValidator[LoanTerms]):
    schema = LoanTermsSchema
    entity_name = "Loan terms"

    def __init__(self, config: LibraryConfiguration):
        self.config = config

    def validation_context(self) -> dict[str, int]:
        return {"max_borrowing_days": self.config.max_borrowing_days}
