"""Edition rule set."""

from datetime import UTC, datetime

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from athenaeum.domain.models import Edition
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import greater_than, required_text

PUBLISHER_MAX_LENGTH = 100
BOOK_TYPE_MAX_LENGTH = 50
# Gutenberg's press; nothing printed earlier is catalogued as an edition
EARLIEST_YEAR = 1450


class EditionSchema(EntitySchema):
    publisher: str | None = None
    year: int = 0
    edition_number: int = 0
    page_count: int = 0
    book_type: str | None = None

    @field_validator("publisher")
    @classmethod
    def validate_publisher(cls, v: str | None) -> str:
        return required_text(v, "Publisher", PUBLISHER_MAX_LENGTH)

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int, info: ValidationInfo) -> int:
        if v <= EARLIEST_YEAR:
            raise PydanticCustomError(
                "too_small",
                "Year must be after {earliest}",
                {"earliest": EARLIEST_YEAR},
            )
        current_year = (info.context or {}).get("current_year") or datetime.now(UTC).year
        if v > current_year:
            raise PydanticCustomError("future_year", "Year cannot be in the future")
        return v

    @field_validator("edition_number")
    @classmethod
    def validate_edition_number(cls, v: int) -> int:
        return greater_than(v, "Edition number", 0)

    @field_validator("page_count")
    @classmethod
    def validate_page_count(cls, v: int) -> int:
        return greater_than(v, "Page count", 0)

    @field_validator("book_type")
    @classmethod
    def validate_book_type(cls, v: str | None) -> str:
        return required_text(v, "Book type", BOOK_TYPE_MAX_LENGTH)


class EditionValidator(EntityValidator[Edition]):
    schema = EditionSchema
    entity_name = "Edition"

    def __init__(self, current_year: int | None = None):
        self.current_year = current_year

    def validation_context(self) -> dict[str, int | None]:
        return {"current_year": self.current_year}
