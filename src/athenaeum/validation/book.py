"""Book rule set."""

from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from athenaeum.domain.models import Book
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import at_least, isbn, max_text, required_text

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class BookSchema(EntitySchema):
    title: str | None = None
    description: str | None = None
    isbn: str | None = None
    total_copies: int = 0
    reading_room_only_copies: int = 0

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return required_text(v, "Title", TITLE_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return max_text(v, "Description", DESCRIPTION_MAX_LENGTH)

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str | None) -> str:
        return isbn(v)

    @field_validator("total_copies")
    @classmethod
    def validate_total_copies(cls, v: int) -> int:
        return at_least(v, "Total copies", 1)

    @field_validator("reading_room_only_copies")
    @classmethod
    def validate_reading_room_only_copies(cls, v: int) -> int:
        return at_least(v, "Reading room copies", 0)

    @model_validator(mode="after")
    def check_copy_split(self) -> "BookSchema":
        if self.reading_room_only_copies > self.total_copies:
            raise PydanticCustomError(
                "copies_exceeded",
                "Reading room copies cannot exceed total copies",
            )
        return self


class BookValidator(EntityValidator[Book]):
    schema = BookSchema
    entity_name = "Book"
