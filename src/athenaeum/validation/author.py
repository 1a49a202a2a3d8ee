"""Author rule set."""

from pydantic import field_validator

from athenaeum.domain.models import Author
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import required_text

NAME_MAX_LENGTH = 50


class AuthorSchema(EntitySchema):
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str | None) -> str:
        return required_text(v, "First name", NAME_MAX_LENGTH)

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str | None) -> str:
        return required_text(v, "Last name", NAME_MAX_LENGTH)


class AuthorValidator(EntityValidator[Author]):
    schema = AuthorSchema
    entity_name = "Author"
