"""BookDomain rule set."""

from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from athenaeum.domain.models import BookDomain
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import max_text, required_text

NAME_MAX_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 500


class BookDomainSchema(EntitySchema):
    id: int = 0
    name: str | None = None
    description: str | None = None
    parent_domain_id: int | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        return required_text(v, "Domain name", NAME_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return max_text(v, "Description", DESCRIPTION_MAX_LENGTH)

    @model_validator(mode="after")
    def check_parent(self) -> "BookDomainSchema":
        if self.id and self.parent_domain_id == self.id:
            raise PydanticCustomError(
                "self_parent", "A domain cannot be its own parent"
            )
        return self


class BookDomainValidator(EntityValidator[BookDomain]):
    schema = BookDomainSchema
    entity_name = "Domain"
