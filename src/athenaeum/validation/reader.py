"""Reader rule set."""

from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from athenaeum.domain.models import Reader
from athenaeum.validation.base import EntitySchema, EntityValidator
from athenaeum.validation.rules import (
    email_address,
    is_blank,
    phone_number,
    required_text,
)

NAME_MAX_LENGTH = 50
ADDRESS_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 150
PHONE_MAX_LENGTH = 20


class ReaderSchema(EntitySchema):
    """
    Field rules for readers.

    A reader needs a name, an address and at least one way to be
    contacted (email or phone).
    """

    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    email: str | None = None
    phone_number: str | None = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str | None) -> str:
        return required_text(v, "First name", NAME_MAX_LENGTH)

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str | None) -> str:
        return required_text(v, "Last name", NAME_MAX_LENGTH)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str | None) -> str:
        return required_text(v, "Address", ADDRESS_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return email_address(v, EMAIL_MAX_LENGTH)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        return phone_number(v, PHONE_MAX_LENGTH)

    @model_validator(mode="after")
    def require_contact(self) -> "ReaderSchema":
        if is_blank(self.email) and is_blank(self.phone_number):
            raise PydanticCustomError(
                "contact_required", "Either email or phone number is required"
            )
        return self


class ReaderValidator(EntityValidator[Reader]):
    schema = ReaderSchema
    entity_name = "Reader"
