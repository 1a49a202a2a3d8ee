"""
Validator base classes.

Each entity has a pydantic schema describing its field rules. A validator
reads the entity's attributes through the schema (``from_attributes``) and
turns pydantic errors into ``ValidationErrorDetail`` records.
"""

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from athenaeum.domain.exceptions import ValidationError
from athenaeum.models.errors import ValidationErrorDetail

E = TypeVar("E")


class EntitySchema(BaseModel):
    """Base schema: reads dataclass attributes and ignores relationships."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class ValidationResult(BaseModel):
    """Outcome of validating one entity."""

    errors: list[ValidationErrorDetail] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [error.msg for error in self.errors]

    def errors_for(self, field_name: str) -> list[ValidationErrorDetail]:
        """Errors reported for one field."""
        return [error for error in self.errors if error.loc[:1] == (field_name,)]

    def has_error_for(self, field_name: str) -> bool:
        return bool(self.errors_for(field_name))


class EntityValidator(Generic[E]):
    """
    Validates entities of one type against a schema.

    Subclasses set ``schema`` and ``entity_name``.
    """

    schema: ClassVar[type[EntitySchema]]
    entity_name: ClassVar[str]

    def validation_context(self) -> dict[str, Any] | None:
        """Extra context passed to schema validators."""
        return None

    def validate(self, entity: E | None) -> ValidationResult:
        """
        Check an entity against the rule set.

        Args:
            entity: Entity to check (None is reported as a missing entity)

        Returns:
            ValidationResult with one error per broken rule
        """
        if entity is None:
            return ValidationResult(
                errors=[
                    ValidationErrorDetail(
                        type="missing",
                        loc=(),
                        msg=f"{self.entity_name} is required",
                    )
                ]
            )

        try:
            self.schema.model_validate(entity, context=self.validation_context())
        except PydanticValidationError as exc:
            return ValidationResult(errors=to_error_details(exc))

        return ValidationResult()

    def is_valid(self, entity: E | None) -> bool:
        return self.validate(entity).is_valid

    def validate_or_raise(self, entity: E | None) -> None:
        """
        Raise ``ValidationError`` when the entity breaks any rule.

        Raises:
            ValidationError: With every broken rule attached
        """
        result = self.validate(entity)
        if not result.is_valid:
            raise ValidationError(result.errors)


def to_error_details(exc: PydanticValidationError) -> list[ValidationErrorDetail]:
    """
    Convert pydantic errors to ValidationErrorDetail.

    Entity-level errors (empty ``loc``) drop their input, which is the
    whole entity with its relationship graph.
    """
    return [
        ValidationErrorDetail(
            type=error["type"],
            loc=tuple(str(loc) for loc in error["loc"]),
            msg=error["msg"],
            input=error.get("input") if error["loc"] else None,
            ctx=(
                {key: str(value) for key, value in error["ctx"].items()}
                if error.get("ctx")
                else None
            ),
        )
        for error in exc.errors()
    ]
