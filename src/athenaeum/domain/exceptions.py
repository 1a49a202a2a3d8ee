"""Domain-level exceptions.

All business rule violations are expressed as subclasses of LibraryError
so callers can catch them uniformly and turn them into error reports.
"""

import re
from collections.abc import Sequence

from athenaeum.domain.violations import RuleViolation
from athenaeum.models.errors import ValidationErrorDetail


class LibraryError(Exception):
    """Base class for all library errors."""

    title = "Library error"

    @property
    def code(self) -> str:
        """Snake-case error category derived from the class name."""
        name = type(self).__name__.removesuffix("Error")
        return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class EntityNotFoundError(LibraryError):
    """A requested entity does not exist."""

    title = "Entity not found"

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found.")


class ValidationError(LibraryError):
    """An entity failed its field-level rule set."""

    title = "Validation failed"

    def __init__(self, errors: Sequence[ValidationErrorDetail]):
        self.errors = list(errors)
        super().__init__(", ".join(error.msg for error in self.errors))


class BusinessRuleViolation(LibraryError):
    """A borrowing or extension request broke library policy."""

    title = "Library policy violated"

    def __init__(self, violations: Sequence[RuleViolation]):
        self.violations = list(violations)
        super().__init__("; ".join(violation.message for violation in self.violations))

    @property
    def codes(self) -> list[str]:
        return [violation.code.value for violation in self.violations]


class DomainHierarchyError(LibraryError):
    """Domain tree constraint broken (cycles, ancestor/descendant pairs)."""

    title = "Domain hierarchy constraint violated"


class DuplicateEntityError(LibraryError):
    """An entity with the same natural key already exists."""

    title = "Duplicate entity"


class InvalidOperationError(LibraryError):
    """The operation is not allowed in the entity's current state."""

    title = "Invalid operation"
