"""Lending rule identifiers and violation records."""

from dataclasses import dataclass
from enum import StrEnum

from athenaeum.models.errors import RuleViolationDetail


class RuleCode(StrEnum):
    """Identifiers of the lending rules."""

    REQUEST_EMPTY = "REQUEST_EMPTY"
    DUPLICATE_BOOK = "DUPLICATE_BOOK"
    REQUEST_SIZE = "REQUEST_SIZE"
    DOMAIN_DIVERSITY = "DOMAIN_DIVERSITY"
    READING_ROOM_ONLY = "READING_ROOM_ONLY"
    NO_COPIES_AVAILABLE = "NO_COPIES_AVAILABLE"
    AVAILABILITY_THRESHOLD = "AVAILABILITY_THRESHOLD"
    PERIOD_QUOTA = "PERIOD_QUOTA"
    DOMAIN_QUOTA = "DOMAIN_QUOTA"
    REBORROW_INTERVAL = "REBORROW_INTERVAL"
    DAILY_LIMIT = "DAILY_LIMIT"
    LOAN_NOT_ACTIVE = "LOAN_NOT_ACTIVE"
    EXTENSION_DAYS_INVALID = "EXTENSION_DAYS_INVALID"
    EXTENSION_LIMIT = "EXTENSION_LIMIT"


@dataclass(frozen=True)
class RuleViolation:
    """
    A single broken lending rule.

    Attributes:
        code: Which rule was broken
        message: Human-readable explanation
        book_id: Book the rule was evaluated for (None for request-wide rules)
    """

    code: RuleCode
    message: str
    book_id: int | None = None

    def to_detail(self) -> RuleViolationDetail:
        return RuleViolationDetail(
            code=self.code.value, msg=self.message, book_id=self.book_id
        )
