"""Per-entity validation rule sets."""

from athenaeum.validation.author import AuthorValidator
from athenaeum.validation.base import EntityValidator, ValidationResult
from athenaeum.validation.book import BookValidator
from athenaeum.validation.book_domain import BookDomainValidator
from athenaeum.validation.edition import EditionValidator
from athenaeum.validation.loan import LoanTerms, LoanTermsValidator
from athenaeum.validation.reader import ReaderValidator

__all__ = [
    "AuthorValidator",
    "BookDomainValidator",
    "BookValidator",
    "EditionValidator",
    "EntityValidator",
    "LoanTerms",
    "LoanTermsValidator",
    "ReaderValidator",
    "ValidationResult",
]
