"""Application services for the library."""

from athenaeum.services.author_service import AuthorService
from athenaeum.services.book_domain_service import BookDomainService
from athenaeum.services.book_service import BookService
from athenaeum.services.borrowing_policy import (
    BorrowingPolicy,
    BorrowingRequestContext,
    EligibilityDecision,
)
from athenaeum.services.borrowing_service import BorrowingService
from athenaeum.services.edition_service import EditionService
from athenaeum.services.reader_service import ReaderService

__all__ = [
    "AuthorService",
    "BookDomainService",
    "BookService",
    "BorrowingPolicy",
    "BorrowingRequestContext",
    "EligibilityDecision",
    "BorrowingService",
    "EditionService",
    "ReaderService",
]
