"""Abstract repository interfaces for library storage."""

from athenaeum.infrastructure.repositories.author_repository import AuthorRepository
from athenaeum.infrastructure.repositories.book_domain_repository import (
    BookDomainRepository,
)
from athenaeum.infrastructure.repositories.book_repository import BookRepository
from athenaeum.infrastructure.repositories.borrowing_repository import (
    BorrowingRepository,
)
from athenaeum.infrastructure.repositories.edition_repository import (
    EditionRepository,
)
from athenaeum.infrastructure.repositories.reader_repository import ReaderRepository

__all__ = [
    "AuthorRepository",
    "BookDomainRepository",
    "BookRepository",
    "BorrowingRepository",
    "EditionRepository",
    "ReaderRepository",
]
