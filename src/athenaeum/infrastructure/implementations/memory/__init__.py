"""In-memory infrastructure implementations."""

from athenaeum.infrastructure.implementations.memory.author_repository import (
    MemoryAuthorRepository,
)
from athenaeum.infrastructure.implementations.memory.book_domain_repository import (
    MemoryBookDomainRepository,
)
from athenaeum.infrastructure.implementations.memory.book_repository import (
    MemoryBookRepository,
)
from athenaeum.infrastructure.implementations.memory.borrowing_repository import (
    MemoryBorrowingRepository,
)
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.implementations.memory.edition_repository import (
    MemoryEditionRepository,
)
from athenaeum.infrastructure.implementations.memory.reader_repository import (
    MemoryReaderRepository,
)

__all__ = [
    "LibraryContext",
    "MemoryAuthorRepository",
    "MemoryBookDomainRepository",
    "MemoryBookRepository",
    "MemoryBorrowingRepository",
    "MemoryEditionRepository",
    "MemoryReaderRepository",
]
