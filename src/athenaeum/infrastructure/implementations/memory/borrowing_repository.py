"""In-memory borrowing repository."""

from datetime import datetime

from loguru import logger

from athenaeum.domain.models import Borrowing, LoanExtension
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.borrowing_repository import (
    BorrowingRepository,
)


def _by_borrowing_date(borrowing: Borrowing) -> tuple[datetime, int]:
    return (borrowing.borrowing_date or datetime.min, borrowing.id)


class MemoryBorrowingRepository(BorrowingRepository):
    """Borrowing and extension storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryBorrowingRepository")

    async def get_all(self) -> list[Borrowing]:
        return sorted(self.context.borrowings.values(), key=_by_borrowing_date)

    async def get_by_id(self, borrowing_id: int) -> Borrowing | None:
        return self.context.borrowings.get(borrowing_id)

    async def get_active_borrowings_by_reader(self, reader_id: int) -> list[Borrowing]:
        return [
            borrowing
            for borrowing in await self.get_borrowings_by_reader(reader_id)
            if borrowing.is_active
        ]

    async def get_borrowings_by_reader(self, reader_id: int) -> list[Borrowing]:
        return sorted(
            (
                borrowing
                for borrowing in self.context.borrowings.values()
                if borrowing.reader_id == reader_id
            ),
            key=_by_borrowing_date,
        )

    async def get_overdue_borrowings(self, now: datetime) -> list[Borrowing]:
        return [
            borrowing
            for borrowing in await self.get_all()
            if borrowing.is_overdue(now)
        ]

    async def get_borrowings_by_book(self, book_id: int) -> list[Borrowing]:
        return sorted(
            (
                borrowing
                for borrowing in self.context.borrowings.values()
                if borrowing.book_id == book_id
            ),
            key=_by_borrowing_date,
        )

    async def get_borrowings_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Borrowing]:
        return [
            borrowing
            for borrowing in await self.get_all()
            if borrowing.borrowing_date is not None
            and start <= borrowing.borrowing_date <= end
        ]

    async def add(self, borrowing: Borrowing) -> Borrowing:
        self.context.require_reader(borrowing.reader_id)
        self.context.require_book(borrowing.book_id)

        borrowing.id = self.context.next_id("borrowings")
        self.context.borrowings[borrowing.id] = borrowing
        self.context.attach_borrowing(borrowing)
        logger.debug(
            f"Stored borrowing {borrowing.id} "
            f"(reader {borrowing.reader_id}, book {borrowing.book_id})"
        )
        return borrowing

    async def update(self, borrowing: Borrowing) -> Borrowing:
        stored = self.context.require_borrowing(borrowing.id)
        stored.due_date = borrowing.due_date
        stored.return_date = borrowing.return_date
        stored.is_active = borrowing.is_active
        stored.total_extension_days = borrowing.total_extension_days
        stored.last_extension_date = borrowing.last_extension_date
        return stored

    async def add_extension(self, extension: LoanExtension) -> LoanExtension:
        self.context.require_borrowing(extension.borrowing_id)
        extension.id = self.context.next_id("extensions")
        self.context.extensions[extension.id] = extension
        self.context.attach_extension(extension)
        logger.debug(
            f"Stored extension {extension.id} for borrowing {extension.borrowing_id}"
        )
        return extension

    async def get_extensions_by_reader_since(
        self, reader_id: int, since: datetime
    ) -> list[LoanExtension]:
        return [
            extension
            for extension in self.context.extensions.values()
            if extension.borrowing is not None
            and extension.borrowing.reader_id == reader_id
            and extension.extension_date is not None
            and extension.extension_date >= since
        ]
