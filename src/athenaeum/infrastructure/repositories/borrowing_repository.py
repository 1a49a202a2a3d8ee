"""
Abstract interface for loan storage.

Handles the lending history:
- Borrowing records (active and returned)
- Loan extensions granted for each borrowing
"""

from abc import ABC, abstractmethod
from datetime import datetime

from athenaeum.domain.models import Borrowing, LoanExtension


class BorrowingRepository(ABC):
    """
    Abstract interface for borrowing storage operations.

    Returned borrowings have their reader, book and extensions attached.
    """

    @abstractmethod
    async def get_all(self) -> list[Borrowing]:
        """List every borrowing."""
        pass

    @abstractmethod
    async def get_by_id(self, borrowing_id: int) -> Borrowing | None:
        """
        Retrieve a borrowing by id.

        Args:
            borrowing_id: Borrowing identifier

        Returns:
            Borrowing if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_active_borrowings_by_reader(self, reader_id: int) -> list[Borrowing]:
        """Loans of the reader that have not been returned."""
        pass

    @abstractmethod
    async def get_borrowings_by_reader(self, reader_id: int) -> list[Borrowing]:
        """Every loan of the reader, oldest first."""
        pass

    @abstractmethod
    async def get_overdue_borrowings(self, now: datetime) -> list[Borrowing]:
        """
        Active loans whose due date is before ``now``.

        Args:
            now: Reference time
        """
        pass

    @abstractmethod
    async def get_borrowings_by_book(self, book_id: int) -> list[Borrowing]:
        """Every loan of the book."""
        pass

    @abstractmethod
    async def get_borrowings_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Borrowing]:
        """
        Loans that started within ``[start, end]``.

        Args:
            start: Inclusive lower bound on borrowing_date
            end: Inclusive upper bound on borrowing_date
        """
        pass

    @abstractmethod
    async def add(self, borrowing: Borrowing) -> Borrowing:
        """
        Store a new borrowing.

        Raises:
            EntityNotFoundError: If the reader or book does not exist
        """
        pass

    @abstractmethod
    async def update(self, borrowing: Borrowing) -> Borrowing:
        """
        Overwrite the mutable loan fields (due date, return date, status,
        extension totals).

        Raises:
            EntityNotFoundError: If the borrowing does not exist
        """
        pass

    @abstractmethod
    async def add_extension(self, extension: LoanExtension) -> LoanExtension:
        """
        Record an extension for a borrowing.

        Raises:
            EntityNotFoundError: If the borrowing does not exist
        """
        pass

    @abstractmethod
    async def get_extensions_by_reader_since(
        self, reader_id: int, since: datetime
    ) -> list[LoanExtension]:
        """
        Extensions granted to the reader on or after ``since``.

        Args:
            reader_id: Reader identifier
            since: Inclusive lower bound on extension_date
        """
        pass
