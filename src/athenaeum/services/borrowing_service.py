"""
Borrowing workflow.

Loads the reader, the requested books and the reader's history, asks
``BorrowingPolicy`` for a decision and records loans, returns and
extensions. Rejected requests raise ``BusinessRuleViolation`` carrying
every broken rule; nothing is stored for them.
"""

from collections.abc import Sequence
from datetime import timedelta

from athenaeum.core.clock import Clock, subtract_months, utc_now
from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.exceptions import (
    BusinessRuleViolation,
    EntityNotFoundError,
    InvalidOperationError,
)
from athenaeum.domain.hierarchy import DomainHierarchy
from athenaeum.domain.models import Borrowing, LoanExtension, Reader
from athenaeum.infrastructure.repositories import (
    BookDomainRepository,
    BookRepository,
    BorrowingRepository,
    ReaderRepository,
)
from athenaeum.models.config import LibraryConfiguration
from athenaeum.services.borrowing_policy import (
    BorrowingPolicy,
    BorrowingRequestContext,
    EligibilityDecision,
)
from athenaeum.validation import LoanTerms, LoanTermsValidator


class BorrowingService:
    """
    Lends books to readers under the library policy.

    Args:
        borrowing_repository: Loan storage
        reader_repository: Reader storage
        book_repository: Book storage
        domain_repository: Domain storage (for per-domain quotas)
        config: Policy thresholds
        clock: Source of the current time (naive UTC)
    """

    def __init__(
        self,
        borrowing_repository: BorrowingRepository,
        reader_repository: ReaderRepository,
        book_repository: BookRepository,
        domain_repository: BookDomainRepository,
        config: LibraryConfiguration,
        clock: Clock = utc_now,
    ):
        self.borrowing_repository = borrowing_repository
        self.reader_repository = reader_repository
        self.book_repository = book_repository
        self.domain_repository = domain_repository
        self.config = config
        self.clock = clock
        self.policy = BorrowingPolicy(config)
        self.terms_validator = LoanTermsValidator(config)

    # ===========================
    # Eligibility
    # ===========================

    async def check_eligibility(
        self, reader_id: int, book_ids: Sequence[int]
    ) -> EligibilityDecision:
        """
        Evaluate a request without recording anything.

        Raises:
            EntityNotFoundError: If the reader or a book does not exist
        """
        request = await self._build_request(reader_id, book_ids)
        return self.policy.evaluate(request)

    async def can_borrow_book(self, reader_id: int, book_id: int) -> bool:
        """True if the reader could borrow the book now (False for unknown ids)."""
        try:
            decision = await self.check_eligibility(reader_id, [book_id])
        except EntityNotFoundError:
            return False
        return decision.allowed

    # ===========================
    # Lending
    # ===========================

    async def borrow_book(
        self, reader_id: int, book_id: int, borrowing_days: int | None = None
    ) -> Borrowing:
        """
        Lend one book.

        Args:
            reader_id: Borrowing reader
            book_id: Book to lend
            borrowing_days: Loan length (defaults to ``default_borrowing_days``)

        Returns:
            The recorded borrowing

        Raises:
            EntityNotFoundError: If the reader or book does not exist
            ValidationError: If the loan length is out of range
            BusinessRuleViolation: If the library policy forbids the loan
        """
        with operation_scope():
            borrowings = await self.borrow_books(reader_id, [book_id], borrowing_days)
            return borrowings[0]

    async def borrow_books(
        self,
        reader_id: int,
        book_ids: Sequence[int],
        borrowing_days: int | None = None,
    ) -> list[Borrowing]:
        """
        Lend several books as one request.

        The request is accepted or rejected as a whole.

        Args:
            reader_id: Borrowing reader
            book_ids: Books to lend
            borrowing_days: Loan length (defaults to ``default_borrowing_days``)

        Returns:
            One borrowing per book, in request order

        Raises:
            EntityNotFoundError: If the reader or a book does not exist
            ValidationError: If the loan length is out of range
            BusinessRuleViolation: If the library policy forbids the request
        """
        with operation_scope():
            days = (
                borrowing_days
                if borrowing_days is not None
                else self.config.default_borrowing_days
            )
            self.terms_validator.validate_or_raise(LoanTerms(borrowing_days=days))

            request = await self._build_request(reader_id, book_ids)
            decision = self.policy.evaluate(request)
            if not decision.allowed:
                logger.warning(
                    f"Borrowing refused for reader {reader_id}, books {list(book_ids)}: "
                    f"{[code.value for code in decision.codes]}"
                )
                raise BusinessRuleViolation(decision.violations)

            now = request.now
            borrowings = []
            for book in request.books:
                borrowing = await self.borrowing_repository.add(
                    Borrowing(
                        reader_id=reader_id,
                        book_id=book.id,
                        borrowing_date=now,
                        due_date=now + timedelta(days=days),
                        is_active=True,
                        initial_borrowing_days=days,
                    )
                )
                borrowings.append(borrowing)
                logger.info(
                    f"Reader {reader_id} borrowed book {book.id} "
                    f"(borrowing {borrowing.id}, due {borrowing.due_date:%Y-%m-%d})"
                )
            return borrowings

    async def return_book(self, borrowing_id: int) -> Borrowing:
        """
        Record the return of a loan.

        Raises:
            EntityNotFoundError: If the borrowing does not exist
            InvalidOperationError: If the loan was already returned
        """
        with operation_scope():
            borrowing = await self._require_borrowing(borrowing_id)
            if not borrowing.is_active:
                raise InvalidOperationError(
                    f"Borrowing {borrowing_id} has already been returned."
                )

            borrowing.return_date = self.clock()
            borrowing.is_active = False
            updated = await self.borrowing_repository.update(borrowing)
            logger.info(f"Borrowing {borrowing_id} returned")
            return updated

    async def extend_borrowing(self, borrowing_id: int, extension_days: int) -> Borrowing:
        """
        Push back the due date of an active loan.

        Args:
            borrowing_id: Loan to extend
            extension_days: Days to add

        Returns:
            The updated borrowing

        Raises:
            EntityNotFoundError: If the borrowing does not exist
            BusinessRuleViolation: If the loan is closed, the days are not
                positive, or the reader's extension allowance is used up
        """
        with operation_scope():
            borrowing = await self._require_borrowing(borrowing_id)
            reader = await self._require_reader(borrowing.reader_id)
            now = self.clock()

            since = subtract_months(now, self.config.extension_window_months)
            recent = await self.borrowing_repository.get_extensions_by_reader_since(
                reader.id, since
            )
            decision = self.policy.evaluate_extension(
                reader, borrowing, extension_days, recent, now
            )
            if not decision.allowed:
                logger.warning(
                    f"Extension refused for borrowing {borrowing_id}: "
                    f"{[code.value for code in decision.codes]}"
                )
                raise BusinessRuleViolation(decision.violations)

            await self.borrowing_repository.add_extension(
                LoanExtension(
                    borrowing_id=borrowing.id,
                    extension_date=now,
                    extension_days=extension_days,
                )
            )
            borrowing.due_date = borrowing.due_date + timedelta(days=extension_days)
            borrowing.total_extension_days += extension_days
            borrowing.last_extension_date = now
            updated = await self.borrowing_repository.update(borrowing)
            logger.info(
                f"Borrowing {borrowing_id} extended by {extension_days} days "
                f"(due {updated.due_date:%Y-%m-%d})"
            )
            return updated

    # ===========================
    # Queries
    # ===========================

    async def get_active_borrowings(self, reader_id: int) -> list[Borrowing]:
        return await self.borrowing_repository.get_active_borrowings_by_reader(reader_id)

    async def get_overdue_borrowings(self) -> list[Borrowing]:
        return await self.borrowing_repository.get_overdue_borrowings(self.clock())

    async def get_active_borrowing_count(self, reader_id: int) -> int:
        return len(await self.get_active_borrowings(reader_id))

    async def get_borrowing_history(self, reader_id: int) -> list[Borrowing]:
        """Every loan of the reader, oldest first."""
        return await self.borrowing_repository.get_borrowings_by_reader(reader_id)

    # ===========================
    # Helpers
    # ===========================

    async def _build_request(
        self, reader_id: int, book_ids: Sequence[int]
    ) -> BorrowingRequestContext:
        reader = await self._require_reader(reader_id)
        books = []
        for book_id in book_ids:
            book = await self.book_repository.get_by_id(book_id)
            if book is None:
                raise EntityNotFoundError("Book", book_id)
            books.append(book)

        return BorrowingRequestContext(
            reader=reader,
            books=books,
            history=await self.borrowing_repository.get_borrowings_by_reader(reader_id),
            hierarchy=DomainHierarchy(await self.domain_repository.get_all()),
            now=self.clock(),
        )

    async def _require_reader(self, reader_id: int) -> Reader:
        reader = await self.reader_repository.get_by_id(reader_id)
        if reader is None:
            raise EntityNotFoundError("Reader", reader_id)
        return reader

    async def _require_borrowing(self, borrowing_id: int) -> Borrowing:
        borrowing = await self.borrowing_repository.get_by_id(borrowing_id)
        if borrowing is None:
            raise EntityNotFoundError("Borrowing", borrowing_id)
        return borrowing
