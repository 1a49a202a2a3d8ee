"""
Lending rule engine.

Evaluates borrowing and extension requests against the library policy.
The engine is pure: callers gather the reader, the requested books, the
reader's loan history and a domain tree snapshot, and get back every
broken rule at once.

Borrowing rules (in evaluation order):
1. The request names at least one book, none of them twice
2. The request does not exceed the per-request limit
3. Large requests span enough distinct domains
4. Each book has copies that may leave the reading room
5. Each book has a copy available right now
6. Lending keeps the available share of each title above the threshold
7. The reader stays within the period quota
8. The reader stays within the per-domain quota (subdomains included)
9. The reader does not re-borrow the same book too soon
10. Regular readers stay within the daily limit
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from athenaeum.core.clock import start_of_day, subtract_months
from athenaeum.domain.hierarchy import DomainHierarchy
from athenaeum.domain.models import Book, Borrowing, LoanExtension, Reader
from athenaeum.domain.violations import RuleCode, RuleViolation
from athenaeum.models.config import EffectiveLimits, LibraryConfiguration


@dataclass(frozen=True)
class BorrowingRequestContext:
    """
    Everything the engine needs to judge one borrowing request.

    Attributes:
        reader: Reader asking for the books
        books: Requested books, in request order
        history: The reader's loans (active and returned)
        hierarchy: Snapshot of the domain tree
        now: Evaluation time
    """

    reader: Reader
    books: Sequence[Book]
    history: Sequence[Borrowing]
    hierarchy: DomainHierarchy
    now: datetime


@dataclass(frozen=True)
class EligibilityDecision:
    """Outcome of a rule evaluation."""

    limits: EffectiveLimits
    violations: tuple[RuleViolation, ...] = field(default_factory=tuple)

    @property
    def allowed(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[RuleCode]:
        return [violation.code for violation in self.violations]

    def violations_for(self, book_id: int) -> list[RuleViolation]:
        return [v for v in self.violations if v.book_id == book_id]


class BorrowingPolicy:
    """Applies the library configuration to borrowing and extension requests."""

    def __init__(self, config: LibraryConfiguration):
        self.config = config

    def effective_limits(self, reader: Reader) -> EffectiveLimits:
        """Limits for the reader after staff adjustments."""
        return EffectiveLimits.for_reader(self.config, reader.is_staff)

    # ===========================
    # Borrowing
    # ===========================

    def evaluate(self, request: BorrowingRequestContext) -> EligibilityDecision:
        """
        Check a borrowing request against every rule.

        Args:
            request: Reader, books, history and evaluation time

        Returns:
            Decision listing every broken rule (empty when allowed)
        """
        limits = self.effective_limits(request.reader)

        if not request.books:
            return EligibilityDecision(
                limits=limits,
                violations=(
                    RuleViolation(
                        RuleCode.REQUEST_EMPTY,
                        "A borrowing request must name at least one book.",
                    ),
                ),
            )

        books = _distinct_books(request.books)
        violations: list[RuleViolation] = []
        violations.extend(self._check_duplicates(request.books))
        violations.extend(self._check_request_size(books, limits))
        violations.extend(self._check_diversity(books))
        for book in books:
            violations.extend(self._check_stock(book))
        violations.extend(self._check_period_quota(request, books, limits))
        violations.extend(self._check_domain_quota(request, books, limits))
        violations.extend(self._check_reborrow_interval(request, books, limits))
        violations.extend(self._check_daily_limit(request, books, limits))

        return EligibilityDecision(limits=limits, violations=tuple(violations))

    def _check_duplicates(self, books: Sequence[Book]) -> Iterator[RuleViolation]:
        seen: set[int] = set()
        reported: set[int] = set()
        for book in books:
            if book.id in seen and book.id not in reported:
                reported.add(book.id)
                yield RuleViolation(
                    RuleCode.DUPLICATE_BOOK,
                    f"Book {book.id} is requested more than once.",
                    book.id,
                )
            seen.add(book.id)

    def _check_request_size(
        self, books: Sequence[Book], limits: EffectiveLimits
    ) -> Iterator[RuleViolation]:
        if len(books) > limits.max_books_per_request:
            yield RuleViolation(
                RuleCode.REQUEST_SIZE,
                f"At most {limits.max_books_per_request} books may be borrowed "
                f"in one request ({len(books)} requested).",
            )

    def _check_diversity(self, books: Sequence[Book]) -> Iterator[RuleViolation]:
        if len(books) < self.config.diversity_threshold:
            return
        distinct_domains = {domain_id for book in books for domain_id in book.domain_ids}
        if len(distinct_domains) < self.config.min_distinct_domains:
            yield RuleViolation(
                RuleCode.DOMAIN_DIVERSITY,
                f"Requests of {self.config.diversity_threshold} or more books must "
                f"span at least {self.config.min_distinct_domains} domains "
                f"({len(distinct_domains)} found).",
            )

    def _check_stock(self, book: Book) -> Iterator[RuleViolation]:
        if not book.can_be_loanable():
            yield RuleViolation(
                RuleCode.READING_ROOM_ONLY,
                f"Book {book.id} may only be read in the reading room.",
                book.id,
            )
            return

        available = book.get_available_copies()
        if available <= 0:
            yield RuleViolation(
                RuleCode.NO_COPIES_AVAILABLE,
                f"No copies of book {book.id} are available.",
                book.id,
            )
            return

        share = available / book.total_copies
        if share < self.config.min_available_percentage:
            yield RuleViolation(
                RuleCode.AVAILABILITY_THRESHOLD,
                f"Only {share:.0%} of book {book.id} is available, "
                f"below the {self.config.min_available_percentage:.0%} threshold.",
                book.id,
            )

    def _check_period_quota(
        self,
        request: BorrowingRequestContext,
        books: Sequence[Book],
        limits: EffectiveLimits,
    ) -> Iterator[RuleViolation]:
        since = request.now - timedelta(days=limits.period_days)
        borrowed = sum(1 for loan in request.history if _started_since(loan, since))
        if borrowed + len(books) > limits.max_books_per_period:
            yield RuleViolation(
                RuleCode.PERIOD_QUOTA,
                f"Reader {request.reader.id} may borrow at most "
                f"{limits.max_books_per_period} books in {limits.period_days} days "
                f"({borrowed} already borrowed).",
            )

    def _check_domain_quota(
        self,
        request: BorrowingRequestContext,
        books: Sequence[Book],
        limits: EffectiveLimits,
    ) -> Iterator[RuleViolation]:
        since = subtract_months(request.now, self.config.domain_limit_months)
        recent_books = [
            loan.book
            for loan in request.history
            if loan.book is not None and _started_since(loan, since)
        ]
        hierarchy = request.hierarchy

        checked: set[int] = set()
        for book in books:
            for domain_id in book.domain_ids:
                if domain_id in checked:
                    continue
                checked.add(domain_id)

                borrowed = sum(1 for b in recent_books if hierarchy.covers(domain_id, b))
                requested = sum(1 for b in books if hierarchy.covers(domain_id, b))
                if borrowed + requested > limits.max_books_per_domain:
                    yield RuleViolation(
                        RuleCode.DOMAIN_QUOTA,
                        f"At most {limits.max_books_per_domain} books of domain "
                        f"{domain_id} may be borrowed in "
                        f"{self.config.domain_limit_months} months "
                        f"({borrowed} already borrowed).",
                        book.id,
                    )

    def _check_reborrow_interval(
        self,
        request: BorrowingRequestContext,
        books: Sequence[Book],
        limits: EffectiveLimits,
    ) -> Iterator[RuleViolation]:
        if limits.min_days_between_borrows <= 0:
            return
        interval = timedelta(days=limits.min_days_between_borrows)

        for book in books:
            last = _last_borrowing_date(request.history, book.id)
            if last is not None and request.now - last < interval:
                yield RuleViolation(
                    RuleCode.REBORROW_INTERVAL,
                    f"Book {book.id} was borrowed on {last:%Y-%m-%d}; "
                    f"{limits.min_days_between_borrows} days must pass "
                    "before borrowing it again.",
                    book.id,
                )

    def _check_daily_limit(
        self,
        request: BorrowingRequestContext,
        books: Sequence[Book],
        limits: EffectiveLimits,
    ) -> Iterator[RuleViolation]:
        if limits.max_books_per_day is None:
            return
        today = start_of_day(request.now)
        borrowed = sum(1 for loan in request.history if _started_since(loan, today))
        if borrowed + len(books) > limits.max_books_per_day:
            yield RuleViolation(
                RuleCode.DAILY_LIMIT,
                f"At most {limits.max_books_per_day} books may be borrowed per day "
                f"({borrowed} already borrowed today).",
            )

    # ===========================
    # Extensions
    # ===========================

    def evaluate_extension(
        self,
        reader: Reader,
        borrowing: Borrowing,
        extension_days: int,
        recent_extensions: Sequence[LoanExtension],
        now: datetime,
    ) -> EligibilityDecision:
        """
        Check an extension request.

        Args:
            reader: Owner of the loan
            borrowing: Loan to extend
            extension_days: Days to add to the due date
            recent_extensions: Extensions granted to the reader so far
                (anything older than the rolling window is ignored)
            now: Evaluation time

        Returns:
            Decision listing every broken rule
        """
        limits = self.effective_limits(reader)
        violations: list[RuleViolation] = []

        if not borrowing.is_active:
            violations.append(
                RuleViolation(
                    RuleCode.LOAN_NOT_ACTIVE,
                    f"Borrowing {borrowing.id} has already been returned.",
                    borrowing.book_id,
                )
            )

        if extension_days < 1:
            violations.append(
                RuleViolation(
                    RuleCode.EXTENSION_DAYS_INVALID,
                    "Extension days must be at least 1.",
                    borrowing.book_id,
                )
            )
        else:
            since = subtract_months(now, self.config.extension_window_months)
            granted = sum(
                extension.extension_days
                for extension in recent_extensions
                if extension.extension_date is not None
                and extension.extension_date >= since
            )
            if granted + extension_days > limits.max_extension_days:
                violations.append(
                    RuleViolation(
                        RuleCode.EXTENSION_LIMIT,
                        f"Extensions are limited to {limits.max_extension_days} days "
                        f"in {self.config.extension_window_months} months "
                        f"({granted} already granted).",
                        borrowing.book_id,
                    )
                )

        return EligibilityDecision(limits=limits, violations=tuple(violations))


def _distinct_books(books: Sequence[Book]) -> list[Book]:
    seen: set[int] = set()
    result = []
    for book in books:
        if book.id not in seen:
            seen.add(book.id)
            result.append(book)
    return result


def _started_since(loan: Borrowing, since: datetime) -> bool:
    return loan.borrowing_date is not None and loan.borrowing_date >= since


def _last_borrowing_date(history: Sequence[Borrowing], book_id: int) -> datetime | None:
    dates = [
        loan.borrowing_date
        for loan in history
        if loan.book_id == book_id and loan.borrowing_date is not None
    ]
    return max(dates) if dates else None
