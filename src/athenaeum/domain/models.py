"""
Domain entities of the library.

Plain records with object relationships. Identifiers are assigned by the
repositories when an entity is added; ``0`` means "not stored yet".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(eq=False)
class Author:
    """
    Author of one or more books.

    Attributes:
        id: Unique author identifier
        first_name: Given name
        last_name: Family name
        books: Books written by this author
    """

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    books: list[Book] = field(default_factory=list, repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(eq=False)
class BookDomain:
    """
    Subject domain (e.g. Science, Mathematics).

    Domains form a forest: a domain without ``parent_domain_id`` is a root,
    every other domain hangs below exactly one parent.

    Attributes:
        id: Unique domain identifier
        name: Display name
        description: Optional free text
        parent_domain_id: Parent identifier (None for root domains)
        parent_domain: Parent domain object, when loaded
        subdomains: Direct children
        books: Books filed directly under this domain
    """

    id: int = 0
    name: str = ""
    description: str = ""
    parent_domain_id: int | None = None
    parent_domain: BookDomain | None = field(default=None, repr=False)
    subdomains: list[BookDomain] = field(default_factory=list, repr=False)
    books: list[Book] = field(default_factory=list, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent_domain_id is None


@dataclass(eq=False)
class Book:
    """
    Catalogue title with a number of physical copies.

    Attributes:
        id: Unique book identifier
        title: Book title
        description: Optional summary
        isbn: ISBN-10 or ISBN-13
        total_copies: Physical copies owned by the library
        reading_room_only_copies: Copies that never leave the reading room
        authors: Authors of the book
        domains: Domains the book is filed under
        editions: Known editions
        borrowing_records: Every loan of this book (active and returned)
    """

    id: int = 0
    title: str = ""
    description: str = ""
    isbn: str = ""
    total_copies: int = 0
    reading_room_only_copies: int = 0
    authors: list[Author] = field(default_factory=list, repr=False)
    domains: list[BookDomain] = field(default_factory=list, repr=False)
    editions: list[Edition] = field(default_factory=list, repr=False)
    borrowing_records: list[Borrowing] = field(default_factory=list, repr=False)

    @property
    def domain_ids(self) -> list[int]:
        return [domain.id for domain in self.domains]

    def get_active_loan_count(self) -> int:
        """Count loans that are still active."""
        return sum(1 for record in self.borrowing_records if record.is_active)

    def get_available_copies(self) -> int:
        """
        Copies that can be lent right now.

        Reading-room-only copies and copies currently on loan are not
        available. Never negative.
        """
        available = (
            self.total_copies
            - self.reading_room_only_copies
            - self.get_active_loan_count()
        )
        return max(available, 0)

    def can_be_loanable(self) -> bool:
        """True when at least one copy may leave the reading room."""
        return self.total_copies > self.reading_room_only_copies


@dataclass(eq=False)
class Edition:
    """
    Published edition of a book.

    Attributes:
        id: Unique edition identifier
        book_id: Book this edition belongs to
        publisher: Publishing house
        year: Publication year
        edition_number: Edition ordinal (1 for the first edition)
        page_count: Number of pages
        book_type: Binding or medium (hardcover, paperback, ebook, ...)
        book: Book object, when loaded
    """

    id: int = 0
    book_id: int = 0
    publisher: str = ""
    year: int = 0
    edition_number: int = 0
    page_count: int = 0
    book_type: str = ""
    book: Book | None = field(default=None, repr=False)


@dataclass(eq=False)
class Reader:
    """
    Registered library reader.

    Attributes:
        id: Unique reader identifier
        first_name: Given name
        last_name: Family name
        address: Postal address
        phone_number: Contact phone (optional if email is set)
        email: Contact email (optional if phone is set)
        registration_date: When the reader was registered
        is_staff: Staff readers get relaxed quotas
        borrowing_records: Loans of this reader
    """

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    phone_number: str | None = None
    email: str | None = None
    registration_date: datetime | None = None
    is_staff: bool = False
    borrowing_records: list[Borrowing] = field(default_factory=list, repr=False)

    def get_full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(eq=False)
class Borrowing:
    """
    Loan of one copy of a book to a reader.

    Attributes:
        id: Unique borrowing identifier
        reader_id: Borrowing reader
        book_id: Borrowed book
        borrowing_date: When the copy left the library
        due_date: When the copy must be back (moves with extensions)
        return_date: When the copy came back (None while on loan)
        total_extension_days: Days added to the due date so far
        last_extension_date: When the latest extension was granted
        is_active: False once the copy has been returned
        initial_borrowing_days: Loan length requested at borrowing time
        reader: Reader object, when loaded
        book: Book object, when loaded
        extensions: Extensions granted for this loan
    """

    id: int = 0
    reader_id: int = 0
    book_id: int = 0
    borrowing_date: datetime | None = None
    due_date: datetime | None = None
    return_date: datetime | None = None
    total_extension_days: int = 0
    last_extension_date: datetime | None = None
    is_active: bool = False
    initial_borrowing_days: int = 0
    reader: Reader | None = field(default=None, repr=False)
    book: Book | None = field(default=None, repr=False)
    extensions: list[LoanExtension] = field(default_factory=list, repr=False)

    def is_overdue(self, now: datetime) -> bool:
        """An active loan whose due date has passed."""
        return self.is_active and self.due_date is not None and self.due_date < now


@dataclass(eq=False)
class LoanExtension:
    """
    Extension granted for a loan.

    Attributes:
        id: Unique extension identifier
        borrowing_id: Extended loan
        extension_date: When the extension was granted
        extension_days: Days added to the due date
        borrowing: Borrowing object, when loaded
    """

    id: int = 0
    borrowing_id: int = 0
    extension_date: datetime | None = None
    extension_days: int = 0
    borrowing: Borrowing | None = field(default=None, repr=False)
