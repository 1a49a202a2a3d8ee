"""
Book catalogue operations.

Books are filed under one or more domains. A book may not be filed under
more than ``max_domains_per_book`` domains, nor under two domains where
one is an ancestor of the other (the narrower domain already implies the
broader one).
"""

from collections.abc import Sequence

from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.exceptions import (
    DomainHierarchyError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidOperationError,
    ValidationError,
)
from athenaeum.domain.hierarchy import DomainHierarchy
from athenaeum.domain.models import Book
from athenaeum.infrastructure.repositories import (
    AuthorRepository,
    BookDomainRepository,
    BookRepository,
)
from athenaeum.models.config import LibraryConfiguration
from athenaeum.models.errors import ValidationErrorDetail
from athenaeum.validation import BookValidator


class BookService:
    """Reads and maintains the book catalogue."""

    def __init__(
        self,
        book_repository: BookRepository,
        domain_repository: BookDomainRepository,
        author_repository: AuthorRepository,
        config: LibraryConfiguration,
        validator: BookValidator | None = None,
    ):
        self.book_repository = book_repository
        self.domain_repository = domain_repository
        self.author_repository = author_repository
        self.config = config
        self.validator = validator or BookValidator()

    # ===========================
    # Queries
    # ===========================

    async def get_all_books(self) -> list[Book]:
        return await self.book_repository.get_all()

    async def get_book_by_id(self, book_id: int) -> Book | None:
        return await self.book_repository.get_by_id(book_id)

    async def get_books_by_author(self, author_id: int) -> list[Book]:
        return await self.book_repository.get_books_by_author(author_id)

    async def get_books_by_domain(self, domain_id: int) -> list[Book]:
        """
        Books filed under a domain or any of its subdomains.

        Each book appears once even when filed under several of the
        visited domains.

        Args:
            domain_id: Top of the subtree to search

        Returns:
            Matching books (empty for unknown domains)
        """
        hierarchy = DomainHierarchy(await self.domain_repository.get_all())
        if domain_id not in hierarchy:
            return []

        books: dict[int, Book] = {}
        for current_id in [domain_id, *hierarchy.descendants(domain_id)]:
            for book in await self.book_repository.get_books_by_domain(current_id):
                books.setdefault(book.id, book)
        return list(books.values())

    async def get_books_directly_in_domain(self, domain_id: int) -> list[Book]:
        """Books filed under the domain itself, subdomains excluded."""
        return await self.book_repository.get_books_by_domain(domain_id)

    async def get_available_books(self) -> list[Book]:
        return await self.book_repository.get_available_books()

    async def get_books_ordered_by_availability(self) -> list[Book]:
        """Available books, most available copies first."""
        books = await self.book_repository.get_available_books()
        return sorted(books, key=lambda book: book.get_available_copies(), reverse=True)

    async def isbn_exists(self, isbn: str) -> bool:
        if not isbn or not isbn.strip():
            return False
        return await self.book_repository.get_by_isbn(isbn) is not None

    async def get_total_books_count(self) -> int:
        """Number of titles in the catalogue."""
        return len(await self.book_repository.get_all())

    async def get_total_available_copies(self) -> int:
        books = await self.book_repository.get_all()
        return sum(book.get_available_copies() for book in books)

    async def get_books_with_no_copies_available(self) -> list[Book]:
        books = await self.book_repository.get_all()
        return [book for book in books if book.get_available_copies() <= 0]

    async def get_reading_room_only_books(self) -> list[Book]:
        books = await self.book_repository.get_all()
        return [book for book in books if not book.can_be_loanable()]

    async def can_borrow_book(self, book_id: int) -> bool:
        """True if the book exists and has copies that may leave the library."""
        book = await self.book_repository.get_by_id(book_id)
        return book is not None and book.can_be_loanable()

    async def get_available_copies(self, book_id: int) -> int:
        book = await self.book_repository.get_by_id(book_id)
        return book.get_available_copies() if book is not None else 0

    # ===========================
    # Domain constraints
    # ===========================

    async def validate_book_domains(self, book: Book) -> bool:
        """
        Check the domain constraints for a book.

        Args:
            book: Book whose ``domains`` are checked

        Returns:
            True if the book has at most ``max_domains_per_book`` domains
            and none of them is an ancestor of another
        """
        try:
            await self._check_domains(book.domain_ids)
        except DomainHierarchyError:
            return False
        return True

    async def _check_domains(self, domain_ids: Sequence[int]) -> None:
        """
        Raises:
            DomainHierarchyError: If there are too many domains or two of
                them are related
        """
        if len(domain_ids) > self.config.max_domains_per_book:
            raise DomainHierarchyError(
                f"A book may belong to at most {self.config.max_domains_per_book} "
                f"domains ({len(domain_ids)} given)."
            )

        hierarchy = DomainHierarchy(await self.domain_repository.get_all())
        pair = hierarchy.find_related_pair(list(domain_ids))
        if pair is not None:
            ancestor_id, descendant_id = pair
            raise DomainHierarchyError(
                f"Domain {ancestor_id} is an ancestor of domain {descendant_id}; "
                "a book cannot belong to both."
            )

    # ===========================
    # Maintenance
    # ===========================

    async def create_book(
        self,
        book: Book,
        domain_ids: Sequence[int],
        author_ids: Sequence[int] = (),
    ) -> Book:
        """
        Validate and store a new book.

        Args:
            book: Book to store
            domain_ids: Domains to file the book under (at least one)
            author_ids: Authors of the book

        Returns:
            The stored book

        Raises:
            ValidationError: If fields are invalid or no domain is given
            EntityNotFoundError: If a domain or author does not exist
            DuplicateEntityError: If another book has the same ISBN
            DomainHierarchyError: If the domain constraints are broken
        """
        with operation_scope():
            self.validator.validate_or_raise(book)
            domain_ids = _unique_ids(domain_ids)
            author_ids = _unique_ids(author_ids)

            if not domain_ids:
                raise ValidationError(
                    [
                        ValidationErrorDetail(
                            type="required",
                            loc=("domains",),
                            msg="Book must belong to at least one domain",
                        )
                    ]
                )
            await self._require_domains(domain_ids)
            for author_id in author_ids:
                if await self.author_repository.get_by_id(author_id) is None:
                    raise EntityNotFoundError("Author", author_id)

            if await self.book_repository.get_by_isbn(book.isbn) is not None:
                raise DuplicateEntityError(f"Book with ISBN '{book.isbn}' already exists.")

            await self._check_domains(domain_ids)

            created = await self.book_repository.add(book, domain_ids, author_ids)
            logger.info(
                f"Created book {created.id} '{created.title}' "
                f"in domains {created.domain_ids}"
            )
            return created

    async def update_book(
        self, book: Book, domain_ids: Sequence[int] | None = None
    ) -> Book:
        """
        Store new values for a book.

        Args:
            book: Book with new values
            domain_ids: New domains (None keeps the current ones)

        Raises:
            ValidationError: If fields are invalid or the domain list is empty
            EntityNotFoundError: If the book or a domain does not exist
            DuplicateEntityError: If another book has the same ISBN
            DomainHierarchyError: If the domain constraints are broken
        """
        with operation_scope():
            self.validator.validate_or_raise(book)
            stored = await self.book_repository.get_by_id(book.id)
            if stored is None:
                raise EntityNotFoundError("Book", book.id)

            same_isbn = await self.book_repository.get_by_isbn(book.isbn)
            if same_isbn is not None and same_isbn.id != book.id:
                raise DuplicateEntityError(f"Book with ISBN '{book.isbn}' already exists.")

            if domain_ids is not None:
                domain_ids = _unique_ids(domain_ids)
                if not domain_ids:
                    raise ValidationError(
                        [
                            ValidationErrorDetail(
                                type="required",
                                loc=("domains",),
                                msg="Book must belong to at least one domain",
                            )
                        ]
                    )
                await self._require_domains(domain_ids)
                await self._check_domains(domain_ids)

            if book.total_copies - book.reading_room_only_copies < stored.get_active_loan_count():
                raise InvalidOperationError(
                    f"Book {book.id} has {stored.get_active_loan_count()} copies on "
                    "loan; the lendable stock cannot drop below that."
                )

            updated = await self.book_repository.update(book, domain_ids)
            logger.info(f"Updated book {updated.id}")
            return updated

    async def delete_book(self, book_id: int) -> None:
        """
        Remove a book with its editions and loan history.

        Raises:
            EntityNotFoundError: If the book does not exist
            InvalidOperationError: If copies of the book are still on loan
        """
        with operation_scope():
            book = await self.book_repository.get_by_id(book_id)
            if book is None:
                raise EntityNotFoundError("Book", book_id)
            active = book.get_active_loan_count()
            if active:
                raise InvalidOperationError(
                    f"Book {book_id} cannot be deleted while {active} copies are on loan."
                )
            await self.book_repository.delete(book_id)
            logger.info(f"Deleted book {book_id}")

    async def _require_domains(self, domain_ids: Sequence[int]) -> None:
        for domain_id in domain_ids:
            if await self.domain_repository.get_by_id(domain_id) is None:
                raise EntityNotFoundError("BookDomain", domain_id)


def _unique_ids(ids: Sequence[int]) -> list[int]:
    return list(dict.fromkeys(ids))
