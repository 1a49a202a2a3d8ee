"""
Shared in-memory store for the memory provider.

Holds one dictionary per entity type and keeps both sides of every
relationship in sync:
    author <-> book
    domain <-> book
    parent domain <-> subdomain
    reader / book <-> borrowing
    book <-> edition
    borrowing <-> extension
"""

import itertools
from collections.abc import Iterable

from loguru import logger

from athenaeum.domain.exceptions import EntityNotFoundError
from athenaeum.domain.models import (
    Author,
    Book,
    BookDomain,
    Borrowing,
    Edition,
    LoanExtension,
    Reader,
)


class LibraryContext:
    """
    In-memory unit of storage shared by the memory repositories.

    Entities are stored by identity: repositories hand out the stored
    objects, so changes made through one repository are visible through
    every other one sharing the context.
    """

    def __init__(self) -> None:
        self.authors: dict[int, Author] = {}
        self.books: dict[int, Book] = {}
        self.domains: dict[int, BookDomain] = {}
        self.editions: dict[int, Edition] = {}
        self.readers: dict[int, Reader] = {}
        self.borrowings: dict[int, Borrowing] = {}
        self.extensions: dict[int, LoanExtension] = {}
        self._sequences: dict[str, itertools.count] = {}

        logger.debug("Initialized LibraryContext")

    def next_id(self, table: str) -> int:
        """Next identifier for a table, starting at 1."""
        sequence = self._sequences.setdefault(table, itertools.count(1))
        return next(sequence)

    # ------------------------------------------------------------------
    # Lookups that fail loudly
    # ------------------------------------------------------------------

    def require_author(self, author_id: int) -> Author:
        author = self.authors.get(author_id)
        if author is None:
            raise EntityNotFoundError("Author", author_id)
        return author

    def require_book(self, book_id: int) -> Book:
        book = self.books.get(book_id)
        if book is None:
            raise EntityNotFoundError("Book", book_id)
        return book

    def require_domain(self, domain_id: int) -> BookDomain:
        domain = self.domains.get(domain_id)
        if domain is None:
            raise EntityNotFoundError("BookDomain", domain_id)
        return domain

    def require_edition(self, edition_id: int) -> Edition:
        edition = self.editions.get(edition_id)
        if edition is None:
            raise EntityNotFoundError("Edition", edition_id)
        return edition

    def require_reader(self, reader_id: int) -> Reader:
        reader = self.readers.get(reader_id)
        if reader is None:
            raise EntityNotFoundError("Reader", reader_id)
        return reader

    def require_borrowing(self, borrowing_id: int) -> Borrowing:
        borrowing = self.borrowings.get(borrowing_id)
        if borrowing is None:
            raise EntityNotFoundError("Borrowing", borrowing_id)
        return borrowing

    # ------------------------------------------------------------------
    # Relationship bookkeeping
    # ------------------------------------------------------------------

    def set_book_authors(self, book: Book, author_ids: Iterable[int]) -> None:
        """Replace the authors of a book, updating each author's book list."""
        authors = [self.require_author(author_id) for author_id in author_ids]
        for author in book.authors:
            _discard(author.books, book)
        book.authors = _unique(authors)
        for author in book.authors:
            author.books.append(book)

    def set_book_domains(self, book: Book, domain_ids: Iterable[int]) -> None:
        """Replace the domains of a book, updating each domain's book list."""
        domains = [self.require_domain(domain_id) for domain_id in domain_ids]
        for domain in book.domains:
            _discard(domain.books, book)
        book.domains = _unique(domains)
        for domain in book.domains:
            domain.books.append(book)

    def set_domain_parent(self, domain: BookDomain, parent_id: int | None) -> None:
        """Move a domain below a new parent (None makes it a root)."""
        parent = self.require_domain(parent_id) if parent_id is not None else None
        if domain.parent_domain is not None:
            _discard(domain.parent_domain.subdomains, domain)
        domain.parent_domain_id = parent_id
        domain.parent_domain = parent
        if parent is not None:
            parent.subdomains.append(domain)

    def attach_edition(self, edition: Edition) -> None:
        book = self.require_book(edition.book_id)
        edition.book = book
        book.editions.append(edition)

    def attach_borrowing(self, borrowing: Borrowing) -> None:
        reader = self.require_reader(borrowing.reader_id)
        book = self.require_book(borrowing.book_id)
        borrowing.reader = reader
        borrowing.book = book
        reader.borrowing_records.append(borrowing)
        book.borrowing_records.append(borrowing)

    def attach_extension(self, extension: LoanExtension) -> None:
        borrowing = self.require_borrowing(extension.borrowing_id)
        extension.borrowing = borrowing
        borrowing.extensions.append(extension)

    # ------------------------------------------------------------------
    # Removal with cascades
    # ------------------------------------------------------------------

    def remove_author(self, author: Author) -> None:
        for book in author.books:
            _discard(book.authors, author)
        author.books = []
        del self.authors[author.id]

    def remove_domain(self, domain: BookDomain) -> None:
        """Remove a domain; its subdomains become roots."""
        for subdomain in list(domain.subdomains):
            self.set_domain_parent(subdomain, None)
        for book in domain.books:
            _discard(book.domains, domain)
        domain.books = []
        self.set_domain_parent(domain, None)
        del self.domains[domain.id]

    def remove_edition(self, edition: Edition) -> None:
        if edition.book is not None:
            _discard(edition.book.editions, edition)
        edition.book = None
        del self.editions[edition.id]

    def remove_borrowing(self, borrowing: Borrowing) -> None:
        """Remove a borrowing together with its extensions."""
        for extension in list(borrowing.extensions):
            del self.extensions[extension.id]
        borrowing.extensions = []
        if borrowing.reader is not None:
            _discard(borrowing.reader.borrowing_records, borrowing)
        if borrowing.book is not None:
            _discard(borrowing.book.borrowing_records, borrowing)
        del self.borrowings[borrowing.id]

    def remove_book(self, book: Book) -> None:
        """Remove a book with its editions and loan history."""
        for edition in list(book.editions):
            self.remove_edition(edition)
        for borrowing in list(book.borrowing_records):
            self.remove_borrowing(borrowing)
        self.set_book_authors(book, [])
        self.set_book_domains(book, [])
        del self.books[book.id]

    def remove_reader(self, reader: Reader) -> None:
        """Remove a reader with their loan history."""
        for borrowing in list(reader.borrowing_records):
            self.remove_borrowing(borrowing)
        del self.readers[reader.id]


def _discard(items: list, item: object) -> None:
    """Remove ``item`` from ``items`` by identity, if present."""
    for index, candidate in enumerate(items):
        if candidate is item:
            del items[index]
            return


def _unique(items: list) -> list:
    seen: set[int] = set()
    result = []
    for item in items:
        if id(item) not in seen:
            seen.add(id(item))
            result.append(item)
    return result
