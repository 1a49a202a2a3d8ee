"""In-memory book repository."""

from loguru import logger

from athenaeum.domain.models import Book
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.book_repository import BookRepository
from athenaeum.validation.rules import normalize_isbn


class MemoryBookRepository(BookRepository):
    """Book storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryBookRepository")

    async def get_all(self) -> list[Book]:
        return list(self.context.books.values())

    async def get_by_id(self, book_id: int) -> Book | None:
        return self.context.books.get(book_id)

    async def get_by_isbn(self, isbn: str) -> Book | None:
        wanted = normalize_isbn(isbn)
        for book in self.context.books.values():
            if normalize_isbn(book.isbn) == wanted:
                return book
        return None

    async def get_books_by_author(self, author_id: int) -> list[Book]:
        author = self.context.authors.get(author_id)
        return list(author.books) if author is not None else []

    async def get_books_by_domain(self, domain_id: int) -> list[Book]:
        domain = self.context.domains.get(domain_id)
        return list(domain.books) if domain is not None else []

    async def get_available_books(self) -> list[Book]:
        return [
            book
            for book in self.context.books.values()
            if book.get_available_copies() > 0
        ]

    async def add(
        self,
        book: Book,
        domain_ids: list[int] | None = None,
        author_ids: list[int] | None = None,
    ) -> Book:
        # Resolve links first so a bad id leaves nothing behind
        for domain_id in domain_ids or []:
            self.context.require_domain(domain_id)
        for author_id in author_ids or []:
            self.context.require_author(author_id)

        book.id = self.context.next_id("books")
        self.context.books[book.id] = book
        self.context.set_book_domains(book, domain_ids or [])
        self.context.set_book_authors(book, author_ids or [])
        logger.debug(f"Stored book {book.id} ({book.isbn})")
        return book

    async def update(self, book: Book, domain_ids: list[int] | None = None) -> Book:
        stored = self.context.require_book(book.id)
        if domain_ids is not None:
            for domain_id in domain_ids:
                self.context.require_domain(domain_id)

        stored.title = book.title
        stored.description = book.description
        stored.isbn = book.isbn
        stored.total_copies = book.total_copies
        stored.reading_room_only_copies = book.reading_room_only_copies
        if domain_ids is not None:
            self.context.set_book_domains(stored, domain_ids)
        return stored

    async def delete(self, book_id: int) -> None:
        book = self.context.require_book(book_id)
        self.context.remove_book(book)
        logger.debug(f"Removed book {book_id}")
