"""Abstract interface for book storage."""

from abc import ABC, abstractmethod

from athenaeum.domain.models import Book


class BookRepository(ABC):
    """
    Abstract interface for book storage operations.

    Books are returned with their authors, domains, editions and
    borrowing records attached.
    """

    @abstractmethod
    async def get_all(self) -> list[Book]:
        """List every book."""
        pass

    @abstractmethod
    async def get_by_id(self, book_id: int) -> Book | None:
        """
        Retrieve a book by id.

        Args:
            book_id: Book identifier

        Returns:
            Book if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_isbn(self, isbn: str) -> Book | None:
        """
        Retrieve a book by ISBN.

        Hyphens, spaces and case are ignored when comparing.
        """
        pass

    @abstractmethod
    async def get_books_by_author(self, author_id: int) -> list[Book]:
        """Books written by the author."""
        pass

    @abstractmethod
    async def get_books_by_domain(self, domain_id: int) -> list[Book]:
        """Books filed directly under the domain (subdomains excluded)."""
        pass

    @abstractmethod
    async def get_available_books(self) -> list[Book]:
        """Books with at least one copy available for lending."""
        pass

    @abstractmethod
    async def add(
        self,
        book: Book,
        domain_ids: list[int] | None = None,
        author_ids: list[int] | None = None,
    ) -> Book:
        """
        Store a new book and link it to domains and authors.

        Args:
            book: Book to store (id is assigned)
            domain_ids: Domains to file the book under
            author_ids: Authors of the book

        Returns:
            The stored book

        Raises:
            EntityNotFoundError: If a domain or author does not exist
        """
        pass

    @abstractmethod
    async def update(self, book: Book, domain_ids: list[int] | None = None) -> Book:
        """
        Overwrite a book's fields.

        Args:
            book: Book with new values
            domain_ids: New domain links (None keeps the current ones)

        Raises:
            EntityNotFoundError: If the book or a domain does not exist
        """
        pass

    @abstractmethod
    async def delete(self, book_id: int) -> None:
        """
        Remove a book together with its editions.

        Raises:
            EntityNotFoundError: If the book does not exist
        """
        pass
