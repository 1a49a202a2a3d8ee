"""Abstract interface for edition storage."""

from abc import ABC, abstractmethod

from athenaeum.domain.models import Edition


class EditionRepository(ABC):
    """Abstract interface for edition storage operations."""

    @abstractmethod
    async def get_all(self) -> list[Edition]:
        """List every edition."""
        pass

    @abstractmethod
    async def get_by_id(self, edition_id: int) -> Edition | None:
        """Retrieve an edition by id, None if unknown."""
        pass

    @abstractmethod
    async def get_by_book_id(self, book_id: int) -> list[Edition]:
        """Editions of one book."""
        pass

    @abstractmethod
    async def get_by_publisher(self, publisher: str) -> list[Edition]:
        """Editions by a publisher (case-insensitive)."""
        pass

    @abstractmethod
    async def add(self, edition: Edition) -> Edition:
        """
        Store a new edition.

        Raises:
            EntityNotFoundError: If the book does not exist
        """
        pass

    @abstractmethod
    async def update(self, edition: Edition) -> Edition:
        """
        Overwrite an edition's fields.

        Raises:
            EntityNotFoundError: If the edition does not exist
        """
        pass

    @abstractmethod
    async def delete(self, edition_id: int) -> None:
        """
        Remove an edition.

        Raises:
            EntityNotFoundError: If the edition does not exist
        """
        pass
