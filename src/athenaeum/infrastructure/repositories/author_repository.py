"""Abstract interface for author storage."""

from abc import ABC, abstractmethod

from athenaeum.domain.models import Author


class AuthorRepository(ABC):
    """Abstract interface for author storage operations."""

    @abstractmethod
    async def get_all(self) -> list[Author]:
        """List every author."""
        pass

    @abstractmethod
    async def get_by_id(self, author_id: int) -> Author | None:
        """
        Retrieve an author by id.

        Args:
            author_id: Author identifier

        Returns:
            Author if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_first_name(self, first_name: str) -> list[Author]:
        """Authors whose first name matches (case-insensitive)."""
        pass

    @abstractmethod
    async def get_by_last_name(self, last_name: str) -> list[Author]:
        """Authors whose last name matches (case-insensitive)."""
        pass

    @abstractmethod
    async def add(self, author: Author) -> Author:
        """
        Store a new author.

        Args:
            author: Author to store (id is assigned)

        Returns:
            The stored author
        """
        pass

    @abstractmethod
    async def update(self, author: Author) -> Author:
        """
        Overwrite an author's fields.

        Raises:
            EntityNotFoundError: If the author does not exist
        """
        pass

    @abstractmethod
    async def delete(self, author_id: int) -> None:
        """
        Remove an author and its book links.

        Raises:
            EntityNotFoundError: If the author does not exist
        """
        pass
