"""Abstract interface for reader storage."""

from abc import ABC, abstractmethod

from athenaeum.domain.models import Reader


class ReaderRepository(ABC):
    """Abstract interface for reader storage operations."""

    @abstractmethod
    async def get_all(self) -> list[Reader]:
        """List every reader."""
        pass

    @abstractmethod
    async def get_by_id(self, reader_id: int) -> Reader | None:
        """
        Retrieve a reader by id.

        Args:
            reader_id: Reader identifier

        Returns:
            Reader with borrowing records attached, None if unknown
        """
        pass

    @abstractmethod
    async def get_staff_members(self) -> list[Reader]:
        """Readers flagged as staff."""
        pass

    @abstractmethod
    async def get_regular_readers(self) -> list[Reader]:
        """Readers not flagged as staff."""
        pass

    @abstractmethod
    async def add(self, reader: Reader) -> Reader:
        """Store a new reader (id is assigned)."""
        pass

    @abstractmethod
    async def update(self, reader: Reader) -> Reader:
        """
        Overwrite a reader's fields.

        Raises:
            EntityNotFoundError: If the reader does not exist
        """
        pass

    @abstractmethod
    async def delete(self, reader_id: int) -> None:
        """
        Remove a reader.

        Raises:
            EntityNotFoundError: If the reader does not exist
        """
        pass
