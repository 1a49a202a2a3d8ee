"""Abstract interface for subject domain storage."""

from abc import ABC, abstractmethod

from athenaeum.domain.models import BookDomain


class BookDomainRepository(ABC):
    """Abstract interface for domain tree storage operations."""

    @abstractmethod
    async def get_all(self) -> list[BookDomain]:
        """List every domain."""
        pass

    @abstractmethod
    async def get_by_id(self, domain_id: int) -> BookDomain | None:
        """
        Retrieve a domain by id.

        Args:
            domain_id: Domain identifier

        Returns:
            BookDomain if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_root_domains(self) -> list[BookDomain]:
        """Domains without a parent."""
        pass

    @abstractmethod
    async def get_subdomains(self, parent_domain_id: int) -> list[BookDomain]:
        """Direct children of a domain."""
        pass

    @abstractmethod
    async def add(self, domain: BookDomain) -> BookDomain:
        """
        Store a new domain.

        Raises:
            EntityNotFoundError: If the parent domain does not exist
        """
        pass

    @abstractmethod
    async def update(self, domain: BookDomain) -> BookDomain:
        """
        Overwrite a domain's fields, moving it if the parent changed.

        Raises:
            EntityNotFoundError: If the domain or its new parent does not exist
        """
        pass

    @abstractmethod
    async def delete(self, domain_id: int) -> None:
        """
        Remove a domain.

        Raises:
            EntityNotFoundError: If the domain does not exist
        """
        pass
