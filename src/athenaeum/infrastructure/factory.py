"""
Infrastructure factory for provider selection.

Selects repository implementations based on configuration:
- memory: In-process storage shared by all repositories of one factory

Usage:
    from athenaeum.infrastructure import InfrastructureFactory
    from athenaeum.config import get_settings

    # Option 1: From settings
    settings = get_settings()
    factory = InfrastructureFactory.from_settings(settings)

    # Option 2: Manual configuration
    factory = InfrastructureFactory(provider="memory")

    # Get repositories
    book_repo = factory.get_book_repository()
    borrowing_repo = factory.get_borrowing_repository()
"""

from typing import TYPE_CHECKING, Literal

from loguru import logger

from athenaeum.infrastructure.repositories import (
    AuthorRepository,
    BookDomainRepository,
    BookRepository,
    BorrowingRepository,
    EditionRepository,
    ReaderRepository,
)

if TYPE_CHECKING:
    from athenaeum.config import Settings
    from athenaeum.infrastructure.implementations.memory import LibraryContext

InfrastructureProvider = Literal["memory"]

SUPPORTED_PROVIDERS = ("memory",)


class InfrastructureFactory:
    """
    Factory for creating infrastructure repository instances.

    Repositories obtained from the same factory share one store, so a
    book added through the book repository is visible to the borrowing
    repository.
    """

    def __init__(self, provider: InfrastructureProvider | None = None, **config):
        """
        Initialize infrastructure factory.

        Args:
            provider: Infrastructure provider ("memory").
                     If None, uses "memory" as default.
            **config: Provider-specific configuration options.
                     ``context`` may carry an existing LibraryContext to share.

        Raises:
            ValueError: If provider is not supported
        """
        if provider is None:
            provider = "memory"

        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported infrastructure provider: {provider}")

        self.provider = provider
        self.config = config
        self._context: LibraryContext | None = config.get("context")

        logger.info(f"Initialized InfrastructureFactory with provider: {provider}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InfrastructureFactory":
        """
        Create factory from Settings object.

        Args:
            settings: Application settings from config.py

        Returns:
            InfrastructureFactory configured from settings
        """
        return cls(provider=settings.infrastructure_provider)

    @property
    def context(self) -> "LibraryContext":
        """Store shared by the memory repositories (created on first use)."""
        if self._context is None:
            from athenaeum.infrastructure.implementations.memory import LibraryContext

            self._context = LibraryContext()
        return self._context

    def get_author_repository(self) -> AuthorRepository:
        """
        Get author repository for configured provider.

        Returns:
            AuthorRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryAuthorRepository,
        )

        return MemoryAuthorRepository(self.context)

    def get_book_repository(self) -> BookRepository:
        """
        Get book repository for configured provider.

        Returns:
            BookRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryBookRepository,
        )

        return MemoryBookRepository(self.context)

    def get_book_domain_repository(self) -> BookDomainRepository:
        """
        Get domain repository for configured provider.

        Returns:
            BookDomainRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryBookDomainRepository,
        )

        return MemoryBookDomainRepository(self.context)

    def get_edition_repository(self) -> EditionRepository:
        """
        Get edition repository for configured provider.

        Returns:
            EditionRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryEditionRepository,
        )

        return MemoryEditionRepository(self.context)

    def get_reader_repository(self) -> ReaderRepository:
        """
        Get reader repository for configured provider.

        Returns:
            ReaderRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryReaderRepository,
        )

        return MemoryReaderRepository(self.context)

    def get_borrowing_repository(self) -> BorrowingRepository:
        """
        Get borrowing repository for configured provider.

        Returns:
            BorrowingRepository implementation
        """
        from athenaeum.infrastructure.implementations.memory import (
            MemoryBorrowingRepository,
        )

        return MemoryBorrowingRepository(self.context)
