"""Edition catalogue operations."""

from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.exceptions import EntityNotFoundError
from athenaeum.domain.models import Edition
from athenaeum.infrastructure.repositories import BookRepository, EditionRepository
from athenaeum.validation import EditionValidator


class EditionService:
    """Reads and maintains book editions."""

    def __init__(
        self,
        edition_repository: EditionRepository,
        book_repository: BookRepository,
        validator: EditionValidator | None = None,
    ):
        self.edition_repository = edition_repository
        self.book_repository = book_repository
        self.validator = validator or EditionValidator()

    async def get_all_editions(self) -> list[Edition]:
        return await self.edition_repository.get_all()

    async def get_edition_by_id(self, edition_id: int) -> Edition | None:
        return await self.edition_repository.get_by_id(edition_id)

    async def get_editions_by_book(self, book_id: int) -> list[Edition]:
        return await self.edition_repository.get_by_book_id(book_id)

    async def get_editions_by_publisher(self, publisher: str) -> list[Edition]:
        if not publisher or not publisher.strip():
            return []
        return await self.edition_repository.get_by_publisher(publisher.strip())

    async def create_edition(self, edition: Edition) -> Edition:
        """
        Validate and store a new edition of an existing book.

        Raises:
            ValidationError: If publisher, year, numbering or type are invalid
            EntityNotFoundError: If the book does not exist
        """
        with operation_scope():
            self.validator.validate_or_raise(edition)
            if await self.book_repository.get_by_id(edition.book_id) is None:
                raise EntityNotFoundError("Book", edition.book_id)
            created = await self.edition_repository.add(edition)
            logger.info(
                f"Created edition {created.id} of book {created.book_id} "
                f"({created.publisher}, {created.year})"
            )
            return created

    async def update_edition(self, edition: Edition) -> Edition:
        """
        Raises:
            ValidationError: If the new values are invalid
            EntityNotFoundError: If the edition does not exist
        """
        with operation_scope():
            self.validator.validate_or_raise(edition)
            updated = await self.edition_repository.update(edition)
            logger.info(f"Updated edition {updated.id}")
            return updated

    async def delete_edition(self, edition_id: int) -> None:
        """Remove an edition; unknown ids are ignored."""
        with operation_scope():
            if await self.edition_repository.get_by_id(edition_id) is None:
                logger.debug(f"Edition {edition_id} not found, nothing to delete")
                return
            await self.edition_repository.delete(edition_id)
            logger.info(f"Deleted edition {edition_id}")
