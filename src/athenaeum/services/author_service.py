"""Author catalogue operations."""

from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.exceptions import EntityNotFoundError
from athenaeum.domain.models import Author, Book
from athenaeum.infrastructure.repositories import AuthorRepository, BookRepository
from athenaeum.validation import AuthorValidator


class AuthorService:
    """Reads and maintains authors."""

    def __init__(
        self,
        author_repository: AuthorRepository,
        book_repository: BookRepository,
        validator: AuthorValidator | None = None,
    ):
        self.author_repository = author_repository
        self.book_repository = book_repository
        self.validator = validator or AuthorValidator()

    async def get_all_authors(self) -> list[Author]:
        return await self.author_repository.get_all()

    async def get_author_by_id(self, author_id: int) -> Author | None:
        return await self.author_repository.get_by_id(author_id)

    async def get_authors_by_first_name(self, first_name: str) -> list[Author]:
        if not first_name or not first_name.strip():
            return []
        return await self.author_repository.get_by_first_name(first_name.strip())

    async def get_authors_by_last_name(self, last_name: str) -> list[Author]:
        if not last_name or not last_name.strip():
            return []
        return await self.author_repository.get_by_last_name(last_name.strip())

    async def get_books_by_author(self, author_id: int) -> list[Book]:
        """Books of an author (empty for unknown authors)."""
        return await self.book_repository.get_books_by_author(author_id)

    async def create_author(self, author: Author) -> Author:
        """
        Validate and store a new author.

        Raises:
            ValidationError: If the names are missing or too long
        """
        with operation_scope():
            self.validator.validate_or_raise(author)
            created = await self.author_repository.add(author)
            logger.info(f"Created author {created.id}: {created.full_name}")
            return created

    async def update_author(self, author: Author) -> Author:
        """
        Validate and store new values for an existing author.

        Raises:
            ValidationError: If the names are missing or too long
            EntityNotFoundError: If the author does not exist
        """
        with operation_scope():
            self.validator.validate_or_raise(author)
            updated = await self.author_repository.update(author)
            logger.info(f"Updated author {updated.id}")
            return updated

    async def delete_author(self, author_id: int) -> None:
        """
        Remove an author; their books stay in the catalogue.

        Raises:
            EntityNotFoundError: If the author does not exist
        """
        with operation_scope():
            if await self.author_repository.get_by_id(author_id) is None:
                raise EntityNotFoundError("Author", author_id)
            await self.author_repository.delete(author_id)
            logger.info(f"Deleted author {author_id}")
