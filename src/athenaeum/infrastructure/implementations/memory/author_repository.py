"""In-memory author repository."""

from loguru import logger

from athenaeum.domain.models import Author
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.author_repository import AuthorRepository


class MemoryAuthorRepository(AuthorRepository):
    """Author storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryAuthorRepository")

    async def get_all(self) -> list[Author]:
        return list(self.context.authors.values())

    async def get_by_id(self, author_id: int) -> Author | None:
        return self.context.authors.get(author_id)

    async def get_by_first_name(self, first_name: str) -> list[Author]:
        wanted = first_name.casefold()
        return [
            author
            for author in self.context.authors.values()
            if author.first_name.casefold() == wanted
        ]

    async def get_by_last_name(self, last_name: str) -> list[Author]:
        wanted = last_name.casefold()
        return [
            author
            for author in self.context.authors.values()
            if author.last_name.casefold() == wanted
        ]

    async def add(self, author: Author) -> Author:
        author.id = self.context.next_id("authors")
        self.context.authors[author.id] = author
        logger.debug(f"Stored author {author.id}")
        return author

    async def update(self, author: Author) -> Author:
        stored = self.context.require_author(author.id)
        stored.first_name = author.first_name
        stored.last_name = author.last_name
        return stored

    async def delete(self, author_id: int) -> None:
        author = self.context.require_author(author_id)
        self.context.remove_author(author)
        logger.debug(f"Removed author {author_id}")
