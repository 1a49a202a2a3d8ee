"""In-memory edition repository."""

from loguru import logger

from athenaeum.domain.models import Edition
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.edition_repository import (
    EditionRepository,
)


class MemoryEditionRepository(EditionRepository):
    """Edition storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryEditionRepository")

    async def get_all(self) -> list[Edition]:
        return list(self.context.editions.values())

    async def get_by_id(self, edition_id: int) -> Edition | None:
        return self.context.editions.get(edition_id)

    async def get_by_book_id(self, book_id: int) -> list[Edition]:
        return [
            edition
            for edition in self.context.editions.values()
            if edition.book_id == book_id
        ]

    async def get_by_publisher(self, publisher: str) -> list[Edition]:
        wanted = publisher.casefold()
        return [
            edition
            for edition in self.context.editions.values()
            if edition.publisher.casefold() == wanted
        ]

    async def add(self, edition: Edition) -> Edition:
        self.context.require_book(edition.book_id)
        edition.id = self.context.next_id("editions")
        self.context.editions[edition.id] = edition
        self.context.attach_edition(edition)
        logger.debug(f"Stored edition {edition.id} of book {edition.book_id}")
        return edition

    async def update(self, edition: Edition) -> Edition:
        stored = self.context.require_edition(edition.id)
        stored.publisher = edition.publisher
        stored.year = edition.year
        stored.edition_number = edition.edition_number
        stored.page_count = edition.page_count
        stored.book_type = edition.book_type
        return stored

    async def delete(self, edition_id: int) -> None:
        edition = self.context.require_edition(edition_id)
        self.context.remove_edition(edition)
        logger.debug(f"Removed edition {edition_id}")
