"""In-memory reader repository."""

from loguru import logger

from athenaeum.domain.models import Reader
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.reader_repository import ReaderRepository


class MemoryReaderRepository(ReaderRepository):
    """Reader storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryReaderRepository")

    async def get_all(self) -> list[Reader]:
        return list(self.context.readers.values())

    async def get_by_id(self, reader_id: int) -> Reader | None:
        return self.context.readers.get(reader_id)

    async def get_staff_members(self) -> list[Reader]:
        return [reader for reader in self.context.readers.values() if reader.is_staff]

    async def get_regular_readers(self) -> list[Reader]:
        return [
            reader for reader in self.context.readers.values() if not reader.is_staff
        ]

    async def add(self, reader: Reader) -> Reader:
        reader.id = self.context.next_id("readers")
        self.context.readers[reader.id] = reader
        logger.debug(f"Stored reader {reader.id}")
        return reader

    async def update(self, reader: Reader) -> Reader:
        stored = self.context.require_reader(reader.id)
        stored.first_name = reader.first_name
        stored.last_name = reader.last_name
        stored.address = reader.address
        stored.phone_number = reader.phone_number
        stored.email = reader.email
        stored.is_staff = reader.is_staff
        if reader.registration_date is not None:
            stored.registration_date = reader.registration_date
        return stored

    async def delete(self, reader_id: int) -> None:
        reader = self.context.require_reader(reader_id)
        self.context.remove_reader(reader)
        logger.debug(f"Removed reader {reader_id}")
