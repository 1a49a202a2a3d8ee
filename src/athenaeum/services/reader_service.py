"""Reader registration and lookup."""

from athenaeum.core.clock import Clock, utc_now
from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.models import Reader
from athenaeum.infrastructure.repositories import ReaderRepository
from athenaeum.validation import ReaderValidator


class ReaderService:
    """Registers readers and keeps their contact data valid."""

    def __init__(
        self,
        reader_repository: ReaderRepository,
        validator: ReaderValidator | None = None,
        clock: Clock = utc_now,
    ):
        self.reader_repository = reader_repository
        self.validator = validator or ReaderValidator()
        self.clock = clock

    async def get_all_readers(self) -> list[Reader]:
        return await self.reader_repository.get_all()

    async def get_reader_by_id(self, reader_id: int) -> Reader | None:
        return await self.reader_repository.get_by_id(reader_id)

    async def get_staff_members(self) -> list[Reader]:
        return await self.reader_repository.get_staff_members()

    async def get_regular_readers(self) -> list[Reader]:
        return await self.reader_repository.get_regular_readers()

    def validate_reader(self, reader: Reader | None) -> bool:
        """True if the reader passes every field rule."""
        return self.validator.is_valid(reader)

    async def create_reader(self, reader: Reader) -> Reader:
        """
        Register a new reader.

        The registration date is stamped with the current time unless the
        caller already set one.

        Raises:
            ValidationError: If names, address or contact data are invalid
        """
        with operation_scope():
            self.validator.validate_or_raise(reader)
            if reader.registration_date is None:
                reader.registration_date = self.clock()
            created = await self.reader_repository.add(reader)
            logger.info(
                f"Registered reader {created.id} "
                f"({'staff' if created.is_staff else 'regular'})"
            )
            return created

    async def update_reader(self, reader: Reader) -> Reader:
        """
        Store new values for an existing reader.

        Raises:
            ValidationError: If the new values are invalid
            EntityNotFoundError: If the reader does not exist
        """
        with operation_scope():
            self.validator.validate_or_raise(reader)
            updated = await self.reader_repository.update(reader)
            logger.info(f"Updated reader {updated.id}")
            return updated

    async def delete_reader(self, reader_id: int) -> None:
        """
        Remove a reader together with their loan history.

        Raises:
            EntityNotFoundError: If the reader does not exist
        """
        with operation_scope():
            await self.reader_repository.delete(reader_id)
            logger.info(f"Deleted reader {reader_id}")
