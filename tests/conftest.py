"""Global pytest configuration and fixtures for all tests."""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta

import pytest
import pytest_asyncio

from athenaeum.domain.models import Author, Book, BookDomain, Reader
from athenaeum.infrastructure import InfrastructureFactory
from athenaeum.models.config import LibraryConfiguration
from athenaeum.services import (
    AuthorService,
    BookDomainService,
    BookService,
    BorrowingService,
    EditionService,
    ReaderService,
)

START_TIME = datetime(2026, 3, 16, 10, 0, 0)


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars():
    """
    Set environment variables for testing.

    Settings objects created inside tests read these values; the
    module-level settings instance is left untouched.
    """
    original_env = {}

    test_env_vars = {
        "INFRASTRUCTURE_PROVIDER": "memory",
        "LOG_LEVEL": "DEBUG",
        "LOG_COLORIZE": "false",
    }

    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def config():
    return LibraryConfiguration()


@pytest.fixture
def factory():
    return InfrastructureFactory(provider="memory")


@pytest.fixture
def author_service(factory):
    return AuthorService(factory.get_author_repository(), factory.get_book_repository())


@pytest.fixture
def reader_service(factory, clock):
    return ReaderService(factory.get_reader_repository(), clock=clock)


@pytest.fixture
def domain_service(factory):
    return BookDomainService(factory.get_book_domain_repository())


@pytest.fixture
def book_service(factory, config):
    return BookService(
        factory.get_book_repository(),
        factory.get_book_domain_repository(),
        factory.get_author_repository(),
        config,
    )


@pytest.fixture
def edition_service(factory):
    return EditionService(factory.get_edition_repository(), factory.get_book_repository())


@pytest.fixture
def borrowing_service(factory, config, clock):
    return BorrowingService(
        factory.get_borrowing_repository(),
        factory.get_reader_repository(),
        factory.get_book_repository(),
        factory.get_book_domain_repository(),
        config,
        clock=clock,
    )


@dataclass
class SeededLibrary:
    """Handles to the entities created by the ``library`` fixture."""

    science: BookDomain
    physics: BookDomain
    quantum: BookDomain
    mathematics: BookDomain
    algebra: BookDomain
    literature: BookDomain
    author: Author
    physics_book: Book
    quantum_book: Book
    algebra_book: Book
    novel: Book
    poetry: Book
    drama: Book
    rare_atlas: Book
    scarce_book: Book
    alice: Reader
    bob: Reader


def make_book(title: str, isbn: str, total: int = 10, reading_room: int = 0) -> Book:
    return Book(
        title=title,
        isbn=isbn,
        total_copies=total,
        reading_room_only_copies=reading_room,
    )


@pytest_asyncio.fixture
async def library(domain_service, book_service, author_service, reader_service):
    """
    Small catalogue:

        Science
        └── Physics
            └── Quantum
        Mathematics
        └── Algebra
        Literature

    Alice is a regular reader, Bob is staff.
    """
    science = await domain_service.create_domain(BookDomain(name="Science"))
    physics = await domain_service.create_domain(
        BookDomain(name="Physics", parent_domain_id=science.id)
    )
    quantum = await domain_service.create_domain(
        BookDomain(name="Quantum", parent_domain_id=physics.id)
    )
    mathematics = await domain_service.create_domain(BookDomain(name="Mathematics"))
    algebra = await domain_service.create_domain(
        BookDomain(name="Algebra", parent_domain_id=mathematics.id)
    )
    literature = await domain_service.create_domain(BookDomain(name="Literature"))

    author = await author_service.create_author(
        Author(first_name="Richard", last_name="Feynman")
    )

    physics_book = await book_service.create_book(
        make_book("Lectures on Physics", "9780465023820"),
        [physics.id],
        [author.id],
    )
    quantum_book = await book_service.create_book(
        make_book("QED", "9780691164090"), [quantum.id], [author.id]
    )
    algebra_book = await book_service.create_book(
        make_book("Linear Algebra Done Right", "9783319110790"), [algebra.id]
    )
    novel = await book_service.create_book(
        make_book("Middlemarch", "9780141439549"), [literature.id]
    )
    poetry = await book_service.create_book(
        make_book("Leaves of Grass", "9780140421996"), [literature.id]
    )
    drama = await book_service.create_book(
        make_book("Hamlet", "9780743477123"), [literature.id]
    )
    rare_atlas = await book_service.create_book(
        make_book("Atlas Maior", "9783836580830", total=2, reading_room=2),
        [mathematics.id],
    )
    scarce_book = await book_service.create_book(
        make_book("Principia", "0520088174", total=10, reading_room=9),
        [science.id],
    )

    alice = await reader_service.create_reader(
        Reader(
            first_name="Alice",
            last_name="Reader",
            address="1 Library Lane",
            email="alice@example.org",
        )
    )
    bob = await reader_service.create_reader(
        Reader(
            first_name="Bob",
            last_name="Staff",
            address="2 Library Lane",
            phone_number="+40 721 000 000",
            is_staff=True,
        )
    )

    return SeededLibrary(
        science=science,
        physics=physics,
        quantum=quantum,
        mathematics=mathematics,
        algebra=algebra,
        literature=literature,
        author=author,
        physics_book=physics_book,
        quantum_book=quantum_book,
        algebra_book=algebra_book,
        novel=novel,
        poetry=poetry,
        drama=drama,
        rare_atlas=rare_atlas,
        scarce_book=scarce_book,
        alice=alice,
        bob=bob,
    )
