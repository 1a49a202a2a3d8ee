"""End-to-end lending workflow over the memory provider."""

from unittest.mock import patch

import pytest

from athenaeum.config import Settings
from athenaeum.domain.models import Book, BookDomain, Edition, Reader
from athenaeum.infrastructure import InfrastructureFactory
from athenaeum.models.results import ServiceResult
from athenaeum.services import (
    BookDomainService,
    BookService,
    BorrowingService,
    EditionService,
    ReaderService,
)


@pytest.fixture
def settings():
    env = {
        "INFRASTRUCTURE_PROVIDER": "memory",
        "POLICY_MAX_BOOKS_PER_DAY": "2",
        "POLICY_MAX_EXTENSION_DAYS": "7",
    }
    with patch.dict("os.environ", env):
        return Settings(_env_file=None)


@pytest.fixture
def services(settings, clock):
    factory = InfrastructureFactory.from_settings(settings)
    config = settings.get_library_configuration()
    return {
        "domains": BookDomainService(factory.get_book_domain_repository()),
        "books": BookService(
            factory.get_book_repository(),
            factory.get_book_domain_repository(),
            factory.get_author_repository(),
            config,
        ),
        "editions": EditionService(
            factory.get_edition_repository(), factory.get_book_repository()
        ),
        "readers": ReaderService(factory.get_reader_repository(), clock=clock),
        "borrowing": BorrowingService(
            factory.get_borrowing_repository(),
            factory.get_reader_repository(),
            factory.get_book_repository(),
            factory.get_book_domain_repository(),
            config,
            clock=clock,
        ),
    }


@pytest.mark.asyncio
async def test_catalogue_to_return(services, clock):
    """Test building a catalogue, lending, extending and returning."""
    domains = services["domains"]
    books = services["books"]
    borrowing = services["borrowing"]

    computing = await domains.create_domain(BookDomain(name="Computing"))
    languages = await domains.create_domain(
        BookDomain(name="Programming Languages", parent_domain_id=computing.id)
    )
    fiction = await domains.create_domain(BookDomain(name="Fiction"))

    sicp = await books.create_book(
        Book(title="SICP", isbn="9780262510875", total_copies=3),
        [languages.id],
    )
    dune = await books.create_book(
        Book(title="Dune", isbn="9780441172719", total_copies=5, reading_room_only_copies=1),
        [fiction.id],
    )
    await services["editions"].create_edition(
        Edition(
            book_id=sicp.id,
            publisher="MIT Press",
            year=1996,
            edition_number=2,
            page_count=657,
            book_type="paperback",
        )
    )
    reader = await services["readers"].create_reader(
        Reader(first_name="Alyssa", last_name="Hacker", address="MIT", email="alyssa@mit.edu")
    )

    loans = await borrowing.borrow_books(reader.id, [sicp.id, dune.id])
    assert [loan.book_id for loan in loans] == [sicp.id, dune.id]
    assert await books.get_books_by_domain(computing.id) == [sicp]

    # Daily limit lowered to two through the environment
    refused = await ServiceResult.capture(borrowing.borrow_book(reader.id, sicp.id))
    assert refused.is_success is False
    assert refused.error.type == "business_rule_violation"
    assert {v.code for v in refused.error.violations} == {"REBORROW_INTERVAL", "DAILY_LIMIT"}

    clock.advance(days=5)
    extended = await ServiceResult.capture(borrowing.extend_borrowing(loans[0].id, 7))
    assert extended.is_success
    too_long = await ServiceResult.capture(borrowing.extend_borrowing(loans[1].id, 1))
    assert too_long.error.violations[0].code == "EXTENSION_LIMIT"

    await borrowing.return_book(loans[0].id)
    await borrowing.return_book(loans[1].id)
    assert await borrowing.get_active_borrowing_count(reader.id) == 0
    assert await books.get_available_copies(dune.id) == 4

    deleted = await ServiceResult.capture(domains.delete_domain(computing.id))
    assert deleted.is_success is False
    assert deleted.error.type == "domain_hierarchy"


@pytest.mark.asyncio
async def test_popular_title_keeps_reserve(services):
    """Test the availability threshold across several readers."""
    fiction = await services["domains"].create_domain(BookDomain(name="Fiction"))
    book = await services["books"].create_book(
        Book(title="Dune", isbn="9780441172719", total_copies=10, reading_room_only_copies=8),
        [fiction.id],
    )
    readers = [
        await services["readers"].create_reader(
            Reader(
                first_name=f"Reader{i}",
                last_name="Test",
                address="Somewhere",
                phone_number=f"555-010{i}",
            )
        )
        for i in range(3)
    ]
    borrowing = services["borrowing"]

    await borrowing.borrow_book(readers[0].id, book.id)
    decision = await borrowing.check_eligibility(readers[1].id, [book.id])

    # One copy left out of ten still meets the 10% reserve
    assert decision.allowed
    await borrowing.borrow_book(readers[1].id, book.id)
    assert not await borrowing.can_borrow_book(readers[2].id, book.id)
