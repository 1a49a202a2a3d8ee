"""Tests for BookDomainService."""

import pytest

from athenaeum.domain.exceptions import (
    DomainHierarchyError,
    EntityNotFoundError,
    ValidationError,
)
from athenaeum.domain.models import Book, BookDomain


@pytest.mark.asyncio
async def test_create_root_and_child(domain_service):
    """Test domains can be nested."""
    history = await domain_service.create_domain(BookDomain(name="History"))
    ancient = await domain_service.create_domain(
        BookDomain(name="Ancient", parent_domain_id=history.id)
    )

    assert await domain_service.get_root_domains() == [history]
    assert await domain_service.get_subdomains(history.id) == [ancient]


@pytest.mark.asyncio
async def test_create_domain_with_unknown_parent(domain_service):
    """Test the parent must exist."""
    with pytest.raises(EntityNotFoundError, match="BookDomain 77 not found"):
        await domain_service.create_domain(BookDomain(name="Lost", parent_domain_id=77))


@pytest.mark.asyncio
async def test_create_domain_requires_name(domain_service):
    """Test nameless domains are refused."""
    with pytest.raises(ValidationError):
        await domain_service.create_domain(BookDomain(name=" "))


@pytest.mark.asyncio
async def test_ancestors_and_descendants(domain_service, library):
    """Test ancestry queries walk the whole tree."""
    ancestors = await domain_service.get_ancestor_domains(library.quantum.id)
    descendants = await domain_service.get_descendant_domains(library.science.id)

    assert ancestors == [library.physics, library.science]
    assert descendants == [library.physics, library.quantum]
    assert await domain_service.get_ancestor_domains(999) == []
    assert await domain_service.get_descendant_domains(999) == []


@pytest.mark.asyncio
async def test_is_ancestor(domain_service, library):
    """Test strict ancestry through the service."""
    assert await domain_service.is_ancestor(library.science.id, library.quantum.id)
    assert not await domain_service.is_ancestor(library.quantum.id, library.science.id)
    assert not await domain_service.is_ancestor(library.mathematics.id, library.quantum.id)


@pytest.mark.asyncio
async def test_move_domain(domain_service, library):
    """Test a domain can move to another branch."""
    await domain_service.update_domain(
        BookDomain(
            id=library.quantum.id,
            name="Quantum",
            parent_domain_id=library.mathematics.id,
        )
    )

    assert library.quantum.parent_domain is library.mathematics
    assert await domain_service.get_descendant_domains(library.science.id) == [
        library.physics
    ]


@pytest.mark.asyncio
async def test_move_below_descendant_is_refused(domain_service, library):
    """Test a domain cannot become its own ancestor."""
    with pytest.raises(DomainHierarchyError, match="own descendant"):
        await domain_service.update_domain(
            BookDomain(
                id=library.science.id,
                name="Science",
                parent_domain_id=library.quantum.id,
            )
        )

    assert library.science.parent_domain_id is None


@pytest.mark.asyncio
async def test_move_below_itself_is_refused(domain_service, library):
    """Test the self-parent rule runs on update."""
    with pytest.raises(ValidationError, match="own parent"):
        await domain_service.update_domain(
            BookDomain(id=library.science.id, name="Science", parent_domain_id=library.science.id)
        )


@pytest.mark.asyncio
async def test_update_unknown_domain(domain_service):
    """Test updating a missing domain fails."""
    with pytest.raises(EntityNotFoundError):
        await domain_service.update_domain(BookDomain(id=12, name="Ghost"))


@pytest.mark.asyncio
async def test_delete_domain_with_subdomains_is_refused(domain_service, library):
    """Test non-leaf domains cannot be deleted."""
    with pytest.raises(DomainHierarchyError, match="subdomains"):
        await domain_service.delete_domain(library.science.id)


@pytest.mark.asyncio
async def test_delete_domain_with_books_is_refused(domain_service, library):
    """Test domains holding books cannot be deleted."""
    with pytest.raises(DomainHierarchyError, match="books"):
        await domain_service.delete_domain(library.literature.id)


@pytest.mark.asyncio
async def test_delete_empty_leaf(domain_service, library):
    """Test empty leaves can be deleted."""
    poetry = await domain_service.create_domain(
        BookDomain(name="Poetry", parent_domain_id=library.literature.id)
    )

    await domain_service.delete_domain(poetry.id)

    assert await domain_service.get_domain_by_id(poetry.id) is None
    assert library.literature.subdomains == []
    with pytest.raises(EntityNotFoundError):
        await domain_service.delete_domain(poetry.id)


@pytest.mark.asyncio
async def test_move_below_domain_sharing_a_book_is_refused(domain_service, book_service):
    """Test a move cannot file a book under a domain and its ancestor."""
    first = await domain_service.create_domain(BookDomain(name="First"))
    second = await domain_service.create_domain(BookDomain(name="Second"))
    book = await book_service.create_book(
        Book(title="Shared", isbn="9780262033848", total_copies=1),
        [first.id, second.id],
    )

    with pytest.raises(DomainHierarchyError, match=f"book {book.id}"):
        await domain_service.update_domain(
            BookDomain(id=second.id, name="Second", parent_domain_id=first.id)
        )

    assert second.parent_domain_id is None
    assert second.parent_domain is None
    assert first.subdomains == []
    assert await book_service.validate_book_domains(book)


@pytest.mark.asyncio
async def test_move_checks_books_in_the_moved_subtree(domain_service, book_service, library):
    """Test books filed below the moved domain are checked too."""
    plays = await domain_service.create_domain(
        BookDomain(name="Plays", parent_domain_id=library.literature.id)
    )
    await book_service.create_book(
        Book(title="Euclid in Verse", isbn="9780131103627", total_copies=1),
        [plays.id, library.algebra.id],
    )

    with pytest.raises(DomainHierarchyError, match="descendant"):
        await domain_service.update_domain(
            BookDomain(
                id=library.literature.id,
                name="Literature",
                parent_domain_id=library.algebra.id,
            )
        )

    assert library.literature.parent_domain_id is None
    assert library.algebra.subdomains == []


@pytest.mark.asyncio
async def test_move_with_shared_book_in_unrelated_branches(
    domain_service, book_service, library
):
    """Test a shared book does not block moves that keep its domains unrelated."""
    book = await book_service.create_book(
        Book(title="Mathematical Poems", isbn="9780201633610", total_copies=1),
        [library.literature.id, library.algebra.id],
    )

    await domain_service.update_domain(
        BookDomain(
            id=library.literature.id,
            name="Literature",
            parent_domain_id=library.science.id,
        )
    )

    assert library.literature.parent_domain is library.science
    assert await book_service.validate_book_domains(book)
