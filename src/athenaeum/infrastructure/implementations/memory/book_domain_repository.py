"""In-memory domain repository."""

from loguru import logger

from athenaeum.domain.models import BookDomain
from athenaeum.infrastructure.implementations.memory.context import LibraryContext
from athenaeum.infrastructure.repositories.book_domain_repository import (
    BookDomainRepository,
)


class MemoryBookDomainRepository(BookDomainRepository):
    """Domain storage backed by a shared LibraryContext."""

    def __init__(self, context: LibraryContext):
        self.context = context
        logger.debug("Initialized MemoryBookDomainRepository")

    async def get_all(self) -> list[BookDomain]:
        return list(self.context.domains.values())

    async def get_by_id(self, domain_id: int) -> BookDomain | None:
        return self.context.domains.get(domain_id)

    async def get_root_domains(self) -> list[BookDomain]:
        return [domain for domain in self.context.domains.values() if domain.is_root]

    async def get_subdomains(self, parent_domain_id: int) -> list[BookDomain]:
        parent = self.context.domains.get(parent_domain_id)
        return list(parent.subdomains) if parent is not None else []

    async def add(self, domain: BookDomain) -> BookDomain:
        parent_id = domain.parent_domain_id
        if parent_id is not None:
            self.context.require_domain(parent_id)

        domain.id = self.context.next_id("domains")
        domain.parent_domain = None
        self.context.domains[domain.id] = domain
        self.context.set_domain_parent(domain, parent_id)
        logger.debug(f"Stored domain {domain.id} under parent {parent_id}")
        return domain

    async def update(self, domain: BookDomain) -> BookDomain:
        stored = self.context.require_domain(domain.id)
        new_parent_id = domain.parent_domain_id
        if new_parent_id is not None:
            self.context.require_domain(new_parent_id)

        stored.name = domain.name
        stored.description = domain.description
        # Compare against the linked parent, the caller may have edited the id
        current_parent_id = (
            stored.parent_domain.id if stored.parent_domain is not None else None
        )
        if new_parent_id != current_parent_id:
            self.context.set_domain_parent(stored, new_parent_id)
        return stored

    async def delete(self, domain_id: int) -> None:
        domain = self.context.require_domain(domain_id)
        self.context.remove_domain(domain)
        logger.debug(f"Removed domain {domain_id}")
