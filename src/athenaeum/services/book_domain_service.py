"""
Subject domain tree operations.

Domains form a forest. Besides CRUD, this service answers ancestry
questions and keeps the tree acyclic when domains are moved. A move is
also refused when it would file a book under a domain and its ancestor.
"""

from dataclasses import replace

from athenaeum.core.logging import logger
from athenaeum.core.operation_context import operation_scope
from athenaeum.domain.exceptions import DomainHierarchyError, EntityNotFoundError
from athenaeum.domain.hierarchy import DomainHierarchy, descendant_ids
from athenaeum.domain.models import BookDomain
from athenaeum.infrastructure.repositories import BookDomainRepository
from athenaeum.validation import BookDomainValidator


class BookDomainService:
    """Maintains the domain tree."""

    def __init__(
        self,
        domain_repository: BookDomainRepository,
        validator: BookDomainValidator | None = None,
    ):
        self.domain_repository = domain_repository
        self.validator = validator or BookDomainValidator()

    async def get_all_domains(self) -> list[BookDomain]:
        return await self.domain_repository.get_all()

    async def get_domain_by_id(self, domain_id: int) -> BookDomain | None:
        return await self.domain_repository.get_by_id(domain_id)

    async def get_root_domains(self) -> list[BookDomain]:
        return await self.domain_repository.get_root_domains()

    async def get_subdomains(self, parent_domain_id: int) -> list[BookDomain]:
        return await self.domain_repository.get_subdomains(parent_domain_id)

    async def get_hierarchy(self) -> DomainHierarchy:
        """Snapshot of the whole tree."""
        return DomainHierarchy(await self.domain_repository.get_all())

    # ===========================
    # Ancestry
    # ===========================

    async def get_ancestor_domains(self, domain_id: int) -> list[BookDomain]:
        """
        Ancestors of a domain, nearest parent first.

        Returns an empty list for roots and unknown domains.

        Raises:
            DomainHierarchyError: If the stored parent chain loops
        """
        hierarchy = await self.get_hierarchy()
        if domain_id not in hierarchy:
            return []
        return [hierarchy.get(ancestor_id) for ancestor_id in hierarchy.ancestors(domain_id)]

    async def get_descendant_domains(self, domain_id: int) -> list[BookDomain]:
        """Every domain below ``domain_id``, depth-first."""
        hierarchy = await self.get_hierarchy()
        if domain_id not in hierarchy:
            return []
        return [hierarchy.get(child_id) for child_id in hierarchy.descendants(domain_id)]

    async def is_ancestor(self, ancestor_id: int, descendant_id: int) -> bool:
        """True if ``ancestor_id`` lies strictly above ``descendant_id``."""
        hierarchy = await self.get_hierarchy()
        return hierarchy.is_ancestor(ancestor_id, descendant_id)

    # ===========================
    # Maintenance
    # ===========================

    async def create_domain(self, domain: BookDomain) -> BookDomain:
        """
        Validate and store a new domain.

        Raises:
            ValidationError: If the name or description is invalid
            EntityNotFoundError: If the parent domain does not exist
        """
        with operation_scope():
            self.validator.validate_or_raise(domain)
            await self._require_parent(domain.parent_domain_id)
            created = await self.domain_repository.add(domain)
            logger.info(
                f"Created domain {created.id} '{created.name}' "
                f"under parent {created.parent_domain_id}"
            )
            return created

    async def update_domain(self, domain: BookDomain) -> BookDomain:
        """
        Store new values for a domain, possibly moving it in the tree.

        Raises:
            ValidationError: If the new values are invalid
            EntityNotFoundError: If the domain or the new parent does not exist
            DomainHierarchyError: If the move would place the domain below
                itself or one of its descendants, or would file a book under
                both an ancestor and its descendant
        """
        with operation_scope():
            self.validator.validate_or_raise(domain)
            if await self.domain_repository.get_by_id(domain.id) is None:
                raise EntityNotFoundError("BookDomain", domain.id)
            await self._require_parent(domain.parent_domain_id)

            if domain.parent_domain_id is not None:
                await self._check_move(domain)

            updated = await self.domain_repository.update(domain)
            logger.info(f"Updated domain {updated.id}")
            return updated

    async def delete_domain(self, domain_id: int) -> None:
        """
        Remove an empty leaf domain.

        Raises:
            EntityNotFoundError: If the domain does not exist
            DomainHierarchyError: If the domain still has subdomains or books
        """
        with operation_scope():
            domain = await self.domain_repository.get_by_id(domain_id)
            if domain is None:
                raise EntityNotFoundError("BookDomain", domain_id)
            if domain.subdomains:
                raise DomainHierarchyError(
                    f"Domain {domain_id} still has {len(domain.subdomains)} subdomains."
                )
            if domain.books:
                raise DomainHierarchyError(
                    f"Domain {domain_id} still has {len(domain.books)} books."
                )
            await self.domain_repository.delete(domain_id)
            logger.info(f"Deleted domain {domain_id}")

    async def _require_parent(self, parent_id: int | None) -> None:
        if parent_id is None:
            return
        if await self.domain_repository.get_by_id(parent_id) is None:
            raise EntityNotFoundError("BookDomain", parent_id)

    async def _check_move(self, domain: BookDomain) -> None:
        # Walk the stored subdomain links, not parent ids the caller
        # may already have edited
        domains = {d.id: d for d in await self.domain_repository.get_all()}
        below = descendant_ids(
            domain.id,
            lambda domain_id: (
                domains[domain_id].subdomains if domain_id in domains else []
            ),
        )
        if domain.parent_domain_id in below:
            logger.warning(
                f"Refused to move domain {domain.id} below its "
                f"descendant {domain.parent_domain_id}"
            )
            raise DomainHierarchyError(
                f"Domain {domain.id} cannot be moved below its own "
                f"descendant {domain.parent_domain_id}."
            )

        moved = replace(domains[domain.id], parent_domain_id=domain.parent_domain_id)
        hierarchy = DomainHierarchy(
            moved if domain_id == domain.id else stored
            for domain_id, stored in domains.items()
        )
        for subtree_id in [domain.id, *below]:
            for book in domains[subtree_id].books:
                pair = hierarchy.find_related_pair(book.domain_ids)
                if pair is not None:
                    logger.warning(
                        f"Refused to move domain {domain.id}: book {book.id} "
                        f"would be filed under {pair[0]} and its descendant {pair[1]}"
                    )
                    raise DomainHierarchyError(
                        f"Domain {domain.id} cannot be moved below "
                        f"{domain.parent_domain_id}: book {book.id} is filed under "
                        f"domain {pair[0]} and its descendant {pair[1]}."
                    )
