"""
Ancestor/descendant logic for the subject domain tree.

Functions here work on plain lookups so they can be used both with a
repository-backed snapshot and with hand-built test data:

- ``lookup``: maps a domain id to its ``BookDomain`` (None when unknown)
- ``children_of``: maps a domain id to its direct subdomains
"""

from collections.abc import Callable, Iterable, Sequence

from athenaeum.domain.exceptions import DomainHierarchyError
from athenaeum.domain.models import Book, BookDomain

DomainLookup = Callable[[int], BookDomain | None]
ChildrenLookup = Callable[[int], Iterable[BookDomain]]


def ancestor_ids(domain_id: int, lookup: DomainLookup) -> list[int]:
    """
    Walk up from a domain to its root.

    Args:
        domain_id: Starting domain (not included in the result)
        lookup: Domain lookup

    Returns:
        Ancestor ids, nearest parent first

    Raises:
        DomainHierarchyError: If the parent chain loops
    """
    ancestors: list[int] = []
    seen = {domain_id}
    current = lookup(domain_id)

    while current is not None and current.parent_domain_id is not None:
        parent_id = current.parent_domain_id
        if parent_id in seen:
            raise DomainHierarchyError(
                f"Domain {domain_id} has a cyclic parent chain at {parent_id}."
            )
        seen.add(parent_id)
        ancestors.append(parent_id)
        current = lookup(parent_id)

    return ancestors


def is_ancestor(ancestor_id: int, descendant_id: int, lookup: DomainLookup) -> bool:
    """True if ``ancestor_id`` is a strict ancestor of ``descendant_id``."""
    if ancestor_id == descendant_id:
        return False
    return ancestor_id in ancestor_ids(descendant_id, lookup)


def descendant_ids(domain_id: int, children_of: ChildrenLookup) -> list[int]:
    """
    Collect every domain below ``domain_id`` (depth-first, each id once).

    The starting domain is not included.
    """
    result: list[int] = []
    seen = {domain_id}
    # Reversed so the first child is visited first
    stack = list(reversed(list(children_of(domain_id))))

    while stack:
        current = stack.pop()
        if current.id in seen:
            continue
        seen.add(current.id)
        result.append(current.id)
        stack.extend(reversed(list(children_of(current.id))))

    return result


def find_related_pair(
    domain_ids: Sequence[int], lookup: DomainLookup
) -> tuple[int, int] | None:
    """
    Find two domains where one is an ancestor of the other.

    Args:
        domain_ids: Domains a book would be filed under
        lookup: Domain lookup

    Returns:
        ``(ancestor_id, descendant_id)`` for the first related pair, or None
    """
    for index, first in enumerate(domain_ids):
        for second in domain_ids[index + 1 :]:
            if is_ancestor(first, second, lookup):
                return first, second
            if is_ancestor(second, first, lookup):
                return second, first
    return None


class DomainHierarchy:
    """
    Immutable snapshot of the domain tree.

    Built once per service call from the repository contents so rule
    evaluation does not hit the repositories for every ancestor step.
    """

    def __init__(self, domains: Iterable[BookDomain]):
        self._domains: dict[int, BookDomain] = {domain.id: domain for domain in domains}
        self._children: dict[int, list[BookDomain]] = {}
        for domain in self._domains.values():
            if domain.parent_domain_id is not None:
                self._children.setdefault(domain.parent_domain_id, []).append(domain)

    def __contains__(self, domain_id: int) -> bool:
        return domain_id in self._domains

    def get(self, domain_id: int) -> BookDomain | None:
        return self._domains.get(domain_id)

    def children(self, domain_id: int) -> list[BookDomain]:
        return list(self._children.get(domain_id, []))

    def ancestors(self, domain_id: int) -> list[int]:
        return ancestor_ids(domain_id, self.get)

    def descendants(self, domain_id: int) -> list[int]:
        return descendant_ids(domain_id, self.children)

    def is_ancestor(self, ancestor_id: int, descendant_id: int) -> bool:
        return is_ancestor(ancestor_id, descendant_id, self.get)

    def find_related_pair(self, domain_ids: Sequence[int]) -> tuple[int, int] | None:
        return find_related_pair(domain_ids, self.get)

    def covers(self, domain_id: int, book: Book) -> bool:
        """
        True if the book is filed under the domain or one of its subdomains.

        Args:
            domain_id: Domain to test
            book: Book whose domains are checked
        """
        for book_domain_id in book.domain_ids:
            if book_domain_id == domain_id or self.is_ancestor(domain_id, book_domain_id):
                return True
        return False
