"""
Infrastructure abstraction layer for library storage.

This module provides repository interfaces and implementations for:
- Catalogue entities (authors, books, domains, editions)
- Readers
- Borrowings and loan extensions

Supports multiple providers via factory pattern:
- memory: In-process storage
"""

from athenaeum.infrastructure.factory import InfrastructureFactory

__all__ = ["InfrastructureFactory"]
