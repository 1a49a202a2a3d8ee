"""
Domain layer - entities and business rules.

This package contains:
- Models: Library entities and their relationships
- Hierarchy: Ancestor/descendant logic for subject domains
- Exceptions: Domain-specific exceptions
"""
