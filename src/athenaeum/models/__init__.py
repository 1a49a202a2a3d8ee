"""
Models package.

Contains shared Pydantic models: policy configuration and error reports.
Service result envelopes live in ``athenaeum.models.results``.
"""

from athenaeum.models.config import EffectiveLimits, LibraryConfiguration
from athenaeum.models.errors import (
    ErrorReport,
    RuleViolationDetail,
    ValidationErrorDetail,
)

__all__ = [
    "EffectiveLimits",
    "ErrorReport",
    "LibraryConfiguration",
    "RuleViolationDetail",
    "ValidationErrorDetail",
]
