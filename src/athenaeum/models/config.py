"""
Library policy configuration.

Thresholds enforced by the borrowing rule engine and the catalogue
services. Staff readers get relaxed limits derived from the same values
(see ``EffectiveLimits``).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LibraryConfiguration(BaseModel):
    """
    Lending and cataloguing thresholds.

    Attributes:
        max_domains_per_book: Domains a single book may be filed under.
        max_books_per_period: Books a reader may borrow within ``period_days``.
        period_days: Length of the borrowing quota period.
        max_books_per_request: Books allowed in a single borrowing request.
        diversity_threshold: Request size from which domain diversity applies.
        min_distinct_domains: Distinct domains required for diverse requests.
        max_books_per_domain: Books of one domain (subdomains included)
            allowed within ``domain_limit_months``.
        domain_limit_months: Window for the per-domain limit.
        max_extension_days: Extension days a reader may receive within
            ``extension_window_months``.
        extension_window_months: Rolling window for extension caps.
        min_days_between_borrows: Minimum gap before a reader borrows the
            same book again.
        max_books_per_day: Daily limit for regular readers.
        min_available_percentage: Share of a title's stock that must be
            available for it to be lent.
        default_borrowing_days: Loan length when the caller gives none.
        max_borrowing_days: Longest loan that may be requested.
        staff_multiplier: Factor applied to staff quotas.
    """

    model_config = ConfigDict(frozen=True)

    max_domains_per_book: int = Field(default=3, ge=1)
    max_books_per_period: int = Field(default=10, ge=1)
    period_days: int = Field(default=30, ge=1)
    max_books_per_request: int = Field(default=5, ge=1)
    diversity_threshold: int = Field(default=3, ge=1)
    min_distinct_domains: int = Field(default=2, ge=1)
    max_books_per_domain: int = Field(default=3, ge=1)
    domain_limit_months: int = Field(default=3, ge=1)
    max_extension_days: int = Field(default=14, ge=0)
    extension_window_months: int = Field(default=3, ge=1)
    min_days_between_borrows: int = Field(default=7, ge=0)
    max_books_per_day: int = Field(default=3, ge=1)
    min_available_percentage: float = Field(default=0.10, ge=0.0, le=1.0)
    default_borrowing_days: int = Field(default=14, ge=1)
    max_borrowing_days: int = Field(default=60, ge=1)
    staff_multiplier: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def check_consistency(self) -> "LibraryConfiguration":
        """Reject threshold combinations that can never be satisfied."""
        if self.min_distinct_domains > self.diversity_threshold:
            raise ValueError(
                "min_distinct_domains cannot exceed diversity_threshold"
            )
        if self.default_borrowing_days > self.max_borrowing_days:
            raise ValueError(
                "default_borrowing_days cannot exceed max_borrowing_days"
            )
        return self


class EffectiveLimits(BaseModel):
    """Limits after applying the staff adjustments for one reader."""

    model_config = ConfigDict(frozen=True)

    is_staff: bool
    max_books_per_period: int
    period_days: int
    max_books_per_request: int
    max_books_per_domain: int
    max_extension_days: int
    min_days_between_borrows: int
    max_books_per_day: int | None = Field(
        default=None, description="None means the daily limit does not apply"
    )

    @classmethod
    def for_reader(
        cls, config: LibraryConfiguration, is_staff: bool
    ) -> "EffectiveLimits":
        """
        Derive the limits that apply to a regular or staff reader.

        Staff quotas are multiplied by ``staff_multiplier``, intervals are
        divided by it, and the daily limit is lifted.
        """
        if not is_staff:
            return cls(
                is_staff=False,
                max_books_per_period=config.max_books_per_period,
                period_days=config.period_days,
                max_books_per_request=config.max_books_per_request,
                max_books_per_domain=config.max_books_per_domain,
                max_extension_days=config.max_extension_days,
                min_days_between_borrows=config.min_days_between_borrows,
                max_books_per_day=config.max_books_per_day,
            )

        factor = config.staff_multiplier
        return cls(
            is_staff=True,
            max_books_per_period=config.max_books_per_period * factor,
            period_days=max(config.period_days // factor, 1),
            max_books_per_request=config.max_books_per_request * factor,
            max_books_per_domain=config.max_books_per_domain * factor,
            max_extension_days=config.max_extension_days * factor,
            min_days_between_borrows=config.min_days_between_borrows // factor,
            max_books_per_day=None,
        )
