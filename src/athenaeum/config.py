"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (policy_max_books_per_day)
- In .env or ENV vars: UPPER_CASE (POLICY_MAX_BOOKS_PER_DAY)
- Pydantic automatically converts between both
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from athenaeum.models.config import LibraryConfiguration


class Settings(BaseSettings):
    """
    Unified application configuration.

    All variables can be defined in:
    - .env file: VARIABLE_NAME=value
    - Environment variables: export VARIABLE_NAME=value

    Example:
        # In .env or as environment variable:
        LOG_LEVEL=DEBUG
        POLICY_MAX_BOOKS_PER_PERIOD=12
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allows using uppercase or lowercase
        extra="ignore",  # Ignores extra variables in .env
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(default="Athenaeum", description="Project name")
    project_version: str = Field(default="1.0.0", description="Project version")
    debug: bool = Field(default=False, description="Debug mode")

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | op={extra[operation_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    log_colorize: bool = Field(default=True, description="Colorize log output")
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # INFRASTRUCTURE SETTINGS
    # ============================================================================
    infrastructure_provider: str = Field(
        default="memory",
        description="Repository provider (memory)",
    )

    # ============================================================================
    # LIBRARY POLICY SETTINGS
    # ============================================================================
    policy_max_domains_per_book: int = Field(
        default=3, description="Maximum domains a book can belong to"
    )
    policy_max_books_per_period: int = Field(
        default=10, description="Books a reader may borrow within the period"
    )
    policy_period_days: int = Field(
        default=30, description="Length of the borrowing quota period in days"
    )
    policy_max_books_per_request: int = Field(
        default=5, description="Books allowed in a single borrowing request"
    )
    policy_diversity_threshold: int = Field(
        default=3, description="Request size from which domain diversity applies"
    )
    policy_min_distinct_domains: int = Field(
        default=2, description="Distinct domains required in diverse requests"
    )
    policy_max_books_per_domain: int = Field(
        default=3, description="Books of one domain allowed in the domain window"
    )
    policy_domain_limit_months: int = Field(
        default=3, description="Window in months for the per-domain limit"
    )
    policy_max_extension_days: int = Field(
        default=14, description="Extension days allowed in the extension window"
    )
    policy_extension_window_months: int = Field(
        default=3, description="Rolling window in months for extension caps"
    )
    policy_min_days_between_borrows: int = Field(
        default=7, description="Minimum days before re-borrowing the same book"
    )
    policy_max_books_per_day: int = Field(
        default=3, description="Daily limit for regular readers"
    )
    policy_min_available_percentage: float = Field(
        default=0.10, description="Share of stock that must remain available"
    )
    policy_default_borrowing_days: int = Field(
        default=14, description="Loan length when none is requested"
    )
    policy_max_borrowing_days: int = Field(
        default=60, description="Longest loan that may be requested"
    )
    policy_staff_multiplier: int = Field(
        default=2, description="Factor applied to staff quotas"
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    def get_library_configuration(self) -> LibraryConfiguration:
        """
        Build the lending policy from the ``policy_*`` settings.

        Returns:
            LibraryConfiguration: Validated policy thresholds.

        Raises:
            pydantic.ValidationError: If the thresholds are inconsistent.
        """
        prefix = "policy_"
        values = {
            name[len(prefix) :]: value
            for name, value in self.model_dump().items()
            if name.startswith(prefix)
        }
        return LibraryConfiguration(**values)


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    This function is cached, so the .env file is only read once.
    To refresh the configuration, clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


# Global instance for modules that need settings at import time
settings = get_settings()
