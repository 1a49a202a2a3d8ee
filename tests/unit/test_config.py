"""Tests for Settings and the library policy configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from athenaeum.config import Settings, get_settings
from athenaeum.models.config import EffectiveLimits, LibraryConfiguration


def test_settings_defaults():
    """Test default provider and policy values."""
    with patch.dict("os.environ", {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.infrastructure_provider == "memory"
    assert settings.log_level == "INFO"
    assert settings.policy_max_books_per_period == 10
    assert settings.policy_min_available_percentage == pytest.approx(0.10)


def test_settings_read_environment():
    """Test environment variables override defaults (case-insensitive)."""
    env = {
        "POLICY_MAX_BOOKS_PER_DAY": "5",
        "policy_staff_multiplier": "3",
        "LOG_LEVEL": "WARNING",
    }
    with patch.dict("os.environ", env):
        settings = Settings(_env_file=None)

    assert settings.policy_max_books_per_day == 5
    assert settings.policy_staff_multiplier == 3
    assert settings.log_level == "WARNING"


def test_get_library_configuration_strips_prefix():
    """Test policy settings are mapped onto LibraryConfiguration."""
    with patch.dict("os.environ", {"POLICY_MAX_DOMAINS_PER_BOOK": "4"}):
        config = Settings(_env_file=None).get_library_configuration()

    assert isinstance(config, LibraryConfiguration)
    assert config.max_domains_per_book == 4
    assert config.period_days == 30


def test_get_library_configuration_rejects_inconsistent_values():
    """Test cross-field checks run when building the configuration."""
    env = {"POLICY_MIN_DISTINCT_DOMAINS": "5", "POLICY_DIVERSITY_THRESHOLD": "3"}
    with patch.dict("os.environ", env):
        settings = Settings(_env_file=None)

    with pytest.raises(ValidationError, match="min_distinct_domains"):
        settings.get_library_configuration()


def test_get_settings_is_cached():
    """Test get_settings returns the same instance until the cache is cleared."""
    assert get_settings() is get_settings()


class TestLibraryConfiguration:
    """Tests for LibraryConfiguration validation."""

    def test_defaults(self):
        config = LibraryConfiguration()

        assert config.max_domains_per_book == 3
        assert config.max_books_per_request == 5
        assert config.diversity_threshold == 3
        assert config.min_distinct_domains == 2
        assert config.max_extension_days == 14
        assert config.default_borrowing_days == 14

    def test_is_frozen(self):
        config = LibraryConfiguration()

        with pytest.raises(ValidationError):
            config.period_days = 7

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_books_per_period", 0),
            ("min_available_percentage", 1.5),
            ("min_available_percentage", -0.1),
            ("staff_multiplier", 0),
        ],
    )
    def test_rejects_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            LibraryConfiguration(**{field: value})

    def test_default_loan_cannot_exceed_maximum(self):
        with pytest.raises(ValidationError, match="default_borrowing_days"):
            LibraryConfiguration(default_borrowing_days=30, max_borrowing_days=20)


class TestEffectiveLimits:
    """Tests for staff adjustments."""

    def test_regular_reader_gets_configured_limits(self):
        config = LibraryConfiguration()

        limits = EffectiveLimits.for_reader(config, is_staff=False)

        assert limits.is_staff is False
        assert limits.max_books_per_period == 10
        assert limits.period_days == 30
        assert limits.max_books_per_domain == 3
        assert limits.min_days_between_borrows == 7
        assert limits.max_books_per_day == 3

    def test_staff_limits_are_relaxed(self):
        config = LibraryConfiguration()

        limits = EffectiveLimits.for_reader(config, is_staff=True)

        assert limits.is_staff is True
        assert limits.max_books_per_period == 20
        assert limits.period_days == 15
        assert limits.max_books_per_request == 10
        assert limits.max_books_per_domain == 6
        assert limits.max_extension_days == 28
        assert limits.min_days_between_borrows == 3
        assert limits.max_books_per_day is None

    def test_staff_period_never_drops_below_one_day(self):
        config = LibraryConfiguration(period_days=1, staff_multiplier=4)

        limits = EffectiveLimits.for_reader(config, is_staff=True)

        assert limits.period_days == 1
