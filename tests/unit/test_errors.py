"""Tests for the exception hierarchy, error reports and service results."""

import pytest

from athenaeum.domain.exceptions import (
    BusinessRuleViolation,
    DomainHierarchyError,
    EntityNotFoundError,
    InvalidOperationError,
    LibraryError,
    ValidationError,
)
from athenaeum.domain.violations import RuleCode, RuleViolation
from athenaeum.models.errors import ErrorReport, ValidationErrorDetail
from athenaeum.models.results import ServiceResult


def _detail(field: str, msg: str) -> ValidationErrorDetail:
    return ValidationErrorDetail(type="required", loc=(field,), msg=msg)


class TestExceptions:
    """Tests for LibraryError subclasses."""

    def test_codes_are_derived_from_class_names(self):
        assert EntityNotFoundError("Book", 1).code == "entity_not_found"
        assert DomainHierarchyError("x").code == "domain_hierarchy"
        assert InvalidOperationError("x").code == "invalid_operation"
        assert BusinessRuleViolation([]).code == "business_rule_violation"

    def test_entity_not_found_message(self):
        exc = EntityNotFoundError("Reader", 42)

        assert str(exc) == "Reader 42 not found."
        assert exc.entity == "Reader"
        assert exc.entity_id == 42

    def test_validation_error_joins_messages(self):
        exc = ValidationError(
            [_detail("first_name", "First name is required"), _detail("isbn", "ISBN is required")]
        )

        assert str(exc) == "First name is required, ISBN is required"
        assert len(exc.errors) == 2

    def test_business_rule_violation_lists_codes(self):
        exc = BusinessRuleViolation(
            [
                RuleViolation(RuleCode.PERIOD_QUOTA, "Quota reached."),
                RuleViolation(RuleCode.DAILY_LIMIT, "Daily limit reached.", 3),
            ]
        )

        assert exc.codes == ["PERIOD_QUOTA", "DAILY_LIMIT"]
        assert str(exc) == "Quota reached.; Daily limit reached."

    def test_all_errors_share_base_class(self):
        assert issubclass(ValidationError, LibraryError)
        assert issubclass(BusinessRuleViolation, LibraryError)


class TestErrorReport:
    """Tests for ErrorReport.from_exception."""

    def test_report_from_validation_error(self):
        exc = ValidationError([_detail("title", "Title is required")])

        report = ErrorReport.from_exception(exc)

        assert report.type == "validation"
        assert report.title == "Validation failed"
        assert report.detail == "Title is required"
        assert report.errors[0].loc == ("title",)
        assert report.violations is None

    def test_report_from_rule_violation(self):
        exc = BusinessRuleViolation(
            [RuleViolation(RuleCode.NO_COPIES_AVAILABLE, "No copies.", 7)]
        )

        report = ErrorReport.from_exception(exc)

        assert report.type == "business_rule_violation"
        assert report.errors is None
        assert report.violations[0].code == "NO_COPIES_AVAILABLE"
        assert report.violations[0].book_id == 7

    def test_report_serializes(self):
        report = ErrorReport.from_exception(EntityNotFoundError("Book", 5))

        data = report.model_dump()

        assert data["type"] == "entity_not_found"
        assert data["detail"] == "Book 5 not found."


class TestServiceResult:
    """Tests for ServiceResult."""

    def test_success(self):
        result = ServiceResult[int].success(3)

        assert result.is_success is True
        assert result.data == 3
        assert result.error is None

    def test_failure(self):
        result = ServiceResult[int].failure("nope")

        assert result.is_success is False
        assert result.message == "nope"
        assert result.data is None

    @pytest.mark.asyncio
    async def test_capture_success(self):
        async def call():
            return "done"

        result = await ServiceResult.capture(call())

        assert result.is_success is True
        assert result.data == "done"

    @pytest.mark.asyncio
    async def test_capture_library_error(self):
        async def call():
            raise EntityNotFoundError("Book", 9)

        result = await ServiceResult.capture(call())

        assert result.is_success is False
        assert result.message == "Book 9 not found."
        assert result.error.type == "entity_not_found"

    @pytest.mark.asyncio
    async def test_capture_propagates_other_errors(self):
        async def call():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await ServiceResult.capture(call())
