"""Reusable field checks with library-specific error messages."""

import re

from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9 ()\-]+$")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def required_text(value: str | None, label: str, max_length: int) -> str:
    """Non-blank string of at most ``max_length`` characters."""
    if is_blank(value):
        raise PydanticCustomError("required", "{label} is required", {"label": label})
    return max_text(value, label, max_length)


def max_text(value: str | None, label: str, max_length: int) -> str | None:
    """Optional string of at most ``max_length`` characters."""
    if value is not None and len(value) > max_length:
        raise PydanticCustomError(
            "too_long",
            "{label} cannot exceed {max_length} characters",
            {"label": label, "max_length": max_length},
        )
    return value


def greater_than(value: int, label: str, minimum: int) -> int:
    if value <= minimum:
        raise PydanticCustomError(
            "too_small",
            "{label} must be greater than {minimum}",
            {"label": label, "minimum": minimum},
        )
    return value


def at_least(value: int, label: str, minimum: int) -> int:
    if value < minimum:
        raise PydanticCustomError(
            "too_small",
            "{label} must be at least {minimum}",
            {"label": label, "minimum": minimum},
        )
    return value


def email_address(value: str | None, max_length: int) -> str | None:
    """Well-formed email, blank meaning "not given"."""
    if is_blank(value):
        return None
    max_text(value, "Email", max_length)
    if not EMAIL_PATTERN.match(value.strip()):
        raise PydanticCustomError("email", "Email must be a valid email address")
    return value


def phone_number(value: str | None, max_length: int) -> str | None:
    """Digits with optional spaces, dashes, parentheses and leading plus."""
    if is_blank(value):
        return None
    max_text(value, "Phone number", max_length)
    if not PHONE_PATTERN.match(value.strip()):
        raise PydanticCustomError(
            "phone", "Phone number may only contain digits, spaces and + - ( )"
        )
    return value


def normalize_isbn(value: str) -> str:
    return re.sub(r"[\s-]", "", value).upper()


def isbn(value: str | None) -> str:
    """ISBN-10 (last char may be X) or ISBN-13, hyphens and spaces ignored."""
    if is_blank(value):
        raise PydanticCustomError("required", "ISBN is required")
    compact = normalize_isbn(value)
    if not (re.fullmatch(r"\d{9}[\dX]", compact) or re.fullmatch(r"\d{13}", compact)):
        raise PydanticCustomError(
            "isbn", "ISBN must contain 10 or 13 digits (ISBN-10 may end in X)"
        )
    return value
