"""Time helpers shared by the services."""

import calendar
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as naive UTC, the form stored on every entity."""
    return datetime.now(UTC).replace(tzinfo=None)


def subtract_months(moment: datetime, months: int) -> datetime:
    """
    Move ``moment`` back by calendar months.

    The day is clamped to the length of the target month, so
    31 May minus three months is 28 (or 29) February.

    Args:
        moment: Starting point
        months: Number of months to go back

    Returns:
        The shifted datetime, time of day preserved
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)
