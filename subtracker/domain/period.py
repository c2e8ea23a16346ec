"""
Month-granularity date model.

Подписки тарифицируются помесячно, поэтому все даты приводятся к первому
числу месяца (UTC, 00:00). Конец периода расширяется до последнего дня
месяца: период "по 07-2025" включает весь июль.
"""
import calendar
import re
from datetime import datetime, timezone
from typing import Tuple

from subtracker.domain.errors import InvalidPeriodFormat, SubscriptionValidationError

_MONTH_YEAR_RE = re.compile(r"([0-9]{2})-([0-9]{4})")


def parse_month_year(value: str) -> datetime:
    """
    Parse "MM-YYYY" into the first instant of that month (UTC)

    Raises:
        InvalidPeriodFormat: wrong pattern, month outside 01-12 or year 0000

    Example:
        >>> parse_month_year("07-2025")
        datetime.datetime(2025, 7, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str):
        raise InvalidPeriodFormat(value)
    match = _MONTH_YEAR_RE.fullmatch(value)
    if not match:
        raise InvalidPeriodFormat(value)

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidPeriodFormat(value)

    return datetime(year, month, 1, tzinfo=timezone.utc)


def format_month_year(moment: datetime) -> str:
    """Render a datetime as "MM-YYYY"."""
    return f"{moment.month:02d}-{moment.year:04d}"


def month_end(moment: datetime) -> datetime:
    """Return the last day of the month at midnight (day 0 of the following month)."""
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    return datetime(moment.year, moment.month, last_day, tzinfo=timezone.utc)


def parse_period(start: str, end: str) -> Tuple[datetime, datetime]:
    """
    Parse a reporting period "MM-YYYY".."MM-YYYY" (both months inclusive)

    Returns:
        (start_of_period, end_of_period) where end_of_period is the
        last day of the end month

    Raises:
        InvalidPeriodFormat: if either bound is malformed
        SubscriptionValidationError: if start is after end
    """
    period_start = parse_month_year(start)
    period_end = month_end(parse_month_year(end))
    if period_start > period_end:
        raise SubscriptionValidationError(
            f"period start {start} is after period end {end}"
        )
    return period_start, period_end
