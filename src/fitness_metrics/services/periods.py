"""Period resolution and plan week numbering."""

from datetime import date, datetime, timedelta

from fitness_metrics.domain.errors import InvalidPeriod
from fitness_metrics.domain.metrics import DateRange

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "3months": 90,
}

DAYS_PER_WEEK = 7


def resolve_period(token: str, now: date | datetime) -> DateRange:
    """Return the range covering the last N days of a period, ending at now.

    The range is inclusive of ``now``: ``week`` spans today and the six days
    before it. Pass a ``date`` when the entries being filtered are date-only.
    """
    days = PERIOD_DAYS.get(token)
    if days is None:
        raise InvalidPeriod(token)
    return DateRange(start=now - timedelta(days=days - 1), end=now)


def week_index_for(day: date, start_date: date) -> int:
    """Return the 1-based plan week a date falls in."""
    offset = (day - start_date).days
    if offset < 0:
        raise ValueError(f"{day.isoformat()} is before plan start {start_date}")
    return offset // DAYS_PER_WEEK + 1


def week_dates(week: int, start_date: date) -> DateRange:
    """Return the first and last day of a plan week."""
    if week < 1:
        raise ValueError(f"Week must be positive, got {week}")
    start = start_date + timedelta(days=(week - 1) * DAYS_PER_WEEK)
    return DateRange(start=start, end=start + timedelta(days=DAYS_PER_WEEK - 1))
