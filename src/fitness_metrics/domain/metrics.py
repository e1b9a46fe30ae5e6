"""Domain models for dated metrics and their derived summaries."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of dates or datetimes."""

    start: date | datetime
    end: date | datetime

    def as_dates(self) -> "DateRange":
        """Return the range truncated to calendar dates."""
        return DateRange(start=_to_date(self.start), end=_to_date(self.end))

    def contains(self, day: date) -> bool:
        """Return True when a calendar date falls inside the range."""
        dates = self.as_dates()
        return dates.start <= day <= dates.end


@dataclass(frozen=True)
class DatedMetric:
    """One logged measurement tagged with its plan week."""

    date: date
    value: float
    week_index: int


@dataclass(frozen=True)
class WeekBucket:
    """Entries of one week with descriptive statistics."""

    week: int
    entries: list[DatedMetric]
    avg: float
    min: float
    max: float
    count: int
    change_from_previous: float | None


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a current value toward a goal."""

    current: float
    goal: float
    percent: int


@dataclass(frozen=True)
class StreakDay:
    """Whether any activity was logged on a calendar date."""

    date: date
    has_activity: bool


def _to_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
