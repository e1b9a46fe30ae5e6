"""Activity streak calculation."""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from fitness_metrics.domain.metrics import StreakDay


def current_streak(days: Sequence[StreakDay]) -> int:
    """Return the run of consecutive active days ending at the latest day.

    ``days`` must be in chronological order with at most one entry per date.
    An inactive latest day yields 0.
    """
    streak = 0
    expected: date | None = None
    for day in reversed(days):
        if not day.has_activity:
            break
        if expected is not None and day.date != expected:
            break
        streak += 1
        expected = day.date - timedelta(days=1)
    return streak


def activity_days(logged_dates: Iterable[date], today: date) -> list[StreakDay]:
    """Build one merged activity flag per date from the first log through today."""
    active = {day for day in logged_dates if day <= today}
    if not active:
        return [StreakDay(date=today, has_activity=False)]
    first = min(active)
    span = (today - first).days + 1
    return [
        StreakDay(date=day, has_activity=day in active)
        for day in (first + timedelta(days=offset) for offset in range(span))
    ]
