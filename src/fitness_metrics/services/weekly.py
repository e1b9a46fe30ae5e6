"""Weekly grouping and descriptive statistics."""

from collections import defaultdict
from collections.abc import Iterable

from fitness_metrics.domain.metrics import DatedMetric, WeekBucket


def group_by_week(entries: Iterable[DatedMetric]) -> list[WeekBucket]:
    """Group entries into per-week buckets, newest week first.

    Each bucket's ``change_from_previous`` compares its average with the
    nearest earlier week that has entries. Weeks without entries are absent.
    """
    by_week: dict[int, list[DatedMetric]] = defaultdict(list)
    for entry in entries:
        by_week[entry.week_index].append(entry)

    buckets: list[WeekBucket] = []
    previous_avg: float | None = None
    for week in sorted(by_week):
        bucket = _build_bucket(week, by_week[week], previous_avg)
        buckets.append(bucket)
        previous_avg = bucket.avg

    buckets.reverse()
    return buckets


def chronological(buckets: list[WeekBucket]) -> list[WeekBucket]:
    """Return buckets oldest week first, for chart series."""
    return list(reversed(buckets))


def _build_bucket(
    week: int, entries: list[DatedMetric], previous_avg: float | None
) -> WeekBucket:
    values = [entry.value for entry in entries]
    avg = round(sum(values) / len(values), 1)
    change = None if previous_avg is None else round(avg - previous_avg, 1)
    return WeekBucket(
        week=week,
        entries=sorted(entries, key=lambda entry: entry.date, reverse=True),
        avg=avg,
        min=min(values),
        max=max(values),
        count=len(values),
        change_from_previous=change,
    )
