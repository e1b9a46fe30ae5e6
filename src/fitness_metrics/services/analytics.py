"""Analytics service composing the pure aggregations over stored entries."""

from collections import Counter, defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from fitness_metrics.domain.analytics import (
    DailyCalories,
    DailySteps,
    MealAnalytics,
    Overview,
    PlanOverview,
    StepsAnalytics,
    StepsWeek,
    WeightAnalytics,
    WeightSummary,
    WorkoutAnalytics,
)
from fitness_metrics.domain.entries import (
    MealEntry,
    StepEntry,
    WeightEntry,
    WorkoutEntry,
)
from fitness_metrics.domain.imports import WeightRecord
from fitness_metrics.domain.metrics import DatedMetric, GoalProgress, WeekBucket
from fitness_metrics.domain.nutrition import CategoryCount
from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.nutrition import (
    aggregate_macros,
    category_shares,
    macro_shares,
    meal_type_label,
    sum_macro_totals,
)
from fitness_metrics.services.periods import resolve_period, week_index_for
from fitness_metrics.services.progress import (
    current_plan_week,
    goal_progress,
    plan_progress,
    round_half_up,
)
from fitness_metrics.services.streaks import activity_days, current_streak
from fitness_metrics.services.weekly import group_by_week

_NumberedEntry = WeightEntry | StepEntry | WorkoutEntry


class EntryRepository(Protocol):
    """Persistence interface for logged entries, ordered by date ascending."""

    def list_weights(
        self, user_id: UUID, start: date, end: date
    ) -> list[WeightEntry]:
        """Return weight entries within an inclusive date range."""

    def list_all_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return every weight entry for a user."""

    def list_steps(self, user_id: UUID, start: date, end: date) -> list[StepEntry]:
        """Return step entries within an inclusive date range."""

    def list_all_steps(self, user_id: UUID) -> list[StepEntry]:
        """Return every step entry for a user."""

    def list_workouts(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutEntry]:
        """Return workouts within an inclusive date range."""

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meals within an inclusive date range."""

    def create_weight(self, record: WeightRecord) -> UUID:
        """Persist one weight reading and return its id."""


class PlanRepository(Protocol):
    """Persistence interface for user plans."""

    def get_active_plan(self, user_id: UUID) -> PlanContext | None:
        """Return the user's current plan, if any."""


@dataclass
class AnalyticsService:
    """Service for period analytics and the dashboard overview."""

    entries: EntryRepository
    plans: PlanRepository
    default_steps_goal: int = 10000
    default_weekly_workout_goal: int = 4
    streak_lookback_days: int = 365

    def weight_analytics(
        self, user_id: UUID, period: str, today: date
    ) -> WeightAnalytics:
        """Return weight entries, weekly buckets and start/current summary."""
        period_range = resolve_period(period, today)
        weights = self.entries.list_weights(
            user_id, period_range.start, period_range.end
        )
        plan = self.plans.get_active_plan(user_id)
        return WeightAnalytics(
            period=period,
            range=period_range,
            entries=weights,
            weekly=group_by_week(_weight_metrics(weights, plan)),
            summary=_weight_summary(weights),
        )

    def weekly_weights(self, user_id: UUID) -> list[WeekBucket]:
        """Return weekly buckets over every weight entry, newest week first."""
        weights = self.entries.list_all_weights(user_id)
        plan = self.plans.get_active_plan(user_id)
        return group_by_week(_weight_metrics(weights, plan))

    def steps_analytics(
        self, user_id: UUID, period: str, today: date
    ) -> StepsAnalytics:
        """Return daily step progress with totals for a period."""
        period_range = resolve_period(period, today)
        steps = self.entries.list_steps(user_id, period_range.start, period_range.end)
        plan = self.plans.get_active_plan(user_id)
        daily = [
            DailySteps(
                date=entry.date,
                progress=goal_progress(entry.count, self._steps_goal(entry, plan)),
            )
            for entry in steps
        ]
        total = sum(entry.count for entry in steps)
        return StepsAnalytics(
            period=period,
            range=period_range,
            daily=daily,
            total=total,
            average=round_half_up(total / len(steps)) if steps else 0,
            goals_met=sum(
                1 for day in daily if day.progress.current >= day.progress.goal
            ),
        )

    def weekly_steps(self, user_id: UUID) -> list[StepsWeek]:
        """Return per-week step totals, newest week first."""
        steps = self.entries.list_all_steps(user_id)
        plan = self.plans.get_active_plan(user_id)
        goals_met: Counter[int] = Counter()
        metrics = []
        for entry, week in zip(steps, _week_numbers(plan, steps), strict=True):
            metrics.append(DatedMetric(entry.date, entry.count, week))
            if entry.count >= self._steps_goal(entry, plan):
                goals_met[week] += 1
        return [
            StepsWeek(
                week=bucket.week,
                total=int(sum(metric.value for metric in bucket.entries)),
                avg=bucket.avg,
                max=int(bucket.max),
                goals_met=goals_met[bucket.week],
                days_tracked=bucket.count,
            )
            for bucket in group_by_week(metrics)
        ]

    def workout_analytics(
        self, user_id: UUID, period: str, today: date
    ) -> WorkoutAnalytics:
        """Return workout totals for a period and progress toward this week's goal."""
        period_range = resolve_period(period, today)
        workouts = self.entries.list_workouts(
            user_id, period_range.start, period_range.end
        )
        plan = self.plans.get_active_plan(user_id)
        metrics = [
            DatedMetric(entry.date, entry.duration_minutes, week)
            for entry, week in zip(
                workouts, _week_numbers(plan, workouts), strict=True
            )
        ]
        return WorkoutAnalytics(
            period=period,
            range=period_range,
            sessions=len(workouts),
            total_duration_minutes=sum(entry.duration_minutes for entry in workouts),
            total_calories_burned=sum(entry.calories_burned for entry in workouts),
            weekly=group_by_week(metrics),
            this_week=self._workouts_this_week(workouts, plan, today),
        )

    def meal_analytics(self, user_id: UUID, period: str, today: date) -> MealAnalytics:
        """Return daily calories, macro totals and meal-type shares for a period."""
        period_range = resolve_period(period, today)
        meals = self.entries.list_meals(user_id, period_range.start, period_range.end)
        per_meal = [(meal, aggregate_macros(meal.items)) for meal in meals]

        calories_by_day: dict[date, int] = defaultdict(int)
        for meal, meal_totals in per_meal:
            calories_by_day[meal.date] += meal_totals.calories
        totals = sum_macro_totals(meal_totals for _, meal_totals in per_meal)

        return MealAnalytics(
            period=period,
            range=period_range,
            daily=[
                DailyCalories(date=day, calories=calories)
                for day, calories in sorted(calories_by_day.items())
            ],
            totals=totals,
            macro_shares=macro_shares(totals),
            meal_types=category_shares(
                CategoryCount(category=meal_type_label(meal_type), count=count)
                for meal_type, count in Counter(
                    meal.meal_type for meal in meals
                ).items()
            ),
        )

    def overview(self, user_id: UUID, today: date) -> Overview:
        """Return today's headline numbers, the streak and plan progress."""
        plan = self.plans.get_active_plan(user_id)
        todays_steps = self.entries.list_steps(user_id, today, today)
        step_count = sum(entry.count for entry in todays_steps)
        steps_goal = (
            self._steps_goal(todays_steps[-1], plan)
            if todays_steps
            else self._plan_steps_goal(plan)
        )

        todays_meals = self.entries.list_meals(user_id, today, today)
        this_week = resolve_period("week", today)
        workouts = self.entries.list_workouts(user_id, this_week.start, this_week.end)

        weights = self.entries.list_all_weights(user_id)
        summary = _weight_summary(weights)

        return Overview(
            date=today,
            steps=goal_progress(step_count, steps_goal),
            meals_today=sum_macro_totals(
                aggregate_macros(meal.items) for meal in todays_meals
            ),
            meals_logged=len(todays_meals),
            workouts_this_week=self._workouts_this_week(workouts, plan, today),
            latest_weight=summary.current_weight if summary else None,
            weight_unit=summary.unit if summary else None,
            weight_change=summary.total_change if summary else None,
            streak=current_streak(
                activity_days(self._activity_dates(user_id, today), today)
            ),
            plan=_plan_overview(plan, today) if plan else None,
        )

    def _workouts_this_week(
        self, workouts: list[WorkoutEntry], plan: PlanContext | None, today: date
    ) -> GoalProgress:
        this_week = resolve_period("week", today)
        sessions = sum(1 for entry in workouts if this_week.contains(entry.date))
        weekly_goal = (
            plan.weekly_workout_goal if plan else self.default_weekly_workout_goal
        )
        return goal_progress(sessions, weekly_goal)

    def _activity_dates(self, user_id: UUID, today: date) -> list[date]:
        start = today - timedelta(days=self.streak_lookback_days - 1)
        fetchers = (
            self.entries.list_weights,
            self.entries.list_steps,
            self.entries.list_workouts,
            self.entries.list_meals,
        )
        return [
            entry.date for fetch in fetchers for entry in fetch(user_id, start, today)
        ]

    def _steps_goal(self, entry: StepEntry, plan: PlanContext | None) -> int:
        return entry.goal or self._plan_steps_goal(plan)

    def _plan_steps_goal(self, plan: PlanContext | None) -> int:
        return plan.daily_steps_goal if plan else self.default_steps_goal


def _weight_metrics(
    weights: list[WeightEntry], plan: PlanContext | None
) -> list[DatedMetric]:
    return [
        DatedMetric(date=entry.date, value=entry.weight, week_index=week)
        for entry, week in zip(weights, _week_numbers(plan, weights), strict=True)
    ]


def _week_numbers(
    plan: PlanContext | None, entries: Sequence[_NumberedEntry]
) -> list[int]:
    """Number every entry from one anchor so weeks never decrease with date.

    Stored weeks are plan-relative, so they are kept only when the plan start
    is the anchor; otherwise every week is derived from the fallback anchor.
    """
    if not entries:
        return []
    anchor = _week_anchor(plan, [entry.date for entry in entries])
    keep_stored = plan is not None and anchor == plan.start_date
    return [
        entry.week
        if keep_stored and entry.week
        else week_index_for(entry.date, anchor)
        for entry in entries
    ]


def _week_anchor(plan: PlanContext | None, dates: list[date]) -> date:
    """Return the date week 1 starts on for a non-empty list of entry dates.

    The plan start is used when every entry falls on or after it; otherwise
    weeks start on the Monday before the earliest entry.
    """
    earliest = min(dates)
    if plan and earliest >= plan.start_date:
        return plan.start_date
    return earliest - timedelta(days=earliest.weekday())


def _weight_summary(weights: list[WeightEntry]) -> WeightSummary | None:
    if not weights:
        return None
    ordered = sorted(weights, key=lambda entry: entry.date)
    start_weight = ordered[0].weight
    current_weight = ordered[-1].weight
    return WeightSummary(
        start_weight=start_weight,
        current_weight=current_weight,
        total_change=round(current_weight - start_weight, 1),
        total_entries=len(weights),
        unit=ordered[-1].unit,
    )


def _plan_overview(plan: PlanContext, today: date) -> PlanOverview:
    return PlanOverview(
        status=plan.status,
        current_week=current_plan_week(plan, today),
        total_weeks=plan.number_of_weeks,
        progress=plan_progress(plan, today),
    )
