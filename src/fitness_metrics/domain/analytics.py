"""Result models for analytics summaries."""

from dataclasses import dataclass
from datetime import date

from fitness_metrics.domain.entries import WeightEntry
from fitness_metrics.domain.metrics import DateRange, GoalProgress, WeekBucket
from fitness_metrics.domain.nutrition import CategoryShare, MacroTotals


@dataclass(frozen=True)
class WeightSummary:
    """First and latest weight in a series."""

    start_weight: float
    current_weight: float
    total_change: float
    total_entries: int
    unit: str = "kg"


@dataclass(frozen=True)
class WeightAnalytics:
    """Weight entries for a period with weekly statistics."""

    period: str
    range: DateRange
    entries: list[WeightEntry]
    weekly: list[WeekBucket]
    summary: WeightSummary | None


@dataclass(frozen=True)
class DailySteps:
    """Step count for a day against that day's goal."""

    date: date
    progress: GoalProgress


@dataclass(frozen=True)
class StepsAnalytics:
    """Step counts for a period."""

    period: str
    range: DateRange
    daily: list[DailySteps]
    total: int
    average: int
    goals_met: int


@dataclass(frozen=True)
class StepsWeek:
    """Step totals for one plan week."""

    week: int
    total: int
    avg: float
    max: int
    goals_met: int
    days_tracked: int


@dataclass(frozen=True)
class WorkoutAnalytics:
    """Workout sessions for a period."""

    period: str
    range: DateRange
    sessions: int
    total_duration_minutes: int
    total_calories_burned: int
    weekly: list[WeekBucket]
    this_week: GoalProgress


@dataclass(frozen=True)
class DailyCalories:
    """Calories eaten on a day."""

    date: date
    calories: int


@dataclass(frozen=True)
class MealAnalytics:
    """Meals for a period with macro and meal-type breakdowns."""

    period: str
    range: DateRange
    daily: list[DailyCalories]
    totals: MacroTotals
    macro_shares: list[CategoryShare]
    meal_types: list[CategoryShare]


@dataclass(frozen=True)
class PlanOverview:
    """Plan status and progress through its weeks."""

    status: str
    current_week: int
    total_weeks: int
    progress: GoalProgress


@dataclass(frozen=True)
class Overview:
    """Dashboard headline numbers for today."""

    date: date
    steps: GoalProgress
    meals_today: MacroTotals
    meals_logged: int
    workouts_this_week: GoalProgress
    latest_weight: float | None
    weight_unit: str | None
    weight_change: float | None
    streak: int
    plan: PlanOverview | None
