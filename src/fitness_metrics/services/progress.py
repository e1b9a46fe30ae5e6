"""Goal progress percentages.

Every ratio shown to the user (steps against the daily goal, plan week against
plan length, workouts against the weekly goal) goes through :func:`progress`
so that all screens round and clamp the same way.
"""

import math
from datetime import date

from fitness_metrics.domain.metrics import GoalProgress
from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.periods import week_index_for

MAX_PERCENT = 100


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, sending halves up."""
    return math.floor(value + 0.5)


def percent_of(part: float, total: float) -> int:
    """Return part as a whole percent of total, rounded half up."""
    return round_half_up(part / total * 100)


def progress(current: float, goal: float | None) -> int:
    """Return the percent of goal reached, clamped to 0..100."""
    if not goal or goal <= 0:
        return 0
    return max(0, min(percent_of(current, goal), MAX_PERCENT))


def goal_progress(current: float, goal: float | None) -> GoalProgress:
    """Return current, goal and percent together."""
    return GoalProgress(
        current=current, goal=goal or 0, percent=progress(current, goal)
    )


def current_plan_week(plan: PlanContext, today: date) -> int:
    """Return the plan week for today, clamped to the plan's length."""
    if today < plan.start_date:
        return 1
    week = week_index_for(today, plan.start_date)
    return max(1, min(week, plan.number_of_weeks))


def plan_progress(plan: PlanContext, today: date) -> GoalProgress:
    """Return progress through the plan as current week of total weeks."""
    return goal_progress(current_plan_week(plan, today), plan.number_of_weeks)
