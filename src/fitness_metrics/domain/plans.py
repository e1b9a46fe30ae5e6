"""Plan domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PlanContext:
    """A user's training plan, the anchor for week numbering."""

    start_date: date
    number_of_weeks: int
    status: str = "active"
    daily_steps_goal: int = 10000
    weekly_workout_goal: int = 4
    target_weight: float | None = None
