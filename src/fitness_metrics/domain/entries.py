"""Domain models for raw log entries read from the entry store."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from fitness_metrics.domain.nutrition import FoodItem


@dataclass(frozen=True)
class WeightEntry:
    """A logged body-weight reading."""

    id: UUID
    date: date
    weight: float
    unit: str = "kg"
    week: int | None = None
    notes: str = ""


@dataclass(frozen=True)
class StepEntry:
    """A logged daily step count."""

    id: UUID
    date: date
    count: int
    goal: int
    week: int | None = None


@dataclass(frozen=True)
class WorkoutEntry:
    """A logged workout session."""

    id: UUID
    date: date
    name: str
    duration_minutes: int = 0
    calories_burned: int = 0
    exercise_count: int = 0
    week: int | None = None


@dataclass(frozen=True)
class MealEntry:
    """A logged meal with its food items."""

    id: UUID
    date: date
    meal_type: str
    items: list[FoodItem] = field(default_factory=list)
    notes: str = ""
