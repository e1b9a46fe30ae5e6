"""Supabase repository for logged weight, step, workout and meal entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_metrics.domain.entries import (
    MealEntry,
    StepEntry,
    WeightEntry,
    WorkoutEntry,
)
from fitness_metrics.domain.imports import WeightRecord
from fitness_metrics.domain.nutrition import FoodItem
from fitness_metrics.services.analytics import EntryRepository

_WEIGHT_COLUMNS = "id, date, weight, unit, week, notes"
_STEP_COLUMNS = "id, date, count, goal, week"
_WORKOUT_COLUMNS = "id, date, name, duration, calories_burned, exercises, week"
_MEAL_COLUMNS = "id, date, meal_type, items, notes"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation of the entry store."""

    client: Client

    def list_weights(
        self, user_id: UUID, start: date, end: date
    ) -> list[WeightEntry]:
        """Return weight entries in the date range."""
        rows = self._select_range("weights", _WEIGHT_COLUMNS, user_id, start, end)
        return [_parse_weight(row) for row in rows]

    def list_all_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return all weight entries for a user."""
        rows = self._select_all("weights", _WEIGHT_COLUMNS, user_id)
        return [_parse_weight(row) for row in rows]

    def list_steps(self, user_id: UUID, start: date, end: date) -> list[StepEntry]:
        """Return step entries in the date range."""
        rows = self._select_range("steps", _STEP_COLUMNS, user_id, start, end)
        return [_parse_steps(row) for row in rows]

    def list_all_steps(self, user_id: UUID) -> list[StepEntry]:
        """Return all step entries for a user."""
        rows = self._select_all("steps", _STEP_COLUMNS, user_id)
        return [_parse_steps(row) for row in rows]

    def list_workouts(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutEntry]:
        """Return workouts in the date range."""
        rows = self._select_range("workouts", _WORKOUT_COLUMNS, user_id, start, end)
        return [_parse_workout(row) for row in rows]

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meals in the date range."""
        rows = self._select_range("meals", _MEAL_COLUMNS, user_id, start, end)
        return [_parse_meal(row) for row in rows]

    def create_weight(self, record: WeightRecord) -> UUID:
        """Insert a weight reading and return its id."""
        response = (
            self.client.table("weights")
            .insert(
                {
                    "user_id": str(record.user_id),
                    "date": record.date.isoformat(),
                    "weight": record.weight,
                    "unit": record.unit,
                    "week": record.week,
                    "notes": record.notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight entry")
        return UUID(response.data[0]["id"])

    def _select_range(
        self, table: str, columns: str, user_id: UUID, start: date, end: date
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(table)
            .select(columns)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return response.data or []

    def _select_all(
        self, table: str, columns: str, user_id: UUID
    ) -> list[dict[str, object]]:
        response = (
            self.client.table(table)
            .select(columns)
            .eq("user_id", str(user_id))
            .order("date", desc=False)
            .execute()
        )
        return response.data or []


def _parse_date(value: object) -> date:
    # Columns may be DATE or TIMESTAMPTZ; the calendar date is the prefix.
    return date.fromisoformat(str(value)[:10])


def _parse_week(value: object) -> int | None:
    return int(value) if isinstance(value, int | float) and value > 0 else None


def _parse_weight(row: dict[str, object]) -> WeightEntry:
    return WeightEntry(
        id=UUID(str(row["id"])),
        date=_parse_date(row["date"]),
        weight=float(row.get("weight", 0.0)),
        unit=str(row.get("unit") or "kg"),
        week=_parse_week(row.get("week")),
        notes=str(row.get("notes") or ""),
    )


def _parse_steps(row: dict[str, object]) -> StepEntry:
    return StepEntry(
        id=UUID(str(row["id"])),
        date=_parse_date(row["date"]),
        count=int(row.get("count") or 0),
        goal=int(row.get("goal") or 0),
        week=_parse_week(row.get("week")),
    )


def _parse_workout(row: dict[str, object]) -> WorkoutEntry:
    exercises = row.get("exercises")
    return WorkoutEntry(
        id=UUID(str(row["id"])),
        date=_parse_date(row["date"]),
        name=str(row.get("name") or "Workout"),
        duration_minutes=int(row.get("duration") or 0),
        calories_burned=int(row.get("calories_burned") or 0),
        exercise_count=len(exercises) if isinstance(exercises, list) else 0,
        week=_parse_week(row.get("week")),
    )


def _parse_meal(row: dict[str, object]) -> MealEntry:
    items = row.get("items")
    return MealEntry(
        id=UUID(str(row["id"])),
        date=_parse_date(row["date"]),
        meal_type=str(row.get("meal_type") or "other"),
        items=[_parse_food_item(item) for item in items]
        if isinstance(items, list)
        else [],
        notes=str(row.get("notes") or ""),
    )


def _parse_food_item(item: dict[str, object]) -> FoodItem:
    return FoodItem(
        name=str(item.get("name") or ""),
        quantity=str(item.get("quantity") or ""),
        calories=int(item.get("calories") or 0),
        protein=int(item.get("protein") or 0),
        carbs=int(item.get("carbs") or 0),
        fats=int(item.get("fats") or 0),
    )
