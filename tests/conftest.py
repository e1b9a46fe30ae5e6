"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from fitness_metrics.config import Settings
from fitness_metrics.containers import AppContainer
from fitness_metrics.domain.entries import (
    MealEntry,
    StepEntry,
    WeightEntry,
    WorkoutEntry,
)
from fitness_metrics.domain.imports import WeightRecord
from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.analytics import (
    AnalyticsService,
    EntryRepository,
    PlanRepository,
)
from fitness_metrics.services.imports import WeightImportService, WeightWriter


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry store for tests."""

    weights: list[WeightEntry] = field(default_factory=list)
    steps: list[StepEntry] = field(default_factory=list)
    workouts: list[WorkoutEntry] = field(default_factory=list)
    meals: list[MealEntry] = field(default_factory=list)
    created: list[WeightRecord] = field(default_factory=list)

    def list_weights(self, user_id: UUID, start, end) -> list[WeightEntry]:
        return _in_range(self.weights, start, end)

    def list_all_weights(self, user_id: UUID) -> list[WeightEntry]:
        return sorted(self.weights, key=lambda entry: entry.date)

    def list_steps(self, user_id: UUID, start, end) -> list[StepEntry]:
        return _in_range(self.steps, start, end)

    def list_all_steps(self, user_id: UUID) -> list[StepEntry]:
        return sorted(self.steps, key=lambda entry: entry.date)

    def list_workouts(self, user_id: UUID, start, end) -> list[WorkoutEntry]:
        return _in_range(self.workouts, start, end)

    def list_meals(self, user_id: UUID, start, end) -> list[MealEntry]:
        return _in_range(self.meals, start, end)

    def create_weight(self, record: WeightRecord) -> UUID:
        entry_id = uuid4()
        self.created.append(record)
        self.weights.append(
            WeightEntry(
                id=entry_id,
                date=record.date,
                weight=record.weight,
                unit=record.unit,
                week=record.week,
                notes=record.notes,
            )
        )
        return entry_id


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan store for tests."""

    plan: PlanContext | None = None

    def get_active_plan(self, user_id: UUID) -> PlanContext | None:
        return self.plan


@dataclass
class FlakyWeightWriter(WeightWriter):
    """Weight writer that fails for chosen weights."""

    failing_weights: set[float] = field(default_factory=set)
    attempts: list[float] = field(default_factory=list)
    written: list[WeightRecord] = field(default_factory=list)

    def create_weight(self, record: WeightRecord) -> UUID:
        self.attempts.append(record.weight)
        if record.weight in self.failing_weights:
            raise RuntimeError("Failed to create weight entry")
        self.written.append(record)
        return uuid4()


def _in_range(entries: list, start: date, end: date) -> list:
    return sorted(
        (entry for entry in entries if start <= entry.date <= end),
        key=lambda entry: entry.date,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
        import_retry_delay_seconds=0,
    )


@pytest.fixture
def plan() -> PlanContext:
    return PlanContext(start_date=date(2025, 1, 1), number_of_weeks=12)


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def plan_repository(plan: PlanContext) -> InMemoryPlanRepository:
    return InMemoryPlanRepository(plan=plan)


@pytest.fixture
def container(
    settings: Settings,
    entry_repository: InMemoryEntryRepository,
    plan_repository: InMemoryPlanRepository,
) -> AppContainer:
    analytics_service = AnalyticsService(
        entries=entry_repository,
        plans=plan_repository,
        default_steps_goal=settings.default_steps_goal,
        default_weekly_workout_goal=settings.default_weekly_workout_goal,
    )
    weight_import_service = WeightImportService(
        repository=entry_repository,
        max_rows=settings.import_max_rows,
        max_workers=settings.import_max_workers,
        retry_attempts=settings.import_retry_attempts,
        retry_delay_seconds=settings.import_retry_delay_seconds,
    )
    return AppContainer(
        settings=settings,
        plan_repository=plan_repository,
        analytics_service=analytics_service,
        weight_import_service=weight_import_service,
    )
