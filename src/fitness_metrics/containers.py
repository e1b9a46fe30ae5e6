"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fitness_metrics.adapters.supabase_entry_repository import SupabaseEntryRepository
from fitness_metrics.adapters.supabase_plan_repository import SupabasePlanRepository
from fitness_metrics.config import Settings
from fitness_metrics.services.analytics import AnalyticsService, PlanRepository
from fitness_metrics.services.imports import WeightImportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    plan_repository: PlanRepository
    analytics_service: AnalyticsService
    weight_import_service: WeightImportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    analytics_service = AnalyticsService(
        entries=entry_repository,
        plans=plan_repository,
        default_steps_goal=resolved_settings.default_steps_goal,
        default_weekly_workout_goal=resolved_settings.default_weekly_workout_goal,
        streak_lookback_days=resolved_settings.streak_lookback_days,
    )
    weight_import_service = WeightImportService(
        repository=entry_repository,
        max_rows=resolved_settings.import_max_rows,
        max_workers=resolved_settings.import_max_workers,
        retry_attempts=resolved_settings.import_retry_attempts,
        retry_delay_seconds=resolved_settings.import_retry_delay_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        plan_repository=plan_repository,
        analytics_service=analytics_service,
        weight_import_service=weight_import_service,
    )
