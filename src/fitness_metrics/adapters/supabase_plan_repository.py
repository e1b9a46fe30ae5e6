"""Supabase repository for user plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.analytics import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for plan lookups."""

    client: Client

    def get_active_plan(self, user_id: UUID) -> PlanContext | None:
        """Return the most recent active or paused plan for a user."""
        response = (
            self.client.table("plans")
            .select("start_date, number_of_weeks, status, goals")
            .eq("user_id", str(user_id))
            .in_("status", ["active", "paused"])
            .order("start_date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])


def _parse_plan(row: dict[str, object]) -> PlanContext:
    goals = row.get("goals") if isinstance(row.get("goals"), dict) else {}
    target_weight = goals.get("target_weight")
    return PlanContext(
        start_date=date.fromisoformat(str(row["start_date"])[:10]),
        number_of_weeks=int(row.get("number_of_weeks") or 1),
        status=str(row.get("status") or "active"),
        daily_steps_goal=int(goals.get("daily_steps_goal") or 10000),
        weekly_workout_goal=int(goals.get("weekly_workout_goal") or 4),
        target_weight=float(target_weight) if target_weight is not None else None,
    )
