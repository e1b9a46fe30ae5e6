"""Analytics API endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from fitness_metrics.containers import AppContainer

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _today(today: date | None) -> date:
    return today or date.today()


@router.get("/weight")
async def weight_analytics(
    user_id: UUID, request: Request, period: str = "month", today: date | None = None
) -> dict[str, object]:
    """Return weight entries, weekly averages and summary for a period."""
    result = _container(request).analytics_service.weight_analytics(
        user_id, period, _today(today)
    )
    return {"data": asdict(result)}


@router.get("/steps")
async def steps_analytics(
    user_id: UUID, request: Request, period: str = "month", today: date | None = None
) -> dict[str, object]:
    """Return daily steps against goal for a period."""
    result = _container(request).analytics_service.steps_analytics(
        user_id, period, _today(today)
    )
    return {"data": asdict(result)}


@router.get("/workouts")
async def workout_analytics(
    user_id: UUID, request: Request, period: str = "month", today: date | None = None
) -> dict[str, object]:
    """Return workout totals for a period."""
    result = _container(request).analytics_service.workout_analytics(
        user_id, period, _today(today)
    )
    return {"data": asdict(result)}


@router.get("/meals")
async def meal_analytics(
    user_id: UUID, request: Request, period: str = "month", today: date | None = None
) -> dict[str, object]:
    """Return calories, macros and meal-type distribution for a period."""
    result = _container(request).analytics_service.meal_analytics(
        user_id, period, _today(today)
    )
    return {"data": asdict(result)}


@router.get("/overview")
async def overview(
    user_id: UUID, request: Request, today: date | None = None
) -> dict[str, object]:
    """Return the dashboard overview for today."""
    result = _container(request).analytics_service.overview(user_id, _today(today))
    return {"data": asdict(result)}
