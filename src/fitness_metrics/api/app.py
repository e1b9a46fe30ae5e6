"""FastAPI application factory."""

import logging
from dataclasses import asdict
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from fitness_metrics.api.analytics import router as analytics_router
from fitness_metrics.app_logging import configure_logging
from fitness_metrics.containers import AppContainer
from fitness_metrics.domain.errors import InvalidQuantity, MetricsError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(analytics_router)

    @app.exception_handler(MetricsError)
    async def metrics_error_handler(
        request: Request, exc: MetricsError
    ) -> JSONResponse:
        status_code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if isinstance(exc, InvalidQuantity)
            else status.HTTP_400_BAD_REQUEST
        )
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "message": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/weight/bulk-upload")
    async def weight_bulk_upload(
        user_id: UUID, request: Request
    ) -> dict[str, object]:
        """Import weight readings from a CSV request body."""
        state_container: AppContainer = request.app.state.container
        try:
            raw_text = (await request.body()).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Upload must be UTF-8 text",
            ) from exc
        plan = state_container.plan_repository.get_active_plan(user_id)
        result = await state_container.weight_import_service.import_weights(
            user_id, raw_text, plan
        )
        return {
            "message": _format_import_message(result.imported_count),
            "data": asdict(result),
        }

    @app.get("/weight/weekly")
    async def weight_weekly(user_id: UUID, request: Request) -> dict[str, object]:
        """Return weekly weight statistics, newest week first."""
        state_container: AppContainer = request.app.state.container
        buckets = state_container.analytics_service.weekly_weights(user_id)
        return {"data": [asdict(bucket) for bucket in buckets]}

    @app.get("/steps/weekly")
    async def steps_weekly(user_id: UUID, request: Request) -> dict[str, object]:
        """Return weekly step totals, newest week first."""
        state_container: AppContainer = request.app.state.container
        weeks = state_container.analytics_service.weekly_steps(user_id)
        return {"data": [asdict(week) for week in weeks]}

    return app


def _format_import_message(imported_count: int) -> str:
    noun = "entry" if imported_count == 1 else "entries"
    return f"Imported {imported_count} weight {noun}"
