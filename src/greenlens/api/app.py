"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

import httpx
from fastapi import FastAPI, HTTPException, Request, Response, status

from greenlens.adapters.activity_payloads import ActivityInput, ActivityPayloadError
from greenlens.app_logging import configure_logging
from greenlens.containers import AppContainer
from greenlens.domain.activities import (
    Activity,
    CategoryFilter,
    CommuteDetails,
    ElectricityDetails,
    FoodDetails,
)
from greenlens.domain.history import HistoryReport
from greenlens.services.filters import parse_selector
from greenlens.services.pdf_export import THEMES


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    async def load_report(
        request: Request, category: str | None, today: date | None
    ) -> HistoryReport:
        state_container: AppContainer = request.app.state.container
        try:
            selector = parse_selector(category)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown category: {category}",
            ) from exc
        try:
            return await state_container.history_service.load(selector, today)
        except (httpx.HTTPError, ActivityPayloadError) as exc:
            logger.exception("Failed to fetch history data")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Activity store unavailable",
            ) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/history")
    async def history(
        request: Request, category: str | None = None, today: date | None = None
    ) -> dict[str, object]:
        """Return the seven-day history report."""
        report = await load_report(request, category, today)
        return _serialize_report(report)

    @app.get("/history/export.csv")
    async def export_csv(
        request: Request, category: str | None = None, today: date | None = None
    ) -> Response:
        """Download the filtered history as CSV."""
        report = await load_report(request, category, today)
        service = request.app.state.container.history_service
        filename, content = service.csv_export(report)
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/history/export.pdf")
    async def export_pdf(
        request: Request,
        category: str | None = None,
        today: date | None = None,
        theme: str | None = None,
    ) -> Response:
        """Download the filtered history as PDF."""
        if theme is not None and theme not in THEMES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown theme: {theme}",
            )
        report = await load_report(request, category, today)
        service = request.app.state.container.history_service
        filename, content = service.pdf_export(
            report, THEMES[theme] if theme else None
        )
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/history/activities", status_code=status.HTTP_201_CREATED)
    async def create_activity(
        activity: ActivityInput, request: Request
    ) -> dict[str, object]:
        """Create an activity in the store."""
        state_container: AppContainer = request.app.state.container
        try:
            created = await state_container.history_service.create_activity(activity)
        except (httpx.HTTPError, ActivityPayloadError) as exc:
            logger.exception("Failed to create activity")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Activity store unavailable",
            ) from exc
        return {"success": True, "activity": _serialize_activity(created)}

    @app.delete("/history/activities/{activity_id}")
    async def delete_activity(activity_id: str, request: Request) -> dict[str, bool]:
        """Delete an activity from the store."""
        state_container: AppContainer = request.app.state.container
        success = await state_container.history_service.delete_activity(activity_id)
        return {"success": success}

    return app


def _serialize_report(report: HistoryReport) -> dict[str, object]:
    return {
        "today": report.today.isoformat(),
        "category": str(report.category),
        "stats": {
            "totalCo2": report.stats.total_co2,
            "dailyAverage": report.stats.daily_average,
            "highestDay": report.stats.highest_day,
            "totalEntries": report.stats.total_entries,
        },
        "window": [
            {"date": bucket.date.isoformat(), "co2e": bucket.co2e}
            for bucket in report.window
        ],
        "chart": {"labels": report.chart.labels, "values": report.chart.values},
        "breakdown": {
            str(category): {"total": entry.total, "percent": entry.percent}
            for category, entry in report.breakdown.items()
            if report.category in {CategoryFilter.ALL, category}
        },
        "equivalents": {
            "tonnes": report.equivalents.tonnes,
            "treesPerYear": report.equivalents.trees_per_year,
            "carMiles": report.equivalents.car_miles,
        },
        "activities": [_serialize_activity(activity) for activity in report.filtered],
    }


def _serialize_activity(activity: Activity) -> dict[str, object]:
    data: dict[str, object] = {
        "id": activity.id,
        "activityType": activity.activity_type,
        "date": activity.date.isoformat(),
        "createdAt": activity.created_at.isoformat(),
        "co2e": activity.co2e,
        "notes": activity.notes,
    }
    details = activity.details
    if isinstance(details, CommuteDetails):
        data.update(distance=details.distance, transportMode=details.transport_mode)
    elif isinstance(details, FoodDetails):
        data.update(
            foodType=details.food_type, quantity=details.quantity, unit=details.unit
        )
    elif isinstance(details, ElectricityDetails):
        data.update(
            energyConsumed=details.energy_consumed, energyUnit=details.energy_unit
        )
    return data
