"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

import httpx
from fastapi import FastAPI, HTTPException, Request, status

from pku_diet.app_logging import configure_logging
from pku_diet.containers import AppContainer
from pku_diet.domain.nutrients import Classification, InvalidTargetError
from pku_diet.services.menus import MenuPayloadError
from pku_diet.services.rollup import (
    DaySummary,
    InvalidWeekStartError,
    NutrientStatus,
    WeekSummary,
)

_UNPROCESSABLE = 422


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

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/patients/{patient_id}/days/{day}/summary")
    async def day_summary(
        patient_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return nutrient totals and severities for one day."""
        state_container: AppContainer = request.app.state.container
        try:
            summary = await state_container.rollup_service.summarize_day(
                patient_id, day
            )
        except InvalidTargetError as exc:
            raise HTTPException(
                status_code=_UNPROCESSABLE, detail=str(exc)
            ) from exc
        except (httpx.HTTPError, MenuPayloadError) as exc:
            logger.exception("Menu backend failed for day %s", day.isoformat())
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return _format_day_summary(summary)

    @app.get("/patients/{patient_id}/weeks/{week_start}/summary")
    async def week_summary(
        patient_id: UUID,
        week_start: date,
        request: Request,
        week_start_day: str | None = None,
    ) -> dict[str, object]:
        """Return independent per-day summaries for a week."""
        state_container: AppContainer = request.app.state.container
        try:
            summary = await state_container.rollup_service.summarize_week(
                patient_id, week_start, week_start_day
            )
        except (InvalidTargetError, InvalidWeekStartError) as exc:
            raise HTTPException(
                status_code=_UNPROCESSABLE, detail=str(exc)
            ) from exc
        except (httpx.HTTPError, MenuPayloadError) as exc:
            logger.exception("Menu backend failed for week %s", week_start.isoformat())
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return _format_week_summary(summary)

    return app


def _format_classification(classification: Classification) -> dict[str, object]:
    return {
        "severity": classification.severity.value,
        "percentage": round(classification.percentage, 1),
    }


def _format_nutrient(entry: NutrientStatus) -> dict[str, object]:
    return {
        "nutrient": entry.nutrient.value,
        "unit": entry.unit,
        "target": entry.target,
        "planned": entry.planned,
        "consumed": entry.consumed,
        "consumed_status": _format_classification(entry.consumed_status),
        "planned_status": _format_classification(entry.planned_status),
        "badge_status": _format_classification(entry.badge_status),
        "consumed_bar": round(entry.consumed_bar, 1),
        "planned_bar": round(entry.planned_bar, 1),
    }


def _format_day_summary(summary: DaySummary) -> dict[str, object]:
    return {
        "date": summary.day.isoformat(),
        "nutrients": [_format_nutrient(entry) for entry in summary.nutrients],
        "total_items": summary.total_items,
        "slot_count": summary.slot_count,
        "filled_slots": summary.filled_slots,
        "is_generated": summary.is_generated,
        "emergency_mode": summary.emergency_mode,
        "phe_overage_mg": summary.phe_overage_mg,
    }


def _format_week_summary(summary: WeekSummary) -> dict[str, object]:
    return {
        "days": [_format_day_summary(day) for day in summary.days],
        "generated_days": summary.generated_days,
        "total_days": summary.total_days,
    }
