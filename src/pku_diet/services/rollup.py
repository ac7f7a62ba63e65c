"""Day and week nutrient rollups for the diary views."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from pku_diet.domain.menus import MenuDay
from pku_diet.domain.nutrients import (
    ALL_NUTRIENTS,
    NUTRIENT_UNITS,
    Classification,
    NutrientName,
    NutrientTarget,
)
from pku_diet.domain.totals import DayTotals
from pku_diet.services.aggregation import aggregate, count_entries
from pku_diet.services.classification import (
    badge_value,
    bar_width,
    classify_target,
)
from pku_diet.services.menus import MenuService
from pku_diet.services.targets import TargetsService

_logger = logging.getLogger(__name__)

WEEK_START_DAYS = ("monday", "sunday")


class InvalidWeekStartError(ValueError):
    """Raised for a week start other than Monday or Sunday."""


@dataclass(frozen=True)
class NutrientStatus:
    """Totals and classifications of one nutrient for a day."""

    nutrient: NutrientName
    unit: str
    target: float
    planned: float
    consumed: float
    consumed_status: Classification
    planned_status: Classification
    badge_status: Classification
    consumed_bar: float
    planned_bar: float


@dataclass(frozen=True)
class DaySummary:
    """Everything the day view needs for one date."""

    day: date
    totals: DayTotals
    nutrients: list[NutrientStatus]
    total_items: int
    slot_count: int
    filled_slots: list[str]
    is_generated: bool
    emergency_mode: bool
    phe_overage_mg: float

    def status(self, nutrient: NutrientName) -> NutrientStatus | None:
        """Return the status for a nutrient if it is tracked."""
        for entry in self.nutrients:
            if entry.nutrient is nutrient:
                return entry
        return None


@dataclass(frozen=True)
class WeekSummary:
    """Independent per-day summaries for a week view."""

    days: list[DaySummary]
    generated_days: int
    total_days: int


def summarize_day(
    menu_day: MenuDay,
    targets: Mapping[NutrientName, NutrientTarget],
    tracked_nutrients: Iterable[NutrientName] = ALL_NUTRIENTS,
) -> DaySummary:
    """Aggregate a day and classify each tracked nutrient against its target."""
    tracked = list(dict.fromkeys(tracked_nutrients))
    totals = aggregate(menu_day.slots, tracked)

    statuses = []
    for nutrient in tracked:
        target = targets.get(nutrient)
        if target is None:
            _logger.debug("No target for %s, skipping", nutrient.value)
            continue
        planned = totals.planned(nutrient)
        consumed = totals.consumed(nutrient)
        statuses.append(
            NutrientStatus(
                nutrient=nutrient,
                unit=NUTRIENT_UNITS[nutrient],
                target=target.value,
                planned=planned,
                consumed=consumed,
                consumed_status=classify_target(consumed, target),
                planned_status=classify_target(planned, target),
                badge_status=classify_target(badge_value(consumed, planned), target),
                consumed_bar=bar_width(consumed, target.value),
                planned_bar=bar_width(planned, target.value),
            )
        )

    phe_overage = 0.0
    phe_target = targets.get(NutrientName.PHENYLALANINE)
    if phe_target is not None and NutrientName.PHENYLALANINE in tracked:
        consumed_phe = totals.consumed(NutrientName.PHENYLALANINE)
        if consumed_phe > phe_target.value:
            phe_overage = consumed_phe - phe_target.value

    return DaySummary(
        day=menu_day.day,
        totals=totals,
        nutrients=statuses,
        total_items=count_entries(menu_day.slots),
        slot_count=len(menu_day.slots),
        filled_slots=[slot.slot_type for slot in menu_day.slots if slot.entries],
        is_generated=menu_day.is_generated,
        emergency_mode=menu_day.emergency_mode,
        phe_overage_mg=phe_overage,
    )


def sort_week_days(days: Iterable[MenuDay], week_start_day: str) -> list[MenuDay]:
    """Order days by weekday, starting from Monday or Sunday."""
    if week_start_day == "monday":
        return sorted(days, key=lambda menu_day: menu_day.day.weekday())
    if week_start_day == "sunday":
        return sorted(days, key=lambda menu_day: (menu_day.day.weekday() + 1) % 7)
    raise InvalidWeekStartError(
        f"week_start_day must be one of {WEEK_START_DAYS}, got {week_start_day!r}"
    )


def summarize_week(
    days: Iterable[MenuDay],
    targets: Mapping[NutrientName, NutrientTarget],
    tracked_nutrients: Iterable[NutrientName] = ALL_NUTRIENTS,
    week_start_day: str = "monday",
) -> WeekSummary:
    """Summarize each day of a week on its own."""
    tracked = list(dict.fromkeys(tracked_nutrients))
    ordered = sort_week_days(days, week_start_day)
    summaries = [summarize_day(menu_day, targets, tracked) for menu_day in ordered]
    return WeekSummary(
        days=summaries,
        generated_days=sum(1 for menu_day in ordered if menu_day.is_generated),
        total_days=len(ordered),
    )


@dataclass
class RollupService:
    """Fetches menus and targets, then builds day and week summaries."""

    menu_service: MenuService
    targets_service: TargetsService
    tracked_nutrients: list[NutrientName]
    week_start_day: str = "monday"

    async def summarize_day(self, patient_id: UUID, day: date) -> DaySummary:
        """Return the summary of a patient's day."""
        menu_day = await self.menu_service.get_day(day) or MenuDay(day=day)
        targets = self.targets_service.get_targets(patient_id)
        summary = summarize_day(menu_day, targets, self.tracked_nutrients)
        if summary.phe_overage_mg > 0:
            _logger.warning(
                "PHE limit exceeded: patient=%s day=%s overage_mg=%.1f",
                patient_id,
                day.isoformat(),
                summary.phe_overage_mg,
            )
        return summary

    async def summarize_week(
        self,
        patient_id: UUID,
        week_start: date,
        week_start_day: str | None = None,
    ) -> WeekSummary:
        """Return per-day summaries for the week starting at week_start."""
        start_day = week_start_day or self.week_start_day
        if start_day not in WEEK_START_DAYS:
            raise InvalidWeekStartError(
                f"week_start_day must be one of {WEEK_START_DAYS}, got {start_day!r}"
            )
        days = await self.menu_service.get_week(week_start)
        targets = self.targets_service.get_targets(patient_id)
        return summarize_week(days, targets, self.tracked_nutrients, start_day)
