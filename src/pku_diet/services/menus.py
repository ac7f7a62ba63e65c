"""Menu retrieval from the PKU backend."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

import httpx

from pku_diet.adapters.pku_api_client import PkuApiClient
from pku_diet.domain.menus import MealEntry, MealSlot, MenuDay
from pku_diet.domain.nutrients import NutrientName, NutrientQuantity

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

# Backend field names, UI shape first, then the API DTO shape.
_PLANNED_FIELDS: dict[NutrientName, tuple[str, ...]] = {
    NutrientName.PHENYLALANINE: ("plannedPhenylalanine", "calculatedPheMg"),
    NutrientName.PROTEIN: ("plannedProtein", "calculatedProteinG"),
    NutrientName.CALORIES: ("plannedCalories", "calculatedKcal"),
    NutrientName.FAT: ("plannedFats", "calculatedFatG"),
}
_CONSUMED_FIELDS: dict[NutrientName, str] = {
    NutrientName.PHENYLALANINE: "consumedPhenylalanine",
    NutrientName.PROTEIN: "consumedProtein",
    NutrientName.CALORIES: "consumedCalories",
    NutrientName.FAT: "consumedFats",
}

_HTTP_NOT_FOUND = 404


class MenuPayloadError(RuntimeError):
    """Raised when the backend returns a menu payload that cannot be parsed."""


@dataclass
class MenuService:
    """Service for reading day and week menus."""

    api_client: PkuApiClient
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def get_day(self, day: date) -> MenuDay | None:
        """Return the menu for a date, or None when the backend has none."""
        try:
            payload = await self._call_with_retry(
                lambda: self.api_client.get_menu_day(day),
                action=f"get_menu_day:{day.isoformat()}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == _HTTP_NOT_FOUND:
                return None
            raise
        try:
            return parse_menu_day(payload, fallback_day=day)
        except (AttributeError, TypeError, ValueError) as exc:
            raise MenuPayloadError(
                f"Malformed menu for {day.isoformat()}: {exc}"
            ) from exc

    async def get_week(self, week_start: date) -> list[MenuDay]:
        """Return the menus of the week starting at week_start."""
        try:
            payload = await self._call_with_retry(
                lambda: self.api_client.get_menu_week(week_start),
                action=f"get_menu_week:{week_start.isoformat()}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == _HTTP_NOT_FOUND:
                return []
            raise
        raw_days = payload.get("days") or payload.get("menuDays") or []
        try:
            return [parse_menu_day(raw) for raw in raw_days]
        except (AttributeError, TypeError, ValueError) as exc:
            raise MenuPayloadError(
                f"Malformed week starting {week_start.isoformat()}: {exc}"
            ) from exc

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the backend, retrying failures other than 404."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                status_code = _status_code_from_exception(exc)
                if status_code == _HTTP_NOT_FOUND:
                    raise
                attempt += 1
                _logger.warning(
                    "Menu %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code if status_code is not None else "n/a",
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> int | None:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def parse_menu_day(
    payload: dict[str, object], fallback_day: date | None = None
) -> MenuDay:
    """Build a MenuDay from either backend payload shape."""
    raw_date = payload.get("date") or payload.get("menuDate")
    if isinstance(raw_date, str) and raw_date:
        day = date.fromisoformat(raw_date[:10])
    elif fallback_day is not None:
        day = fallback_day
    else:
        raise ValueError("Menu day payload has no date")

    raw_slots = payload.get("slots") or payload.get("mealSlots") or []
    return MenuDay(
        day=day,
        slots=[_parse_slot(raw) for raw in raw_slots],
        is_generated=bool(payload.get("isGenerated", False)),
        emergency_mode=bool(payload.get("emergencyMode", False)),
    )


def _parse_slot(payload: dict[str, object]) -> MealSlot:
    slot_type = (
        payload.get("slotType") or payload.get("slotName") or payload.get("type") or ""
    )
    raw_entries = payload.get("entries") or payload.get("menuEntries") or []
    slot_id = payload.get("id") or payload.get("slotId")
    return MealSlot(
        slot_type=str(slot_type),
        entries=[_parse_entry(raw) for raw in raw_entries],
        slot_id=str(slot_id) if slot_id is not None else None,
    )


def _parse_entry(payload: dict[str, object]) -> MealEntry:
    planned: dict[NutrientName, NutrientQuantity] = {}
    for nutrient, keys in _PLANNED_FIELDS.items():
        amount = _first_number(payload, keys)
        if amount is not None:
            planned[nutrient] = NutrientQuantity(nutrient=nutrient, amount=amount)

    consumed: dict[NutrientName, NutrientQuantity] = {}
    for nutrient, key in _CONSUMED_FIELDS.items():
        amount = _first_number(payload, (key,))
        if amount is not None:
            consumed[nutrient] = NutrientQuantity(nutrient=nutrient, amount=amount)

    is_consumed = bool(payload.get("consumed") or payload.get("isConsumed"))
    if not consumed and is_consumed:
        # The API DTO only flags consumption; the whole serving counts.
        consumed = dict(planned)

    item_id = (
        payload.get("itemId")
        or payload.get("productId")
        or payload.get("dishId")
        or payload.get("id")
    )
    item_name = payload.get("itemName")
    return MealEntry(
        item_id=str(item_id) if item_id is not None else None,
        planned=planned,
        consumed=consumed,
        is_consumed=is_consumed,
        item_name=str(item_name) if item_name is not None else None,
    )


def _first_number(payload: dict[str, object], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return float(value)
    return None
