"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

import httpx
import pytest

from pku_diet.adapters.pku_api_client import PkuApiClient
from pku_diet.config import Settings
from pku_diet.containers import AppContainer
from pku_diet.domain.menus import MealEntry, MealSlot
from pku_diet.domain.nutrients import (
    NutrientName,
    NutrientQuantity,
    NutrientTarget,
    default_polarity,
)
from pku_diet.domain.targets import NormPrescription
from pku_diet.services.cache import TtlCache
from pku_diet.services.menus import MenuService
from pku_diet.services.rollup import RollupService
from pku_diet.services.targets import DEFAULT_TARGETS, TargetsRepository, TargetsService

PHE = NutrientName.PHENYLALANINE
PROTEIN = NutrientName.PROTEIN
CALORIES = NutrientName.CALORIES
FAT = NutrientName.FAT


def make_entry(
    planned: dict[NutrientName, float] | None = None,
    consumed: dict[NutrientName, float] | None = None,
    item_id: str = "item",
) -> MealEntry:
    """Build a meal entry from plain nutrient amounts."""
    return MealEntry(
        item_id=item_id,
        planned={
            nutrient: NutrientQuantity(nutrient, amount)
            for nutrient, amount in (planned or {}).items()
        },
        consumed={
            nutrient: NutrientQuantity(nutrient, amount)
            for nutrient, amount in (consumed or {}).items()
        },
        is_consumed=bool(consumed),
    )


def make_slot(slot_type: str, *entries: MealEntry) -> MealSlot:
    return MealSlot(slot_type=slot_type, entries=list(entries))


def default_targets() -> dict[NutrientName, NutrientTarget]:
    return {
        nutrient: NutrientTarget(nutrient, value, default_polarity(nutrient))
        for nutrient, value in DEFAULT_TARGETS.items()
    }


def http_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://pku.test/api/v1/menus")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"HTTP {status_code}", request=request, response=response
    )


@dataclass
class InMemoryTargetsRepository(TargetsRepository):
    """In-memory prescription repository for tests."""

    prescriptions: dict[UUID, NormPrescription] = field(default_factory=dict)
    calls: int = 0

    def get_active_prescription(self, patient_id: UUID) -> NormPrescription | None:
        self.calls += 1
        return self.prescriptions.get(patient_id)


@dataclass
class FakePkuApiClient(PkuApiClient):
    """Fake backend client serving canned payloads."""

    days: dict[date, dict[str, object]] = field(default_factory=dict)
    weeks: dict[date, dict[str, object]] = field(default_factory=dict)
    failures: list[Exception] = field(default_factory=list)
    calls: int = 0

    async def get_menu_day(self, day: date) -> dict[str, object]:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        if day not in self.days:
            raise http_error(404)
        return self.days[day]

    async def get_menu_week(self, week_start: date) -> dict[str, object]:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        if week_start not in self.weeks:
            raise http_error(404)
        return self.weeks[week_start]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        pku_api_base_url="https://pku.test",
        pku_api_token="api-token",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def targets_repository() -> InMemoryTargetsRepository:
    return InMemoryTargetsRepository()


@pytest.fixture
def api_client() -> FakePkuApiClient:
    return FakePkuApiClient()


@pytest.fixture
def container(
    settings: Settings,
    targets_repository: InMemoryTargetsRepository,
    api_client: FakePkuApiClient,
) -> AppContainer:
    targets_service = TargetsService(
        repository=targets_repository,
        cache=TtlCache(),
        defaults=settings.default_targets(),
    )
    menu_service = MenuService(api_client=api_client, retry_delay_seconds=0)
    rollup_service = RollupService(
        menu_service=menu_service,
        targets_service=targets_service,
        tracked_nutrients=[PHE, PROTEIN, CALORIES, FAT],
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        menu_service=menu_service,
        targets_service=targets_service,
        rollup_service=rollup_service,
        close_resources=close_resources,
    )
