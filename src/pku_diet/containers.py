"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pku_diet.adapters.pku_api_client import HttpxPkuApiClient
from pku_diet.adapters.supabase_targets_repository import SupabaseTargetsRepository
from pku_diet.config import Settings, parse_tracked_nutrients
from pku_diet.services.cache import TtlCache
from pku_diet.services.menus import MenuService
from pku_diet.services.rollup import RollupService
from pku_diet.services.targets import TargetsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    menu_service: MenuService
    targets_service: TargetsService
    rollup_service: RollupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    targets_service = TargetsService(
        repository=SupabaseTargetsRepository(supabase_client),
        cache=TtlCache(),
        defaults=resolved_settings.default_targets(),
        ttl_seconds=resolved_settings.targets_cache_ttl_seconds,
    )
    api_client = HttpxPkuApiClient.create(
        base_url=resolved_settings.pku_api_base_url,
        token=resolved_settings.pku_api_token,
    )
    menu_service = MenuService(api_client=api_client)
    rollup_service = RollupService(
        menu_service=menu_service,
        targets_service=targets_service,
        tracked_nutrients=parse_tracked_nutrients(resolved_settings.tracked_nutrients),
        week_start_day=resolved_settings.week_start_day,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        menu_service=menu_service,
        targets_service=targets_service,
        rollup_service=rollup_service,
        close_resources=close_resources,
    )
