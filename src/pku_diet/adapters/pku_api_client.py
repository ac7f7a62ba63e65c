"""HTTP client for the PKU menu backend."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

import httpx


class PkuApiClient(Protocol):
    """Interface for menu reads from the PKU backend."""

    async def get_menu_day(self, day: date) -> dict[str, object]:
        """Fetch a day's menu and return raw API data."""

    async def get_menu_week(self, week_start: date) -> dict[str, object]:
        """Fetch a week's menus and return raw API data."""


@dataclass
class HttpxPkuApiClient(PkuApiClient):
    """HTTPX-backed PKU backend client."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None
    timeout_seconds: float = 15

    @classmethod
    def create(cls, base_url: str, token: str | None = None) -> "HttpxPkuApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            token=token,
        )

    async def get_menu_day(self, day: date) -> dict[str, object]:
        """Fetch a day's menu."""
        return await self._get(f"/api/v1/menus/days/{day.isoformat()}")

    async def get_menu_week(self, week_start: date) -> dict[str, object]:
        """Fetch the menus of a week."""
        return await self._get(f"/api/v1/menus/weeks/{week_start.isoformat()}")

    async def _get(self, path: str) -> dict[str, object]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            headers=headers,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
