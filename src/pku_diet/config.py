"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from pku_diet.domain.nutrients import ALL_NUTRIENTS, NutrientName

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    pku_api_base_url: str
    pku_api_token: str | None = None
    supabase_url: str
    supabase_service_key: str
    default_phe_limit_mg: float = 300
    default_protein_g: float = 50
    default_calories_kcal: float = 2000
    default_fat_g: float = 65
    tracked_nutrients: str = "phenylalanine,protein,calories,fat"
    week_start_day: Literal["monday", "sunday"] = "monday"
    targets_cache_ttl_seconds: int = 300
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def default_targets(self) -> dict[NutrientName, float]:
        """Return fallback targets for patients without a prescription."""
        return {
            NutrientName.PHENYLALANINE: self.default_phe_limit_mg,
            NutrientName.PROTEIN: self.default_protein_g,
            NutrientName.CALORIES: self.default_calories_kcal,
            NutrientName.FAT: self.default_fat_g,
        }


def parse_tracked_nutrients(raw: str | None) -> list[NutrientName]:
    """Parse a comma-separated nutrient list from env."""
    if raw is None:
        return list(ALL_NUTRIENTS)
    nutrients: list[NutrientName] = []
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if not value:
            continue
        try:
            nutrient = NutrientName(value)
        except ValueError:
            continue
        if nutrient not in nutrients:
            nutrients.append(nutrient)
    return nutrients or list(ALL_NUTRIENTS)
