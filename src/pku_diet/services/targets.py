"""Patient nutrient targets."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from pku_diet.domain.nutrients import NutrientName, NutrientTarget, default_polarity
from pku_diet.domain.targets import NormPrescription
from pku_diet.services.cache import Cache

_logger = logging.getLogger(__name__)

DEFAULT_TARGETS: dict[NutrientName, float] = {
    NutrientName.PHENYLALANINE: 300.0,
    NutrientName.PROTEIN: 50.0,
    NutrientName.CALORIES: 2000.0,
    NutrientName.FAT: 65.0,
}


class TargetsRepository(Protocol):
    """Persistence interface for prescribed norms."""

    def get_active_prescription(self, patient_id: UUID) -> NormPrescription | None:
        """Return the patient's current prescription, if any."""


@dataclass
class TargetsService:
    """Resolve per-patient targets, falling back to configured defaults."""

    repository: TargetsRepository
    cache: Cache
    defaults: dict[NutrientName, float] = field(
        default_factory=lambda: dict(DEFAULT_TARGETS)
    )
    ttl_seconds: int = 300

    def get_targets(self, patient_id: UUID) -> dict[NutrientName, NutrientTarget]:
        """Return a target for every nutrient."""
        cache_key = f"targets:{patient_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return cached

        prescription = self.repository.get_active_prescription(patient_id)
        if prescription is None:
            _logger.info("No active prescription for patient %s", patient_id)
            values = dict(self.defaults)
        else:
            values = _prescribed_values(prescription, self.defaults)

        targets = {
            nutrient: NutrientTarget(
                nutrient=nutrient,
                value=value,
                polarity=default_polarity(nutrient),
            )
            for nutrient, value in values.items()
        }
        self.cache.set(cache_key, targets, ttl_seconds=self.ttl_seconds)
        return targets

    def forget(self, patient_id: UUID) -> None:
        """Drop cached targets after a prescription change."""
        self.cache.invalidate(f"targets:{patient_id}")


def _prescribed_values(
    prescription: NormPrescription, defaults: dict[NutrientName, float]
) -> dict[NutrientName, float]:
    prescribed = {
        NutrientName.PHENYLALANINE: prescription.phe_limit_mg,
        NutrientName.PROTEIN: prescription.protein_g,
        NutrientName.CALORIES: prescription.calories_kcal,
        NutrientName.FAT: prescription.fat_g,
    }
    values = dict(defaults)
    for nutrient, value in prescribed.items():
        if value is not None:
            values[nutrient] = value
    return values
