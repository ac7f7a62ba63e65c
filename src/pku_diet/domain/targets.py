"""Domain models for prescribed nutrient norms."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NormPrescription:
    """Active daily norms prescribed for a patient."""

    phe_limit_mg: float | None = None
    protein_g: float | None = None
    calories_kcal: float | None = None
    fat_g: float | None = None
