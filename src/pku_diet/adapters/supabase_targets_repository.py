"""Supabase repository for prescribed nutrient norms."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from pku_diet.domain.targets import NormPrescription
from pku_diet.services.targets import TargetsRepository


@dataclass
class SupabaseTargetsRepository(TargetsRepository):
    """Supabase implementation reading the norm_prescription table."""

    client: Client

    def get_active_prescription(self, patient_id: UUID) -> NormPrescription | None:
        """Return the most recently prescribed active norms."""
        response = (
            self.client.table("norm_prescription")
            .select(
                "phe_limit_mg_per_day, protein_limit_g_per_day, "
                "kcal_min_per_day, fat_limit_g_per_day"
            )
            .eq("patient_id", str(patient_id))
            .eq("is_active", True)
            .order("prescribed_date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> NormPrescription:
    return NormPrescription(
        phe_limit_mg=_optional_float(row.get("phe_limit_mg_per_day")),
        protein_g=_optional_float(row.get("protein_limit_g_per_day")),
        calories_kcal=_optional_float(row.get("kcal_min_per_day")),
        fat_g=_optional_float(row.get("fat_limit_g_per_day")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
