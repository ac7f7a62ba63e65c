"""Domain models for aggregated nutrient totals."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from pku_diet.domain.nutrients import NutrientName


@dataclass(frozen=True)
class NutrientTotals:
    """Planned and consumed sums for one nutrient."""

    planned: float = 0.0
    consumed: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            planned=self.planned + other.planned,
            consumed=self.consumed + other.consumed,
        )


@dataclass(frozen=True)
class DayTotals:
    """Per-nutrient totals for a day."""

    totals: dict[NutrientName, NutrientTotals] = field(default_factory=dict)

    @classmethod
    def zero(cls, nutrients: Iterable[NutrientName]) -> "DayTotals":
        """Return all-zero totals for the given nutrients."""
        return cls(totals={nutrient: NutrientTotals() for nutrient in nutrients})

    @property
    def nutrients(self) -> list[NutrientName]:
        return list(self.totals)

    def get(self, nutrient: NutrientName) -> NutrientTotals:
        """Return totals for a nutrient; untracked nutrients are zero."""
        return self.totals.get(nutrient, NutrientTotals())

    def planned(self, nutrient: NutrientName) -> float:
        return self.get(nutrient).planned

    def consumed(self, nutrient: NutrientName) -> float:
        return self.get(nutrient).consumed

    def __add__(self, other: "DayTotals") -> "DayTotals":
        combined: dict[NutrientName, NutrientTotals] = dict(self.totals)
        for nutrient, value in other.totals.items():
            combined[nutrient] = combined.get(nutrient, NutrientTotals()) + value
        return DayTotals(totals=combined)
