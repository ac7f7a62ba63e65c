"""Nutrient domain models."""

from dataclasses import dataclass
from enum import Enum


class NutrientName(Enum):
    """Nutrients tracked for a PKU diet."""

    PHENYLALANINE = "phenylalanine"
    PROTEIN = "protein"
    CALORIES = "calories"
    FAT = "fat"


NUTRIENT_UNITS: dict[NutrientName, str] = {
    NutrientName.PHENYLALANINE: "mg",
    NutrientName.PROTEIN: "g",
    NutrientName.CALORIES: "kcal",
    NutrientName.FAT: "g",
}

ALL_NUTRIENTS: tuple[NutrientName, ...] = tuple(NutrientName)


class Polarity(Enum):
    """Which side of a target is penalized."""

    UPPER_BOUND = "upper_bound"
    GOAL = "goal"


class Severity(Enum):
    """Severity band of a value measured against its target."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class InvalidTargetError(ValueError):
    """Raised when a nutrient target is negative."""


def default_polarity(nutrient: NutrientName) -> Polarity:
    """Phenylalanine is a ceiling, everything else is a goal."""
    if nutrient is NutrientName.PHENYLALANINE:
        return Polarity.UPPER_BOUND
    return Polarity.GOAL


@dataclass(frozen=True)
class NutrientQuantity:
    """Amount of a single nutrient in its fixed unit."""

    nutrient: NutrientName
    amount: float

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(
                f"{self.nutrient.value} amount must be non-negative, got {self.amount}"
            )

    @property
    def unit(self) -> str:
        return NUTRIENT_UNITS[self.nutrient]


@dataclass(frozen=True)
class NutrientTarget:
    """Per-patient ceiling or goal for a nutrient."""

    nutrient: NutrientName
    value: float
    polarity: Polarity

    def __post_init__(self) -> None:
        if self.value < 0:
            raise InvalidTargetError(
                f"{self.nutrient.value} target must be non-negative, got {self.value}"
            )


@dataclass(frozen=True)
class Classification:
    """Severity and percentage of a value against a target."""

    severity: Severity
    percentage: float
