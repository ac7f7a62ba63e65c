"""Domain models for planned menus."""

from dataclasses import dataclass, field
from datetime import date

from pku_diet.domain.nutrients import NutrientName, NutrientQuantity


@dataclass(frozen=True)
class MealEntry:
    """Product or dish placed in a meal slot."""

    item_id: str | None
    planned: dict[NutrientName, NutrientQuantity] = field(default_factory=dict)
    consumed: dict[NutrientName, NutrientQuantity] = field(default_factory=dict)
    is_consumed: bool = False
    item_name: str | None = None

    def planned_amount(self, nutrient: NutrientName) -> float:
        """Return the planned amount, 0 when the nutrient is absent."""
        quantity = self.planned.get(nutrient)
        return quantity.amount if quantity is not None else 0.0

    def consumed_amount(self, nutrient: NutrientName) -> float:
        """Return the consumed amount, 0 when the nutrient is absent."""
        quantity = self.consumed.get(nutrient)
        return quantity.amount if quantity is not None else 0.0


@dataclass(frozen=True)
class MealSlot:
    """Named meal grouping such as breakfast or dinner."""

    slot_type: str
    entries: list[MealEntry] = field(default_factory=list)
    slot_id: str | None = None


@dataclass(frozen=True)
class MenuDay:
    """A day's menu as returned by the backend."""

    day: date
    slots: list[MealSlot] = field(default_factory=list)
    is_generated: bool = False
    emergency_mode: bool = False
