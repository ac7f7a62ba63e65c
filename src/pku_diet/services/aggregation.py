"""Day-level aggregation of planned and consumed nutrients.

Totals are built with ``math.fsum``, which returns the correctly rounded sum of
its inputs. The result therefore does not depend on the order of slots or of
entries within a slot.
"""

import math
from collections.abc import Iterable

from pku_diet.domain.menus import MealSlot
from pku_diet.domain.nutrients import NutrientName
from pku_diet.domain.totals import DayTotals, NutrientTotals


def aggregate(
    slots: Iterable[MealSlot], tracked_nutrients: Iterable[NutrientName]
) -> DayTotals:
    """Sum planned and consumed amounts per tracked nutrient across slots."""
    nutrients = list(dict.fromkeys(tracked_nutrients))
    entries = [entry for slot in slots for entry in slot.entries]
    if not entries:
        return DayTotals.zero(nutrients)
    totals: dict[NutrientName, NutrientTotals] = {}
    for nutrient in nutrients:
        totals[nutrient] = NutrientTotals(
            planned=math.fsum(entry.planned_amount(nutrient) for entry in entries),
            consumed=math.fsum(entry.consumed_amount(nutrient) for entry in entries),
        )
    return DayTotals(totals=totals)


def count_entries(slots: Iterable[MealSlot]) -> int:
    """Return the number of entries across all slots."""
    return sum(len(slot.entries) for slot in slots)
