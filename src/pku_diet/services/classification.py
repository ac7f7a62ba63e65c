"""Severity classification of nutrient values against targets.

Upper-bound nutrients (phenylalanine):

    percentage > 100        CRITICAL
    80 < percentage <= 100  WARNING
    percentage <= 80        OK

Goal nutrients (protein, calories, fat):

    percentage < 50         CRITICAL
    50 <= percentage < 80   WARNING
    percentage >= 80        OK

Exact boundaries fall into the less severe band, so 100% of a phenylalanine
limit is WARNING and 80% is OK. Goal nutrients are never penalized for going
over their target.

A target of zero yields 0% for a zero value and 100% otherwise, so a positive
value against a zero phenylalanine allowance is WARNING, not CRITICAL.
"""

from pku_diet.domain.nutrients import (
    Classification,
    InvalidTargetError,
    NutrientTarget,
    Polarity,
    Severity,
)

UPPER_BOUND_CRITICAL_ABOVE = 100.0
UPPER_BOUND_WARNING_ABOVE = 80.0
GOAL_CRITICAL_BELOW = 50.0
GOAL_WARNING_BELOW = 80.0


def percentage_of(value: float, target: float) -> float:
    """Return value as a percentage of target."""
    if target < 0:
        raise InvalidTargetError(f"Target must be non-negative, got {target}")
    if target == 0:
        return 100.0 if value > 0 else 0.0
    # Multiply first so integral boundary values divide exactly.
    return value * 100 / target


def classify(value: float, target: float, polarity: Polarity) -> Classification:
    """Classify a value against a target for the given polarity."""
    percentage = percentage_of(value, target)
    if polarity is Polarity.UPPER_BOUND:
        if percentage > UPPER_BOUND_CRITICAL_ABOVE:
            severity = Severity.CRITICAL
        elif percentage > UPPER_BOUND_WARNING_ABOVE:
            severity = Severity.WARNING
        else:
            severity = Severity.OK
    elif percentage < GOAL_CRITICAL_BELOW:
        severity = Severity.CRITICAL
    elif percentage < GOAL_WARNING_BELOW:
        severity = Severity.WARNING
    else:
        severity = Severity.OK
    return Classification(severity=severity, percentage=percentage)


def classify_target(value: float, target: NutrientTarget) -> Classification:
    """Classify a value against a configured nutrient target."""
    return classify(value, target.value, target.polarity)


def bar_width(value: float, target: float) -> float:
    """Return the progress bar fill, clamped to 0..100."""
    return min(max(percentage_of(value, target), 0.0), 100.0)


def badge_value(consumed: float, planned: float) -> float:
    """Return the value shown on a calendar badge.

    Consumed wins once anything has been eaten; until then the plan is shown.
    """
    return consumed or planned
