"""Tests for severity classification."""

import pytest

from pku_diet.domain.nutrients import (
    InvalidTargetError,
    NutrientName,
    NutrientTarget,
    Polarity,
    Severity,
)
from pku_diet.services.classification import (
    badge_value,
    bar_width,
    classify,
    classify_target,
    percentage_of,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, Severity.OK),
        (80, Severity.OK),
        (80.01, Severity.WARNING),
        (100, Severity.WARNING),
        (100.01, Severity.CRITICAL),
    ],
)
def test_upper_bound_boundaries(value: float, expected: Severity) -> None:
    assert classify(value, 100, Polarity.UPPER_BOUND).severity is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, Severity.CRITICAL),
        (49, Severity.CRITICAL),
        (50, Severity.WARNING),
        (79, Severity.WARNING),
        (80, Severity.OK),
        (250, Severity.OK),
    ],
)
def test_goal_boundaries(value: float, expected: Severity) -> None:
    assert classify(value, 100, Polarity.GOAL).severity is expected


def test_phe_boundaries_hold_for_non_round_targets() -> None:
    assert classify(240, 300, Polarity.UPPER_BOUND).severity is Severity.OK
    assert classify(300, 300, Polarity.UPPER_BOUND).severity is Severity.WARNING


def test_zero_target_policy() -> None:
    nothing = classify(0, 0, Polarity.UPPER_BOUND)
    something = classify(5, 0, Polarity.UPPER_BOUND)

    assert nothing.percentage == 0
    assert nothing.severity is Severity.OK
    # 100% sits on the inclusive WARNING edge, not CRITICAL.
    assert something.percentage == 100
    assert something.severity is Severity.WARNING


@pytest.mark.parametrize("polarity", list(Polarity))
@pytest.mark.parametrize("value", [0, 1, 500])
def test_negative_target_is_rejected(value: float, polarity: Polarity) -> None:
    with pytest.raises(InvalidTargetError):
        classify(value, -1, polarity)


def test_low_phe_day_is_ok() -> None:
    result = classify(50, 300, Polarity.UPPER_BOUND)

    assert result.percentage == pytest.approx(16.7, abs=0.05)
    assert result.severity is Severity.OK


def test_phe_over_limit_is_critical() -> None:
    result = classify(310, 300, Polarity.UPPER_BOUND)

    assert result.percentage == pytest.approx(103.3, abs=0.05)
    assert result.severity is Severity.CRITICAL


def test_protein_shortfall_and_recovery() -> None:
    short = classify(20, 50, Polarity.GOAL)
    enough = classify(45, 50, Polarity.GOAL)

    assert short.percentage == 40
    assert short.severity is Severity.CRITICAL
    assert enough.percentage == 90
    assert enough.severity is Severity.OK


def test_classify_target_uses_polarity() -> None:
    phe = NutrientTarget(NutrientName.PHENYLALANINE, 300, Polarity.UPPER_BOUND)
    protein = NutrientTarget(NutrientName.PROTEIN, 300, Polarity.GOAL)

    assert classify_target(100, phe).severity is Severity.OK
    assert classify_target(100, protein).severity is Severity.CRITICAL


def test_negative_nutrient_target_cannot_be_built() -> None:
    with pytest.raises(InvalidTargetError):
        NutrientTarget(NutrientName.FAT, -5, Polarity.GOAL)


def test_bar_width_is_clamped() -> None:
    assert bar_width(150, 100) == 100
    assert bar_width(25, 100) == 25
    assert bar_width(0, 0) == 0
    assert bar_width(3, 0) == 100


def test_percentage_of_zero_target() -> None:
    assert percentage_of(0, 0) == 0
    assert percentage_of(0.5, 0) == 100


def test_badge_value_prefers_consumed() -> None:
    assert badge_value(120, 200) == 120
    assert badge_value(0, 200) == 200
    assert badge_value(0, 0) == 0
