"""Tests for configuration helpers."""

import pytest
from pydantic import ValidationError

from pku_diet.config import Settings, parse_tracked_nutrients
from tests.conftest import CALORIES, FAT, PHE, PROTEIN


def test_parse_tracked_nutrients_defaults_to_all() -> None:
    assert parse_tracked_nutrients(None) == [PHE, PROTEIN, CALORIES, FAT]
    assert parse_tracked_nutrients("") == [PHE, PROTEIN, CALORIES, FAT]
    assert parse_tracked_nutrients("vitamins") == [PHE, PROTEIN, CALORIES, FAT]


def test_parse_tracked_nutrients_keeps_order_and_drops_unknown() -> None:
    assert parse_tracked_nutrients("Protein, phenylalanine,,sugar,protein") == [
        PROTEIN,
        PHE,
    ]


def test_settings_default_targets(settings) -> None:
    targets = settings.default_targets()

    assert targets[PHE] == 300
    assert targets[PROTEIN] == 50
    assert targets[CALORIES] == 2000
    assert targets[FAT] == 65


def test_settings_accepts_sunday_week_start(settings) -> None:
    updated = Settings(**{**settings.model_dump(), "week_start_day": "sunday"})

    assert updated.week_start_day == "sunday"


def test_settings_rejects_unknown_week_start(settings) -> None:
    with pytest.raises(ValidationError):
        Settings(**{**settings.model_dump(), "week_start_day": "friday"})
