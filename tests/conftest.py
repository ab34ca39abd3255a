"""Pytest fixtures for tdeecalc tests."""

from __future__ import annotations

import pytest

from tdeecalc.engine import ProjectionEngine
from tdeecalc.profiles.models import (
    ActivityLevel,
    Gender,
    HeightUnit,
    ProfileInput,
    WeightUnit,
)


@pytest.fixture
def engine():
    """Engine with the built-in default constants."""
    return ProjectionEngine()


@pytest.fixture
def male_profile():
    """30 year old, 70 kg, 170 cm, moderately active male.

    BMR = 10*70 + 6.25*170 - 5*30 + 5 = 1617.5
    TDEE = 1617.5 * 1.55 = 2507.125
    """
    return ProfileInput(
        gender=Gender.MALE,
        age=30,
        weight=70.0,
        weight_unit=WeightUnit.KG,
        height_unit=HeightUnit.CM,
        activity_level=ActivityLevel.MODERATE,
        height_cm=170.0,
    )


@pytest.fixture
def female_lb_profile():
    """40 year old, 150 lb, 5 ft 6 in, lightly active female.

    weight = 68.0388 kg, height = 167.64 cm
    BMR = 680.388 + 1047.75 - 200 - 161 = 1367.138
    TDEE = 1367.138 * 1.375 = 1879.81475
    """
    return ProfileInput(
        gender=Gender.FEMALE,
        age=40,
        weight=150.0,
        weight_unit=WeightUnit.LB,
        height_unit=HeightUnit.FT,
        activity_level=ActivityLevel.LIGHT,
        height_ft=5,
        height_ft_in=6,
    )


@pytest.fixture
def profile_yaml(tmp_path):
    """Write a profile YAML file and return its path."""
    path = tmp_path / "profile.yaml"
    path.write_text(
        "gender: female\n"
        "age: 40\n"
        "weight: 150\n"
        "weight_unit: lbs\n"
        "height:\n"
        "  unit: ft\n"
        "  feet: 5\n"
        "  inches: 6\n"
        "activity_level: light\n"
    )
    return path
