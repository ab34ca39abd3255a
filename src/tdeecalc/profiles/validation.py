"""Validation and parsing of calculator profiles.

Ranges follow the calculator form: age 15-100, weight and target 30-300 in
the entered unit, height 100-250 cm, 1-120 in, or 1-8 ft plus 0-11 in.
Height fields for units other than ``height_unit`` are ignored.
"""

from __future__ import annotations

from typing import Any, Optional

from tdeecalc.profiles.models import (
    ActivityLevel,
    Gender,
    HeightUnit,
    ProfileInput,
    ValidationError,
    WeightUnit,
)

AGE_RANGE = (15, 100)
WEIGHT_RANGE = (30.0, 300.0)
HEIGHT_CM_RANGE = (100.0, 250.0)
HEIGHT_IN_RANGE = (1.0, 120.0)
HEIGHT_FT_RANGE = (1.0, 8.0)
HEIGHT_FT_IN_RANGE = (0.0, 11.0)


def _check_range(
    errors: list[str],
    name: str,
    value: Optional[float],
    bounds: tuple[float, float],
) -> None:
    if value is None:
        return
    low, high = bounds
    if not low <= value <= high:
        errors.append(f"{name} must be between {low:g} and {high:g}, got {value:g}")


def _check_height(
    errors: list[str],
    unit: HeightUnit,
    height_cm: Optional[float],
    height_in: Optional[float],
    height_ft: Optional[float],
    height_ft_in: Optional[float],
) -> None:
    if unit == HeightUnit.CM:
        if height_cm is None:
            errors.append("height_cm is required when height_unit is 'cm'")
        _check_range(errors, "height_cm", height_cm, HEIGHT_CM_RANGE)
    elif unit == HeightUnit.IN:
        if height_in is None:
            errors.append("height_in is required when height_unit is 'in'")
        _check_range(errors, "height_in", height_in, HEIGHT_IN_RANGE)
    else:
        if height_ft is None:
            errors.append("height_ft is required when height_unit is 'ft'")
        _check_range(errors, "height_ft", height_ft, HEIGHT_FT_RANGE)
        _check_range(errors, "height_ft_in", height_ft_in, HEIGHT_FT_IN_RANGE)


def validate_height(
    unit: HeightUnit,
    height_cm: Optional[float] = None,
    height_in: Optional[float] = None,
    height_ft: Optional[float] = None,
    height_ft_in: Optional[float] = None,
) -> None:
    """Check a height on its own, for callers that need no full profile.

    Raises:
        ValidationError: If the unit-matched field is missing or out of range
    """
    errors: list[str] = []
    _check_height(errors, unit, height_cm, height_in, height_ft, height_ft_in)
    if errors:
        raise ValidationError(errors[0] if len(errors) == 1 else "Invalid height", errors)


def validate_profile(profile: ProfileInput) -> ProfileInput:
    """Check a profile against the field constraints.

    All problems are collected before raising so a form can show them at once.

    Args:
        profile: Profile to check

    Returns:
        The same profile, for chaining

    Raises:
        ValidationError: With every failed check listed in ``errors``
    """
    errors: list[str] = []

    if isinstance(profile.age, bool) or not isinstance(profile.age, int):
        errors.append(f"age must be a whole number, got {profile.age!r}")
    else:
        _check_range(errors, "age", profile.age, AGE_RANGE)

    if profile.weight is None:
        errors.append("weight is required")
    _check_range(errors, "weight", profile.weight, WEIGHT_RANGE)
    _check_range(errors, "target_weight", profile.target_weight, WEIGHT_RANGE)

    _check_height(
        errors,
        profile.height_unit,
        profile.height_cm,
        profile.height_in,
        profile.height_ft,
        profile.height_ft_in,
    )

    if errors:
        raise ValidationError(errors[0] if len(errors) == 1 else "Invalid profile", errors)

    return profile


def _parse_enum(errors: list[str], enum_cls, name: str, value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        errors.append(f"{name} must be one of {choices}, got {value!r}")
        return None


def _parse_float(errors: list[str], name: str, value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        errors.append(f"{name} must be a number, got {value!r}")
        return None


def build_profile(
    gender: Any,
    age: Any,
    weight: Any,
    weight_unit: Any = "kg",
    height_unit: Any = "cm",
    activity_level: Any = "moderate",
    height_cm: Any = None,
    height_in: Any = None,
    height_ft: Any = None,
    height_ft_in: Any = None,
    target_weight: Any = None,
) -> ProfileInput:
    """Parse raw form/CLI/YAML values into a validated ProfileInput.

    Strings are accepted for every field ("lbs", "very_active", "70").
    Empty strings count as missing.

    Raises:
        ValidationError: If any field cannot be parsed or is out of range
    """
    errors: list[str] = []

    gender_enum = _parse_enum(errors, Gender, "gender", gender)
    weight_unit_enum = _parse_enum(errors, WeightUnit, "weight_unit", weight_unit)
    height_unit_enum = _parse_enum(errors, HeightUnit, "height_unit", height_unit)
    activity_enum = _parse_enum(errors, ActivityLevel, "activity_level", activity_level)

    parsed_age: Optional[int] = None
    try:
        age_value = float(age)
        if age_value.is_integer():
            parsed_age = int(age_value)
        else:
            errors.append(f"age must be a whole number, got {age!r}")
    except (TypeError, ValueError):
        errors.append(f"age must be a whole number, got {age!r}")

    parsed_weight = _parse_float(errors, "weight", weight)
    if parsed_weight is None and not any(e.startswith("weight ") for e in errors):
        errors.append("weight is required")

    numbers = {
        name: _parse_float(errors, name, value)
        for name, value in (
            ("height_cm", height_cm),
            ("height_in", height_in),
            ("height_ft", height_ft),
            ("height_ft_in", height_ft_in),
            ("target_weight", target_weight),
        )
    }

    if errors:
        raise ValidationError(errors[0] if len(errors) == 1 else "Invalid profile", errors)

    profile = ProfileInput(
        gender=gender_enum,
        age=parsed_age,
        weight=parsed_weight,
        weight_unit=weight_unit_enum,
        height_unit=height_unit_enum,
        activity_level=activity_enum,
        **numbers,
    )
    return validate_profile(profile)
