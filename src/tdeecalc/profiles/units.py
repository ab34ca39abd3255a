"""Unit conversion for calculator profiles.

All later stages work in kilograms and centimetres. Weights are converted
back to the user's unit only for display.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from tdeecalc.profiles.models import (
    ActivityLevel,
    HeightUnit,
    NormalizedProfile,
    ProfileInput,
    ValidationError,
    WeightUnit,
)

KG_PER_LB = 0.453592
LB_PER_KG = 2.20462
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero.

    Python's round() uses banker's rounding, which would turn a BMR of
    1617.5 into 1618 but 1616.5 into 1616. Rounding is done on the
    shortest decimal repr of the float so 0.45 rounds to 0.5.

    Args:
        value: Number to round
        ndigits: Decimal places to keep

    Returns:
        Rounded value (a float; use int() for whole numbers)

    Example:
        >>> round_half_up(1617.5)
        1618.0
        >>> round_half_up(69.45, 1)
        69.5
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_kg(weight: float, unit: WeightUnit) -> float:
    """Convert a weight in ``unit`` to kilograms."""
    if unit == WeightUnit.LB:
        return weight * KG_PER_LB
    return weight


def from_kg(weight_kg: float, unit: WeightUnit) -> float:
    """Convert kilograms back to ``unit``."""
    if unit == WeightUnit.LB:
        return weight_kg / KG_PER_LB
    return weight_kg


def convert_height(
    unit: HeightUnit,
    height_cm: Optional[float] = None,
    height_in: Optional[float] = None,
    height_ft: Optional[float] = None,
    height_ft_in: Optional[float] = None,
) -> float:
    """Convert a height given in ``unit`` to centimetres.

    Only the field(s) matching ``unit`` are read. For feet, missing extra
    inches count as 0.

    Raises:
        ValidationError: If the field required by ``unit`` is missing
    """
    if unit == HeightUnit.CM:
        if height_cm is None:
            raise ValidationError("height_cm is required when height_unit is 'cm'")
        return float(height_cm)

    if unit == HeightUnit.IN:
        if height_in is None:
            raise ValidationError("height_in is required when height_unit is 'in'")
        return height_in * CM_PER_INCH

    if height_ft is None:
        raise ValidationError("height_ft is required when height_unit is 'ft'")
    total_inches = height_ft * INCHES_PER_FOOT + (height_ft_in or 0)
    return total_inches * CM_PER_INCH


def height_to_cm(profile: ProfileInput) -> float:
    """Convert the profile's height to centimetres."""
    return convert_height(
        profile.height_unit,
        height_cm=profile.height_cm,
        height_in=profile.height_in,
        height_ft=profile.height_ft,
        height_ft_in=profile.height_ft_in,
    )


def normalize_profile(
    profile: ProfileInput,
    activity_multipliers: Mapping[ActivityLevel, float],
) -> NormalizedProfile:
    """Convert a raw profile to canonical units.

    Args:
        profile: Validated calculator input
        activity_multipliers: Multiplier table to look the activity level up in

    Returns:
        NormalizedProfile with weight in kg and height in cm
    """
    return NormalizedProfile(
        gender=profile.gender,
        age=profile.age,
        weight_kg=to_kg(profile.weight, profile.weight_unit),
        height_cm=height_to_cm(profile),
        activity_multiplier=activity_multipliers[profile.activity_level],
    )
