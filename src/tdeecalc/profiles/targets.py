"""Target weight resolution.

When the user gives no target weight, a reference "healthy" weight is
derived from a BMI of 22 (middle of the 18.5-24.9 range), nudged up for men
and down for women to approximate typical lean-mass differences. This is a
display aid, not a clinical recommendation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tdeecalc.profiles.models import Gender, WeightUnit
from tdeecalc.profiles.units import LB_PER_KG, round_half_up, to_kg

REFERENCE_BMI = 22.0
MALE_WEIGHT_FACTOR = 1.07
FEMALE_WEIGHT_FACTOR = 0.95


@dataclass(frozen=True)
class ResolvedTarget:
    """Target weight in both the display unit and kilograms."""

    target_weight: float  # display unit
    target_weight_kg: float
    is_healthy_estimate: bool

    def to_dict(self) -> dict:
        return {
            "target_weight": self.target_weight,
            "target_weight_kg": self.target_weight_kg,
            "is_healthy_estimate": self.is_healthy_estimate,
        }


def calculate_healthy_weight(
    height_cm: float,
    gender: Gender,
    weight_unit: WeightUnit,
    reference_bmi: float = REFERENCE_BMI,
    male_factor: float = MALE_WEIGHT_FACTOR,
    female_factor: float = FEMALE_WEIGHT_FACTOR,
) -> int:
    """Estimate a healthy body weight from height.

    Args:
        height_cm: Height in centimetres
        gender: Biological sex
        weight_unit: Unit to return the weight in
        reference_bmi: BMI the estimate is anchored on
        male_factor: Multiplier applied for men
        female_factor: Multiplier applied for women

    Returns:
        Healthy weight in ``weight_unit``, rounded to a whole number

    Example:
        >>> calculate_healthy_weight(170, Gender.MALE, WeightUnit.KG)
        68
    """
    height_m = height_cm / 100
    healthy_kg = reference_bmi * (height_m * height_m)

    if gender == Gender.MALE:
        healthy_kg *= male_factor
    else:
        healthy_kg *= female_factor

    if weight_unit == WeightUnit.LB:
        return int(round_half_up(healthy_kg * LB_PER_KG))
    return int(round_half_up(healthy_kg))


def resolve_target(
    height_cm: float,
    gender: Gender,
    weight_unit: WeightUnit,
    user_target_weight: Optional[float] = None,
    reference_bmi: float = REFERENCE_BMI,
    male_factor: float = MALE_WEIGHT_FACTOR,
    female_factor: float = FEMALE_WEIGHT_FACTOR,
) -> ResolvedTarget:
    """Use the user's target weight, or fall back to the healthy estimate.

    The kilogram figure for a healthy estimate is converted from the rounded
    display value so that both fields describe the same line on a chart.
    """
    if user_target_weight is not None:
        return ResolvedTarget(
            target_weight=user_target_weight,
            target_weight_kg=to_kg(user_target_weight, weight_unit),
            is_healthy_estimate=False,
        )

    healthy = calculate_healthy_weight(
        height_cm,
        gender,
        weight_unit,
        reference_bmi=reference_bmi,
        male_factor=male_factor,
        female_factor=female_factor,
    )
    return ResolvedTarget(
        target_weight=float(healthy),
        target_weight_kg=to_kg(healthy, weight_unit),
        is_healthy_estimate=True,
    )
