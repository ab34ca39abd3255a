"""Energy expenditure calculator.

Calculates BMR (Basal Metabolic Rate), TDEE (Total Daily Energy
Expenditure) and the cutting/maintenance/bulking calorie regimes.

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate.

Rounding order: TDEE is computed from the unrounded BMR, and the cutting and
bulking regimes from the unrounded TDEE. Each figure is rounded half away
from zero only at the end. For a 30 year old, 70 kg, 170 cm, moderately
active male this gives BMR 1618 (1617.5) and TDEE 2507 (1617.5 * 1.55).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from tdeecalc.profiles.models import ActivityLevel, Gender, NormalizedProfile
from tdeecalc.profiles.units import round_half_up

# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS: Mapping[ActivityLevel, float] = MappingProxyType({
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
})

ACTIVITY_DESCRIPTIONS: Mapping[ActivityLevel, str] = MappingProxyType({
    ActivityLevel.SEDENTARY: "Little or no exercise",
    ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
    ActivityLevel.ACTIVE: "Hard exercise 6-7 days/week",
    ActivityLevel.VERY_ACTIVE: "Very hard exercise & physical job or 2x training",
})

CUTTING_FACTOR = 0.8   # 20% deficit
BULKING_FACTOR = 1.1   # 10% surplus


@dataclass(frozen=True)
class EnergyEstimate:
    """Daily calorie figures, all rounded to whole kcal."""

    bmr: int
    tdee: int
    cutting: int
    maintenance: int
    bulking: int

    def to_dict(self) -> dict[str, int]:
        return {
            "bmr": self.bmr,
            "tdee": self.tdee,
            "cutting": self.cutting,
            "maintenance": self.maintenance,
            "bulking": self.bulking,
        }


def calculate_bmr(
    age: int,
    gender: Gender,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        gender: Biological sex
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day (unrounded)
    """
    if gender == Gender.MALE:
        return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5
    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) - 161


def calculate_tdee(bmr: float, multiplier: float) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate (unrounded)
        multiplier: Activity multiplier

    Returns:
        TDEE in calories per day (unrounded)
    """
    return bmr * multiplier


def estimate_energy(
    profile: NormalizedProfile,
    cutting_factor: float = CUTTING_FACTOR,
    bulking_factor: float = BULKING_FACTOR,
) -> EnergyEstimate:
    """Calculate BMR, TDEE and the three calorie regimes for a profile.

    Args:
        profile: Profile in kg/cm
        cutting_factor: Fraction of TDEE eaten while cutting
        bulking_factor: Fraction of TDEE eaten while bulking

    Returns:
        EnergyEstimate with every figure rounded to a whole calorie
    """
    bmr = calculate_bmr(
        profile.age, profile.gender, profile.height_cm, profile.weight_kg
    )
    tdee = calculate_tdee(bmr, profile.activity_multiplier)

    return EnergyEstimate(
        bmr=int(round_half_up(bmr)),
        tdee=int(round_half_up(tdee)),
        cutting=int(round_half_up(tdee * cutting_factor)),
        maintenance=int(round_half_up(tdee)),
        bulking=int(round_half_up(tdee * bulking_factor)),
    )
