"""Data models for calculator input profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Gender(Enum):
    """Biological sex for BMR calculation."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Gender"]:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class WeightUnit(Enum):
    """Unit the user enters (and reads back) body weight in."""

    KG = "kg"
    LB = "lb"

    @classmethod
    def _missing_(cls, value: object) -> Optional["WeightUnit"]:
        # Accept "lbs"/"LB" style spellings from forms and YAML files
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ("lb", "lbs", "pound", "pounds"):
                return cls.LB
            if normalized in ("kg", "kgs", "kilogram", "kilograms"):
                return cls.KG
        return None


class HeightUnit(Enum):
    """Unit the user enters height in."""

    CM = "cm"
    IN = "in"
    FT = "ft"  # feet + inches

    @classmethod
    def _missing_(cls, value: object) -> Optional["HeightUnit"]:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ActivityLevel(Enum):
    """Activity level keys for the TDEE multiplier table."""

    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    ACTIVE = "active"                # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very-active"      # Very hard exercise, physical job

    @classmethod
    def _missing_(cls, value: object) -> Optional["ActivityLevel"]:
        # "very_active" and "Very Active" both map to VERY_ACTIVE
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(frozen=True)
class ProfileInput:
    """Raw calculator input, in the units the user entered.

    Exactly one height representation is expected, matching ``height_unit``.
    For feet, ``height_ft_in`` may be left as None and counts as 0 inches.
    """

    gender: Gender
    age: int
    weight: float
    weight_unit: WeightUnit
    height_unit: HeightUnit
    activity_level: ActivityLevel
    height_cm: Optional[float] = None
    height_in: Optional[float] = None
    height_ft: Optional[float] = None
    height_ft_in: Optional[float] = None
    target_weight: Optional[float] = None


@dataclass(frozen=True)
class NormalizedProfile:
    """Profile in canonical units (kg, cm), used by every later stage."""

    gender: Gender
    age: int
    weight_kg: float
    height_cm: float
    activity_multiplier: float


# Custom exceptions


class TDEECalcError(Exception):
    """Base exception for tdeecalc errors."""

    pass


class ValidationError(TDEECalcError, ValueError):
    """Raised when a profile is malformed or out of range."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class DegenerateRateError(TDEECalcError):
    """Raised when a weekly rate of change cannot reach a target.

    The projector treats this as soft: the weeks-to-target figure is
    simply left unset.
    """

    pass


class ConfigError(TDEECalcError):
    """Raised when configuration values cannot build an engine config."""

    pass
