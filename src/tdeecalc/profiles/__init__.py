"""Calculator profiles: input models, unit conversion, energy and targets.

Key components:
- ProfileInput and its enums (gender, units, activity level)
- Unit normalization to kg/cm
- Mifflin-St Jeor BMR and TDEE
- Target weight resolution (user target or healthy-BMI estimate)
"""

from __future__ import annotations

from tdeecalc.profiles.body_calc import EnergyEstimate, estimate_energy
from tdeecalc.profiles.loader import load_profile_from_yaml, profile_from_dict
from tdeecalc.profiles.models import (
    ActivityLevel,
    ConfigError,
    DegenerateRateError,
    Gender,
    HeightUnit,
    NormalizedProfile,
    ProfileInput,
    TDEECalcError,
    ValidationError,
    WeightUnit,
)
from tdeecalc.profiles.targets import ResolvedTarget, resolve_target
from tdeecalc.profiles.units import normalize_profile
from tdeecalc.profiles.validation import build_profile, validate_height, validate_profile

__all__ = [
    "ActivityLevel",
    "ConfigError",
    "DegenerateRateError",
    "EnergyEstimate",
    "Gender",
    "HeightUnit",
    "NormalizedProfile",
    "ProfileInput",
    "ResolvedTarget",
    "TDEECalcError",
    "ValidationError",
    "WeightUnit",
    "build_profile",
    "estimate_energy",
    "load_profile_from_yaml",
    "normalize_profile",
    "profile_from_dict",
    "resolve_target",
    "validate_height",
    "validate_profile",
]
