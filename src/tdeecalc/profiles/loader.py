"""Load calculator profiles from YAML files.

Example profile.yaml:

    gender: female
    age: 34
    weight: 150
    weight_unit: lbs
    height:
      unit: ft
      feet: 5
      inches: 6
    activity_level: light
    target_weight: 140

``height`` may also be a plain number with ``height_unit`` alongside, or
the flat ``height_cm``/``height_in``/``height_ft``/``height_ft_in`` keys.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from tdeecalc.profiles.models import ProfileInput, ValidationError
from tdeecalc.profiles.validation import build_profile

_FLAT_HEIGHT_KEYS = ("height_cm", "height_in", "height_ft", "height_ft_in")


def _height_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Extract height keyword arguments from a profile mapping."""
    fields = {key: data[key] for key in _FLAT_HEIGHT_KEYS if key in data}
    unit = data.get("height_unit", "cm")
    height = data.get("height")

    if isinstance(height, dict):
        unit = height.get("unit", unit)
        if str(unit).lower() == "ft":
            fields["height_ft"] = height.get("feet")
            fields["height_ft_in"] = height.get("inches", 0)
        else:
            fields[f"height_{str(unit).lower()}"] = height.get("value")
    elif height is not None:
        fields[f"height_{str(unit).lower()}"] = height

    fields["height_unit"] = unit
    return fields


def profile_from_dict(data: dict[str, Any]) -> ProfileInput:
    """Build a validated ProfileInput from a parsed YAML/JSON mapping.

    Raises:
        ValidationError: If required keys are missing or values are invalid
    """
    missing = [key for key in ("gender", "age", "weight") if key not in data]
    if missing:
        raise ValidationError(f"Profile is missing required keys: {', '.join(missing)}")

    height_fields = _height_fields(data)
    known = {"height_unit", *_FLAT_HEIGHT_KEYS}
    unknown_height = [k for k in height_fields if k not in known]
    if unknown_height:
        raise ValidationError(f"Unknown height unit: {height_fields['height_unit']}")

    return build_profile(
        gender=data["gender"],
        age=data["age"],
        weight=data["weight"],
        weight_unit=data.get("weight_unit", "kg"),
        activity_level=data.get("activity_level", "moderate"),
        target_weight=data.get("target_weight"),
        **height_fields,
    )


def load_profile_from_yaml(path: Path) -> ProfileInput:
    """Load and validate a profile YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated ProfileInput

    Raises:
        ValidationError: If the file content is not a valid profile
        FileNotFoundError: If the file does not exist
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"{path} must contain a mapping of profile fields")

    return profile_from_dict(data)
