"""Tests for YAML profile loading."""

from __future__ import annotations

import pytest

from tdeecalc.profiles.loader import load_profile_from_yaml, profile_from_dict
from tdeecalc.profiles.models import HeightUnit, ValidationError, WeightUnit


class TestProfileFromDict:
    """Tests for profile_from_dict."""

    def test_flat_height_keys(self) -> None:
        profile = profile_from_dict(
            {"gender": "male", "age": 30, "weight": 70, "height_unit": "cm", "height_cm": 170}
        )

        assert profile.height_unit == HeightUnit.CM
        assert profile.height_cm == 170.0

    def test_plain_height_with_unit(self) -> None:
        profile = profile_from_dict(
            {"gender": "male", "age": 30, "weight": 70, "height": 67, "height_unit": "in"}
        )

        assert profile.height_unit == HeightUnit.IN
        assert profile.height_in == 67.0

    def test_nested_cm_height(self) -> None:
        profile = profile_from_dict(
            {"gender": "male", "age": 30, "weight": 70, "height": {"unit": "cm", "value": 182}}
        )

        assert profile.height_cm == 182.0

    def test_missing_keys(self) -> None:
        with pytest.raises(ValidationError, match="gender, age"):
            profile_from_dict({"weight": 70})

    def test_unknown_height_unit(self) -> None:
        with pytest.raises(ValidationError, match="Unknown height unit"):
            profile_from_dict(
                {"gender": "male", "age": 30, "weight": 70, "height": {"unit": "m", "value": 1.8}}
            )


class TestLoadProfileFromYaml:
    """Tests for load_profile_from_yaml."""

    def test_loads_nested_feet(self, profile_yaml) -> None:
        profile = load_profile_from_yaml(profile_yaml)

        assert profile.weight_unit == WeightUnit.LB
        assert profile.height_unit == HeightUnit.FT
        assert profile.height_ft == 5.0
        assert profile.height_ft_in == 6.0
        assert profile.target_weight is None

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValidationError, match="mapping"):
            load_profile_from_yaml(path)

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("gender: [male\n")

        with pytest.raises(ValidationError, match="Could not parse"):
            load_profile_from_yaml(path)
