"""Tests for settings loading and engine config."""

from __future__ import annotations

import pytest

from tdeecalc.config.settings import EngineConfig, Settings
from tdeecalc.profiles.models import ActivityLevel, ConfigError


class TestSettingsLoad:
    """Tests for Settings.load/save."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "nope.yaml")

        assert settings.engine.kcal_per_kg == 7700
        assert settings.defaults.weight_unit == "kg"

    def test_overrides(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "engine:\n"
            "  kcal_per_kg: 7000\n"
            "  cutting_factor: 0.75\n"
            "  activity_multipliers:\n"
            "    very_active: 2.0\n"
            "defaults:\n"
            "  weight_unit: lb\n"
            "  output_format: markdown\n"
        )

        settings = Settings.load(path)
        config = settings.engine_config()

        assert config.kcal_per_kg == 7000.0
        assert config.cutting_factor == 0.75
        assert config.activity_multipliers[ActivityLevel.VERY_ACTIVE] == 2.0
        assert config.activity_multipliers[ActivityLevel.MODERATE] == 1.55
        assert settings.defaults.weight_unit == "lb"
        assert settings.defaults.output_format == "markdown"

    def test_save_round_trip(self, tmp_path) -> None:
        path = tmp_path / "sub" / "config.yaml"
        settings = Settings()
        settings.engine.max_horizon_weeks = 260
        settings.defaults.height_unit = "ft"
        settings.save(path)

        restored = Settings.load(path)

        assert restored.engine.max_horizon_weeks == 260
        assert restored.defaults.height_unit == "ft"
        assert restored.engine_config().summary_weeks == (4, 8, 12)

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("engine: [\n")

        with pytest.raises(ConfigError):
            Settings.load(path)

    def test_non_numeric_value(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("engine:\n  kcal_per_kg: lots\n")

        with pytest.raises(ConfigError):
            Settings.load(path)

    @pytest.mark.parametrize("text", ["defaults: 5\n", "engine: fast\n", "engine: [1, 2]\n"])
    def test_section_must_be_mapping(self, tmp_path, text: str) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(text)

        with pytest.raises(ConfigError, match="must be a mapping"):
            Settings.load(path)


class TestEngineConfig:
    """Tests for EngineConfig validation."""

    def test_defaults(self) -> None:
        config = EngineConfig()

        assert config.default_horizon_weeks == 12
        assert config.reference_bmi == 22.0
        assert set(config.activity_multipliers) == set(ActivityLevel)

    def test_unknown_activity_level(self) -> None:
        settings = Settings()
        settings.engine.activity_multipliers["couch"] = 1.0

        with pytest.raises(ConfigError, match="couch"):
            settings.engine_config()

    def test_horizon_below_twelve(self) -> None:
        with pytest.raises(ConfigError):
            EngineConfig(default_horizon_weeks=8)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("kcal_per_kg", 0),
            ("cutting_factor", 1.2),
            ("bulking_factor", 0.9),
            ("reference_bmi", 0),
            ("male_weight_factor", -1.07),
            ("female_weight_factor", 0),
            ("summary_weeks", (-1, 4)),
            ("summary_weeks", (4, 13)),
        ],
    )
    def test_out_of_range(self, field: str, value: float) -> None:
        with pytest.raises(ConfigError):
            EngineConfig(**{field: value})

    def test_frozen(self) -> None:
        config = EngineConfig()
        with pytest.raises(AttributeError):
            config.kcal_per_kg = 1  # type: ignore[misc]
