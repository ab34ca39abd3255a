"""Application settings and configuration management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from tdeecalc.profiles.body_calc import (
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_MULTIPLIERS,
    BULKING_FACTOR,
    CUTTING_FACTOR,
)
from tdeecalc.profiles.models import ActivityLevel, ConfigError
from tdeecalc.profiles.targets import (
    FEMALE_WEIGHT_FACTOR,
    MALE_WEIGHT_FACTOR,
    REFERENCE_BMI,
)
from tdeecalc.projection.trajectory import (
    DEFAULT_HORIZON_WEEKS,
    KCAL_PER_KG,
    MAX_HORIZON_WEEKS,
    SUMMARY_WEEKS,
)

logger = logging.getLogger(__name__)


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".tdeecalc"


def default_config_path() -> Path:
    """Return the default config file path."""
    return _default_config_dir() / "config.yaml"


def _level_key(key: Any) -> str:
    """Canonical spelling of an activity level key ("very_active" -> "very-active").

    Unknown keys are kept as-is and rejected later by engine_config().
    """
    try:
        return ActivityLevel(str(key)).value
    except ValueError:
        return str(key)


@dataclass(frozen=True)
class EngineConfig:
    """Immutable numeric constants for the projection engine.

    Build one through ``Settings.engine_config()`` or use the defaults.
    """

    activity_multipliers: Mapping[ActivityLevel, float] = field(
        default_factory=lambda: ACTIVITY_MULTIPLIERS
    )
    activity_descriptions: Mapping[ActivityLevel, str] = field(
        default_factory=lambda: ACTIVITY_DESCRIPTIONS
    )
    cutting_factor: float = CUTTING_FACTOR
    bulking_factor: float = BULKING_FACTOR
    kcal_per_kg: float = KCAL_PER_KG
    default_horizon_weeks: int = DEFAULT_HORIZON_WEEKS
    max_horizon_weeks: int = MAX_HORIZON_WEEKS
    reference_bmi: float = REFERENCE_BMI
    male_weight_factor: float = MALE_WEIGHT_FACTOR
    female_weight_factor: float = FEMALE_WEIGHT_FACTOR
    summary_weeks: tuple[int, ...] = SUMMARY_WEEKS

    def __post_init__(self) -> None:
        missing = [level.value for level in ActivityLevel if level not in self.activity_multipliers]
        if missing:
            raise ConfigError(f"Missing activity multipliers for: {', '.join(missing)}")
        if self.kcal_per_kg <= 0:
            raise ConfigError(f"kcal_per_kg must be positive, got {self.kcal_per_kg}")
        if self.default_horizon_weeks < 12:
            # Period summaries index weeks 4, 8 and 12 directly
            raise ConfigError(
                f"default_horizon_weeks must be at least 12, got {self.default_horizon_weeks}"
            )
        if self.max_horizon_weeks < self.default_horizon_weeks:
            raise ConfigError("max_horizon_weeks must not be below default_horizon_weeks")
        if not 0 < self.cutting_factor < 1:
            raise ConfigError(f"cutting_factor must be between 0 and 1, got {self.cutting_factor}")
        if self.bulking_factor <= 1:
            raise ConfigError(f"bulking_factor must be above 1, got {self.bulking_factor}")
        for name in ("reference_bmi", "male_weight_factor", "female_weight_factor"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        outside = [w for w in self.summary_weeks if not 0 <= w <= self.default_horizon_weeks]
        if outside:
            raise ConfigError(
                f"summary_weeks must be between 0 and {self.default_horizon_weeks}, got {outside}"
            )


@dataclass
class EngineSettings:
    """Engine constants as read from YAML (mutable until frozen)."""

    activity_multipliers: dict[str, float] = field(
        default_factory=lambda: {
            level.value: value for level, value in ACTIVITY_MULTIPLIERS.items()
        }
    )
    cutting_factor: float = CUTTING_FACTOR
    bulking_factor: float = BULKING_FACTOR
    kcal_per_kg: float = KCAL_PER_KG
    default_horizon_weeks: int = DEFAULT_HORIZON_WEEKS
    max_horizon_weeks: int = MAX_HORIZON_WEEKS
    reference_bmi: float = REFERENCE_BMI
    male_weight_factor: float = MALE_WEIGHT_FACTOR
    female_weight_factor: float = FEMALE_WEIGHT_FACTOR
    summary_weeks: list[int] = field(default_factory=lambda: list(SUMMARY_WEEKS))


@dataclass
class DefaultsConfig:
    """Default values for CLI options."""

    weight_unit: str = "kg"
    height_unit: str = "cm"
    activity_level: str = "moderate"
    output_format: str = "table"  # "table" or "json"


@dataclass
class Settings:
    """Main application settings."""

    engine: EngineSettings = field(default_factory=EngineSettings)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.tdeecalc/config.yaml

        Returns:
            Settings instance

        Raises:
            ConfigError: If the file is not valid YAML or has bad values
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            logger.debug("No config at %s, using defaults", config_path)
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

        logger.debug("Loaded config from %s", config_path)
        settings = cls()

        # Parse engine config
        if "engine" in data:
            eng_data = data["engine"] or {}
            if not isinstance(eng_data, dict):
                raise ConfigError(f"engine in {config_path} must be a mapping")
            try:
                if "activity_multipliers" in eng_data:
                    for key, value in eng_data["activity_multipliers"].items():
                        settings.engine.activity_multipliers[_level_key(key)] = float(value)
                for key in (
                    "cutting_factor",
                    "bulking_factor",
                    "kcal_per_kg",
                    "reference_bmi",
                    "male_weight_factor",
                    "female_weight_factor",
                ):
                    if key in eng_data:
                        setattr(settings.engine, key, float(eng_data[key]))
                if "default_horizon_weeks" in eng_data:
                    settings.engine.default_horizon_weeks = int(eng_data["default_horizon_weeks"])
                if "max_horizon_weeks" in eng_data:
                    settings.engine.max_horizon_weeks = int(eng_data["max_horizon_weeks"])
                if "summary_weeks" in eng_data:
                    settings.engine.summary_weeks = [int(w) for w in eng_data["summary_weeks"]]
            except (TypeError, ValueError, AttributeError) as e:
                raise ConfigError(f"Invalid engine setting in {config_path}: {e}") from e

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if not isinstance(def_data, dict):
                raise ConfigError(f"defaults in {config_path} must be a mapping")
            if "weight_unit" in def_data:
                settings.defaults.weight_unit = str(def_data["weight_unit"])
            if "height_unit" in def_data:
                settings.defaults.height_unit = str(def_data["height_unit"])
            if "activity_level" in def_data:
                settings.defaults.activity_level = str(def_data["activity_level"])
            if "output_format" in def_data:
                settings.defaults.output_format = str(def_data["output_format"])

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.tdeecalc/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "engine": {
                "activity_multipliers": dict(self.engine.activity_multipliers),
                "cutting_factor": self.engine.cutting_factor,
                "bulking_factor": self.engine.bulking_factor,
                "kcal_per_kg": self.engine.kcal_per_kg,
                "default_horizon_weeks": self.engine.default_horizon_weeks,
                "max_horizon_weeks": self.engine.max_horizon_weeks,
                "reference_bmi": self.engine.reference_bmi,
                "male_weight_factor": self.engine.male_weight_factor,
                "female_weight_factor": self.engine.female_weight_factor,
                "summary_weeks": list(self.engine.summary_weeks),
            },
            "defaults": {
                "weight_unit": self.defaults.weight_unit,
                "height_unit": self.defaults.height_unit,
                "activity_level": self.defaults.activity_level,
                "output_format": self.defaults.output_format,
            },
        }

    def engine_config(self) -> EngineConfig:
        """Freeze the engine settings into an EngineConfig.

        Raises:
            ConfigError: On unknown activity levels or out-of-range constants
        """
        multipliers = {}
        for key, value in self.engine.activity_multipliers.items():
            try:
                level = ActivityLevel(key)
            except ValueError as e:
                raise ConfigError(f"Unknown activity level in config: {key}") from e
            if value <= 0:
                raise ConfigError(f"Activity multiplier for {key} must be positive")
            multipliers[level] = value

        return EngineConfig(
            activity_multipliers=MappingProxyType(multipliers),
            cutting_factor=self.engine.cutting_factor,
            bulking_factor=self.engine.bulking_factor,
            kcal_per_kg=self.engine.kcal_per_kg,
            default_horizon_weeks=self.engine.default_horizon_weeks,
            max_horizon_weeks=self.engine.max_horizon_weeks,
            reference_bmi=self.engine.reference_bmi,
            male_weight_factor=self.engine.male_weight_factor,
            female_weight_factor=self.engine.female_weight_factor,
            summary_weeks=tuple(self.engine.summary_weeks),
        )


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
