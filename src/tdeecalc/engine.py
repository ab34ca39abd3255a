"""Projection engine: runs a profile through every calculation stage.

    ProfileInput
      -> normalize_profile      (kg / cm)
      -> estimate_energy        (BMR, TDEE, regimes)
      -> resolve_target         (user target or healthy estimate)
      -> project_weights        (weekly trajectories)
      -> estimate_weeks_to_target, summarize_periods
      -> weekly_rates, summarize_body_composition

The engine holds only an immutable EngineConfig, so a single instance can
serve any number of requests, including concurrent ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from tdeecalc.config.settings import EngineConfig
from tdeecalc.profiles.body_calc import EnergyEstimate, estimate_energy
from tdeecalc.profiles.models import NormalizedProfile, ProfileInput
from tdeecalc.profiles.targets import ResolvedTarget, resolve_target
from tdeecalc.profiles.units import normalize_profile
from tdeecalc.profiles.validation import validate_profile
from tdeecalc.projection.models import (
    BodyCompositionSummary,
    PeriodSummary,
    Trajectory,
    WeeklyRate,
    WeeksToTarget,
)
from tdeecalc.projection.trajectory import (
    estimate_weeks_to_target,
    project_weights,
    summarize_body_composition,
    summarize_periods,
    weekly_rates,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    """Everything computed for one profile."""

    profile: ProfileInput
    normalized: NormalizedProfile
    energy: EnergyEstimate
    target: ResolvedTarget
    trajectory: Trajectory
    weeks_to_target: WeeksToTarget
    period_summaries: tuple[PeriodSummary, ...] = field(default_factory=tuple)
    weekly_rate: Optional[WeeklyRate] = None
    body_composition: Optional[BodyCompositionSummary] = None

    @property
    def starting_weight(self) -> float:
        return self.profile.weight

    @property
    def weight_unit(self) -> str:
        return self.profile.weight_unit.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "energy": self.energy.to_dict(),
            "starting_weight": self.starting_weight,
            "weight_unit": self.weight_unit,
            "normalized": {
                "weight_kg": round(self.normalized.weight_kg, 3),
                "height_cm": round(self.normalized.height_cm, 2),
                "activity_multiplier": self.normalized.activity_multiplier,
            },
            "target": self.target.to_dict(),
            "weeks_to_target": {
                "cutting": self.weeks_to_target.cutting,
                "bulking": self.weeks_to_target.bulking,
            },
            "projections": {
                "cutting": [_point_dict(p) for p in self.trajectory.cutting],
                "maintenance": [_point_dict(p) for p in self.trajectory.maintenance],
                "bulking": [_point_dict(p) for p in self.trajectory.bulking],
                "target": (
                    [_point_dict(p) for p in self.trajectory.target]
                    if self.trajectory.target is not None
                    else None
                ),
            },
            "period_summaries": [
                {
                    "week": s.week,
                    "cutting": s.cutting,
                    "maintenance": s.maintenance,
                    "bulking": s.bulking,
                }
                for s in self.period_summaries
            ],
            "weekly_rate": (
                {
                    "cutting": self.weekly_rate.cutting,
                    "maintenance": self.weekly_rate.maintenance,
                    "bulking": self.weekly_rate.bulking,
                }
                if self.weekly_rate is not None
                else None
            ),
            "body_composition": (
                self.body_composition.to_dict() if self.body_composition is not None else None
            ),
        }


def _point_dict(point) -> dict[str, float]:
    return {"week": point.week, "weight": point.weight}


class ProjectionEngine:
    """Calculate energy needs and weight projections for a profile."""

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize the engine.

        Args:
            config: Engine constants. If None, uses the built-in defaults.
        """
        self.config = config or EngineConfig()

    def normalize(self, profile: ProfileInput) -> NormalizedProfile:
        return normalize_profile(profile, self.config.activity_multipliers)

    def estimate(self, normalized: NormalizedProfile) -> EnergyEstimate:
        return estimate_energy(
            normalized,
            cutting_factor=self.config.cutting_factor,
            bulking_factor=self.config.bulking_factor,
        )

    def resolve(self, profile: ProfileInput, height_cm: float) -> ResolvedTarget:
        return resolve_target(
            height_cm,
            profile.gender,
            profile.weight_unit,
            user_target_weight=profile.target_weight,
            reference_bmi=self.config.reference_bmi,
            male_factor=self.config.male_weight_factor,
            female_factor=self.config.female_weight_factor,
        )

    def calculate(self, profile: ProfileInput) -> CalculationResult:
        """Run the full calculation.

        Args:
            profile: Calculator input

        Returns:
            CalculationResult

        Raises:
            ValidationError: If the profile is missing fields or out of range
        """
        validate_profile(profile)

        normalized = self.normalize(profile)
        energy = self.estimate(normalized)
        target = self.resolve(profile, normalized.height_cm)
        logger.debug(
            "BMR %d, TDEE %d, target %.1f %s (healthy estimate: %s)",
            energy.bmr,
            energy.tdee,
            target.target_weight,
            profile.weight_unit.value,
            target.is_healthy_estimate,
        )

        trajectory = project_weights(
            profile.weight,
            profile.weight_unit,
            energy,
            target_weight=target.target_weight,
            kcal_per_kg=self.config.kcal_per_kg,
            default_weeks=self.config.default_horizon_weeks,
            max_weeks=self.config.max_horizon_weeks,
        )
        weeks_to_target = estimate_weeks_to_target(
            trajectory, profile.weight, target.target_weight
        )
        summaries = summarize_periods(
            trajectory, profile.weight, weeks=self.config.summary_weeks
        )
        composition = summarize_body_composition(
            trajectory, profile.weight, week=self.config.default_horizon_weeks
        )

        return CalculationResult(
            profile=profile,
            normalized=normalized,
            energy=energy,
            target=target,
            trajectory=trajectory,
            weeks_to_target=weeks_to_target,
            period_summaries=tuple(summaries),
            weekly_rate=weekly_rates(trajectory),
            body_composition=composition,
        )


def calculate(
    profile: ProfileInput,
    config: Optional[EngineConfig] = None,
) -> CalculationResult:
    """Convenience wrapper around ProjectionEngine.calculate()."""
    return ProjectionEngine(config).calculate(profile)
