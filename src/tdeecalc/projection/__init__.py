"""Weight trajectory projection."""

from __future__ import annotations

from tdeecalc.projection.models import (
    BodyCompositionSummary,
    MassSplit,
    PeriodSummary,
    Trajectory,
    WeeklyRate,
    WeeksToTarget,
    WeightPoint,
)
from tdeecalc.projection.trajectory import (
    estimate_weeks_to_target,
    project_weights,
    summarize_body_composition,
    summarize_periods,
    weekly_rates,
)

__all__ = [
    "BodyCompositionSummary",
    "MassSplit",
    "PeriodSummary",
    "Trajectory",
    "WeeklyRate",
    "WeeksToTarget",
    "WeightPoint",
    "estimate_weeks_to_target",
    "project_weights",
    "summarize_body_composition",
    "summarize_periods",
    "weekly_rates",
]
