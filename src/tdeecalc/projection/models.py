"""Data models for weight trajectories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WeightPoint:
    """Projected weight at the end of a week, in the display unit."""

    week: int
    weight: float


@dataclass(frozen=True)
class Trajectory:
    """Week-by-week projections for each calorie regime.

    Every series starts at week 0 (the starting weight) and has the same
    length, which is never less than 13 points (weeks 0-12).
    """

    cutting: tuple[WeightPoint, ...]
    maintenance: tuple[WeightPoint, ...]
    bulking: tuple[WeightPoint, ...]
    target: Optional[tuple[WeightPoint, ...]] = None

    @property
    def weeks(self) -> int:
        """Last projected week."""
        return self.cutting[-1].week

    def at_week(self, week: int) -> dict[str, Optional[float]]:
        """Return every series' weight at ``week``."""
        return {
            "week": week,
            "cutting": self.cutting[week].weight,
            "maintenance": self.maintenance[week].weight,
            "bulking": self.bulking[week].weight,
            "target": self.target[week].weight if self.target else None,
        }

    def rows(self) -> list[dict[str, Optional[float]]]:
        """Flatten to one dict per week, the shape charts consume."""
        return [self.at_week(week) for week in range(len(self.cutting))]


@dataclass(frozen=True)
class WeeksToTarget:
    """Estimated weeks to reach the target weight.

    At most one of ``cutting``/``bulking`` is set: the one whose direction
    matches the required weight change.
    """

    cutting: Optional[int] = None
    bulking: Optional[int] = None

    @property
    def weeks(self) -> Optional[int]:
        return self.cutting if self.cutting is not None else self.bulking

    @property
    def regime(self) -> Optional[str]:
        if self.cutting is not None:
            return "cutting"
        if self.bulking is not None:
            return "bulking"
        return None

    def exceeds_horizon(self, horizon_weeks: int = 12) -> bool:
        """True when the estimate falls beyond the default projection window."""
        weeks = self.weeks
        return weeks is not None and weeks > horizon_weeks


@dataclass(frozen=True)
class PeriodSummary:
    """Change from the starting weight after ``week`` weeks, per regime."""

    week: int
    cutting: float
    maintenance: float
    bulking: float


@dataclass(frozen=True)
class WeeklyRate:
    """Week 0 to week 1 weight change per regime, in the display unit."""

    cutting: float
    maintenance: float
    bulking: float


@dataclass(frozen=True)
class MassSplit:
    """A weight change divided into fat and lean mass."""

    fat: float
    lean: float


@dataclass(frozen=True)
class BodyCompositionSummary:
    """Estimated fat and lean mass change after ``week`` weeks, per regime.

    A rough rule of thumb: a deficit costs mostly fat, a modest surplus
    adds mostly lean mass when paired with training.
    """

    week: int
    cutting: MassSplit
    maintenance: MassSplit
    bulking: MassSplit

    def to_dict(self) -> dict:
        return {
            "week": self.week,
            "cutting": {"fat": self.cutting.fat, "lean": self.cutting.lean},
            "maintenance": {"fat": self.maintenance.fat, "lean": self.maintenance.lean},
            "bulking": {"fat": self.bulking.fat, "lean": self.bulking.lean},
        }
