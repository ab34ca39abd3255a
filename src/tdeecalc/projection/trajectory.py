"""Weight trajectory projection.

Projects body weight week by week under the three calorie regimes, assuming
a constant daily deficit or surplus and the standard approximation:

    7700 kcal ≈ 1 kg of body weight

so a daily deficit of D kcal loses D * 7 / 7700 kg per week. Maintenance is
flat by definition. The model is linear: it ignores metabolic adaptation and
the shrinking TDEE of a lighter body, which is fine for a 12-week picture
but increasingly optimistic over longer horizons.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from tdeecalc.profiles.body_calc import EnergyEstimate
from tdeecalc.profiles.models import DegenerateRateError, WeightUnit
from tdeecalc.profiles.units import from_kg, round_half_up, to_kg
from tdeecalc.projection.models import (
    BodyCompositionSummary,
    MassSplit,
    PeriodSummary,
    Trajectory,
    WeeklyRate,
    WeeksToTarget,
    WeightPoint,
)

logger = logging.getLogger(__name__)

KCAL_PER_KG = 7700
DEFAULT_HORIZON_WEEKS = 12
MAX_HORIZON_WEEKS = 1040  # 20 years
SUMMARY_WEEKS = (4, 8, 12)

# (fat, lean) share of a weight change
CUTTING_SPLIT = (0.8, 0.2)
BULKING_SPLIT = (0.3, 0.7)


def weekly_rate_kg(daily_kcal: float, kcal_per_kg: float = KCAL_PER_KG) -> float:
    """Convert a daily calorie deficit or surplus to kg per week."""
    return (daily_kcal * 7) / kcal_per_kg


def weeks_to_reach(distance: float, weekly_rate: float) -> float:
    """Weeks needed to cover ``distance`` at ``weekly_rate``.

    Both arguments are in the same unit. The result is not rounded.

    Raises:
        DegenerateRateError: If the rate is zero or points the wrong way
    """
    if weekly_rate <= 0:
        raise DegenerateRateError(
            f"Weekly rate {weekly_rate} cannot cover a distance of {distance}"
        )
    return abs(distance) / weekly_rate


def projection_horizon(
    start_kg: float,
    target_kg: Optional[float],
    weekly_loss_kg: float,
    weekly_gain_kg: float,
    default_weeks: int = DEFAULT_HORIZON_WEEKS,
    max_weeks: int = MAX_HORIZON_WEEKS,
) -> int:
    """Number of weeks to project.

    With a target, the horizon is stretched until the target would be reached
    by either regime, so at least one line visibly crosses it. Regimes with
    a non-positive rate are ignored. The result is never below
    ``default_weeks`` and never above ``max_weeks`` (unless the default
    itself is larger).
    """
    if target_kg is None:
        return default_weeks

    distance = start_kg - target_kg
    estimates: list[float] = [default_weeks]
    for rate in (weekly_loss_kg, weekly_gain_kg):
        try:
            estimates.append(weeks_to_reach(distance, rate))
        except DegenerateRateError:
            continue

    weeks = math.ceil(max(estimates))
    if weeks > max_weeks:
        logger.warning(
            "Projection horizon of %d weeks capped at %d", weeks, max_weeks
        )
        weeks = max_weeks
    return max(weeks, default_weeks)


def project_weights(
    starting_weight: float,
    weight_unit: WeightUnit,
    energy: EnergyEstimate,
    target_weight: Optional[float] = None,
    kcal_per_kg: float = KCAL_PER_KG,
    default_weeks: int = DEFAULT_HORIZON_WEEKS,
    max_weeks: int = MAX_HORIZON_WEEKS,
) -> Trajectory:
    """Project weekly weights for each calorie regime.

    Args:
        starting_weight: Current weight in ``weight_unit``
        weight_unit: Display unit for input and output weights
        energy: Rounded calorie figures for the three regimes
        target_weight: Optional target in ``weight_unit``; adds a flat target line
        kcal_per_kg: Energy density of body mass
        default_weeks: Minimum horizon
        max_weeks: Cap for horizons stretched to reach the target

    Returns:
        Trajectory with weights rounded to 1 decimal in ``weight_unit``
    """
    start_kg = to_kg(starting_weight, weight_unit)
    target_kg = to_kg(target_weight, weight_unit) if target_weight is not None else None

    weekly_loss_kg = weekly_rate_kg(energy.tdee - energy.cutting, kcal_per_kg)
    weekly_gain_kg = weekly_rate_kg(energy.bulking - energy.tdee, kcal_per_kg)

    weeks = projection_horizon(
        start_kg,
        target_kg,
        weekly_loss_kg,
        weekly_gain_kg,
        default_weeks=default_weeks,
        max_weeks=max_weeks,
    )
    logger.debug(
        "Projecting %d weeks: loss %.4f kg/wk, gain %.4f kg/wk",
        weeks,
        weekly_loss_kg,
        weekly_gain_kg,
    )

    def point(week: int, weight_kg: float) -> WeightPoint:
        return WeightPoint(
            week=week,
            weight=round_half_up(from_kg(weight_kg, weight_unit), 1),
        )

    cutting = []
    maintenance = []
    bulking = []
    target = [] if target_weight is not None else None

    for week in range(weeks + 1):
        cutting.append(point(week, start_kg - weekly_loss_kg * week))
        maintenance.append(point(week, start_kg))
        bulking.append(point(week, start_kg + weekly_gain_kg * week))
        if target is not None:
            target.append(WeightPoint(week=week, weight=target_weight))

    return Trajectory(
        cutting=tuple(cutting),
        maintenance=tuple(maintenance),
        bulking=tuple(bulking),
        target=tuple(target) if target is not None else None,
    )


def estimate_weeks_to_target(
    trajectory: Trajectory,
    starting_weight: float,
    target_weight: Optional[float],
) -> WeeksToTarget:
    """Estimate weeks to reach the target from the projected lines.

    Uses the realised first-week change of the regime that moves toward the
    target (cutting to lose, bulking to gain), in the display unit.
    """
    if target_weight is None or target_weight == starting_weight:
        return WeeksToTarget()

    distance = starting_weight - target_weight

    if target_weight < starting_weight:
        first, second = trajectory.cutting[0], trajectory.cutting[1]
        weekly_change = round_half_up(first.weight - second.weight, 1)
        try:
            weeks = math.ceil(weeks_to_reach(distance, weekly_change))
        except DegenerateRateError:
            logger.debug("Cutting rate is %s, no weeks-to-target", weekly_change)
            return WeeksToTarget()
        return WeeksToTarget(cutting=weeks)

    first, second = trajectory.bulking[0], trajectory.bulking[1]
    weekly_change = round_half_up(second.weight - first.weight, 1)
    try:
        weeks = math.ceil(weeks_to_reach(distance, weekly_change))
    except DegenerateRateError:
        logger.debug("Bulking rate is %s, no weeks-to-target", weekly_change)
        return WeeksToTarget()
    return WeeksToTarget(bulking=weeks)


def summarize_periods(
    trajectory: Trajectory,
    starting_weight: float,
    weeks: Sequence[int] = SUMMARY_WEEKS,
) -> list[PeriodSummary]:
    """Change from the starting weight at the end of each period.

    Weeks outside the trajectory are skipped.
    """
    summaries = []
    for week in weeks:
        if not 0 <= week <= trajectory.weeks:
            continue
        summaries.append(
            PeriodSummary(
                week=week,
                cutting=round_half_up(trajectory.cutting[week].weight - starting_weight, 1),
                maintenance=round_half_up(
                    trajectory.maintenance[week].weight - starting_weight, 1
                ),
                bulking=round_half_up(trajectory.bulking[week].weight - starting_weight, 1),
            )
        )
    return summaries


def weekly_rates(trajectory: Trajectory) -> WeeklyRate:
    """First-week change of each regime, rounded to 2 decimals.

    Changes are signed: negative for cutting, positive for bulking.
    """

    def change(series) -> float:
        return round_half_up(series[1].weight - series[0].weight, 2)

    return WeeklyRate(
        cutting=change(trajectory.cutting),
        maintenance=change(trajectory.maintenance),
        bulking=change(trajectory.bulking),
    )


def split_change(change: float, split: tuple[float, float]) -> MassSplit:
    """Divide ``change`` into fat and lean mass using ``split`` shares."""
    fat_share, lean_share = split
    return MassSplit(
        fat=round_half_up(change * fat_share, 1),
        lean=round_half_up(change * lean_share, 1),
    )


def summarize_body_composition(
    trajectory: Trajectory,
    starting_weight: float,
    week: int = DEFAULT_HORIZON_WEEKS,
) -> BodyCompositionSummary:
    """Estimate fat vs lean mass change after ``week`` weeks.

    Maintenance is reported as no change in either.

    Raises:
        ValueError: If ``week`` is outside the trajectory
    """
    if not 0 <= week <= trajectory.weeks:
        raise ValueError(f"Week {week} is outside the projection (0-{trajectory.weeks})")

    cutting_change = round_half_up(trajectory.cutting[week].weight - starting_weight, 1)
    bulking_change = round_half_up(trajectory.bulking[week].weight - starting_weight, 1)
    return BodyCompositionSummary(
        week=week,
        cutting=split_change(cutting_change, CUTTING_SPLIT),
        maintenance=MassSplit(fat=0.0, lean=0.0),
        bulking=split_change(bulking_change, BULKING_SPLIT),
    )
