"""Tests for BMR/TDEE calculation."""

from __future__ import annotations

import pytest

from tdeecalc.profiles.body_calc import (
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_MULTIPLIERS,
    calculate_bmr,
    calculate_tdee,
    estimate_energy,
)
from tdeecalc.profiles.models import ActivityLevel, Gender, NormalizedProfile


def _normalized(gender=Gender.MALE, age=30, weight_kg=70.0, height_cm=170.0, multiplier=1.55):
    return NormalizedProfile(
        gender=gender,
        age=age,
        weight_kg=weight_kg,
        height_cm=height_cm,
        activity_multiplier=multiplier,
    )


class TestCalculateBMR:
    """Tests for the Mifflin-St Jeor equation."""

    def test_male(self) -> None:
        assert calculate_bmr(30, Gender.MALE, 170, 70) == pytest.approx(1617.5)

    def test_female(self) -> None:
        # 700 + 1062.5 - 150 - 161
        assert calculate_bmr(30, Gender.FEMALE, 170, 70) == pytest.approx(1451.5)

    def test_gender_offset_is_166(self) -> None:
        male = calculate_bmr(45, Gender.MALE, 180, 90)
        female = calculate_bmr(45, Gender.FEMALE, 180, 90)
        assert male - female == pytest.approx(166)


class TestCalculateTDEE:
    """Tests for calculate_tdee."""

    def test_moderate(self) -> None:
        assert calculate_tdee(1617.5, 1.55) == pytest.approx(2507.125)

    def test_multiplier_table(self) -> None:
        assert ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY] == 1.2
        assert ACTIVITY_MULTIPLIERS[ActivityLevel.LIGHT] == 1.375
        assert ACTIVITY_MULTIPLIERS[ActivityLevel.MODERATE] == 1.55
        assert ACTIVITY_MULTIPLIERS[ActivityLevel.ACTIVE] == 1.725
        assert ACTIVITY_MULTIPLIERS[ActivityLevel.VERY_ACTIVE] == 1.9

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            ACTIVITY_MULTIPLIERS[ActivityLevel.ACTIVE] = 2.0  # type: ignore[index]

    def test_every_level_has_a_description(self) -> None:
        assert set(ACTIVITY_DESCRIPTIONS) == set(ActivityLevel)


class TestEstimateEnergy:
    """Tests for estimate_energy."""

    def test_golden_values(self) -> None:
        """TDEE uses the unrounded BMR: 1617.5 * 1.55 = 2507.125."""
        energy = estimate_energy(_normalized())

        assert energy.bmr == 1618
        assert energy.tdee == 2507
        assert energy.maintenance == 2507
        assert energy.cutting == 2006   # 2005.7
        assert energy.bulking == 2758   # 2757.8375

    def test_female_lb_profile_values(self) -> None:
        energy = estimate_energy(
            _normalized(Gender.FEMALE, 40, 150 * 0.453592, 66 * 2.54, 1.375)
        )

        assert energy.bmr == 1367
        assert energy.tdee == 1880
        assert energy.cutting == 1504
        assert energy.bulking == 2068

    @pytest.mark.parametrize("gender", list(Gender))
    @pytest.mark.parametrize("level", list(ActivityLevel))
    @pytest.mark.parametrize("age", [15, 45, 100])
    def test_regimes_strictly_ordered(self, gender, level, age) -> None:
        energy = estimate_energy(
            _normalized(gender, age, 60.0, 165.0, ACTIVITY_MULTIPLIERS[level])
        )

        assert energy.tdee > 0
        assert energy.cutting < energy.maintenance < energy.bulking

    def test_custom_factors(self) -> None:
        energy = estimate_energy(_normalized(), cutting_factor=0.75, bulking_factor=1.15)

        assert energy.cutting == 1880   # 1880.34375
        assert energy.bulking == 2883   # 2883.19375
