"""Tests for the end-to-end projection engine."""

from __future__ import annotations

import dataclasses
import json
import threading

import pytest

from tdeecalc.config.settings import EngineConfig
from tdeecalc.engine import ProjectionEngine, calculate
from tdeecalc.profiles.models import ValidationError


class TestGoldenScenario:
    """Male, 30, 70 kg, 170 cm, moderate, no target."""

    def test_energy(self, engine, male_profile) -> None:
        result = engine.calculate(male_profile)

        assert result.energy.bmr == 1618
        assert result.energy.tdee == 2507
        assert result.energy.cutting == 2006
        assert result.energy.bulking == 2758

    def test_healthy_target(self, engine, male_profile) -> None:
        result = engine.calculate(male_profile)

        assert result.target.is_healthy_estimate is True
        assert result.target.target_weight == 68.0
        assert result.trajectory.target is not None
        assert {p.weight for p in result.trajectory.target} == {68.0}

    def test_weeks_and_summaries(self, engine, male_profile) -> None:
        result = engine.calculate(male_profile)

        assert result.weeks_to_target.cutting == 4
        assert result.weeks_to_target.bulking is None
        assert [s.week for s in result.period_summaries] == [4, 8, 12]

    def test_weekly_rate_and_body_composition(self, engine, male_profile) -> None:
        result = engine.calculate(male_profile)

        assert result.weekly_rate.cutting == -0.5
        assert result.weekly_rate.bulking == 0.2
        assert result.body_composition.week == 12
        assert result.body_composition.cutting.fat == -4.4
        assert result.body_composition.cutting.lean == -1.1

        data = result.to_dict()
        assert data["weekly_rate"] == {"cutting": -0.5, "maintenance": 0.0, "bulking": 0.2}
        assert data["body_composition"]["cutting"] == {"fat": -4.4, "lean": -1.1}

    def test_trajectory_has_summary_indices(self, engine, male_profile) -> None:
        result = engine.calculate(male_profile)

        assert len(result.trajectory.cutting) >= 13
        for week in (0, 4, 8, 12):
            assert result.trajectory.cutting[week].week == week


class TestEngineBehaviour:
    """General engine properties."""

    def test_lb_profile(self, engine, female_lb_profile) -> None:
        result = engine.calculate(female_lb_profile)

        assert result.energy.tdee == 1880
        assert result.target.target_weight == 129.0
        assert result.weeks_to_target.cutting == 27
        assert result.weight_unit == "lb"
        assert all(p.weight == 150.0 for p in result.trajectory.maintenance)

    def test_user_target(self, engine, male_profile) -> None:
        profile = dataclasses.replace(male_profile, target_weight=75.0)
        result = engine.calculate(profile)

        assert result.target.is_healthy_estimate is False
        assert result.weeks_to_target.bulking is not None
        assert result.weeks_to_target.cutting is None

    def test_equal_target(self, engine, male_profile) -> None:
        profile = dataclasses.replace(male_profile, target_weight=70.0)
        result = engine.calculate(profile)

        assert result.weeks_to_target.cutting is None
        assert result.weeks_to_target.bulking is None

    @pytest.mark.parametrize("age", [15, 100])
    def test_age_boundaries(self, engine, male_profile, age) -> None:
        result = engine.calculate(dataclasses.replace(male_profile, age=age))
        assert result.energy.tdee > 0

    def test_idempotent(self, engine, male_profile) -> None:
        first = engine.calculate(male_profile)
        second = engine.calculate(male_profile)

        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_concurrent_requests_share_engine(self, engine, male_profile, female_lb_profile) -> None:
        results = {}

        def run(name, profile):
            results[name] = engine.calculate(profile)

        threads = [
            threading.Thread(target=run, args=(f"m{i}", male_profile)) for i in range(4)
        ] + [
            threading.Thread(target=run, args=(f"f{i}", female_lb_profile)) for i in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(results[f"m{i}"] == results["m0"] for i in range(4))
        assert all(results[f"f{i}"] == results["f0"] for i in range(4))

    def test_missing_height_rejected(self, engine, male_profile) -> None:
        with pytest.raises(ValidationError):
            engine.calculate(dataclasses.replace(male_profile, height_cm=None))

    def test_calculate_wrapper(self, male_profile) -> None:
        assert calculate(male_profile).energy.tdee == 2507

    def test_to_dict_is_json_serializable(self, engine, female_lb_profile) -> None:
        data = engine.calculate(female_lb_profile).to_dict()
        encoded = json.loads(json.dumps(data))

        assert encoded["energy"]["tdee"] == 1880
        assert encoded["target"]["is_healthy_estimate"] is True
        assert encoded["weeks_to_target"] == {"cutting": 27, "bulking": None}
        assert encoded["projections"]["cutting"][1] == {"week": 1, "weight": 149.2}


class TestEngineConfig:
    """Engine with injected constants."""

    def test_custom_energy_density(self, male_profile) -> None:
        engine = ProjectionEngine(EngineConfig(kcal_per_kg=3850))
        result = engine.calculate(male_profile)

        # Twice the default rate: 0.911 kg/wk
        assert result.trajectory.cutting[1].weight == 69.1

    def test_custom_horizon(self, male_profile) -> None:
        engine = ProjectionEngine(EngineConfig(default_horizon_weeks=16))
        result = engine.calculate(male_profile)

        assert result.trajectory.weeks == 16
