"""Tests for result formatters."""

from __future__ import annotations

import dataclasses
import io
import json

import pytest
from rich.console import Console

from tdeecalc.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    display_weeks,
    format_result,
)


@pytest.fixture
def result(engine, male_profile):
    return engine.calculate(male_profile)


class TestDisplayWeeks:
    """Tests for display_weeks."""

    def test_every_week(self, result) -> None:
        assert display_weeks(result) == list(range(13))

    def test_every_fourth(self, result) -> None:
        assert display_weeks(result, every=4) == [0, 4, 8, 12]

    def test_uneven_step_ends_on_twelve(self, result) -> None:
        assert display_weeks(result, every=5) == [0, 5, 10, 12]

    def test_extended_horizon_adds_last_week(self, engine, male_profile) -> None:
        extended = engine.calculate(dataclasses.replace(male_profile, target_weight=50.0))
        assert display_weeks(extended, every=4) == [0, 4, 8, 12, 88]


class TestTableFormatter:
    """Tests for TableFormatter."""

    def test_prints_key_figures(self, result) -> None:
        buffer = io.StringIO()
        TableFormatter(Console(file=buffer, width=120)).format(result)
        output = buffer.getvalue()

        assert "2507" in output
        assert "2006" in output
        assert "Healthy weight estimate" in output
        assert "4 weeks cutting" in output
        assert "Change from Start" in output
        assert "Per week" in output
        assert "Body Composition after 12 Weeks" in output
        assert "-4.4" in output

    def test_beyond_horizon_notice(self, engine, male_profile) -> None:
        extended = engine.calculate(dataclasses.replace(male_profile, target_weight=50.0))
        buffer = io.StringIO()
        TableFormatter(Console(file=buffer, width=120)).format(extended, every=4)

        assert "extends beyond 12-week projection" in buffer.getvalue()


class TestTextFormatters:
    """Tests for JSON and Markdown output."""

    def test_json(self, result) -> None:
        data = json.loads(JSONFormatter().format(result))

        assert data["energy"]["bmr"] == 1618
        assert len(data["projections"]["maintenance"]) == 13

    def test_markdown(self, result) -> None:
        text = MarkdownFormatter().format(result)

        assert "**TDEE:** 2507 kcal/day" in text
        assert "| 4 | 68.2 | 70.0 | 70.9 |" in text
        assert "- Cutting: -0.50" in text
        assert "| Cutting | -4.4 | -1.1 |" in text
        assert "| Bulking | +0.8 | +1.9 |" in text

    def test_unknown_format(self, result) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            format_result(result, "xml")

    def test_table_returns_none(self, result) -> None:
        console = Console(file=io.StringIO())
        assert format_result(result, "table", console=console) is None
