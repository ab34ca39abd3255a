"""Output formatters for calculation results."""

from __future__ import annotations

import json
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tdeecalc.engine import CalculationResult


def display_weeks(result: CalculationResult, every: int = 1, default_weeks: int = 12) -> list[int]:
    """Pick which weeks to show in a trajectory table.

    Every ``every``-th week up to ``default_weeks``, plus the final week when
    the projection was extended to reach the target.
    """
    every = max(every, 1)
    last = result.trajectory.weeks
    weeks = list(range(0, min(default_weeks, last) + 1, every))
    if weeks[-1] != min(default_weeks, last):
        weeks.append(min(default_weeks, last))
    if last > default_weeks:
        weeks.append(last)
    return weeks


def _signed(value: float) -> str:
    return f"{value:+.1f}"


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, result: CalculationResult, every: int = 1) -> None:
        """Print formatted tables to console.

        Args:
            result: Calculation result to format
            every: Show every N-th week in the trajectory table
        """
        unit = result.weight_unit
        energy = result.energy

        header_lines = [
            f"BMR: [bold]{energy.bmr}[/bold] kcal/day",
            f"TDEE: [bold]{energy.tdee}[/bold] kcal/day",
        ]
        self.console.print(Panel("\n".join(header_lines), title="TDEE Calculator"))

        # Calorie regimes
        regime_table = Table(title="Daily Calorie Targets")
        regime_table.add_column("Plan")
        regime_table.add_column("Calories", justify="right")
        regime_table.add_column("vs TDEE", justify="right")
        regime_table.add_row(
            "[red]Cutting[/red]", str(energy.cutting), f"{energy.cutting - energy.tdee:+d}"
        )
        regime_table.add_row("Maintenance", str(energy.maintenance), "+0")
        regime_table.add_row(
            "[green]Bulking[/green]", str(energy.bulking), f"{energy.bulking - energy.tdee:+d}"
        )
        self.console.print(regime_table)

        # Target
        target = result.target
        label = "Healthy weight estimate" if target.is_healthy_estimate else "Target weight"
        self.console.print(f"{label}: [bold]{target.target_weight:g} {unit}[/bold]")

        weeks_to_target = result.weeks_to_target
        if weeks_to_target.weeks is not None:
            line = f"Time to target: {weeks_to_target.weeks} weeks {weeks_to_target.regime}"
            if weeks_to_target.exceeds_horizon():
                line += " [dim](extends beyond 12-week projection)[/dim]"
            self.console.print(line)
        elif result.starting_weight != target.target_weight:
            self.console.print("[yellow]Target not reachable at these calorie levels[/yellow]")

        # Trajectory
        trajectory_table = Table(title=f"Projected Weight ({unit})")
        trajectory_table.add_column("Week", justify="right")
        trajectory_table.add_column("Cutting", justify="right", style="red")
        trajectory_table.add_column("Maintenance", justify="right")
        trajectory_table.add_column("Bulking", justify="right", style="green")
        trajectory_table.add_column("Target", justify="right", style="cyan")

        for week in display_weeks(result, every):
            row = result.trajectory.at_week(week)
            trajectory_table.add_row(
                str(week),
                f"{row['cutting']:.1f}",
                f"{row['maintenance']:.1f}",
                f"{row['bulking']:.1f}",
                f"{row['target']:g}" if row["target"] is not None else "-",
            )
        self.console.print(trajectory_table)

        # Period summaries
        if result.period_summaries or result.weekly_rate is not None:
            summary_table = Table(title=f"Change from Start ({unit})")
            summary_table.add_column("Period")
            summary_table.add_column("Cutting", justify="right", style="red")
            summary_table.add_column("Maintenance", justify="right")
            summary_table.add_column("Bulking", justify="right", style="green")
            rate = result.weekly_rate
            if rate is not None:
                summary_table.add_row(
                    "Per week",
                    f"{rate.cutting:+.2f}",
                    f"{rate.maintenance:+.2f}",
                    f"{rate.bulking:+.2f}",
                )
            for summary in result.period_summaries:
                summary_table.add_row(
                    f"{summary.week} weeks",
                    _signed(summary.cutting),
                    _signed(summary.maintenance),
                    _signed(summary.bulking),
                )
            self.console.print(summary_table)

        composition = result.body_composition
        if composition is not None:
            composition_table = Table(
                title=f"Body Composition after {composition.week} Weeks ({unit})"
            )
            composition_table.add_column("Plan")
            composition_table.add_column("Fat", justify="right")
            composition_table.add_column("Lean", justify="right")
            for name, split in (
                ("[red]Cutting[/red]", composition.cutting),
                ("Maintenance", composition.maintenance),
                ("[green]Bulking[/green]", composition.bulking),
            ):
                composition_table.add_row(name, _signed(split.fat), _signed(split.lean))
            self.console.print(composition_table)


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format(self, result: CalculationResult) -> str:
        """Return JSON string."""
        return json.dumps(result.to_dict(), indent=2)


class MarkdownFormatter:
    """Format results as Markdown for notes or documentation."""

    def format(self, result: CalculationResult, every: int = 4) -> str:
        """Return Markdown string.

        Args:
            result: Calculation result to format
            every: Show every N-th week in the projection table

        Returns:
            Markdown string
        """
        unit = result.weight_unit
        energy = result.energy
        target = result.target

        lines = [
            "# TDEE Results",
            "",
            f"**BMR:** {energy.bmr} kcal/day",
            f"**TDEE:** {energy.tdee} kcal/day",
            "",
            "| Plan | Calories |",
            "|------|----------|",
            f"| Cutting | {energy.cutting} |",
            f"| Maintenance | {energy.maintenance} |",
            f"| Bulking | {energy.bulking} |",
            "",
        ]

        label = "Healthy weight estimate" if target.is_healthy_estimate else "Target weight"
        lines.append(f"**{label}:** {target.target_weight:g} {unit}")
        if result.weeks_to_target.weeks is not None:
            lines.append(
                f"**Time to target:** {result.weeks_to_target.weeks} weeks "
                f"{result.weeks_to_target.regime}"
            )

        lines.extend(
            [
                "",
                f"## Projected Weight ({unit})",
                "",
                "| Week | Cutting | Maintenance | Bulking |",
                "|------|---------|-------------|---------|",
            ]
        )
        for week in display_weeks(result, every):
            row = result.trajectory.at_week(week)
            lines.append(
                f"| {week} | {row['cutting']:.1f} | {row['maintenance']:.1f} | {row['bulking']:.1f} |"
            )

        rate = result.weekly_rate
        if rate is not None:
            lines.extend(
                [
                    "",
                    f"## Weekly Change ({unit}/week)",
                    "",
                    f"- Cutting: {rate.cutting:+.2f}",
                    f"- Maintenance: {rate.maintenance:+.2f}",
                    f"- Bulking: {rate.bulking:+.2f}",
                ]
            )

        composition = result.body_composition
        if composition is not None:
            lines.extend(
                [
                    "",
                    f"## Body Composition after {composition.week} Weeks ({unit})",
                    "",
                    "| Plan | Fat | Lean |",
                    "|------|-----|------|",
                ]
            )
            for name, split in (
                ("Cutting", composition.cutting),
                ("Maintenance", composition.maintenance),
                ("Bulking", composition.bulking),
            ):
                lines.append(f"| {name} | {split.fat:+.1f} | {split.lean:+.1f} |")

        return "\n".join(lines)


def format_result(
    result: CalculationResult,
    output_format: str = "table",
    console: Optional[Console] = None,
    every: Optional[int] = None,
) -> Optional[str]:
    """Format a calculation result in the specified format.

    Args:
        result: Calculation result to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)
        every: Week step for trajectory tables (formatter default if None)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format(result, every=every or 1)
        return None
    elif output_format == "json":
        return JSONFormatter().format(result)
    elif output_format == "markdown":
        return MarkdownFormatter().format(result, every=every or 4)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
