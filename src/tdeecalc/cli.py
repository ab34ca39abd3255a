"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from tdeecalc.agent.response import calculation_response, create_response, error_response
from tdeecalc.config import default_config_path, get_settings, reload_settings
from tdeecalc.config.settings import EngineConfig, Settings
from tdeecalc.engine import ProjectionEngine
from tdeecalc.export.formatters import format_result
from tdeecalc.profiles.loader import load_profile_from_yaml
from tdeecalc.profiles.models import (
    ConfigError,
    Gender,
    HeightUnit,
    ProfileInput,
    ValidationError,
    WeightUnit,
)
from tdeecalc.profiles.targets import calculate_healthy_weight
from tdeecalc.profiles.units import convert_height
from tdeecalc.profiles.validation import build_profile, validate_height

app = typer.Typer(
    help="TDEE calculator with cutting/maintenance/bulking weight projections",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")

logger = logging.getLogger(__name__)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def load_engine_config(command: str = "", json_output: bool = False) -> EngineConfig:
    """Build the engine config from the active settings.

    Raises typer.Exit(1) with a friendly message if the config is invalid,
    or an error envelope when ``json_output`` is set.
    """
    try:
        return get_settings().engine_config()
    except ConfigError as e:
        if json_output:
            fail(
                command,
                e,
                json_output,
                [f"Check {default_config_path()} or pass --config"],
            )
        err_console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        err_console.print(f"Check [cyan]{default_config_path()}[/cyan] or pass --config")
        raise typer.Exit(1)


def fail(command: str, error: Exception, json_output: bool, suggestions: list[str]) -> None:
    """Report an error and exit with status 1."""
    details = getattr(error, "errors", None)
    if json_output:
        output_json(error_response(command, str(error), details, suggestions).to_dict())
    else:
        for message in details or [str(error)]:
            console.print(f"[red]{escape(message)}[/red]")
        for suggestion in suggestions:
            console.print(suggestion)
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml (default: ~/.tdeecalc/config.yaml)"
    ),
) -> None:
    """Configure logging and settings before any command runs."""
    configure_logging(verbose)
    try:
        reload_settings(config)
    except ConfigError as e:
        err_console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)


# ============================================================================
# Main Commands
# ============================================================================


@app.command()
def calculate(
    gender: Optional[str] = typer.Option(None, "--gender", "-g", help="Gender (male/female)"),
    age: Optional[int] = typer.Option(None, "--age", "-a", help="Age in years (15-100)"),
    weight: Optional[float] = typer.Option(None, "--weight", "-w", help="Current weight"),
    weight_unit: Optional[str] = typer.Option(
        None, "--weight-unit", help="Weight unit (kg/lb)"
    ),
    height: Optional[float] = typer.Option(
        None, "--height", help="Height in cm or inches, or whole feet with --height-unit ft"
    ),
    height_unit: Optional[str] = typer.Option(
        None, "--height-unit", help="Height unit (cm/in/ft)"
    ),
    inches: Optional[float] = typer.Option(
        None, "--inches", help="Extra inches when --height-unit is ft (0-11)"
    ),
    activity: Optional[str] = typer.Option(
        None,
        "--activity",
        help="Activity level (sedentary/light/moderate/active/very-active)",
    ),
    target: Optional[float] = typer.Option(
        None, "--target", "-t", help="Target weight (default: healthy weight estimate)"
    ),
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", "-f", help="Load the profile from a YAML file"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Output format (table/json/markdown)"
    ),
    every: Optional[int] = typer.Option(
        None, "--every", help="Show every N-th week in the projection table"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON response envelope"),
) -> None:
    """Calculate BMR, TDEE and projected weight for each calorie plan."""
    settings = get_settings()
    engine = ProjectionEngine(load_engine_config("calculate", json_output))

    try:
        if from_file:
            if not from_file.exists():
                raise ValidationError(f"Profile file not found: {from_file}")
            profile = load_profile_from_yaml(from_file)
        else:
            profile = _profile_from_options(
                settings,
                gender=gender,
                age=age,
                weight=weight,
                weight_unit=weight_unit,
                height=height,
                height_unit=height_unit,
                inches=inches,
                activity=activity,
                target=target,
            )
        logger.debug("Calculating for %s", profile)
        result = engine.calculate(profile)
    except ValidationError as e:
        fail(
            "calculate",
            e,
            json_output,
            [
                "Example: tdeecalc calculate --gender male --age 30 --weight 70 --height 170",
                "Or: tdeecalc calculate --from-file profile.yaml",
            ],
        )
        return

    if json_output:
        output_json(
            calculation_response(result, engine.config.default_horizon_weeks).to_dict()
        )
        return

    fmt = output_format or settings.defaults.output_format
    try:
        formatted = format_result(result, fmt, console=console, every=every)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if formatted is not None:
        print(formatted)


def _profile_from_options(
    settings: Settings,
    gender: Optional[str],
    age: Optional[int],
    weight: Optional[float],
    weight_unit: Optional[str],
    height: Optional[float],
    height_unit: Optional[str],
    inches: Optional[float],
    activity: Optional[str],
    target: Optional[float],
) -> ProfileInput:
    """Build a profile from CLI options, filling units from settings defaults."""
    missing = [
        name
        for name, value in (("--gender", gender), ("--age", age), ("--weight", weight), ("--height", height))
        if value is None
    ]
    if missing:
        raise ValidationError(
            f"Missing required options: {', '.join(missing)}",
            [f"{name} is required (or use --from-file)" for name in missing],
        )

    unit = (height_unit or settings.defaults.height_unit).lower()
    height_fields = {}
    if unit == "ft":
        height_fields = {"height_ft": height, "height_ft_in": inches}
    elif unit in ("cm", "in"):
        height_fields = {f"height_{unit}": height}

    return build_profile(
        gender=gender,
        age=age,
        weight=weight,
        weight_unit=weight_unit or settings.defaults.weight_unit,
        height_unit=unit,
        activity_level=activity or settings.defaults.activity_level,
        target_weight=target,
        **height_fields,
    )


@app.command("healthy-weight")
def healthy_weight(
    gender: str = typer.Option(..., "--gender", "-g", help="Gender (male/female)"),
    height: float = typer.Option(..., "--height", help="Height in cm or inches, or whole feet"),
    height_unit: Optional[str] = typer.Option(None, "--height-unit", help="Height unit (cm/in/ft)"),
    inches: Optional[float] = typer.Option(None, "--inches", help="Extra inches for ft"),
    weight_unit: Optional[str] = typer.Option(None, "--weight-unit", help="Weight unit (kg/lb)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the BMI-22 healthy weight estimate for a height."""
    settings = get_settings()
    config = load_engine_config("healthy-weight", json_output)

    try:
        gender_enum = Gender(gender)
        unit_enum = WeightUnit(weight_unit or settings.defaults.weight_unit)
        height_unit_enum = HeightUnit(height_unit or settings.defaults.height_unit)
    except ValueError as e:
        fail("healthy-weight", e, json_output, ["Genders: male, female. Units: kg/lb, cm/in/ft"])
        return

    height_fields = {
        "height_cm": height,
        "height_in": height,
        "height_ft": height,
        "height_ft_in": inches,
    }
    try:
        validate_height(height_unit_enum, **height_fields)
    except ValidationError as e:
        fail("healthy-weight", e, json_output, ["Example: tdeecalc healthy-weight -g male --height 170"])
        return

    height_cm = convert_height(height_unit_enum, **height_fields)
    value = calculate_healthy_weight(
        height_cm,
        gender_enum,
        unit_enum,
        reference_bmi=config.reference_bmi,
        male_factor=config.male_weight_factor,
        female_factor=config.female_weight_factor,
    )

    if json_output:
        output_json(
            create_response(
                "healthy-weight",
                data={
                    "healthy_weight": value,
                    "weight_unit": unit_enum.value,
                    "height_cm": round(height_cm, 2),
                    "reference_bmi": config.reference_bmi,
                },
                human_summary=f"Healthy weight estimate: {value} {unit_enum.value}",
            ).to_dict()
        )
    else:
        console.print(f"Healthy weight estimate: [bold]{value} {unit_enum.value}[/bold]")
        console.print(f"[dim]BMI {config.reference_bmi:g} at {height_cm:.1f} cm[/dim]")


@app.command("activity-levels")
def activity_levels(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List activity levels with their TDEE multipliers."""
    config = load_engine_config("activity-levels", json_output)

    if json_output:
        output_json(
            create_response(
                "activity-levels",
                data={
                    "levels": [
                        {
                            "level": level.value,
                            "multiplier": multiplier,
                            "description": config.activity_descriptions.get(level, ""),
                        }
                        for level, multiplier in config.activity_multipliers.items()
                    ]
                },
            ).to_dict()
        )
        return

    table = Table(title="Activity Levels")
    table.add_column("Level", style="cyan")
    table.add_column("Multiplier", justify="right")
    table.add_column("Description")
    for level, multiplier in config.activity_multipliers.items():
        table.add_row(level.value, f"{multiplier:g}", config.activity_descriptions.get(level, ""))
    console.print(table)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Print the active settings."""
    data = get_settings().to_dict()
    if json_output:
        output_json(create_response("config show", data=data).to_dict())
    else:
        import yaml

        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default settings."""
    target = path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]Config already exists: {target}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Wrote default config to {target}[/green]")


if __name__ == "__main__":
    app()
