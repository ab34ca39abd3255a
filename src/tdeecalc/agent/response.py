"""Response envelope for machine-readable JSON output.

Every ``--json`` command prints one envelope. ``data`` holds the command's
result; ``human_summary`` is a single line a script can show as-is.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from tdeecalc.engine import CalculationResult


@dataclass
class AgentResponse:
    """Standardized response envelope for all CLI commands.

    Scripts read ``success`` first, then either ``data`` or ``errors``.
    Per-field validation problems are listed one per entry in ``errors``.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""
    schema_version: str = "1.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": self.schema_version,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def create_response(
    command: str,
    success: bool = True,
    data: Optional[dict[str, Any]] = None,
    errors: Optional[list[str]] = None,
    warnings: Optional[list[str]] = None,
    suggestions: Optional[list[str]] = None,
    human_summary: str = "",
) -> AgentResponse:
    """Create an AgentResponse with defaults.

    Args:
        command: The command that was executed
        success: Whether the command succeeded
        data: Command-specific result data
        errors: Error messages
        warnings: Non-fatal warning messages
        suggestions: Actionable suggestions for next steps
        human_summary: One-line description for humans

    Returns:
        AgentResponse instance
    """
    return AgentResponse(
        success=success,
        command=command,
        data=data or {},
        errors=errors or [],
        warnings=warnings or [],
        suggestions=suggestions or [],
        human_summary=human_summary,
    )


def calculation_summary(result: CalculationResult) -> str:
    """One line describing a calculation, e.g.

    ``TDEE 2507 kcal/day (cut 2006, bulk 2758), 68 kg target in 4 weeks cutting``
    """
    energy = result.energy
    summary = f"TDEE {energy.tdee} kcal/day (cut {energy.cutting}, bulk {energy.bulking})"
    weeks = result.weeks_to_target
    if weeks.weeks is not None:
        summary += (
            f", {result.target.target_weight:g} {result.weight_unit} target"
            f" in {weeks.weeks} weeks {weeks.regime}"
        )
    return summary


def calculation_response(
    result: CalculationResult,
    default_weeks: int = 12,
) -> AgentResponse:
    """Wrap a calculation result in a success envelope.

    Warnings flag a healthy-weight target the user did not choose, a target
    beyond the ``default_weeks`` window, and a target no regime reaches.
    """
    warnings = []
    suggestions = []
    if result.target.is_healthy_estimate:
        warnings.append("No target weight given; using healthy weight estimate")
        suggestions.append("Pass --target to project toward your own goal")

    weeks = result.weeks_to_target
    if weeks.exceeds_horizon(default_weeks):
        warnings.append(
            f"Target is {weeks.weeks} weeks away, beyond the {default_weeks}-week projection"
        )
    elif weeks.weeks is None and result.starting_weight != result.target.target_weight:
        warnings.append("Target not reachable at these calorie levels")

    return create_response(
        "calculate",
        data=result.to_dict(),
        warnings=warnings,
        suggestions=suggestions,
        human_summary=calculation_summary(result),
    )


def error_response(
    command: str,
    error: str,
    details: Optional[list[str]] = None,
    suggestions: Optional[list[str]] = None,
) -> AgentResponse:
    """Create an error response.

    Args:
        command: The command that failed
        error: Error message
        details: Individual problems (e.g. one per invalid field); replaces
            ``error`` in the errors list when given
        suggestions: Suggestions for fixing the error

    Returns:
        AgentResponse with success=False
    """
    return AgentResponse(
        success=False,
        command=command,
        errors=list(details) if details else [error],
        suggestions=suggestions or [],
        human_summary=f"Error: {error}",
    )
