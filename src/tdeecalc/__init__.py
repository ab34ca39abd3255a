"""TDEE calculator and weight projection engine."""

from __future__ import annotations

__version__ = "0.1.0"

from tdeecalc.engine import CalculationResult, ProjectionEngine, calculate

__all__ = [
    "CalculationResult",
    "ProjectionEngine",
    "__version__",
    "calculate",
]
