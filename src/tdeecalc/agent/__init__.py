"""Agent interface module for machine-readable output."""

from __future__ import annotations

from tdeecalc.agent.response import (
    AgentResponse,
    calculation_response,
    calculation_summary,
    create_response,
    error_response,
)

__all__ = [
    "AgentResponse",
    "calculation_response",
    "calculation_summary",
    "create_response",
    "error_response",
]
