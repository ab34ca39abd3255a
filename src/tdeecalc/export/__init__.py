"""Output formatters."""

from tdeecalc.export.formatters import JSONFormatter, MarkdownFormatter, TableFormatter

__all__ = ["TableFormatter", "JSONFormatter", "MarkdownFormatter"]
