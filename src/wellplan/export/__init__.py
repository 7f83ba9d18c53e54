"""Output formatters for plan bundles."""

from wellplan.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_plans,
    get_formatter,
)

__all__ = [
    "TableFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "format_plans",
    "get_formatter",
]
