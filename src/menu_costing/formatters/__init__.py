"""Output formatting utilities."""

from menu_costing.formatters.console import format_averages_for_console, format_matrix_for_console
from menu_costing.formatters.numbers import format_currency, format_percent

__all__ = [
    "format_averages_for_console",
    "format_currency",
    "format_matrix_for_console",
    "format_percent",
]
