"""Output formatting for search results."""

from src.output.formatters import (
    format_results_json,
    format_results_json_string,
    format_results_markdown,
    format_filters_label,
    format_match_tooltip,
    format_ingredients_text,
)

__all__ = [
    "format_results_json",
    "format_results_json_string",
    "format_results_markdown",
    "format_filters_label",
    "format_match_tooltip",
    "format_ingredients_text",
]
