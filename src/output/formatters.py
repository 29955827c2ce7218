"""Formatters for search results output (JSON and Markdown)."""

import json
import re
from typing import Any, Dict, Iterable, Optional

from src.data_layer.models import MatchResult, ProductRecord
from src.scoring.match_ranker import SearchResults


INSTRUCTIONS_TEXT = "start typing to see matches"
NO_MATCHES_TEXT = "No matches found."
NO_INGREDIENTS_TEXT = "No ingredients listed."


def yes_no_label(value: Optional[bool]) -> str:
    """Format a tri-state flag as "Yes", "No" or "—" when unknown."""
    if value is True:
        return "Yes"
    if value is False:
        return "No"
    return "—"


def protein_presence_label(product: ProductRecord) -> str:
    return "Yes" if product.protein_sources else "No"


def format_match_tooltip(result: MatchResult) -> str:
    """Explain the match percentage (e.g., "Matched 1 of 2 search terms")."""
    if result.needed_groups > 0:
        return f"Matched {result.matched_groups} of {result.needed_groups} search terms"
    return "No active filters"


def format_filters_label(label_includes: Iterable[str], label_excludes: Iterable[str]) -> str:
    """Format the parsed filters, or "" when there are none."""
    includes = ", ".join(label_includes or [])
    excludes = ", ".join(label_excludes or [])
    if not includes and not excludes:
        return ""
    return f"includes: [{includes}]  excludes: [{excludes}]"


def format_count_label(shown: int, total: int) -> str:
    if total == 0 and shown == 0:
        return ""
    return f"{shown}/{total} shown"


def format_ingredients_text(product: ProductRecord) -> str:
    """Format the ingredient list for reading ("chicken, brown rice, ...")."""
    items = [
        item.strip().replace("_", " ")
        for item in re.split(r"[;,\n]+", product.ingredients_list or "")
    ]
    items = [item for item in items if item]
    if not items:
        return NO_INGREDIENTS_TEXT
    return ", ".join(items)


def format_results_markdown(results: SearchResults) -> str:
    """Format SearchResults as Markdown.

    Args:
        results: SearchResults from rank_products/search

    Returns:
        Formatted Markdown string
    """
    lines = ["# Product Matches\n"]

    if not results.active:
        lines.append(f"_{INSTRUCTIONS_TEXT}_")
        return "\n".join(lines)

    filters = format_filters_label(results.label_includes, results.label_excludes)
    if filters:
        lines.append(f"**Filters:** {filters}")
    lines.append(f"**Shown:** {format_count_label(len(results.results), results.total_matches)}")
    lines.append("")

    if not results.results:
        lines.append(NO_MATCHES_TEXT)
        return "\n".join(lines)

    for idx, (product, result) in enumerate(results.results, 1):
        brand = product.brand or "—"
        lines.append(f"## {idx}. {product.name} ({brand})")
        lines.append(f"**Match:** {result.match}% ({format_match_tooltip(result)})")
        if result.tier:
            lines.append(f"**Protein Purity:** {result.tier} ({result.purity_percent}%)")
        if product.protein_sources:
            sources = ", ".join(s.replace("_", " ") for s in product.protein_sources)
            lines.append(f"**Protein Sources:** {sources}")
        else:
            lines.append(f"**Protein:** {protein_presence_label(product)}")
        lines.append(f"**Grains:** {yes_no_label(product.contains_grain)}")
        lines.append(f"**Ingredients:** {format_ingredients_text(product)}")
        if product.product_url:
            lines.append(f"**Link:** {product.product_url}")
        lines.append("")

    return "\n".join(lines)


def format_result_json(product: ProductRecord, result: MatchResult) -> Dict[str, Any]:
    """Format one ranked product as a JSON-ready dictionary."""
    return {
        "product": {
            "id": product.id,
            "name": product.name,
            "brand": product.brand,
            "brand_url": product.brand_url,
            "product_url": product.product_url,
            "image": product.image,
            "contains_grain": product.contains_grain,
            "protein_sources": list(product.protein_sources),
            "ingredients": format_ingredients_text(product),
        },
        "match": result.match,
        "sort_score": result.sort_score,
        "matched_groups": result.matched_groups,
        "needed_groups": result.needed_groups,
        "tier": result.tier,
        "purity_percent": result.purity_percent,
        "tooltip": format_match_tooltip(result),
    }


def format_results_json(results: SearchResults) -> Dict[str, Any]:
    """Format SearchResults as JSON (for API usage).

    Args:
        results: SearchResults from rank_products/search

    Returns:
        Dictionary ready for JSON serialization
    """
    return {
        "active": results.active,
        "filters": {
            "includes": list(results.label_includes),
            "excludes": list(results.label_excludes),
            "label": format_filters_label(results.label_includes, results.label_excludes),
        },
        "total_products": results.total_products,
        "total_matches": results.total_matches,
        "shown": len(results.results),
        "results": [format_result_json(p, r) for p, r in results.results],
    }


def format_results_json_string(results: SearchResults, indent: int = 2) -> str:
    """Format SearchResults as a JSON string.

    Args:
        results: SearchResults from rank_products/search
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_results_json(results), indent=indent)
