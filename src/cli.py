#!/usr/bin/env python3
"""Command-line interface for searching the pet food catalog."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.data_layer.catalog_db import CatalogDB
from src.data_layer.exceptions import CatalogLoadError, SearchConfigError
from src.matching.synonyms import load_search_config
from src.output.formatters import format_results_json_string, format_results_markdown
from src.scoring.match_ranker import DEFAULT_RESULT_LIMIT, search


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Filter and rank pet food products with a free-text query"
    )
    parser.add_argument(
        "query",
        nargs="*",
        help='Query terms, e.g. "grain free chicken -beef" (prefix "-" to exclude; use -- before a leading exclude)'
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default="data/products.json",
        help="Path to products JSON file (default: data/products.json)"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Optional search vocabulary YAML (default: packaged config)"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_RESULT_LIMIT,
        help=f"Maximum number of results to show (default: {DEFAULT_RESULT_LIMIT}, 0 for all)"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    catalog_path = Path(args.catalog)
    if not catalog_path.exists():
        print(f"Error: Catalog file not found: {catalog_path}", file=sys.stderr)
        return 1

    try:
        config = load_search_config(args.config) if args.config else None

        print(f"Loading catalog from {catalog_path}...", file=sys.stderr)
        products = CatalogDB(str(catalog_path)).get_all_products()
        print(f"Found {len(products)} products", file=sys.stderr)
    except (CatalogLoadError, SearchConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    limit = args.limit if args.limit > 0 else None
    results = search(products, " ".join(args.query), config=config, limit=limit)

    if args.output == "json":
        print(format_results_json_string(results, indent=2))
    else:
        print(format_results_markdown(results))

    return 0


if __name__ == "__main__":
    sys.exit(main())
