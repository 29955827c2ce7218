"""Matching layer: normalization, vocabulary, query parsing and indexing."""

from src.matching.normalizer import (
    normalize_token,
    plural_variants,
    tokens_from_string,
    explode_slug,
)

from src.matching.synonyms import (
    SearchConfig,
    DEFAULT_SEARCH_CONFIG,
    build_search_config,
    load_search_config,
    expand_synonyms,
)

from src.matching.query_parser import parse_query

from src.matching.product_indexer import (
    product_token_set,
    ordered_ingredients,
    flat_ingredient_tokens,
)

from src.matching.membership import has_token, has_token_exclude

__all__ = [
    # Normalization
    "normalize_token",
    "plural_variants",
    "tokens_from_string",
    "explode_slug",
    # Vocabulary
    "SearchConfig",
    "DEFAULT_SEARCH_CONFIG",
    "build_search_config",
    "load_search_config",
    "expand_synonyms",
    # Query parsing
    "parse_query",
    # Indexing
    "product_token_set",
    "ordered_ingredients",
    "flat_ingredient_tokens",
    # Membership
    "has_token",
    "has_token_exclude",
]
