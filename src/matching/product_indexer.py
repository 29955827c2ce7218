"""Derive matchable tokens from a product record.

Two views are built per product:
- product_token_set: unordered tokens for yes/no matching, including
  ingredient roots and derived status tokens.
- ordered_ingredients: full ingredient slugs in label order (earlier
  means more of it), used only for ranking.
"""

import re
from typing import FrozenSet, List, Set

from src.data_layer.models import ProductRecord
from src.matching.normalizer import explode_slug, normalize_token, tokens_from_string


CONTAINS_GRAIN_TOKENS = ("contains_grain", "grain", "grains", "with_grains")
GRAIN_FREE_TOKENS = ("grain_free", "no_grain", "no_grains", "grainfree")
HAS_PROTEIN_TOKENS = ("has_protein", "protein")
NO_PROTEIN_TOKENS = ("no_protein",)

_INGREDIENT_SEPARATORS = re.compile(r"[;,\n]+")


def _split_ingredients(ingredients_list: str) -> List[str]:
    return [item.strip() for item in (ingredients_list or "").split(";") if item.strip()]


def grain_status_tokens(product: ProductRecord) -> FrozenSet[str]:
    """Status tokens derived from contains_grain alone.

    Words in the name or brand ("Grain Free Salmon") never count here.
    """
    if product.contains_grain is True:
        return frozenset(CONTAINS_GRAIN_TOKENS)
    if product.contains_grain is False:
        return frozenset(GRAIN_FREE_TOKENS)
    return frozenset()


def product_token_set(product: ProductRecord) -> FrozenSet[str]:
    """Build the membership token set for a product.

    Args:
        product: Catalog product

    Returns:
        Frozen set of tokens
    """
    tokens: Set[str] = set()
    for text in (product.id, product.name, product.brand):
        tokens.update(tokens_from_string(text))

    for ingredient in _split_ingredients(product.ingredients_list):
        tokens.update(explode_slug(ingredient))
    for source in product.protein_sources or []:
        tokens.update(explode_slug(source))

    tokens.update(grain_status_tokens(product))

    if product.protein_sources:
        tokens.update(HAS_PROTEIN_TOKENS)
    else:
        tokens.update(NO_PROTEIN_TOKENS)

    return frozenset(tokens)


def ordered_ingredients(product: ProductRecord) -> List[str]:
    """Ingredient slugs in label order, followed by protein sources.

    No roots, no deduplication, no status tokens.
    """
    sequence = []
    for item in _INGREDIENT_SEPARATORS.split(product.ingredients_list or ""):
        token = normalize_token(item)
        if token:
            sequence.append(token)
    for source in product.protein_sources or []:
        token = normalize_token(source)
        if token:
            sequence.append(token)
    return sequence


def flat_ingredient_tokens(sequence: List[str]) -> List[str]:
    """Expand an ordered ingredient sequence into slugs plus their roots.

    Repeated mentions are kept; used for occurrence counting.
    """
    flat: List[str] = []
    for slug in sequence:
        flat.extend(explode_slug(slug))
    return flat
