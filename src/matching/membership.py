"""Token membership tests against a product token set."""

from typing import AbstractSet, Optional

from src.matching.normalizer import normalize_token
from src.matching.product_indexer import CONTAINS_GRAIN_TOKENS


GRAIN_WORDS = ("grain", "grains")


def has_token(token_set: AbstractSet[str], token: str) -> bool:
    """Permissive include test: exact member or any member starting with token.

    "chick" matches "chicken"; "chicken" matches "chicken_meal".
    """
    if not token:
        return False
    if token in token_set:
        return True
    return any(member.startswith(token) for member in token_set)


def has_token_exclude(
    token_set: AbstractSet[str],
    token: str,
    grain_tokens: Optional[AbstractSet[str]] = None,
) -> bool:
    """Strict exclude test.

    "grain"/"grains" only hit the contains-grain status tokens, so
    excluding grain never hides a grain-free product through
    "grain_free". Any other token must be an exact member or the root of
    one ("chicken" hits "chicken_meal" but not "chickpea").

    Args:
        token_set: Product membership tokens
        token: Exclude token
        grain_tokens: Grain status tokens of the product; when given, the
            grain words are checked against these instead of token_set

    Returns:
        True if the token hides the product
    """
    normalized = normalize_token(token)
    if not normalized:
        return False

    if normalized in GRAIN_WORDS:
        status = token_set if grain_tokens is None else grain_tokens
        return not status.isdisjoint(CONTAINS_GRAIN_TOKENS)

    if normalized in token_set:
        return True
    prefix = normalized + "_"
    return any(member.startswith(prefix) for member in token_set)
