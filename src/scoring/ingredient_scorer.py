"""Ingredient-position relevance scoring.

Pet food labels list ingredients by weight, so a term found at the
front of the list scores close to 1.0 and one found at the end close
to 0.0.
"""

from typing import Iterable, Sequence

from src.data_layer.models import IngredientGroupScore


def ingredient_token_matches(token: str, ingredient: str) -> bool:
    """Check whether a query token refers to an ingredient slug.

    Matches when the two are equal, when either is an underscore-delimited
    prefix of the other, or when a single-word token is one component of
    the ingredient ("potato" matches "sweet_potato").
    """
    if not token or not ingredient:
        return False
    if token == ingredient:
        return True
    if ingredient.startswith(token + "_") or token.startswith(ingredient + "_"):
        return True
    if "_" not in token and token in ingredient.split("_"):
        return True
    return False


def evaluate_ingredient_group_score(
    tokens: Iterable[str],
    ingredients: Sequence[str],
) -> IngredientGroupScore:
    """Score a query group by its earliest match in the ingredient sequence.

    Args:
        tokens: Candidate tokens of one query group
        ingredients: Ordered ingredient sequence of a product

    Returns:
        IngredientGroupScore with score 1 - index/length, or unmatched
    """
    candidates = [t for t in tokens if t]
    length = len(ingredients)
    if not candidates or length == 0:
        return IngredientGroupScore(matched=False, score=0.0, index=None)

    for index, ingredient in enumerate(ingredients):
        if any(ingredient_token_matches(token, ingredient) for token in candidates):
            return IngredientGroupScore(matched=True, score=1 - index / length, index=index)

    return IngredientGroupScore(matched=False, score=0.0, index=None)
