"""Scoring module for product relevance and protein purity."""

from .match_ranker import (
    RankingWeights,
    SearchResults,
    compute_match,
    rank_products,
    search,
)
from .protein_purity import evaluate_protein_purity, parse_protein_source
from .ingredient_scorer import evaluate_ingredient_group_score, ingredient_token_matches

__all__ = [
    "RankingWeights",
    "SearchResults",
    "compute_match",
    "rank_products",
    "search",
    "evaluate_protein_purity",
    "parse_protein_source",
    "evaluate_ingredient_group_score",
    "ingredient_token_matches",
]
