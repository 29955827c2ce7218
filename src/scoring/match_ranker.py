"""Product matching and ranking against a parsed query."""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from src.data_layer.models import MatchResult, ParsedQuery, ProductRecord, QueryGroup
from src.matching.membership import has_token, has_token_exclude
from src.matching.product_indexer import (
    flat_ingredient_tokens,
    grain_status_tokens,
    ordered_ingredients,
    product_token_set,
)
from src.matching.query_parser import parse_query
from src.matching.synonyms import DEFAULT_SEARCH_CONFIG, SearchConfig
from src.scoring.ingredient_scorer import evaluate_ingredient_group_score
from src.scoring.protein_purity import evaluate_protein_purity


DIRECTION_WITH = "with"
DIRECTION_WITHOUT = "without"

# Cap used by the CLI and API; the engine itself never truncates unless asked.
DEFAULT_RESULT_LIMIT = 6


@dataclass
class RankingWeights:
    """Weights combining the sort key components.

    sort_score = match * match_weight
                 + ingredient_rank_boost * rank_boost_weight
                 + frequency_score * frequency_weight
    """
    match_weight: float = 1000.0
    rank_boost_weight: float = 10.0
    frequency_weight: float = 1.0

    def __post_init__(self):
        """Validate weights are non-negative."""
        weights = [self.match_weight, self.rank_boost_weight, self.frequency_weight]
        if any(w < 0 for w in weights):
            raise ValueError("All ranking weights must be non-negative")


@dataclass
class SearchResults:
    """Ranked, filtered output of one search pass."""

    active: bool  # False when the query had no includes and no excludes
    results: List[Tuple[ProductRecord, MatchResult]] = field(default_factory=list)
    total_matches: int = 0  # Shown products before any limit
    total_products: int = 0
    label_includes: List[str] = field(default_factory=list)
    label_excludes: List[str] = field(default_factory=list)


def _group_tokens(group) -> frozenset:
    """Accept QueryGroup objects or plain token collections."""
    if isinstance(group, QueryGroup):
        return group.tokens
    return frozenset(group)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _group_direction(tokens: frozenset, config: SearchConfig) -> Optional[str]:
    if not tokens.isdisjoint(config.grain_present_tokens):
        return DIRECTION_WITH
    if not tokens.isdisjoint(config.grain_free_tokens):
        return DIRECTION_WITHOUT
    return None


def _hidden(matched_groups: int, needed_groups: int) -> MatchResult:
    return MatchResult(
        match=0,
        sort_score=0,
        matched_groups=matched_groups,
        needed_groups=needed_groups,
        show=False,
    )


def compute_match(
    product: ProductRecord,
    include_groups: Sequence,
    excludes: Iterable[str],
    config: Optional[SearchConfig] = None,
    weights: Optional[RankingWeights] = None,
) -> MatchResult:
    """Score one product against parsed include groups and excludes.

    Args:
        product: Catalog product
        include_groups: Ordered QueryGroups (or token collections)
        excludes: Flat exclude tokens
        config: Search vocabulary (default: packaged config)
        weights: Sort key weights (default: RankingWeights())

    Returns:
        MatchResult; show is False when an exclude hits, when no group
        matches, or when a grain direction demanded by the query is not met
    """
    config = config or DEFAULT_SEARCH_CONFIG
    weights = weights or RankingWeights()

    token_set = product_token_set(product)
    grain_tokens = grain_status_tokens(product)
    sequence = ordered_ingredients(product)
    needed_groups = len(include_groups)

    # Excludes veto before any include logic
    for token in excludes:
        if has_token_exclude(token_set, token, grain_tokens):
            return _hidden(0, needed_groups)

    reference_sets = {
        DIRECTION_WITH: config.grain_present_tokens,
        DIRECTION_WITHOUT: config.grain_free_tokens,
    }

    evaluated = []
    for group in include_groups:
        tokens = _group_tokens(group)
        direction = _group_direction(tokens, config)
        if direction is None:
            matched = any(has_token(token_set, token) for token in tokens)
        else:
            # Only contains_grain decides direction; names like
            # "Grain Free Salmon" and prefixes like "grain_free" do not
            matched = not grain_tokens.isdisjoint(reference_sets[direction])
        ingredient_score = evaluate_ingredient_group_score(tokens, sequence)
        evaluated.append((tokens, matched, direction, ingredient_score))

    matched_groups = sum(1 for _, matched, _, _ in evaluated if matched)
    if needed_groups > 0 and matched_groups == 0:
        return _hidden(matched_groups, needed_groups)

    for direction in (DIRECTION_WITH, DIRECTION_WITHOUT):
        demanded = [matched for _, matched, d, _ in evaluated if d == direction]
        if demanded and not any(demanded):
            return _hidden(matched_groups, needed_groups)

    weighted_total = 0.0
    for _, matched, _, ingredient_score in evaluated:
        if matched:
            weighted_total += ingredient_score.score if ingredient_score.matched else 1.0
    match = _round_half_up(weighted_total / needed_groups * 100) if needed_groups else 0

    flat_tokens = flat_ingredient_tokens(sequence)
    frequency_score = 0
    ingredient_rank_boost = 0
    for tokens, matched, _, ingredient_score in evaluated:
        frequency_score += max((flat_tokens.count(t) for t in tokens), default=0)
        if ingredient_score.matched:
            ingredient_rank_boost += len(sequence) - ingredient_score.index

    sort_score = (
        match * weights.match_weight
        + ingredient_rank_boost * weights.rank_boost_weight
        + frequency_score * weights.frequency_weight
    )

    purity = evaluate_protein_purity(product.protein_sources)
    return MatchResult(
        match=match,
        sort_score=sort_score,
        matched_groups=matched_groups,
        needed_groups=needed_groups,
        show=True,
        tier=purity.tier,
        purity_percent=purity.percent,
    )


def rank_products(
    products: Iterable[ProductRecord],
    parsed_query: ParsedQuery,
    config: Optional[SearchConfig] = None,
    weights: Optional[RankingWeights] = None,
    limit: Optional[int] = None,
) -> SearchResults:
    """Score, filter and order a catalog for a parsed query.

    Args:
        products: Catalog products
        parsed_query: Output of parse_query
        config: Search vocabulary (default: packaged config)
        weights: Sort key weights (default: RankingWeights())
        limit: Optional maximum number of results to keep after sorting

    Returns:
        SearchResults sorted by sort_score descending, then name
    """
    catalog = list(products)
    if not parsed_query.is_active:
        return SearchResults(
            active=False,
            total_products=len(catalog),
            label_includes=list(parsed_query.label_includes),
            label_excludes=list(parsed_query.label_excludes),
        )

    scored = []
    for product in catalog:
        result = compute_match(
            product,
            parsed_query.include_groups,
            parsed_query.excludes,
            config=config,
            weights=weights,
        )
        if result.show:
            scored.append((product, result))

    scored.sort(key=lambda pair: (-pair[1].sort_score, (pair[0].name or "").lower()))
    total_matches = len(scored)
    if limit is not None:
        scored = scored[: max(0, limit)]

    return SearchResults(
        active=True,
        results=scored,
        total_matches=total_matches,
        total_products=len(catalog),
        label_includes=list(parsed_query.label_includes),
        label_excludes=list(parsed_query.label_excludes),
    )


def search(
    products: Iterable[ProductRecord],
    query: Optional[str],
    config: Optional[SearchConfig] = None,
    weights: Optional[RankingWeights] = None,
    limit: Optional[int] = None,
) -> SearchResults:
    """Parse a raw query and rank the catalog against it."""
    parsed = parse_query(query, config=config)
    return rank_products(products, parsed, config=config, weights=weights, limit=limit)
