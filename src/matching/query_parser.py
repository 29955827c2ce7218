"""Parse a free-text filter query into include groups and excludes.

Query language:
- Terms are separated by whitespace and read left to right.
- A leading "-" turns a term into an exclude.
- Two adjacent terms that form a configured phrase ("grain free",
  "without grains") are read as one term.
- Any other adjacent pair is also offered as an extra bigram candidate
  inside the first term's group ("sweet potato" -> "sweet_potato"),
  while the second term is still parsed on its own.

Each include term becomes one QueryGroup (OR within the group, AND
across groups). Exclude terms are flattened into a single token set.
"""

from typing import List, Optional, Set

from src.data_layer.models import ParsedQuery, QueryGroup
from src.matching.normalizer import normalize_token, plural_variants
from src.matching.synonyms import DEFAULT_SEARCH_CONFIG, SearchConfig, expand_synonyms


EXCLUDE_PREFIX = "-"


def _add_label(labels: List[str], label: str):
    if label not in labels:
        labels.append(label)


def parse_query(query: Optional[str], config: Optional[SearchConfig] = None) -> ParsedQuery:
    """Parse a raw query string.

    Args:
        query: Text typed by the user (None or blank means no active query)
        config: Search vocabulary (default: packaged config)

    Returns:
        ParsedQuery with include groups in typed order, the flat exclude
        set, and display labels
    """
    config = config or DEFAULT_SEARCH_CONFIG
    terms = (query or "").split()

    include_groups: List[QueryGroup] = []
    excludes: Set[str] = set()
    label_includes: List[str] = []
    label_excludes: List[str] = []

    i = 0
    while i < len(terms):
        term = terms[i]
        is_exclude = term.startswith(EXCLUDE_PREFIX)
        base = normalize_token(term[len(EXCLUDE_PREFIX):] if is_exclude else term)
        if not base:
            i += 1
            continue

        phrase = ""
        if i + 1 < len(terms) and not terms[i + 1].startswith(EXCLUDE_PREFIX):
            following = normalize_token(terms[i + 1])
            if following:
                phrase = f"{base}_{following}"

        if phrase and phrase in config.phrase_overrides:
            tokens = set(expand_synonyms(phrase, config))
            label = phrase
            step = 2
        else:
            tokens = set(expand_synonyms(base, config))
            if phrase:
                tokens.update(plural_variants(phrase))
            label = base
            step = 1

        if is_exclude:
            excludes.update(tokens)
            _add_label(label_excludes, label)
        else:
            include_groups.append(QueryGroup(label=label, tokens=frozenset(tokens)))
            _add_label(label_includes, label)

        i += step

    return ParsedQuery(
        include_groups=include_groups,
        excludes=frozenset(excludes),
        label_includes=label_includes,
        label_excludes=label_excludes,
    )
