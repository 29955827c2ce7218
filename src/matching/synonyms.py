"""Synonym table and phrase overrides loaded from YAML.

The vocabulary is data, not code: new domain synonyms go into
search_config.yaml (or a user-supplied file with the same layout).
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set

import yaml

from src.data_layer.exceptions import SearchConfigError
from src.matching.normalizer import normalize_token, plural_variants


DEFAULT_CONFIG_PATH = Path(__file__).with_name("search_config.yaml")

GRAIN_PRESENT_DOMAIN = "grain_present"
GRAIN_FREE_DOMAIN = "grain_free"


@dataclass(frozen=True)
class SearchConfig:
    """Immutable search vocabulary.

    Attributes:
        synonyms: canonical token -> related tokens (all domains merged)
        phrase_overrides: two-word phrase tokens consumed as one term
        grain_present_tokens: tokens that express "contains grain"
        grain_free_tokens: tokens that express "grain free"
    """
    synonyms: Mapping[str, FrozenSet[str]]
    phrase_overrides: FrozenSet[str]
    grain_present_tokens: FrozenSet[str]
    grain_free_tokens: FrozenSet[str]


def _domain_tokens(domain: Mapping[str, Set[str]]) -> FrozenSet[str]:
    tokens: Set[str] = set()
    for key, values in domain.items():
        tokens.add(key)
        tokens.update(values)
    return frozenset(tokens)


def build_search_config(data: dict, source: str = "<dict>") -> SearchConfig:
    """Build a SearchConfig from parsed YAML data.

    Args:
        data: Mapping with "synonyms" and "phrase_overrides" keys
        source: Name used in error messages

    Returns:
        SearchConfig object

    Raises:
        SearchConfigError: If the layout is wrong or the grain sets overlap
    """
    if not isinstance(data, dict):
        raise SearchConfigError(source, "top level must be a mapping")

    raw_domains = data.get("synonyms") or {}
    if not isinstance(raw_domains, dict):
        raise SearchConfigError(source, "'synonyms' must map domains to tables")

    merged: Dict[str, Set[str]] = {}
    domains: Dict[str, Dict[str, Set[str]]] = {}
    for domain_name, table in raw_domains.items():
        if not isinstance(table, dict):
            raise SearchConfigError(source, f"synonym domain '{domain_name}' must be a mapping")
        domain: Dict[str, Set[str]] = {}
        for key, values in table.items():
            canonical = normalize_token(key)
            if not canonical:
                continue
            related = {normalize_token(v) for v in (values or [])}
            related.discard("")
            domain.setdefault(canonical, set()).update(related)
            merged.setdefault(canonical, set()).update(related)
        domains[str(domain_name)] = domain

    raw_phrases = data.get("phrase_overrides") or []
    if not isinstance(raw_phrases, list):
        raise SearchConfigError(source, "'phrase_overrides' must be a list")
    phrases = {normalize_token(p) for p in raw_phrases}
    phrases.discard("")

    grain_present = _domain_tokens(domains.get(GRAIN_PRESENT_DOMAIN, {}))
    grain_free = _domain_tokens(domains.get(GRAIN_FREE_DOMAIN, {}))
    overlap = grain_present & grain_free
    if overlap:
        raise SearchConfigError(
            source, f"grain reference sets overlap: {', '.join(sorted(overlap))}"
        )

    return SearchConfig(
        synonyms=MappingProxyType({k: frozenset(v) for k, v in merged.items()}),
        phrase_overrides=frozenset(phrases),
        grain_present_tokens=grain_present,
        grain_free_tokens=grain_free,
    )


def load_search_config(path: Optional[str] = None) -> SearchConfig:
    """Load search vocabulary from YAML.

    Args:
        path: Optional path to a YAML file; defaults to the packaged config

    Returns:
        SearchConfig object

    Raises:
        SearchConfigError: If the file is missing, unparsable, or invalid
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise SearchConfigError(str(config_path), "file not found") from exc
    except yaml.YAMLError as exc:
        raise SearchConfigError(str(config_path), f"invalid YAML ({exc})") from exc

    return build_search_config(data, source=str(config_path))


DEFAULT_SEARCH_CONFIG = load_search_config()


def expand_synonyms(token: str, config: Optional[SearchConfig] = None) -> FrozenSet[str]:
    """Expand a token with its configured synonyms and plural variants.

    Args:
        token: Token (normalized again here)
        config: Search vocabulary (default: packaged config)

    Returns:
        Frozen set of token variants; empty for an empty token
    """
    config = config or DEFAULT_SEARCH_CONFIG
    base = normalize_token(token)
    if not base:
        return frozenset()

    expanded = {base}
    expanded.update(config.synonyms.get(base, frozenset()))
    expanded.update(plural_variants(base))
    return frozenset(expanded)
