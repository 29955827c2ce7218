"""Data models for the pet food product filter."""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional


_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}


def _as_text(value: Any) -> str:
    """Coerce a raw field to a string, treating None as empty."""
    if value is None:
        return ""
    return str(value)


def _as_tri_state(value: Any) -> Optional[bool]:
    """Coerce a raw grain flag to True/False/None (unknown)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _as_sources(value: Any) -> List[str]:
    """Coerce raw protein sources to a list of non-empty strings."""
    if isinstance(value, str):
        items = re.split(r"[;,]", value)
    elif isinstance(value, (list, tuple)):
        items = [_as_text(item) for item in value]
    else:
        return []
    return [item.strip() for item in items if item and item.strip()]


@dataclass(frozen=True)
class ProductRecord:
    """Represents one catalog product (read-only input to matching)."""

    id: str = ""
    name: str = ""
    brand: str = ""
    brand_url: str = ""
    product_url: str = ""
    image: str = ""
    contains_grain: Optional[bool] = None  # True, False, or None when unknown
    protein_sources: List[str] = field(default_factory=list)  # Label order
    ingredients_list: str = ""  # Semicolon-delimited, label order

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductRecord":
        """Build a product from a raw catalog entry.

        Missing or malformed fields fall back to empty values; fields not
        listed on the model are ignored.

        Args:
            data: Dictionary parsed from the catalog JSON

        Returns:
            ProductRecord object
        """
        return cls(
            id=_as_text(data.get("id")),
            name=_as_text(data.get("name")),
            brand=_as_text(data.get("brand")),
            brand_url=_as_text(data.get("brand_url")),
            product_url=_as_text(data.get("product_url")),
            image=_as_text(data.get("image")),
            contains_grain=_as_tri_state(data.get("contains_grain")),
            protein_sources=_as_sources(data.get("protein_sources")),
            ingredients_list=_as_text(data.get("ingredients_list")),
        )


@dataclass(frozen=True)
class QueryGroup:
    """One typed include/exclude term expanded into its token variants."""

    label: str  # Normalized base word or phrase, for display only
    tokens: FrozenSet[str]


@dataclass(frozen=True)
class ParsedQuery:
    """Result of parsing a raw query string."""

    include_groups: List[QueryGroup] = field(default_factory=list)
    excludes: FrozenSet[str] = frozenset()
    label_includes: List[str] = field(default_factory=list)
    label_excludes: List[str] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """True when the query carries at least one include or exclude."""
        return bool(self.include_groups) or bool(self.excludes)


@dataclass(frozen=True)
class ProteinParse:
    """Parsed form of one raw protein-source string."""

    base: str  # Underlying ingredient, e.g. "chicken"
    form: str  # "pure", "meal", "fat", or "other"
    mixed: bool = False


@dataclass(frozen=True)
class ProteinPurity:
    """Overall protein purity of a product."""

    percent: int
    tier: str  # "pure", "meal", "fat", "mixed", or "none"


@dataclass(frozen=True)
class IngredientGroupScore:
    """Positional relevance of one query group within an ingredient list."""

    matched: bool
    score: float
    index: Optional[int] = None


@dataclass(frozen=True)
class MatchResult:
    """Per-product outcome of scoring against a parsed query."""

    match: int  # 0-100
    sort_score: float
    matched_groups: int
    needed_groups: int
    show: bool
    tier: Optional[str] = None
    purity_percent: Optional[int] = None
