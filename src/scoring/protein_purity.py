"""Protein purity classification.

Each protein source string is reduced to a base ingredient and a
physical form:

    "Deboned Chicken"  -> base "chicken", form "pure"
    "chicken meal"     -> base "chicken", form "meal"
    "chicken fat"      -> base "chicken", form "fat"
    "chicken liver"    -> base "chicken", form "other"

The product tier then depends on how many distinct bases appear and in
which forms:

    pure  100  one base, only the whole ingredient
    meal   93  one base, whole ingredient and/or meal
    fat    85  one base with fat/other forms, or extra bases that are fat only
    mixed  75  blended names ("chicken_and_rice") or several real proteins
    none    0  no protein sources
"""

from typing import Dict, List, Optional, Sequence

from src.data_layer.models import ProteinParse, ProteinPurity
from src.matching.normalizer import normalize_token


# Descriptors stripped from the front, possibly stacked
# ("freeze_dried_raw_chicken").
PROTEIN_DESCRIPTOR_PREFIXES = (
    "deboned_",
    "roasted_",
    "smoke_flavored_",
    "freeze_dried_",
    "air_dried_",
    "oven_baked_",
    "wild_caught_",
    "farm_raised_",
    "free_range_",
    "cage_free_",
    "real_",
    "fresh_",
    "raw_",
    "ground_",
    "dried_",
)

# First matching suffix wins.
PROTEIN_SUFFIX_FORMS = (
    ("_meal", "meal"),
    ("_meals", "meal"),
    ("_fat", "fat"),
    ("_oil", "fat"),
    ("_tallow", "fat"),
    ("_grease", "fat"),
    ("_product", "other"),
    ("_products", "other"),
    ("_liver", "other"),
    ("_heart", "other"),
    ("_kidney", "other"),
    ("_lung", "other"),
    ("_tripe", "other"),
    ("_giblets", "other"),
    ("_plasma", "other"),
    ("_egg", "other"),
    ("_eggs", "other"),
    ("_whites", "other"),
    ("_breast", "other"),
    ("_and_bone", "other"),
)

MIXED_INFIXES = ("_and_", "_with_", "_plus_")

FORM_PURE = "pure"
FORM_MEAL = "meal"
FORM_FAT = "fat"
FORM_OTHER = "other"

NO_PROTEIN = ProteinPurity(percent=0, tier="none")
PURE = ProteinPurity(percent=100, tier="pure")
MEAL = ProteinPurity(percent=93, tier="meal")
FAT = ProteinPurity(percent=85, tier="fat")
MIXED = ProteinPurity(percent=75, tier="mixed")


def strip_descriptor_prefixes(name: str) -> str:
    """Remove leading descriptors until none match."""
    value = name
    changed = True
    while changed:
        changed = False
        for prefix in PROTEIN_DESCRIPTOR_PREFIXES:
            if value.startswith(prefix):
                value = value[len(prefix):]
                changed = True
                break
    return value


def parse_protein_source(raw) -> Optional[ProteinParse]:
    """Parse one raw protein source string.

    Args:
        raw: Protein source as written on the label

    Returns:
        ProteinParse, or None for empty input
    """
    normalized = normalize_token(raw)
    if not normalized:
        return None

    base = strip_descriptor_prefixes(normalized)
    form = FORM_PURE
    for suffix, suffix_form in PROTEIN_SUFFIX_FORMS:
        if base.endswith(suffix):
            base = base[: -len(suffix)]
            form = suffix_form
            break

    if not base:
        base = normalized

    mixed = any(infix in base for infix in MIXED_INFIXES)
    return ProteinParse(base=base, form=form, mixed=mixed)


def evaluate_protein_purity(sources: Optional[Sequence[str]]) -> ProteinPurity:
    """Classify the protein purity of a product.

    Bases are ranked by number of entries; equal counts keep the order
    in which the bases first appear.

    Args:
        sources: Raw protein source strings in label order

    Returns:
        ProteinPurity with percent and tier
    """
    parsed: List[ProteinParse] = []
    for source in sources or []:
        entry = parse_protein_source(source)
        if entry is not None:
            parsed.append(entry)

    if not parsed:
        return NO_PROTEIN

    forms_by_base: Dict[str, List[str]] = {}
    counts: Dict[str, int] = {}
    for entry in parsed:
        forms = forms_by_base.setdefault(entry.base, [])
        if entry.form not in forms:
            forms.append(entry.form)
        counts[entry.base] = counts.get(entry.base, 0) + 1

    # sorted() is stable, so ties stay in first-seen order
    ranked = sorted(forms_by_base, key=lambda base: -counts[base])
    primary_forms = set(forms_by_base[ranked[0]])
    other_bases = ranked[1:]

    any_mixed = any(entry.mixed for entry in parsed)
    other_base_has_non_fat = any(
        form != FORM_FAT for base in other_bases for form in forms_by_base[base]
    )

    if any_mixed or other_base_has_non_fat:
        return MIXED
    if not other_bases and primary_forms == {FORM_PURE}:
        return PURE
    if not other_bases and primary_forms <= {FORM_PURE, FORM_MEAL}:
        return MEAL
    if not other_bases and primary_forms & {FORM_FAT, FORM_OTHER}:
        return FAT
    if other_bases and not other_base_has_non_fat:
        return FAT
    return MIXED
