"""Token normalization and simple pluralization.

Every piece of text that takes part in matching (query terms, product
names, ingredient slugs) passes through normalize_token first, so the
rest of the engine only ever compares tokens of the form:

- lowercase ASCII letters and digits
- words joined by single underscores
- no leading or trailing underscore

An empty token means "absent" and callers skip it.
"""

import re
from typing import List, Set


_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9]+")
_FIELD_SEPARATORS = re.compile(r"[\s/_-]+")

# (suffix, replacement) pairs. Rules are not exclusive: every rule whose
# suffix matches contributes a variant, so "potatoes" yields three.
PLURAL_SUFFIX_RULES = (
    ("ies", "y"),
    ("oes", ""),
    ("es", ""),
    ("s", ""),
)


def normalize_token(text) -> str:
    """Canonicalize arbitrary text into a token.

    Args:
        text: Any value; non-strings are converted with str()

    Returns:
        Normalized token, or "" when nothing alphanumeric remains
    """
    if text is None:
        return ""
    token = str(text).lower().strip()
    token = _NON_TOKEN_CHARS.sub("_", token)
    return token.strip("_")


def plural_variants(token: str) -> Set[str]:
    """Return the token together with its singular candidates.

    Args:
        token: Token (normalized again here)

    Returns:
        Set containing the token and one variant per matching suffix rule
    """
    base = normalize_token(token)
    if not base:
        return set()

    variants = {base}
    for suffix, replacement in PLURAL_SUFFIX_RULES:
        if base.endswith(suffix):
            variant = normalize_token(base[: -len(suffix)] + replacement)
            if variant:
                variants.add(variant)
    return variants


def tokens_from_string(text) -> List[str]:
    """Split a free-text field on whitespace, slashes, hyphens and underscores."""
    if text is None:
        return []
    pieces = (normalize_token(piece) for piece in _FIELD_SEPARATORS.split(str(text)))
    return [piece for piece in pieces if piece]


def explode_slug(slug) -> List[str]:
    """Return a slug and its root (the part before the first underscore).

    "chicken_meal" -> ["chicken_meal", "chicken"]
    """
    token = normalize_token(slug)
    if not token:
        return []
    parts = [token]
    root, sep, _ = token.partition("_")
    if sep and root:
        parts.append(root)
    return parts
