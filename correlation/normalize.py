"""
Name canonicalization for word-order, case and accent insensitive matching.

"Jeffrey Epstein", "EPSTEIN, Jeffrey" and "Epstein Jeffrey" all normalize to
"epsteinjeffrey". Tokens of two characters or fewer are dropped.
"""

import re
import unicodedata
from typing import Any, Mapping

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
MIN_TOKEN_LENGTH = 3


def name_of(value: Any) -> str:
    """
    Resolve a NameLike (plain string, {name}/{nom} dict, or object with a
    name attribute) to its string form.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in ("name", "nom"):
            if value.get(key):
                return str(value[key])
        return ""
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name
    return str(value)


def normalize(value: Any) -> str:
    """Canonical matching key for a name. Empty means "matches nothing"."""
    text = name_of(value).lower()
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))

    tokens = [t for t in _NON_ALNUM.sub(" ", stripped).split() if len(t) >= MIN_TOKEN_LENGTH]
    return "".join(sorted(tokens))
