"""
Base model classes and lenient coercion helpers.

LLM output is schema-loose: numbers arrive as strings, lists arrive as null,
fields arrive under French or camelCase keys. Everything here is about
accepting that without failing validation.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict


class LooseModel(BaseModel):
    """
    Base for every model parsed from stored or LLM-produced data.

    Unknown keys are ignored and fields may be populated by name or alias.
    """
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


_NUMBER_CHARS = re.compile(r"[^0-9,.\-]")


def coerce_number(value: Any) -> float:
    """
    Parse an LLM-produced amount into a float.

    Handles "600,000", "1 200,50", "1.234.567", "$3.5", None. Unparseable -> 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    text = _NUMBER_CHARS.sub("", str(value))
    if not text:
        return 0.0

    # Decide which separator is the decimal point
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        head, _, tail = text.rpartition(",")
        if len(tail) == 3 and head:
            text = text.replace(",", "")  # thousands separator
        else:
            text = head.replace(",", "") + "." + tail
    elif "." in text:
        head, *groups = text.split(".")
        # "1.234.567" or "600.000": dots group thousands
        if len(groups) > 1 or (head.lstrip("-") not in ("", "0") and len(groups[0]) == 3):
            text = text.replace(".", "")

    try:
        return float(text)
    except ValueError:
        return 0.0


def coerce_score(value: Any) -> float:
    """Coerce a 0-10 score, clamping out-of-range values."""
    return max(0.0, min(10.0, coerce_number(value)))


def coerce_list(value: Any) -> list:
    """None -> [], scalar -> [scalar], list stays list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return [value]


def coerce_text(value: Any) -> str:
    """None -> "", anything else -> its string form."""
    if value is None:
        return ""
    return str(value)
