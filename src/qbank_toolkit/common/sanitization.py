"""
Module: common.sanitization

Purpose:
    Coerce loosely-typed values from uploaded paper JSON into predictable
    Python values, and compare free text the way question import does.
    Nothing here raises on odd input - a value of the wrong shape is
    treated as absent.

Key Functions:
    - is_present(): Presence test where empty lists and objects count
    - ensure_array(): Wrap scalars, drop None, pass lists through
    - as_list(): Lists pass through, everything else becomes []
    - ensure_string(): First usable string form of a value, or None
    - ensure_number(): Numeric value of a number or numeric-prefixed string
    - normalize_text(): Collapse whitespace and lower-case for comparison
    - find_unique_match(): Exact-then-loose unique text lookup
    - has_word_boundary_match(): Case-insensitive whole-word token test

Dependencies:
    - math, re (std)

Used By:
    - analysis.guidelines: Field access during the tree walk
    - answers.*: Answer text coercion
    - validation.questions: Required-field and marks checks
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

# Leading numeric prefix, e.g. "3", "2.5 marks", "-1e2"
_NUMBER_PREFIX_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_WHITESPACE_RE = re.compile(r"\s+")
_NAME_SEPARATOR_RE = re.compile(r"[,/]")


def is_number(value: Any) -> bool:
    """True for int/float values (bools are not numbers here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_present(value: Any) -> bool:
    """
    Presence test for flag-like fields: empty lists and objects count as
    present; None, False, 0, NaN and "" do not.

    Example:
        >>> is_present([])
        True
        >>> is_present("")
        False
    """
    if isinstance(value, (list, Mapping)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def ensure_array(value: Any) -> List[Any]:
    """
    Normalize a value into a list.

    Example:
        >>> ensure_array(None)
        []
        >>> ensure_array("a")
        ['a']
        >>> ensure_array(["a", "b"])
        ['a', 'b']
    """
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def as_list(value: Any) -> List[Any]:
    """Return value if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def ensure_string(value: Any) -> Optional[str]:
    """
    Coerce a value to a string.

    None stays None, lists yield their first element (or None when empty),
    anything else goes through str().
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return str(value[0]) if value else None
    return str(value)


def text_of(value: Any) -> str:
    """String form of a value with None mapped to the empty string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def ensure_number(value: Any) -> Optional[float]:
    """
    Numeric value of a number or of a string with a numeric prefix.

    Example:
        >>> ensure_number(3)
        3
        >>> ensure_number("2.5 marks")
        2.5
        >>> ensure_number("n/a") is None
        True
    """
    if is_number(value):
        return value
    if isinstance(value, str):
        match = _NUMBER_PREFIX_RE.match(value)
        if match:
            return float(match.group(1))
    return None


def normalize_text(value: Any) -> str:
    """Trim, collapse internal whitespace and lower-case."""
    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value).strip()).lower()


def is_exact_text_match(a: Any, b: Any) -> bool:
    """Normalized equality; two blanks never match."""
    normalized_a = normalize_text(a)
    return normalized_a != "" and normalized_a == normalize_text(b)


def is_loose_text_match(a: Any, b: Any) -> bool:
    """Normalized containment in either direction."""
    normalized_a = normalize_text(a)
    normalized_b = normalize_text(b)
    if not normalized_a or not normalized_b:
        return False
    return normalized_a in normalized_b or normalized_b in normalized_a


def find_unique_match(
    items: Sequence[T],
    candidate: Any,
    getters: Iterable[Callable[[T], Any]],
) -> Optional[T]:
    """
    Find the single item whose text matches ``candidate``.

    Every getter is tried for an exact match first; only when no getter
    produces exactly one exact match are loose (containment) matches tried.
    Ambiguous results return None.

    Args:
        items: Candidates to search
        candidate: Text to look for
        getters: Functions extracting comparable text from an item

    Returns:
        The uniquely matching item, or None
    """
    if not normalize_text(candidate):
        return None

    getters = list(getters)
    for getter in getters:
        exact = [item for item in items if is_exact_text_match(getter(item), candidate)]
        if len(exact) == 1:
            return exact[0]

    for getter in getters:
        loose = [item for item in items if is_loose_text_match(getter(item), candidate)]
        if len(loose) == 1:
            return loose[0]

    return None


def has_word_boundary_match(value: Optional[str], token: str) -> bool:
    """
    Case-insensitive whole-word search for ``token``.

    Example:
        >>> has_word_boundary_match("allow ECF from (a)", "ecf")
        True
        >>> has_word_boundary_match("decaffeinated", "ecf")
        False
    """
    if not value:
        return False
    return re.search(rf"\b{re.escape(token)}\b", value, re.IGNORECASE) is not None


def extract_name_candidates(value: Any) -> List[str]:
    """
    Split a name field into candidate names.

    Strings split on commas and forward slashes; lists are flattened.
    """
    if value is None:
        return []
    if isinstance(value, list):
        names: List[str] = []
        for item in value:
            names.extend(name for name in extract_name_candidates(item) if name.strip())
        return names
    if isinstance(value, str):
        return [part.strip() for part in _NAME_SEPARATOR_RE.split(value) if part.strip()]
    return [str(value)]
