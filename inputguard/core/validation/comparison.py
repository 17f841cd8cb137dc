"""
Equality predicates used by membership validation.

Purpose
-------
Keep every coercion rule in one auditable place. Each comparison mode maps to
one pure function ``(needle, element) -> bool``; the membership validator only
dispatches, it never inspects types itself.

Modes
-----
STRICT
    Identical type and identical value. ``True`` is not ``1`` and ``1`` is not
    ``1.0``. Collections must share their type and match element by element.

LOOSE
    Classic dynamic-language loose equality:

    - ``None`` and booleans compare through truthiness (``None == ""`` too)
    - numbers compare numerically
    - a number against a string converts the string from its leading numeric
      prefix (``"1asdf"`` -> 1, ``"b"`` -> 0)
    - two numeric strings compare numerically (``"1.0" == "1"``), any other
      pair of strings compares as exact, case-sensitive text
    - collections match by length/keys and element-wise loose equality

LOOSE_SAFE
    LOOSE with the coercion-vulnerability guard: numeric inputs are rendered to
    their canonical string form, and when the input is a string, numeric
    elements are rendered to strings before comparing. ``"1a"`` can then never
    equal ``1`` and ``"b"`` can never equal ``0``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

Number = Union[int, float]
Comparator = Callable[[Any, Any], bool]

_NUMERIC_STRING = re.compile(
    r"^[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$"
)
_NUMERIC_PREFIX = re.compile(
    r"^[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)


class ComparisonMode(str, Enum):
    """How haystack elements are compared with the validated value."""

    STRICT = "strict"
    LOOSE = "loose"
    LOOSE_SAFE = "loose_safe"

    @classmethod
    def coerce(cls, value: Union[bool, str, "ComparisonMode"]) -> "ComparisonMode":
        """
        Accept the forms the ``strict`` option has historically taken.

        ``True`` -> STRICT, ``False`` -> LOOSE_SAFE, otherwise a mode or its
        string value. Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if value is True:
            return cls.STRICT
        if value is False:
            return cls.LOOSE_SAFE
        if isinstance(value, str):
            return cls(value.lower())
        raise ValueError(f"Unsupported comparison mode: {value!r}")


# ============================================================================
# Classification helpers
# ============================================================================


def is_number(value: Any) -> bool:
    """True for int and float, never for bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_collection(value: Any) -> bool:
    """
    True when a haystack element should be treated as a nested collection.

    Text and binary strings are scalars even though they are sequences.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence, Set))


def iter_elements(collection: Any):
    """Yield the comparable elements of a collection (mapping values for mappings)."""
    if isinstance(collection, Mapping):
        return iter(collection.values())
    return iter(collection)


def is_numeric_string(value: str) -> bool:
    return bool(_NUMERIC_STRING.match(value))


def string_to_number(value: str) -> Number:
    """
    Convert a string to a number using its leading numeric prefix.

    Strings without such a prefix convert to 0.
    """
    match = _NUMERIC_PREFIX.match(value)
    if not match:
        return 0
    text = match.group(0).strip()
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


def number_to_string(value: Number) -> str:
    """
    Render a number the way it reads when written by hand.

    Integral floats drop the fractional part (``1.0`` -> ``"1"``) so that a
    float input and its integer haystack twin render identically.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NAN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    return str(value)


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


# ============================================================================
# Predicates
# ============================================================================


def strict_equals(needle: Any, element: Any) -> bool:
    """Identical type and value, recursively for collections."""
    if type(needle) is not type(element):
        return False

    if isinstance(needle, Mapping):
        if list(needle.keys()) != list(element.keys()):
            return False
        return all(strict_equals(needle[key], element[key]) for key in needle)

    if is_collection(needle) and not isinstance(needle, Set):
        if len(needle) != len(element):
            return False
        return all(strict_equals(a, b) for a, b in zip(needle, element))

    return needle == element


def loose_equals(needle: Any, element: Any) -> bool:
    """Loose equality with implicit type coercion."""
    if needle is None and element is None:
        return True

    if needle is None or element is None:
        other = element if needle is None else needle
        if isinstance(other, str):
            return other == ""
        return not _truthy(other)

    if isinstance(needle, bool) or isinstance(element, bool):
        return _truthy(needle) == _truthy(element)

    if is_number(needle) and is_number(element):
        return needle == element

    if is_number(needle) and isinstance(element, str):
        return needle == string_to_number(element)

    if isinstance(needle, str) and is_number(element):
        return string_to_number(needle) == element

    if isinstance(needle, str) and isinstance(element, str):
        if is_numeric_string(needle) and is_numeric_string(element):
            return string_to_number(needle) == string_to_number(element)
        return needle == element

    if isinstance(needle, Mapping) and isinstance(element, Mapping):
        if set(needle.keys()) != set(element.keys()):
            return False
        return all(loose_equals(needle[key], element[key]) for key in needle)

    if is_collection(needle) and is_collection(element):
        if isinstance(needle, Mapping) or isinstance(element, Mapping):
            return False
        if isinstance(needle, Set) or isinstance(element, Set):
            return needle == element
        if len(needle) != len(element):
            return False
        return all(loose_equals(a, b) for a, b in zip(needle, element))

    return needle == element


def prepare_safe_needle(needle: Any) -> Any:
    """Numeric inputs are compared as their string form in LOOSE_SAFE mode."""
    if is_number(needle):
        return number_to_string(needle)
    return needle


def loose_safe_equals(needle: Any, element: Any) -> bool:
    """
    Loose equality with the string/number coercion guard.

    The needle is expected to have been through ``prepare_safe_needle``; the
    function applies it again so it is also correct when called directly.
    """
    needle = prepare_safe_needle(needle)
    if isinstance(needle, str) and is_number(element):
        element = number_to_string(element)
    return loose_equals(needle, element)


_COMPARATORS: Dict[ComparisonMode, Comparator] = {
    ComparisonMode.STRICT: strict_equals,
    ComparisonMode.LOOSE: loose_equals,
    ComparisonMode.LOOSE_SAFE: loose_safe_equals,
}


def get_comparator(mode: ComparisonMode) -> Comparator:
    return _COMPARATORS[mode]


def compare(needle: Any, element: Any, mode: Optional[ComparisonMode] = None) -> bool:
    """Compare two values under ``mode`` (LOOSE_SAFE when omitted)."""
    return get_comparator(mode or ComparisonMode.LOOSE_SAFE)(needle, element)


__all__ = [
    "ComparisonMode",
    "compare",
    "get_comparator",
    "is_collection",
    "is_number",
    "is_numeric_string",
    "iter_elements",
    "loose_equals",
    "loose_safe_equals",
    "number_to_string",
    "prepare_safe_needle",
    "strict_equals",
    "string_to_number",
]
