"""
Field Validators for MikroValid.

Pure predicates checking one declared constraint against one value:
- Type checks (string, number, boolean, object, array)
- Named formats (alphanumeric, numeric, email, date, url, hexColor)
- Length bounds (arrays by element count, scalars by text length)
- Inclusive numeric range bounds
- Caller-supplied regular expressions

validate_input() runs the declared checks in a fixed order and stops at
the first failure.
"""

import math
import re
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple

from .errors import ErrorKind
from .schema import PropertySchema

FORMAT_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "alphanumeric": re.compile(r"^[A-Za-z0-9]+$"),
    "numeric": re.compile(r"^-?\d+(\.\d+)?$", re.ASCII),
    "email": re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$"),
    "date": re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII),
    "url": re.compile(r"^(https?)://[^\s$.?#].[^\s]*$"),
    "hexColor": re.compile(r"^#?([a-f0-9]{6}|[a-f0-9]{3})$", re.IGNORECASE),
}


class FieldCheck(NamedTuple):
    """Outcome of field-level validation."""

    success: bool
    kind: Optional[ErrorKind] = None


def as_text(value: Any) -> str:
    """
    Text form of a value, spelled the way JSON/JavaScript would print it.

    Booleans and None become true/false/null. Integral floats drop the
    trailing ".0" (1.0 -> "1", 1e20 -> "100000000000000000000") up to 1e21,
    where exponent notation takes over, and infinities are "Infinity".
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if math.isnan(value):
            return "NaN"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def is_number(value: Any) -> bool:
    """Numeric and not NaN; booleans are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_object(value: Any) -> bool:
    """Plain data object: a dict, never a list, None, date, set, or other instance."""
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_correct_type(expected: str, value: Any) -> bool:
    if expected == "string":
        return isinstance(value, str)
    if expected == "number":
        return is_number(value)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "object":
        return is_object(value)
    if expected == "array":
        return is_array(value)
    return False


def is_correct_format(expected: str, value: Any) -> bool:
    pattern = FORMAT_PATTERNS.get(expected)
    if pattern is None:
        return False
    return pattern.fullmatch(as_text(value)) is not None


def _length(value: Any) -> int:
    if is_array(value):
        return len(value)
    return len(as_text(value))


def is_minimum_length(min_length: int, value: Any) -> bool:
    return _length(value) >= min_length


def is_maximum_length(max_length: int, value: Any) -> bool:
    return _length(value) <= max_length


def is_minimum_value(min_value: float, value: Any) -> bool:
    return is_number(value) and value >= min_value


def is_maximum_value(max_value: float, value: Any) -> bool:
    return is_number(value) and value <= max_value


def matches_pattern(pattern: "re.Pattern[str]", value: Any) -> bool:
    return pattern.search(as_text(value)) is not None


# Dispatch table in check order: constraint name -> (predicate, failure kind)
CHECKS: Dict[str, Tuple[Callable[[Any, Any], bool], ErrorKind]] = {
    "type": (is_correct_type, ErrorKind.INVALID_TYPE),
    "format": (is_correct_format, ErrorKind.INVALID_FORMAT),
    "minLength": (is_minimum_length, ErrorKind.LENGTH_TOO_SHORT),
    "maxLength": (is_maximum_length, ErrorKind.LENGTH_TOO_LONG),
    "minValue": (is_minimum_value, ErrorKind.VALUE_TOO_SMALL),
    "maxValue": (is_maximum_value, ErrorKind.VALUE_TOO_LARGE),
    "matchesPattern": (matches_pattern, ErrorKind.PATTERN_MISMATCH),
}


def validate_input(schema: Optional[PropertySchema], value: Any) -> FieldCheck:
    """
    Perform field-level validation of one value.

    Checks run in the order type, format, minLength, maxLength, minValue,
    maxValue, matchesPattern; only declared constraints run, and the first
    failing one decides the result.

    A missing schema (None) is vacuously successful; reporting that
    situation is left to the caller.

    Example:
        >>> validate_input(PropertySchema(type="number", min_value=1000), 999)
        FieldCheck(success=False, kind=<ErrorKind.VALUE_TOO_SMALL: 'value_too_small'>)
    """
    if schema is None:
        return FieldCheck(success=True)

    for name, constraint in schema.constraints():
        predicate, kind = CHECKS[name]
        if not predicate(constraint, value):
            return FieldCheck(success=False, kind=kind)

    return FieldCheck(success=True)
