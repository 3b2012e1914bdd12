"""
Runtime field access and ordering for configurable sort keys.

Sort keys such as "Title" or "Author.Date" come from configuration, so
they are resolved against records at runtime:

    value, ok = dot_get(commit, "Author.Date")
    if ok:
        ...

compare() then orders two resolved values, provided both are of the same
SortKind (string, number or time).
"""

import re
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any, Optional, Tuple

from .exit_codes import ComparisonError

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


class SortKind(Enum):
    """Kinds of values that can be ordered."""
    STRING = "string"
    NUMBER = "number"
    TIME = "time"


def sort_kind(value: Any) -> Optional[SortKind]:
    """Classify a value, or return None if it is not orderable."""
    if isinstance(value, str):
        return SortKind.STRING
    # bool is an int subclass but ordering flags makes no sense
    if isinstance(value, Real) and not isinstance(value, bool):
        return SortKind.NUMBER
    if isinstance(value, datetime):
        return SortKind.TIME
    return None


def _candidate_names(segment: str) -> Tuple[str, ...]:
    """Names to try for one path segment: as written, lower, snake_case."""
    snake = _CAMEL_BOUNDARY.sub('_', segment).lower()
    return tuple(dict.fromkeys((segment, segment.lower(), snake)))


def _get_one(record: Any, segment: str) -> Tuple[Any, bool]:
    for name in _candidate_names(segment):
        if isinstance(record, dict):
            if name in record:
                return record[name], True
        elif hasattr(record, name):
            return getattr(record, name), True
    return None, False


def dot_get(record: Any, path: str) -> Tuple[Any, bool]:
    """
    Resolve a dot-separated path against a record.

    Each segment is looked up as an attribute (or dict key); "Author.Date"
    also matches the attribute path author.date.

    Args:
        record: Object or dict to descend into
        path: Dot-separated field path

    Returns:
        Tuple of (value, found)
    """
    if not path:
        return None, False

    current = record
    for segment in path.split('.'):
        if current is None or not segment:
            return None, False
        current, found = _get_one(current, segment)
        if not found:
            return None, False

    return current, True


def compare(a: Any, op: str, b: Any) -> bool:
    """
    Compare two resolved field values.

    Args:
        a: Left value
        op: Operator, one of "<", "<=", ">", ">=", "=="
        b: Right value

    Returns:
        Result of the comparison

    Raises:
        ComparisonError: If the values are of different or unsupported kinds,
            or the operator is unknown
    """
    kind_a = sort_kind(a)
    kind_b = sort_kind(b)

    if kind_a is None or kind_b is None:
        raise ComparisonError(
            f"Cannot order values of type {type(a).__name__} and {type(b).__name__}"
        )
    if kind_a != kind_b:
        raise ComparisonError(
            f"Cannot compare {kind_a.value} with {kind_b.value}"
        )

    try:
        if op == "<":
            return a < b
        if op == "<=":
            return a <= b
        if op == ">":
            return a > b
        if op == ">=":
            return a >= b
        if op == "==":
            return a == b
    except TypeError as e:
        # naive and aware datetimes share a kind but do not order
        raise ComparisonError(str(e)) from e

    raise ComparisonError(f"Unsupported operator: {op}")


def less_by_path(path: str):
    """
    Build a cmp-style function ordering records by a field path.

    Unresolvable paths and incomparable values count as "not less" in both
    directions, so such pairs keep their input order under a stable sort.
    """
    def _less(x: Any, y: Any) -> bool:
        a, ok = dot_get(x, path)
        if not ok:
            return False
        b, ok = dot_get(y, path)
        if not ok:
            return False
        try:
            return compare(a, '<', b)
        except ComparisonError:
            return False

    def _cmp(x: Any, y: Any) -> int:
        if _less(x, y):
            return -1
        if _less(y, x):
            return 1
        return 0

    return _cmp
