"""Evaluation of a single filter condition against a resolved field value.

Every operator returns a plain bool and never raises. Type mismatches
(e.g. ``gt`` on a string field) evaluate to False rather than erroring;
callers are responsible for supplying values of the right kind.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from sieve.core.accessor import get_field, is_missing, is_null
from sieve.core.schema import FilterCondition, FilterOperator
from sieve.utils.dates import parse_instant

logger = logging.getLogger(__name__)


def evaluate_condition(record: Any, condition: FilterCondition) -> bool:
    """Resolve the condition's field on a record and evaluate it."""
    return evaluate(get_field(record, condition.field), condition)


def evaluate(value: Any, condition: FilterCondition) -> bool:
    """Evaluate a condition against an already resolved value, honoring negate."""
    try:
        op = FilterOperator(condition.operator)
    except ValueError:
        op = None

    handler = _HANDLERS.get(op) if op is not None else None
    if handler is None:
        logger.warning("Unknown filter operator %r on field %r", condition.operator, condition.field)
        result = False
    else:
        result = handler(value, condition.value, condition.case_sensitive)

    return result != condition.negate


# -- Operand helpers --


def _fold(value: Any, case_sensitive: bool) -> Any:
    if not case_sensitive and isinstance(value, str):
        return value.lower()
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(v) for v in value)
    return str(value)


def _equals(left: Any, right: Any, case_sensitive: bool) -> bool:
    # True == 1 in Python; keep booleans and numbers apart
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return _fold(left, case_sensitive) == _fold(right, case_sensitive)


def _as_number(value: Any) -> float | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def _comparable(left: Any, right: Any) -> tuple[Any, Any] | None:
    """Return a pair of mutually comparable operands, or None."""
    a, b = _as_number(left), _as_number(right)
    if a is not None and b is not None:
        return a, b
    if isinstance(left, str) and isinstance(right, str):
        da, db = parse_instant(left), parse_instant(right)
        if da is not None and db is not None:
            return da, db
    return None


def _bounds(expected: Any) -> tuple[Any, Any] | None:
    if isinstance(expected, (list, tuple)) and len(expected) == 2:
        return expected[0], expected[1]
    return None


# -- Operators --


def _eq(value: Any, expected: Any, cs: bool) -> bool:
    if is_missing(value):
        return False
    return _equals(value, expected, cs)


def _ne(value: Any, expected: Any, cs: bool) -> bool:
    return not _eq(value, expected, cs)


def _ordering(test: Callable[[Any, Any], bool]) -> Callable[[Any, Any, bool], bool]:
    def op(value: Any, expected: Any, cs: bool) -> bool:
        pair = _comparable(value, expected)
        if pair is None:
            return False
        return test(*pair)

    return op


def _string_test(test: Callable[[str, str], bool]) -> Callable[[Any, Any, bool], bool]:
    def op(value: Any, expected: Any, cs: bool) -> bool:
        if is_null(value) or expected is None:
            return False
        return test(_fold(_stringify(value), cs), _fold(_stringify(expected), cs))

    return op


def _regex(value: Any, expected: Any, cs: bool) -> bool:
    if is_null(value) or expected is None:
        return False
    text = _stringify(value)
    pattern = _stringify(expected)
    try:
        compiled = re.compile(pattern, 0 if cs else re.IGNORECASE)
    except re.error:
        logger.debug("Invalid regex %r, falling back to substring match", pattern)
        return _fold(pattern, cs) in _fold(text, cs)
    return compiled.search(text) is not None


def _member(value: Any, expected: list, cs: bool) -> bool:
    if isinstance(value, (list, tuple)):
        return any(_member(v, expected, cs) for v in value)
    return any(_equals(value, candidate, cs) for candidate in expected)


def _in(value: Any, expected: Any, cs: bool) -> bool:
    if not isinstance(expected, (list, tuple)) or is_missing(value):
        return False
    return _member(value, expected, cs)


def _not_in(value: Any, expected: Any, cs: bool) -> bool:
    if not isinstance(expected, (list, tuple)):
        return False
    if is_missing(value):
        return True
    return not _member(value, expected, cs)


def _exists(value: Any, expected: Any, cs: bool) -> bool:
    return not is_null(value)


def _not_exists(value: Any, expected: Any, cs: bool) -> bool:
    return is_null(value)


def _is_empty(value: Any, expected: Any, cs: bool) -> bool:
    return is_null(value) or value == ""


def _is_not_empty(value: Any, expected: Any, cs: bool) -> bool:
    return not _is_empty(value, expected, cs)


def _span(upper_inclusive: bool) -> Callable[[Any, Any, bool], bool]:
    def op(value: Any, expected: Any, cs: bool) -> bool:
        bounds = _bounds(expected)
        if bounds is None:
            return False
        low, high = _comparable(value, bounds[0]), _comparable(value, bounds[1])
        if low is None or high is None:
            return False
        above = low[0] >= low[1]
        below = high[0] <= high[1] if upper_inclusive else high[0] < high[1]
        return above and below

    return op


_HANDLERS: dict[FilterOperator, Callable[[Any, Any, bool], bool]] = {
    FilterOperator.eq: _eq,
    FilterOperator.ne: _ne,
    FilterOperator.gt: _ordering(lambda a, b: a > b),
    FilterOperator.gte: _ordering(lambda a, b: a >= b),
    FilterOperator.lt: _ordering(lambda a, b: a < b),
    FilterOperator.lte: _ordering(lambda a, b: a <= b),
    FilterOperator.contains: _string_test(lambda text, needle: needle in text),
    FilterOperator.starts_with: _string_test(lambda text, prefix: text.startswith(prefix)),
    FilterOperator.ends_with: _string_test(lambda text, suffix: text.endswith(suffix)),
    FilterOperator.regex: _regex,
    FilterOperator.in_: _in,
    FilterOperator.not_in: _not_in,
    FilterOperator.exists: _exists,
    FilterOperator.not_exists: _not_exists,
    FilterOperator.is_empty: _is_empty,
    FilterOperator.is_not_empty: _is_not_empty,
    # between is closed [low, high]; range is half-open [low, high)
    FilterOperator.between: _span(upper_inclusive=True),
    FilterOperator.range: _span(upper_inclusive=False),
}
