from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any

from holedrange.errors import ArithmeticDomainError
from holedrange.models import Interval


def map_value(f: Callable[[Any], Any], value: Any) -> Any:
    """Apply ``f``, rejecting NaN/infinite floats and arithmetic failures."""
    try:
        result = f(value)
    except ArithmeticError as exc:
        raise ArithmeticDomainError(value) from exc
    if isinstance(result, float) and not math.isfinite(result):
        raise ArithmeticDomainError(value, result)
    return result


def map_interval(
    f: Callable[[Any], Any], interval: Interval[Any]
) -> Interval[Any]:
    """Map both bounds, re-ordering them for non-monotonic ``f``."""
    lower = map_value(f, interval.lower)
    upper = map_value(f, interval.upper)
    if upper < lower:
        lower, upper = upper, lower
    return Interval.unchecked(lower, upper)


def map_storage(
    f: Callable[[Any], Any],
    intervals: Iterable[Interval[Any]],
    excluded: Iterable[Any],
) -> tuple[list[Interval[Any]], set[Any]]:
    mapped = [map_interval(f, interval) for interval in intervals]
    holes = {map_value(f, value) for value in excluded}
    return mapped, holes
