"""Interval-level case analysis behind removal and symmetric difference."""

from __future__ import annotations

from typing import Any

from holedrange.errors import InvariantViolationError
from holedrange.models import Interval, OverlapShape, RemovalShape


def classify_removal(
    stored: Interval[Any], removed: Interval[Any]
) -> RemovalShape:
    """Classify how ``removed`` overlaps ``stored``.

    Both intervals must overlap. Anything outside the six shapes means the
    bounds are not totally ordered (e.g. NaN) and is reported as an internal
    defect.
    """
    if removed.lower <= stored.lower and stored.upper <= removed.upper:
        return RemovalShape.COVERED
    if removed.upper == stored.lower:
        return RemovalShape.TOUCH_LOWER
    if removed.lower == stored.upper:
        return RemovalShape.TOUCH_UPPER
    if stored.lower < removed.lower and removed.upper < stored.upper:
        return RemovalShape.INTERIOR
    if removed.lower <= stored.lower < removed.upper < stored.upper:
        return RemovalShape.LEFT_OVERHANG
    if stored.lower < removed.lower < stored.upper <= removed.upper:
        return RemovalShape.RIGHT_OVERHANG
    raise InvariantViolationError(
        f"cannot classify removal of {removed} from {stored}"
    )


def subtract_interval(
    stored: Interval[Any], removed: Interval[Any]
) -> tuple[list[Interval[Any]], set[Any]]:
    """Remaining pieces of ``stored`` and the boundary values to exclude."""
    shape = classify_removal(stored, removed)
    match shape:
        case RemovalShape.COVERED:
            return [], set()
        case RemovalShape.INTERIOR:
            return (
                [
                    Interval.unchecked(stored.lower, removed.lower),
                    Interval.unchecked(removed.upper, stored.upper),
                ],
                {removed.lower, removed.upper},
            )
        case RemovalShape.LEFT_OVERHANG:
            return (
                [Interval.unchecked(removed.upper, stored.upper)],
                {removed.upper},
            )
        case RemovalShape.RIGHT_OVERHANG:
            return (
                [Interval.unchecked(stored.lower, removed.lower)],
                {removed.lower},
            )
        case RemovalShape.TOUCH_LOWER:
            return [stored], {stored.lower}
        case RemovalShape.TOUCH_UPPER:
            return [stored], {stored.upper}
    raise InvariantViolationError(f"unhandled removal shape: {shape}")


def classify_overlap(
    first: Interval[Any], second: Interval[Any]
) -> OverlapShape:
    """Classify two overlapping intervals by their endpoint ordering."""
    same_lower = first.lower == second.lower
    same_upper = first.upper == second.upper
    if same_lower and same_upper:
        return OverlapShape.EQUAL
    if same_upper:
        return OverlapShape.LEFT_OVERHANG
    if same_lower:
        return OverlapShape.RIGHT_OVERHANG
    if (first.lower < second.lower) == (second.upper < first.upper):
        return OverlapShape.NESTED
    if first.lower < second.lower:
        return OverlapShape.STAGGERED_LEFT
    return OverlapShape.STAGGERED_RIGHT


def split_overlap(
    first: Interval[Any], second: Interval[Any]
) -> tuple[list[Interval[Any]], set[Any]]:
    """Pieces covered by exactly one of two overlapping intervals.

    Every piece keeps the endpoint it shares with the common part, and that
    endpoint is returned as a value to exclude.
    """
    outer_lower = min(first.lower, second.lower)
    inner_lower = max(first.lower, second.lower)
    inner_upper = min(first.upper, second.upper)
    outer_upper = max(first.upper, second.upper)
    left = Interval.unchecked(outer_lower, inner_lower)
    right = Interval.unchecked(inner_upper, outer_upper)

    match classify_overlap(first, second):
        case OverlapShape.EQUAL:
            return [], set()
        case OverlapShape.LEFT_OVERHANG:
            return [left], {inner_lower}
        case OverlapShape.RIGHT_OVERHANG:
            return [right], {inner_upper}
        case (
            OverlapShape.NESTED
            | OverlapShape.STAGGERED_LEFT
            | OverlapShape.STAGGERED_RIGHT
        ):
            return [left, right], {inner_lower, inner_upper}
    raise InvariantViolationError(
        f"unhandled overlap between {first} and {second}"
    )
