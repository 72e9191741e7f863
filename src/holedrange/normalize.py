"""Canonical form for interval storage.

Canonical storage is sorted by lower bound, pairwise disjoint and
non-adjacent. Exclusions only record values that sit inside a stored
interval; discrete bound types absorb them into the interval list instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from holedrange.capabilities import BoundStepper, shared_stepper
from holedrange.models import Interval


def _touches(
    left: Interval[Any],
    right: Interval[Any],
    stepper: BoundStepper[Any] | None,
) -> bool:
    if left.upper >= right.lower:
        return True
    if stepper is None:
        return False
    following = stepper.successor(left.upper)
    return following is not None and following >= right.lower


def merge_intervals(
    intervals: Iterable[Interval[Any]],
    stepper: BoundStepper[Any] | None = None,
) -> list[Interval[Any]]:
    ordered = sorted(intervals, key=lambda interval: interval.lower)
    merged: list[Interval[Any]] = []
    for interval in ordered:
        if merged and _touches(merged[-1], interval, stepper):
            last = merged[-1]
            if interval.upper > last.upper:
                merged[-1] = Interval.unchecked(last.lower, interval.upper)
            continue
        merged.append(interval)
    return merged


def absorb_exclusions(
    intervals: list[Interval[Any]],
    excluded: set[Any],
    stepper: BoundStepper[Any],
) -> tuple[list[Interval[Any]], set[Any]]:
    """Shrink or split discrete intervals around the values they exclude."""
    remaining = set(excluded)
    result: list[Interval[Any]] = []
    for interval in intervals:
        holes = sorted(
            value for value in remaining if interval.contains(value)
        )
        start = interval.lower
        for hole in holes:
            remaining.discard(hole)
            if start is None:
                continue
            if hole > start:
                result.append(
                    Interval.unchecked(start, stepper.predecessor(hole))
                )
            start = stepper.successor(hole)
        if start is not None and start <= interval.upper:
            result.append(Interval.unchecked(start, interval.upper))
    return result, remaining


def discrete_stepper(
    intervals: list[Interval[Any]], excluded: set[Any]
) -> BoundStepper[Any] | None:
    values: list[Any] = []
    for interval in intervals:
        values.append(interval.lower)
        values.append(interval.upper)
    if not values:
        return None
    values.extend(excluded)
    return shared_stepper(values)


def normalize(
    intervals: Iterable[Interval[Any]], excluded: Iterable[Any]
) -> tuple[list[Interval[Any]], set[Any]]:
    intervals = list(intervals)
    excluded = set(excluded)
    stepper = discrete_stepper(intervals, excluded)

    merged = merge_intervals(intervals, stepper)
    if stepper is not None:
        merged, excluded = absorb_exclusions(merged, excluded, stepper)

    merged = [
        interval
        for interval in merged
        if not (interval.is_point and interval.lower in excluded)
    ]
    kept = {
        value
        for value in excluded
        if any(interval.contains(value) for interval in merged)
    }
    return merged, kept
